"""CLI interface for host_exporter."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TYPE_CHECKING

from . import __version__
from .config import ExporterConfig, load_config
from .errors import ExporterError, ScrapeError

if TYPE_CHECKING:
    from .collector.manager import CollectorManager


def _setup_logging(cfg: ExporterConfig) -> None:
    logging.basicConfig(
        level=cfg.log.level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def _build_manager(cfg: ExporterConfig) -> CollectorManager:
    from .collector.manager import CollectorManager

    try:
        return CollectorManager.from_config(cfg.collectors, cfg.scrape)
    except ExporterError as exc:
        logging.getLogger(__name__).error("Startup failed: %s", exc)
        sys.exit(2)


def _cmd_serve(args: argparse.Namespace) -> None:
    """Serve /health and /metrics over HTTP."""
    cfg = load_config(args.config)
    if args.host is not None:
        cfg.server.host = args.host
    if args.port is not None:
        cfg.server.port = args.port
    _setup_logging(cfg)

    import uvicorn

    from .exporter.http import create_app

    manager = _build_manager(cfg)
    app = create_app(manager)
    logging.getLogger(__name__).info(
        "host_exporter %s listening on %s:%d", __version__, cfg.server.host, cfg.server.port
    )
    uvicorn.run(app, host=cfg.server.host, port=cfg.server.port, log_level=cfg.log.level.lower())


def _cmd_scrape(args: argparse.Namespace) -> None:
    """Run one scrape and print the exposition text."""
    cfg = load_config(args.config)
    _setup_logging(cfg)
    manager = _build_manager(cfg)
    try:
        payload = manager.scrape()
    except ScrapeError as exc:
        print(f"Scrape failed: {exc}", file=sys.stderr)
        sys.exit(1)
    sys.stdout.write(payload.decode("utf-8"))


def _cmd_version(_args: argparse.Namespace) -> None:
    print(f"host_exporter {__version__}")


def main(argv: list[str] | None = None) -> None:
    """Entry point for the host-exporter CLI."""
    parser = argparse.ArgumentParser(
        prog="host-exporter",
        description="Expose host CPU, memory, disk and network metrics to Prometheus",
    )
    parser.add_argument("--config", "-c", default=None, help="Path to host_exporter.yaml")
    sub = parser.add_subparsers(dest="command")

    # serve
    serve_p = sub.add_parser("serve", help="Serve /health and /metrics")
    serve_p.add_argument("--host", default=None, help="Listen address (overrides config)")
    serve_p.add_argument("--port", type=int, default=None, help="Listen port (overrides config)")
    serve_p.set_defaults(func=_cmd_serve)

    # scrape
    scrape_p = sub.add_parser("scrape", help="Collect once and print the metrics text")
    scrape_p.set_defaults(func=_cmd_scrape)

    # version
    ver_p = sub.add_parser("version", help="Print version")
    ver_p.set_defaults(func=_cmd_version)

    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        sys.exit(1)

    args.func(args)


if __name__ == "__main__":
    main()
