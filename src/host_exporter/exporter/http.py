"""HTTP endpoints: ``/health`` and ``/metrics``."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST

from .. import __version__
from ..collector.manager import CollectorManager
from ..errors import ScrapeError

logger = logging.getLogger(__name__)


def create_app(manager: CollectorManager) -> FastAPI:
    """Build the FastAPI application serving *manager*'s registry."""
    app = FastAPI(title="host-exporter", version=__version__, docs_url=None, redoc_url=None)

    @app.get("/health", response_class=PlainTextResponse)
    async def health() -> str:
        return "OK"

    @app.get("/metrics")
    async def metrics() -> Response:
        try:
            payload = await manager.ascrape()
        except ScrapeError as exc:
            logger.error("Scrape aborted: %s", exc)
            return PlainTextResponse(f"scrape failed: {exc.collector}\n", status_code=500)
        return Response(content=payload, media_type=CONTENT_TYPE_LATEST)

    return app
