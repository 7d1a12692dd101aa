"""Configuration loading and validation for host_exporter."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

FREQUENCY_SOURCES = ("sysfs", "psutil")


@dataclass
class ServerConfig:
    """HTTP listener settings."""

    host: str = "0.0.0.0"
    port: int = 9100


@dataclass
class LogConfig:
    """Logging settings."""

    level: str = "INFO"


@dataclass
class ScrapeConfig:
    """Scrape behaviour and shared CPU snapshot settings."""

    fail_fast: bool = False
    cpu_min_refresh_seconds: float = 0.2
    snapshot_lock_timeout_seconds: float = 5.0


@dataclass
class MetricConfig:
    """Settings shared by every metric family."""

    enabled: bool = True


@dataclass
class CpuFrequencyConfig(MetricConfig):
    """CPU frequency family settings."""

    source: str = "sysfs"
    sysfs_root: str = "/sys/devices/system/cpu"


@dataclass
class NetworkIoConfig(MetricConfig):
    """Network I/O family settings.

    When ``watch_interfaces`` is set it is the only filter consulted;
    ``ignore_interfaces`` applies only in its absence.
    """

    watch_interfaces: list[str] | None = None
    ignore_interfaces: list[str] | None = None


@dataclass
class CollectorsConfig:
    """Per-family collector settings."""

    cpu_usage: MetricConfig = field(default_factory=MetricConfig)
    cpu_frequency: CpuFrequencyConfig = field(default_factory=CpuFrequencyConfig)
    memory: MetricConfig = field(default_factory=MetricConfig)
    swap: MetricConfig = field(default_factory=MetricConfig)
    disk_io: MetricConfig = field(default_factory=MetricConfig)
    network_io: NetworkIoConfig = field(default_factory=NetworkIoConfig)


@dataclass
class ExporterConfig:
    """Top-level host_exporter configuration."""

    server: ServerConfig = field(default_factory=ServerConfig)
    log: LogConfig = field(default_factory=LogConfig)
    scrape: ScrapeConfig = field(default_factory=ScrapeConfig)
    collectors: CollectorsConfig = field(default_factory=CollectorsConfig)


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Apply environment variable overrides using HOST_EXPORTER_ prefix."""
    env_map = {
        "HOST_EXPORTER_HOST": (("server", "host"), str),
        "HOST_EXPORTER_PORT": (("server", "port"), int),
        "HOST_EXPORTER_LOG_LEVEL": (("log", "level"), str),
        "HOST_EXPORTER_FAIL_FAST": (("scrape", "fail_fast"), _parse_bool),
    }
    for env_key, (path, coerce) in env_map.items():
        value = os.environ.get(env_key)
        if value is not None:
            obj = data
            for part in path[:-1]:
                obj = obj.setdefault(part, {})
            obj[path[-1]] = coerce(value)
    return data


def _section(cls: type, data: Any) -> Any:
    """Build dataclass *cls* from *data*, ignoring unknown keys."""
    if not isinstance(data, dict):
        return cls()
    return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})


def _optional_names(value: Any, key: str) -> list[str] | None:
    if value is None:
        return None
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise ValueError(f"network_io.{key} must be a list of interface names")
    return [str(v) for v in value]


def _dict_to_config(data: dict[str, Any]) -> ExporterConfig:
    """Convert a raw dictionary to an ExporterConfig dataclass."""
    collectors_data = data.get("collectors") or {}

    network = _section(NetworkIoConfig, collectors_data.get("network_io"))
    network.watch_interfaces = _optional_names(network.watch_interfaces, "watch_interfaces")
    network.ignore_interfaces = _optional_names(network.ignore_interfaces, "ignore_interfaces")

    frequency = _section(CpuFrequencyConfig, collectors_data.get("cpu_frequency"))
    if frequency.source not in FREQUENCY_SOURCES:
        raise ValueError(
            f"cpu_frequency.source must be one of {FREQUENCY_SOURCES}, got {frequency.source!r}"
        )

    return ExporterConfig(
        server=_section(ServerConfig, data.get("server")),
        log=_section(LogConfig, data.get("log")),
        scrape=_section(ScrapeConfig, data.get("scrape")),
        collectors=CollectorsConfig(
            cpu_usage=_section(MetricConfig, collectors_data.get("cpu_usage")),
            cpu_frequency=frequency,
            memory=_section(MetricConfig, collectors_data.get("memory")),
            swap=_section(MetricConfig, collectors_data.get("swap")),
            disk_io=_section(MetricConfig, collectors_data.get("disk_io")),
            network_io=network,
        ),
    )


def load_config(path: str | Path | None = None) -> ExporterConfig:
    """Load configuration from a YAML file with environment overrides.

    Looks for ``host_exporter.yaml`` in the current directory if *path* is None.
    """
    data: dict[str, Any] = {}
    if path is None:
        path = Path("host_exporter.yaml")
    else:
        path = Path(path)

    if path.exists():
        with open(path, encoding="utf-8") as fh:
            loaded = yaml.safe_load(fh)
            if isinstance(loaded, dict):
                data = loaded

    data = _apply_env_overrides(data)
    return _dict_to_config(data)
