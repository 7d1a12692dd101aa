"""Disk I/O collector."""

from __future__ import annotations

from typing import Protocol

from ..config import MetricConfig
from ..probe.disk import DiskIoStats
from .base import Collector, Metric, MetricDefinition, ObservedGauge

BYTES_READ = MetricDefinition(
    "system_disk_bytes_read_total",
    "Total bytes read from disk (cumulative)",
    ("device",),
)
BYTES_WRITTEN = MetricDefinition(
    "system_disk_bytes_written_total",
    "Total bytes written to disk (cumulative)",
    ("device",),
)

# Loopback and compressed-swap block devices are virtual; never exported.
VIRTUAL_DEVICE_PREFIXES = ("loop", "zram")


class DiskIoSource(Protocol):
    def disk_io(self) -> DiskIoStats: ...


class DiskIo(Metric[MetricConfig]):
    name = "disk_io"
    definitions = (BYTES_READ, BYTES_WRITTEN)

    def build_collector(self, gauges: dict[str, ObservedGauge], data_source: DiskIoSource) -> Collector:
        return DiskIoCollector(gauges, data_source)


class DiskIoCollector(Collector):
    def __init__(self, gauges: dict[str, ObservedGauge], data_source: DiskIoSource) -> None:
        self._bytes_read = gauges[BYTES_READ.name]
        self._bytes_written = gauges[BYTES_WRITTEN.name]
        self._data_source = data_source

    @property
    def name(self) -> str:
        return DiskIo.name

    @staticmethod
    def should_collect(device_name: str) -> bool:
        return not device_name.startswith(VIRTUAL_DEVICE_PREFIXES)

    def collect(self) -> None:
        stats = self._data_source.disk_io()
        for dev in stats.devices:
            if not self.should_collect(dev.device_name):
                continue
            self._bytes_read.labels(device=dev.device_name).set(dev.bytes_read)
            self._bytes_written.labels(device=dev.device_name).set(dev.bytes_written)
