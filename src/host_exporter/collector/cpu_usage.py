"""CPU usage collector."""

from __future__ import annotations

from typing import Protocol

from ..config import MetricConfig
from ..probe.cpu import CpuUsageStats
from .base import Collector, Metric, MetricDefinition, ObservedGauge

TOTAL_USAGE = MetricDefinition(
    "system_cpu_usage_ratio",
    "Overall CPU usage as a ratio (0.0 to 1.0)",
)
CORE_USAGE = MetricDefinition(
    "system_cpu_core_usage_ratio",
    "Per-core CPU usage as a ratio (0.0 to 1.0)",
    ("core",),
)


class CpuUsageSource(Protocol):
    def cpu_usage(self) -> CpuUsageStats: ...


class CpuUsage(Metric[MetricConfig]):
    name = "cpu_usage"
    definitions = (TOTAL_USAGE, CORE_USAGE)

    def build_collector(self, gauges: dict[str, ObservedGauge], data_source: CpuUsageSource) -> Collector:
        return CpuUsageCollector(gauges, data_source)


class CpuUsageCollector(Collector):
    """Publishes overall and per-core usage from the shared CPU snapshot."""

    def __init__(self, gauges: dict[str, ObservedGauge], data_source: CpuUsageSource) -> None:
        self._total = gauges[TOTAL_USAGE.name]
        self._cores = gauges[CORE_USAGE.name]
        self._data_source = data_source

    @property
    def name(self) -> str:
        return CpuUsage.name

    def collect(self) -> None:
        stats = self._data_source.cpu_usage()
        self._total.set(stats.total)
        for idx, usage in enumerate(stats.cores):
            self._cores.labels(core=str(idx)).set(usage)
