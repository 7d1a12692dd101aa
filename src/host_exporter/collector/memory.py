"""Memory collector."""

from __future__ import annotations

from typing import Protocol

from ..config import MetricConfig
from ..probe.memory import MemoryStats
from .base import Collector, Metric, MetricDefinition, ObservedGauge

TOTAL = MetricDefinition("system_memory_total_bytes", "Total physical memory in bytes")
USED = MetricDefinition("system_memory_used_bytes", "Used physical memory in bytes")
FREE = MetricDefinition("system_memory_free_bytes", "Free physical memory in bytes")
AVAILABLE = MetricDefinition(
    "system_memory_available_bytes",
    "Memory available for new allocations without swapping, in bytes",
)


class MemorySource(Protocol):
    def memory(self) -> MemoryStats: ...


class Memory(Metric[MetricConfig]):
    name = "memory"
    definitions = (TOTAL, USED, FREE, AVAILABLE)

    def build_collector(self, gauges: dict[str, ObservedGauge], data_source: MemorySource) -> Collector:
        return MemoryCollector(gauges, data_source)


class MemoryCollector(Collector):
    def __init__(self, gauges: dict[str, ObservedGauge], data_source: MemorySource) -> None:
        self._gauges = gauges
        self._data_source = data_source

    @property
    def name(self) -> str:
        return Memory.name

    def collect(self) -> None:
        stats = self._data_source.memory()
        self._gauges[TOTAL.name].set(stats.total)
        self._gauges[USED.name].set(stats.used)
        self._gauges[FREE.name].set(stats.free)
        self._gauges[AVAILABLE.name].set(stats.available)
