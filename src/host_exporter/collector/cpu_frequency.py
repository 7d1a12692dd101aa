"""CPU frequency collector."""

from __future__ import annotations

from typing import Protocol

from ..config import CpuFrequencyConfig
from ..probe.cpu import CpuFrequencyStats
from .base import Collector, Metric, MetricDefinition, ObservedGauge

CORE_FREQUENCY = MetricDefinition(
    "system_cpu_core_frequency_hertz",
    "Current CPU core clock frequency in hertz",
    ("core",),
)


class CpuFrequencySource(Protocol):
    def cpu_frequency(self) -> CpuFrequencyStats: ...


class CpuFrequency(Metric[CpuFrequencyConfig]):
    name = "cpu_frequency"
    definitions = (CORE_FREQUENCY,)

    def build_collector(self, gauges: dict[str, ObservedGauge], data_source: CpuFrequencySource) -> Collector:
        return CpuFrequencyCollector(gauges, data_source)


class CpuFrequencyCollector(Collector):
    def __init__(self, gauges: dict[str, ObservedGauge], data_source: CpuFrequencySource) -> None:
        self._cores = gauges[CORE_FREQUENCY.name]
        self._data_source = data_source

    @property
    def name(self) -> str:
        return CpuFrequency.name

    def collect(self) -> None:
        stats = self._data_source.cpu_frequency()
        for idx, hertz in enumerate(stats.cores):
            self._cores.labels(core=str(idx)).set(hertz)
