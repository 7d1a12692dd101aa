"""Swap collector."""

from __future__ import annotations

from typing import Protocol

from ..config import MetricConfig
from ..probe.memory import SwapStats
from .base import Collector, Metric, MetricDefinition, ObservedGauge

TOTAL = MetricDefinition("system_swap_total_bytes", "Total swap space in bytes")
USED = MetricDefinition("system_swap_used_bytes", "Used swap space in bytes")
FREE = MetricDefinition("system_swap_free_bytes", "Free swap space in bytes")


class SwapSource(Protocol):
    def swap(self) -> SwapStats: ...


class Swap(Metric[MetricConfig]):
    name = "swap"
    definitions = (TOTAL, USED, FREE)

    def build_collector(self, gauges: dict[str, ObservedGauge], data_source: SwapSource) -> Collector:
        return SwapCollector(gauges, data_source)


class SwapCollector(Collector):
    def __init__(self, gauges: dict[str, ObservedGauge], data_source: SwapSource) -> None:
        self._gauges = gauges
        self._data_source = data_source

    @property
    def name(self) -> str:
        return Swap.name

    def collect(self) -> None:
        stats = self._data_source.swap()
        self._gauges[TOTAL.name].set(stats.total)
        self._gauges[USED.name].set(stats.used)
        self._gauges[FREE.name].set(stats.free)
