"""Network I/O collector."""

from __future__ import annotations

from typing import Protocol

from ..config import NetworkIoConfig
from ..probe.network import NetworkIoStats
from .base import Collector, Metric, MetricDefinition, ObservedGauge

BYTES_SENT = MetricDefinition(
    "system_network_transmit_bytes_total",
    "Total bytes sent (cumulative)",
    ("interface",),
)
BYTES_RECEIVED = MetricDefinition(
    "system_network_receive_bytes_total",
    "Total bytes received (cumulative)",
    ("interface",),
)
PACKETS_SENT = MetricDefinition(
    "system_network_transmit_packets_total",
    "Total packets sent (cumulative)",
    ("interface",),
)
PACKETS_RECEIVED = MetricDefinition(
    "system_network_receive_packets_total",
    "Total packets received (cumulative)",
    ("interface",),
)


class NetworkIoSource(Protocol):
    def network_io(self) -> NetworkIoStats: ...


class NetworkIo(Metric[NetworkIoConfig]):
    name = "network_io"
    definitions = (BYTES_SENT, BYTES_RECEIVED, PACKETS_SENT, PACKETS_RECEIVED)

    def build_collector(self, gauges: dict[str, ObservedGauge], data_source: NetworkIoSource) -> Collector:
        return NetworkIoCollector(self.config, gauges, data_source)


class NetworkIoCollector(Collector):
    """Publishes per-interface traffic counters, filtered by the watch/ignore lists."""

    def __init__(
        self,
        config: NetworkIoConfig,
        gauges: dict[str, ObservedGauge],
        data_source: NetworkIoSource,
    ) -> None:
        self._config = config
        self._gauges = gauges
        self._data_source = data_source

    @property
    def name(self) -> str:
        return NetworkIo.name

    def should_collect(self, interface: str) -> bool:
        if self._config.watch_interfaces is not None:
            return interface in self._config.watch_interfaces
        if self._config.ignore_interfaces is not None:
            return interface not in self._config.ignore_interfaces
        return True

    def collect(self) -> None:
        stats = self._data_source.network_io()
        for iface in stats.interfaces:
            if not self.should_collect(iface.interface):
                continue
            self._gauges[BYTES_SENT.name].labels(interface=iface.interface).set(iface.bytes_sent)
            self._gauges[BYTES_RECEIVED.name].labels(interface=iface.interface).set(iface.bytes_received)
            self._gauges[PACKETS_SENT.name].labels(interface=iface.interface).set(iface.packets_sent)
            self._gauges[PACKETS_RECEIVED.name].labels(interface=iface.interface).set(iface.packets_received)
