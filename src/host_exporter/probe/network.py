"""Network I/O probe."""

from __future__ import annotations

from dataclasses import dataclass

import psutil

from ..errors import NoSensorsFound, ProbeIoError


@dataclass(frozen=True)
class InterfaceStats:
    """Cumulative traffic counters for one network interface."""

    interface: str
    bytes_sent: int
    bytes_received: int
    packets_sent: int
    packets_received: int


@dataclass(frozen=True)
class NetworkIoStats:
    interfaces: tuple[InterfaceStats, ...]


class NetworkIoProbe:
    """Reads per-interface counters via :func:`psutil.net_io_counters`."""

    def network_io(self) -> NetworkIoStats:
        try:
            counters = psutil.net_io_counters(pernic=True, nowrap=True)
        except (OSError, psutil.Error) as exc:
            raise ProbeIoError(f"Failed to read network I/O counters: {exc}") from exc
        if not counters:
            raise NoSensorsFound("No network interfaces reported")

        return NetworkIoStats(interfaces=tuple(
            InterfaceStats(
                interface=name,
                bytes_sent=int(nio.bytes_sent),
                bytes_received=int(nio.bytes_recv),
                packets_sent=int(nio.packets_sent),
                packets_received=int(nio.packets_recv),
            )
            for name, nio in sorted(counters.items())
        ))
