"""Shared fakes for collector and HTTP tests."""

from __future__ import annotations

import pytest

from host_exporter.collector.manager import DataSources
from host_exporter.errors import ProbeIoError
from host_exporter.probe.cpu import CpuFrequencyStats, CpuUsageStats
from host_exporter.probe.disk import DeviceIoStats, DiskIoStats
from host_exporter.probe.memory import MemoryStats, SwapStats
from host_exporter.probe.network import InterfaceStats, NetworkIoStats


class FakeSource:
    """Implements every data-source method with fixed values and call counting."""

    def __init__(self) -> None:
        self.calls: dict[str, int] = {}
        self.failing: set[str] = set()
        self.interfaces = ("eth0", "wlan0", "lo")
        self.devices = ("sda", "nvme0n1", "loop0", "loop12", "zram0")

    def _hit(self, name: str) -> None:
        self.calls[name] = self.calls.get(name, 0) + 1
        if name in self.failing:
            raise ProbeIoError(f"{name} probe broken")

    def cpu_usage(self) -> CpuUsageStats:
        self._hit("cpu_usage")
        return CpuUsageStats(total=0.25, cores=(0.5, 0.0))

    def cpu_frequency(self) -> CpuFrequencyStats:
        self._hit("cpu_frequency")
        return CpuFrequencyStats(cores=(1_100_980_000, 883_485_000))

    def memory(self) -> MemoryStats:
        self._hit("memory")
        return MemoryStats(total=8000, used=3000, free=1000, available=5000)

    def swap(self) -> SwapStats:
        self._hit("swap")
        return SwapStats(total=2000, used=500, free=1500)

    def disk_io(self) -> DiskIoStats:
        self._hit("disk_io")
        return DiskIoStats(devices=tuple(
            DeviceIoStats(device_name=name, bytes_read=100 * i, bytes_written=10 * i)
            for i, name in enumerate(self.devices, start=1)
        ))

    def network_io(self) -> NetworkIoStats:
        self._hit("network_io")
        return NetworkIoStats(interfaces=tuple(
            InterfaceStats(
                interface=name,
                bytes_sent=1000 * i,
                bytes_received=2000 * i,
                packets_sent=10 * i,
                packets_received=20 * i,
            )
            for i, name in enumerate(self.interfaces, start=1)
        ))

    def as_sources(self) -> DataSources:
        return DataSources(
            cpu_usage=self,
            cpu_frequency=self,
            memory=self,
            swap=self,
            disk_io=self,
            network_io=self,
        )


@pytest.fixture
def fake_source() -> FakeSource:
    return FakeSource()
