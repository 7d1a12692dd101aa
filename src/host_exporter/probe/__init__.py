"""Probes that read raw OS state into typed measurement structs."""

from .cpu import (
    CpuFrequencyStats,
    CpuUsageProbe,
    CpuUsageStats,
    PsutilCpuFrequencyProbe,
    SysfsCpuFrequencyProbe,
)
from .disk import DeviceIoStats, DiskIoProbe, DiskIoStats
from .memory import MemoryProbe, MemoryStats, SwapProbe, SwapStats
from .network import InterfaceStats, NetworkIoProbe, NetworkIoStats
from .reader import FileReader, LocalFileReader
from .snapshot import CpuReading, CpuSnapshot

__all__ = [
    "CpuFrequencyStats",
    "CpuReading",
    "CpuSnapshot",
    "CpuUsageProbe",
    "CpuUsageStats",
    "DeviceIoStats",
    "DiskIoProbe",
    "DiskIoStats",
    "FileReader",
    "InterfaceStats",
    "LocalFileReader",
    "MemoryProbe",
    "MemoryStats",
    "NetworkIoProbe",
    "NetworkIoStats",
    "PsutilCpuFrequencyProbe",
    "SwapProbe",
    "SwapStats",
    "SysfsCpuFrequencyProbe",
]
