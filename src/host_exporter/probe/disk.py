"""Disk I/O probe."""

from __future__ import annotations

from dataclasses import dataclass

import psutil

from ..errors import NoSensorsFound, ProbeIoError


@dataclass(frozen=True)
class DeviceIoStats:
    """Cumulative byte counters for one block device."""

    device_name: str
    bytes_read: int
    bytes_written: int


@dataclass(frozen=True)
class DiskIoStats:
    devices: tuple[DeviceIoStats, ...]


class DiskIoProbe:
    """Reads per-device counters via :func:`psutil.disk_io_counters`."""

    def disk_io(self) -> DiskIoStats:
        try:
            counters = psutil.disk_io_counters(perdisk=True, nowrap=True)
        except (OSError, psutil.Error) as exc:
            raise ProbeIoError(f"Failed to read disk I/O counters: {exc}") from exc
        if not counters:
            raise NoSensorsFound("No block devices reported")

        return DiskIoStats(devices=tuple(
            DeviceIoStats(
                device_name=name,
                bytes_read=int(io.read_bytes),
                bytes_written=int(io.write_bytes),
            )
            for name, io in sorted(counters.items())
        ))
