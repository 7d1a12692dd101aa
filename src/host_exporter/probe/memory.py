"""Memory and swap probes."""

from __future__ import annotations

from dataclasses import dataclass

import psutil

from ..errors import ProbeIoError


@dataclass(frozen=True)
class MemoryStats:
    """Physical memory in bytes."""

    total: int
    used: int
    free: int
    available: int


@dataclass(frozen=True)
class SwapStats:
    """Swap space in bytes."""

    total: int
    used: int
    free: int


class MemoryProbe:
    """Reads RAM usage via :func:`psutil.virtual_memory`."""

    def memory(self) -> MemoryStats:
        try:
            mem = psutil.virtual_memory()
        except (OSError, psutil.Error) as exc:
            raise ProbeIoError(f"Failed to read memory statistics: {exc}") from exc
        return MemoryStats(
            total=int(mem.total),
            used=int(mem.used),
            free=int(mem.free),
            available=int(mem.available),
        )


class SwapProbe:
    """Reads swap usage via :func:`psutil.swap_memory`."""

    def swap(self) -> SwapStats:
        try:
            swap = psutil.swap_memory()
        except (OSError, psutil.Error) as exc:
            raise ProbeIoError(f"Failed to read swap statistics: {exc}") from exc
        return SwapStats(total=int(swap.total), used=int(swap.used), free=int(swap.free))
