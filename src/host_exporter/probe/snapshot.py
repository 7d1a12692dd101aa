"""Shared, throttled snapshot of per-core CPU counters.

Reading per-core CPU usage is the most expensive probe and psutil derives
usage from the delta between two consecutive calls, so every consumer must
go through one object. :class:`CpuSnapshot` serialises access with a single
lock and refuses to re-sample more often than ``min_interval``; callers that
arrive within that window get the cached reading.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable

import psutil

from ..errors import SnapshotUnavailable

logger = logging.getLogger(__name__)

# Two physical reads closer than this yield meaningless usage deltas.
MINIMUM_CPU_UPDATE_INTERVAL = 0.2


@dataclass(frozen=True)
class CpuReading:
    """One physical sample of the per-core counters."""

    usage_percent: tuple[float, ...]
    frequency_mhz: tuple[float, ...]
    taken_at: float


def sample_cpu() -> tuple[list[float], list[float]]:
    """Read per-core usage (percent) and per-core frequency (MHz) from psutil."""
    usage = psutil.cpu_percent(interval=None, percpu=True)
    try:
        freqs = psutil.cpu_freq(percpu=True) or []
    except (NotImplementedError, AttributeError) as exc:
        # frequency is unsupported here; the frequency probe reports NoSensorsFound
        logger.debug("psutil cannot report CPU frequency: %s", exc)
        freqs = []
    return usage, [f.current for f in freqs]


class CpuSnapshot:
    """Process-wide cache of per-core CPU readings."""

    def __init__(
        self,
        min_interval: float = MINIMUM_CPU_UPDATE_INTERVAL,
        sampler: Callable[[], tuple[list[float], list[float]]] | None = None,
        clock: Callable[[], float] = time.monotonic,
        lock_timeout: float = 5.0,
    ) -> None:
        self._min_interval = min_interval
        self._sampler = sampler or sample_cpu
        self._clock = clock
        self._lock_timeout = lock_timeout
        self._lock = threading.Lock()
        self._reading: CpuReading | None = None
        self._refresh_count = 0

    @property
    def refresh_count(self) -> int:
        """Number of physical reads performed so far."""
        return self._refresh_count

    def _acquire(self) -> None:
        if not self._lock.acquire(timeout=self._lock_timeout):
            raise SnapshotUnavailable(
                f"CPU snapshot lock not acquired within {self._lock_timeout:.1f}s"
            )

    def _is_stale(self) -> bool:
        if self._reading is None:
            return True
        return self._clock() - self._reading.taken_at > self._min_interval

    def _refresh_locked(self) -> bool:
        if not self._is_stale():
            return False
        try:
            usage, freq = self._sampler()
        except (OSError, psutil.Error) as exc:
            raise SnapshotUnavailable(f"Failed to refresh CPU statistics: {exc}") from exc
        # swap in a complete reading; readers never see a partial update
        self._reading = CpuReading(
            usage_percent=tuple(float(u) for u in usage),
            frequency_mhz=tuple(float(f) for f in freq),
            taken_at=self._clock(),
        )
        self._refresh_count += 1
        logger.debug("CPU snapshot refreshed (%d cores)", len(self._reading.usage_percent))
        return True

    def _read_locked(self) -> CpuReading:
        if self._reading is None:
            raise SnapshotUnavailable("CPU snapshot has not been refreshed yet")
        return self._reading

    def refresh_if_stale(self) -> bool:
        """Re-read the OS counters if the cached reading is older than the minimum interval.

        Returns True when a physical read happened.
        """
        self._acquire()
        try:
            return self._refresh_locked()
        finally:
            self._lock.release()

    def read(self) -> CpuReading:
        """Return the most recent cached reading."""
        self._acquire()
        try:
            return self._read_locked()
        finally:
            self._lock.release()

    def current(self) -> CpuReading:
        """Refresh if stale and return the reading, under one lock hold."""
        self._acquire()
        try:
            self._refresh_locked()
            return self._read_locked()
        finally:
            self._lock.release()
