"""Thread-safe in-memory counters for races.

Every call to the race primitive records a start and exactly one terminal
outcome (fulfilled, failed or aborted).
"""

from __future__ import annotations

import time
from threading import RLock
from typing import Any, Dict, Optional

from .latency_stats_snapshot import LatencyStatsSnapshot
from .race_counters_snapshot import RaceCountersSnapshot


class RaceCounters:
    """Thread-safe in-memory counters for race outcomes."""

    __slots__ = (
        "_scope",
        "_lock",
        "_total",
        "_fulfilled",
        "_failed",
        "_aborted",
        "_in_flight",
        "_failure_by_code",
        # latency aggregates
        "_latency_count",
        "_latency_total",
        "_latency_min",
        "_latency_max",
    )

    def __init__(self, scope: str = "default"):
        """Initialize counters for a named scope.

        Args:
            scope: Label reported in snapshots (e.g. ``"default"``).
        """
        self._scope = scope
        self._lock = RLock()
        self._total = 0
        self._fulfilled = 0
        self._failed = 0
        self._aborted = 0
        self._in_flight = 0
        self._failure_by_code: Dict[str, int] = {}
        self._latency_count = 0
        self._latency_total = 0
        self._latency_min: Optional[int] = None
        self._latency_max: Optional[int] = None

    @staticmethod
    def monotonic_ms() -> int:
        """Return current monotonic time in milliseconds for latency measurement."""
        return int(time.monotonic() * 1000)

    # -------------------------- Record Methods -------------------------- #
    def record_start(self) -> None:
        with self._lock:
            self._total += 1
            self._in_flight += 1

    def record_fulfilled(self, latency_ms: int) -> None:
        with self._lock:
            self._fulfilled += 1
            self._in_flight = max(0, self._in_flight - 1)
            self._update_latency(latency_ms)

    def record_failed(self, error_code: str, latency_ms: Optional[int] = None) -> None:
        """Record a race settled by an error from the underlying work.

        Args:
            error_code: Canonical error code string.
            latency_ms: Optional latency to include in aggregate stats.
        """
        with self._lock:
            self._failed += 1
            self._failure_by_code[error_code] = self._failure_by_code.get(error_code, 0) + 1
            self._in_flight = max(0, self._in_flight - 1)
            if latency_ms is not None:
                self._update_latency(latency_ms)

    def record_aborted(self, latency_ms: Optional[int] = None) -> None:
        """Record a race settled by the signal."""
        with self._lock:
            self._aborted += 1
            self._in_flight = max(0, self._in_flight - 1)
            if latency_ms is not None:
                self._update_latency(latency_ms)

    def _update_latency(self, latency_ms: int) -> None:
        if latency_ms < 0:
            return
        if self._latency_min is None or latency_ms < self._latency_min:
            self._latency_min = latency_ms
        if self._latency_max is None or latency_ms > self._latency_max:
            self._latency_max = latency_ms
        self._latency_count += 1
        self._latency_total += latency_ms

    # -------------------------- Snapshot API -------------------------- #
    def snapshot(self, reset: bool = False) -> RaceCountersSnapshot:
        """Return an immutable snapshot of current counters.

        Args:
            reset: If True, zero counters & latency aggregates after creating
                the snapshot (``in_flight`` is preserved).
        """
        with self._lock:
            avg_ms = self._latency_total / self._latency_count if self._latency_count else None
            snapshot = RaceCountersSnapshot(
                scope=self._scope,
                total=self._total,
                fulfilled=self._fulfilled,
                failed=self._failed,
                aborted=self._aborted,
                in_flight=self._in_flight,
                failure_by_code=dict(self._failure_by_code),
                latency=LatencyStatsSnapshot(
                    count=self._latency_count,
                    total_ms=self._latency_total,
                    min_ms=self._latency_min,
                    max_ms=self._latency_max,
                    avg_ms=avg_ms,
                ),
                generated_at_ms=self.monotonic_ms(),
            )
            if reset:
                self._total = 0
                self._fulfilled = 0
                self._failed = 0
                self._aborted = 0
                self._failure_by_code.clear()
                self._latency_count = 0
                self._latency_total = 0
                self._latency_min = None
                self._latency_max = None
            return snapshot

    def as_dict(self, reset: bool = False) -> Dict[str, Any]:
        """Convenience wrapper returning snapshot converted to dictionary."""
        return self.snapshot(reset=reset).to_dict()


_DEFAULT = RaceCounters()


def default_counters() -> RaceCounters:
    """Return the process-wide counters updated by every race."""
    return _DEFAULT


__all__ = ["RaceCounters", "default_counters"]
