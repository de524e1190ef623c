"""Race Counters & Aggregated Timing Utilities.

Re-exports one-class-per-file implementations from ``metrics/counters_parts``.
"""

from .counters_parts import (
    LatencyStatsSnapshot,
    RaceCounters,
    RaceCountersSnapshot,
    default_counters,
)

__all__ = [
    "LatencyStatsSnapshot",
    "RaceCounters",
    "RaceCountersSnapshot",
    "default_counters",
]
