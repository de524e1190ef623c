"""Metrics package for race counters."""

from .counters import (
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
