"""One-class-per-file parts for race counters metrics."""

from .latency_stats_snapshot import LatencyStatsSnapshot
from .race_counters import RaceCounters, default_counters
from .race_counters_snapshot import RaceCountersSnapshot

__all__ = [
    "LatencyStatsSnapshot",
    "RaceCounters",
    "RaceCountersSnapshot",
    "default_counters",
]
