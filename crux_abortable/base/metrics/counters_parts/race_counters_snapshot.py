"""Race counters snapshot dataclass.

Immutable snapshot of race counters, designed for serialization and logging.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict

from .latency_stats_snapshot import LatencyStatsSnapshot


@dataclass(frozen=True)
class RaceCountersSnapshot:
    """Immutable point-in-time snapshot of race counters.

    ``in_flight`` counts races that subscribed to a signal and have not
    settled yet; it returning to zero is the observable form of "no dangling
    listeners".
    """

    scope: str
    total: int
    fulfilled: int
    failed: int
    aborted: int
    in_flight: int
    failure_by_code: Dict[str, int]
    latency: LatencyStatsSnapshot
    generated_at_ms: int

    def to_dict(self) -> Dict[str, Any]:  # convenience
        """Return a dictionary representation suitable for JSON serialization."""
        return asdict(self)


__all__ = ["RaceCountersSnapshot"]
