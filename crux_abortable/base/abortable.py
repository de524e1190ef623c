"""Abortable races (public API facade).

Purpose
-------
Expose the race primitives via the canonical ``crux_abortable.base.abortable``
import path while implementations live under ``abortable_parts``.

Notes
-----
- ``abortable`` dispatches to ``abortable_awaitable`` or ``abortable_iterable``.
- ``race_outcome`` returns a ``RaceOutcome`` instead of raising.
- ``settle`` is the shared primitive; it accepts a ``counters`` override for
  callers that keep their own metrics scope.
"""

from .abortable_parts import (
    abortable,
    abortable_awaitable,
    abortable_iterable,
    orphan_count,
    race_outcome,
    settle,
)

__all__ = [
    "abortable",
    "abortable_awaitable",
    "abortable_iterable",
    "orphan_count",
    "race_outcome",
    "settle",
]
