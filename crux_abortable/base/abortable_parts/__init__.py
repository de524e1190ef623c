"""Implementation parts for the abortable race primitives."""

from .race import abortable_awaitable, orphan_count, settle
from .sequence import abortable_iterable
from .dispatch import abortable, race_outcome

__all__ = [
    "abortable",
    "abortable_awaitable",
    "abortable_iterable",
    "orphan_count",
    "race_outcome",
    "settle",
]
