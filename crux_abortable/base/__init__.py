"""
crux_abortable Base Package

Exports the abort signalling primitives, the race primitives built on them,
and the ambient helpers (errors, logging, metrics, settings) they share.
"""

from .abort_signal import (
    AbortController,
    AbortError,
    AbortListener,
    AbortSignal,
    Subscription,
    SubscriptionState,
    abort_exception,
)
from .abortable import (
    abortable,
    abortable_awaitable,
    abortable_iterable,
    orphan_count,
    race_outcome,
    settle,
)
from .dto import RaceOutcome
from .errors import ErrorCode, classify_exception
from .interfaces import Releasable, SupportsAbort
from .logging import LogContext, configure_logger, get_logger, log_event
from .metrics import RaceCounters, RaceCountersSnapshot, default_counters
from .settings import AbortableSettings, get_settings

__all__ = [
    # Signalling
    "AbortController",
    "AbortError",
    "AbortListener",
    "AbortSignal",
    "Subscription",
    "SubscriptionState",
    "abort_exception",
    # Races
    "abortable",
    "abortable_awaitable",
    "abortable_iterable",
    "orphan_count",
    "race_outcome",
    "settle",
    "RaceOutcome",
    # Interfaces
    "Releasable",
    "SupportsAbort",
    # Errors
    "ErrorCode",
    "classify_exception",
    # Logging
    "LogContext",
    "configure_logger",
    "get_logger",
    "log_event",
    # Metrics & settings
    "RaceCounters",
    "RaceCountersSnapshot",
    "default_counters",
    "AbortableSettings",
    "get_settings",
]
