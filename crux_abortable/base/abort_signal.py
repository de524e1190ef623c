"""Abort signalling primitives (public API facade).

Purpose
-------
Expose the abort constructs via the canonical
``crux_abortable.base.abort_signal`` import path while the concrete
implementations live under ``abort_parts``.

Notes
-----
- ``AbortController`` owns a signal and is the only way to abort it.
- ``AbortSignal`` is shared read-only by every race derived from it.
- ``Subscription`` is the one-shot listener handle returned by
  ``AbortSignal.subscribe``.
- ``AbortError`` is raised when a signal aborted without an exception reason
  is observed.
"""

from .abort_parts import (
    AbortController,
    AbortError,
    AbortListener,
    AbortSignal,
    Subscription,
    SubscriptionState,
    abort_exception,
)

__all__ = [
    "AbortController",
    "AbortError",
    "AbortListener",
    "AbortSignal",
    "Subscription",
    "SubscriptionState",
    "abort_exception",
]
