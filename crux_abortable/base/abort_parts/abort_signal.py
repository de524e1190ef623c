"""Abort signal implementation.

``AbortSignal`` is the observable side of an ``AbortController``: a one-time,
thread-safe "aborted" flag with an optional reason and one-shot listener
subscriptions. Subscribing to an already-aborted signal delivers the reason
synchronously, so there is no window in which an abort can be missed.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from threading import Lock
from typing import Any, Dict, Iterable, List

from ..log_support import LogContext
from ..logging import get_logger, log_event
from ..settings import get_settings
from .abort_error import AbortError, abort_exception
from .state import SignalState
from .subscription import AbortListener, Subscription

logger = get_logger("abortable.signal")


class AbortSignal:
    """Shared, read-only view of an abort request.

    Signals are created by ``AbortController`` (or the ``already_aborted`` /
    ``any`` constructors) and only transition once, from pending to aborted.
    """

    def __init__(self) -> None:
        self._state = SignalState()
        self._lock = Lock()
        # keyed by id() to keep O(1) release while preserving registration order
        self._listeners: Dict[int, Subscription] = {}
        self._leak_warned = False

    # -------------------------- Constructors -------------------------- #
    @classmethod
    def already_aborted(cls, reason: Any = None) -> "AbortSignal":
        """Return a signal that is aborted from the start."""
        signal = cls()
        signal._abort(reason)
        return signal

    @classmethod
    def any(cls, signals: Iterable["AbortSignal"]) -> "AbortSignal":
        """Return a signal that aborts as soon as any of ``signals`` aborts.

        The combined signal takes the reason of the first source to abort.
        Its subscriptions on the sources are released once it has fired.
        """
        combined = cls()
        sources = list(signals)
        for source in sources:
            if source.aborted:
                combined._abort(source.reason)
                return combined

        subs: List[Subscription] = []

        def _on_source_abort(reason: Any) -> None:
            combined._abort(reason)
            for sub in subs:
                sub.release()

        for source in sources:
            subs.append(source.subscribe(_on_source_abort))
            if combined.aborted:
                break
        if combined.aborted:
            for sub in subs:
                sub.release()
        return combined

    # -------------------------- State -------------------------- #
    @property
    def aborted(self) -> bool:  # noqa: D401 - short form
        """Whether the signal has been aborted."""
        return self._state.aborted

    @property
    def reason(self) -> Any:  # noqa: D401 - short form
        """Stored abort reason (an ``AbortError`` when none was supplied)."""
        return self._state.reason

    @property
    def aborted_at(self) -> datetime | None:  # noqa: D401 - short form
        """UTC timestamp of the abort, if any."""
        return self._state.aborted_at

    @property
    def listener_count(self) -> int:
        """Number of listeners still waiting for the abort."""
        with self._lock:
            return len(self._listeners)

    def throw_if_aborted(self) -> None:
        """Raise the abort exception if the signal is aborted."""
        if self._state.aborted:
            raise abort_exception(self._state.reason)

    # -------------------------- Subscriptions -------------------------- #
    def subscribe(self, listener: AbortListener) -> Subscription:
        """Register ``listener`` to be called once with the abort reason.

        If the signal is already aborted the listener runs before this method
        returns and the returned handle is already in the ``FIRED`` state.
        """
        sub = Subscription(listener, self)
        with self._lock:
            already = self._state.aborted
            if not already:
                self._listeners[id(sub)] = sub
                count = len(self._listeners)
        if already:
            sub.fire(self._state.reason)
            return sub
        self._check_listener_count(count)
        return sub

    def unsubscribe(self, handle: Subscription) -> None:
        """Release ``handle``; equivalent to ``handle.release()``."""
        handle.release()

    def _discard(self, sub: Subscription) -> None:
        with self._lock:
            self._listeners.pop(id(sub), None)

    def _check_listener_count(self, count: int) -> None:
        limit = get_settings().max_listeners
        if not limit or count <= limit or self._leak_warned:
            return
        self._leak_warned = True
        log_event(
            logger,
            "abort.listeners.excess",
            LogContext(operation="subscribe"),
            level=logging.WARNING,
            listeners=count,
            limit=limit,
        )

    # -------------------------- Transition -------------------------- #
    def _abort(self, reason: Any = None) -> bool:
        """Transition to aborted and notify listeners; ``False`` if already aborted."""
        with self._lock:
            if self._state.aborted:
                return False
            self._state.aborted = True
            self._state.reason = AbortError() if reason is None else reason
            self._state.aborted_at = datetime.now(timezone.utc)
            stored = self._state.reason
            pending = list(self._listeners.values())
            self._listeners.clear()

        log_event(
            logger,
            "abort.signal.aborted",
            LogContext(operation="abort"),
            level=logging.DEBUG,
            listeners=len(pending),
            reason_type=type(stored).__name__,
        )
        for sub in pending:
            try:
                sub.fire(stored)
            except Exception:
                logger.exception("abort listener raised; continuing with remaining listeners")
        return True

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return (
            f"AbortSignal(aborted={self._state.aborted}, "
            f"reason={self._state.reason!r}, listeners={len(self._listeners)})"
        )


__all__ = ["AbortSignal"]
