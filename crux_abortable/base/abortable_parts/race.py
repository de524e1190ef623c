"""Race primitive: settle an awaitable against an abort signal.

Purpose
-------
``settle`` races one unit of work against a ``SupportsAbort`` signal and
commits exactly one :class:`RaceOutcome`. ``abortable_awaitable`` is the
raising form used by callers; the sequence adapter settles each pull directly.

Ordering
--------
The first callback delivered commits the race. Abort listeners run
synchronously inside ``AbortController.abort()`` while completion of the
work is delivered through a loop callback, so an abort issued after the work
finished but before the loop delivered that completion wins. A signal that
is already aborted settles the race before the work is scheduled at all.

Resource guarantees
-------------------
- The subscription is released on every exit path, including cancellation of
  the awaiting task.
- The work is never cancelled here, and nothing stays attached to it once the
  race has settled. A task created here for a bare coroutine is the only
  thing kept: when it loses, it stays referenced until it finishes and its
  result or exception is retrieved and dropped, so no "exception was never
  retrieved" noise escapes. Futures owned by the caller are left untouched.
"""
from __future__ import annotations

import asyncio
import inspect
import logging
import uuid
from typing import Any, Awaitable, Optional, Set, TypeVar

from ..abort_parts.abort_error import abort_exception
from ..dto.race_outcome import RaceOutcome
from ..errors_parts.classification import classify_exception
from ..errors_parts.error_code import ErrorCode
from ..interfaces_parts.supports_abort import Releasable, SupportsAbort
from ..log_support import LogContext
from ..logging import get_logger, log_event
from ..metrics.counters_parts.race_counters import RaceCounters, default_counters

T = TypeVar("T")

logger = get_logger("abortable.race")

# Losing work that is still running; kept referenced until it settles.
_ORPHANS: Set["asyncio.Future[Any]"] = set()


def _drop_result(fut: "asyncio.Future[Any]") -> None:
    _ORPHANS.discard(fut)
    if not fut.cancelled():
        fut.exception()


def detach(fut: "asyncio.Future[Any]") -> None:
    """Keep ``fut`` referenced until it settles, then drop its result unseen.

    Only for futures created by this package; callers' futures are never
    subscribed to after a race settles.
    """
    if fut.done():
        _drop_result(fut)
        return
    _ORPHANS.add(fut)
    fut.add_done_callback(_drop_result)


def _close_unstarted(work: Awaitable[Any]) -> None:
    # a bare coroutine that will never be awaited must be closed explicitly
    if inspect.iscoroutine(work):
        work.close()


def orphan_count() -> int:
    """Number of losing work items still running in the background."""
    return len(_ORPHANS)


def _outcome_from_future(fut: "asyncio.Future[Any]", latency_ms: int) -> RaceOutcome:
    if fut.cancelled():
        return RaceOutcome(
            kind="error",
            error=asyncio.CancelledError(),
            code=ErrorCode.CANCELLED,
            latency_ms=latency_ms,
        )
    exc = fut.exception()
    if exc is not None:
        return RaceOutcome(kind="error", error=exc, code=classify_exception(exc), latency_ms=latency_ms)
    return RaceOutcome(kind="value", value=fut.result(), latency_ms=latency_ms)


def _aborted_outcome(reason: Any, latency_ms: int) -> RaceOutcome:
    return RaceOutcome(
        kind="aborted",
        error=abort_exception(reason),
        code=ErrorCode.CANCELLED,
        latency_ms=latency_ms,
    )


def _record(counters: RaceCounters, ctx: LogContext, outcome: RaceOutcome) -> None:
    # end of a source counts as a completed pull
    if outcome.kind == "value" or isinstance(outcome.error, StopAsyncIteration):
        counters.record_fulfilled(outcome.latency_ms or 0)
    elif outcome.kind == "aborted":
        counters.record_aborted(outcome.latency_ms)
    else:
        code = outcome.code or ErrorCode.UNKNOWN
        counters.record_failed(code.value, outcome.latency_ms)
    log_event(
        logger,
        "abort.race.settled",
        ctx,
        level=logging.DEBUG,
        outcome=outcome.kind,
        code=outcome.code.value if outcome.code else None,
        latency_ms=outcome.latency_ms,
    )


async def settle(
    work: Awaitable[T],
    signal: SupportsAbort,
    *,
    operation: str = "value",
    counters: Optional[RaceCounters] = None,
) -> RaceOutcome:
    """Race ``work`` against ``signal`` and return the committed outcome.

    Never raises for outcomes of the race itself; only cancellation of the
    awaiting task propagates (after the subscription has been released).
    """
    counters = counters or default_counters()
    ctx = LogContext(operation=operation, race_id=uuid.uuid4().hex[:12])
    started = counters.monotonic_ms()

    if signal.aborted:
        _close_unstarted(work)
        counters.record_start()
        outcome = _aborted_outcome(signal.reason, 0)
        _record(counters, ctx, outcome)
        return outcome

    loop = asyncio.get_running_loop()
    fut = asyncio.ensure_future(work)
    counters.record_start()
    race: "asyncio.Future[RaceOutcome]" = loop.create_future()

    def _elapsed() -> int:
        return counters.monotonic_ms() - started

    def _commit_work(done: "asyncio.Future[Any]") -> None:
        # build first so the loser's exception is always marked retrieved
        outcome = _outcome_from_future(done, _elapsed())
        if not race.done():
            race.set_result(outcome)

    def _commit_abort(reason: Any) -> None:
        if not race.done():
            race.set_result(_aborted_outcome(reason, _elapsed()))

    def _on_abort(reason: Any) -> None:
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None
        if running is loop:
            _commit_abort(reason)
        else:
            loop.call_soon_threadsafe(_commit_abort, reason)

    sub: Optional[Releasable] = None
    try:
        sub = signal.subscribe(_on_abort)
        fut.add_done_callback(_commit_work)
        outcome = await race
    except asyncio.CancelledError:
        counters.record_failed(ErrorCode.CANCELLED.value, _elapsed())
        raise
    except Exception:
        # setup failure (e.g. a broken signal); the race itself never raises
        counters.record_failed(ErrorCode.INTERNAL.value, _elapsed())
        raise
    finally:
        if sub is not None:
            sub.release()
        fut.remove_done_callback(_commit_work)
        if fut is not work:
            detach(fut)
    _record(counters, ctx, outcome)
    return outcome


async def abortable_awaitable(work: Awaitable[T], signal: SupportsAbort) -> T:
    """Await ``work`` unless ``signal`` aborts first.

    Returns the work's value, re-raises the work's exception unchanged, or
    raises the abort reason (the reason itself when it is an exception,
    otherwise an ``AbortError``).
    """
    outcome = await settle(work, signal)
    return outcome.unwrap()


__all__ = ["abortable_awaitable", "detach", "orphan_count", "settle"]
