"""Sequence adapter: iterate an async iterable until a signal aborts.

Each pull of the source is raced against the signal with its own
subscription (see ``race.settle``). Items yielded before the abort are never
retracted; the abort surfaces at the next suspension point as the abort
exception and no further pulls happen.

The in-flight pull is never cancelled: whatever the source is waiting on may
be shared with other code. When the adapter stops while a pull is still
pending, the pull stays referenced and the source's ``aclose()`` is queued
behind it, running as soon as that pull settles. Its item, if any, is
dropped.

Python does not close an ``async for`` target on ``break``; wrap the adapter
in ``contextlib.aclosing`` when stopping early so the source is released
promptly.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, AsyncIterable, AsyncIterator, TypeVar

from ..abort_parts.abort_error import abort_exception
from ..interfaces_parts.supports_abort import SupportsAbort
from ..log_support import LogContext
from ..logging import get_logger, log_event
from .race import detach, settle

T = TypeVar("T")

logger = get_logger("abortable.sequence")


async def _close_source(iterator: AsyncIterator[Any]) -> None:
    aclose = getattr(iterator, "aclose", None)
    if aclose is not None:
        await aclose()


def _report_close(closing: "asyncio.Future[Any]") -> None:
    if closing.cancelled():
        return
    exc = closing.exception()
    if exc is not None:
        logger.error("closing source after abort failed", exc_info=exc)


def _close_when_settled(pull: "asyncio.Future[Any]", iterator: AsyncIterator[Any]) -> None:
    def _on_settled(_: "asyncio.Future[Any]") -> None:
        closing = asyncio.ensure_future(_close_source(iterator))
        closing.add_done_callback(_report_close)
        detach(closing)

    pull.add_done_callback(_on_settled)
    detach(pull)


async def abortable_iterable(source: AsyncIterable[T], signal: SupportsAbort) -> AsyncIterator[T]:
    """Yield items from ``source`` until it is exhausted or ``signal`` aborts.

    Raises the abort exception when the signal aborts (before the first pull
    if it is already aborted, yielding nothing). Errors raised by ``source``
    propagate unchanged.
    """
    if signal.aborted:
        raise abort_exception(signal.reason)

    iterator = source.__aiter__()
    pending: "asyncio.Future[Any] | None" = None
    in_flight: BaseException | None = None
    produced = 0
    state = "consumer"
    try:
        while True:
            if signal.aborted:
                state = "aborted"
                raise abort_exception(signal.reason)
            pull = asyncio.ensure_future(iterator.__anext__())
            pending = pull
            outcome = await settle(pull, signal, operation="pull")
            if pull.done():
                pending = None
                detach(pull)
            if outcome.aborted:
                state = "aborted"
            elif isinstance(outcome.error, StopAsyncIteration):
                state = "exhausted"
                return
            elif outcome.error is not None:
                state = "error"
            item = outcome.unwrap()
            produced += 1
            yield item
    except BaseException as exc:
        in_flight = exc
        raise
    finally:
        try:
            if pending is not None and not pending.done():
                _close_when_settled(pending, iterator)
            else:
                await _close_source(iterator)
        except Exception:
            # a close failure must not mask the abort or the source error
            if in_flight is None or isinstance(in_flight, GeneratorExit):
                raise
            logger.exception("closing source failed while %s was propagating", type(in_flight).__name__)
        finally:
            log_event(
                logger,
                "abort.sequence.closed",
                LogContext(operation="sequence"),
                level=logging.DEBUG,
                items=produced,
                state=state,
            )


__all__ = ["abortable_iterable"]
