"""Shared sources and signals for race tests."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, List

from crux_abortable.base.abort_signal import AbortController, Subscription


async def hello_world(delay: float, closed: List[bool] | None = None):
    """Yield "Hello", suspend for ``delay`` seconds, then yield "World"."""
    try:
        yield "Hello"
        await asyncio.sleep(delay)
        yield "World"
    finally:
        if closed is not None:
            closed.append(True)


class CountingSource:
    """Class-based async iterator recording pulls and close requests."""

    def __init__(self, items: List[Any]) -> None:
        self._items = list(items)
        self.pulls = 0
        self.closed = False

    def __aiter__(self) -> "CountingSource":
        return self

    async def __anext__(self) -> Any:
        self.pulls += 1
        if not self._items:
            raise StopAsyncIteration
        await asyncio.sleep(0)
        return self._items.pop(0)

    async def aclose(self) -> None:
        self.closed = True


class RecordingSignal:
    """``SupportsAbort`` wrapper that keeps every listener and handle it hands out."""

    def __init__(self) -> None:
        self.controller = AbortController()
        self.listeners: List[Callable[[Any], None]] = []
        self.handles: List[Subscription] = []

    @property
    def aborted(self) -> bool:
        return self.controller.signal.aborted

    @property
    def reason(self) -> Any:
        return self.controller.signal.reason

    def subscribe(self, listener: Callable[[Any], None]) -> Subscription:
        handle = self.controller.signal.subscribe(listener)
        self.listeners.append(listener)
        self.handles.append(handle)
        return handle

    def unsubscribe(self, handle: Subscription) -> None:
        handle.release()


def resolve_later(value: Any, delay: float):
    """Return ``(future, timer_handle)`` resolving ``future`` with ``value`` after ``delay``."""
    loop = asyncio.get_running_loop()
    fut = loop.create_future()
    handle = loop.call_later(delay, fut.set_result, value)
    return fut, handle


async def wait_until(predicate: Callable[[], bool], timeout: float = 1.0) -> None:
    """Poll ``predicate`` on the running loop until it holds or ``timeout`` passes."""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            raise AssertionError("condition not reached in time")
        await asyncio.sleep(0.005)


class CallbackCountingFuture(asyncio.Future):
    """Future tracking how many done callbacks are currently attached."""

    def __init__(self, *, loop: asyncio.AbstractEventLoop | None = None) -> None:
        super().__init__(loop=loop)
        self.live_callbacks = 0

    def add_done_callback(self, fn, *, context=None) -> None:  # type: ignore[override]
        super().add_done_callback(fn, context=context)
        self.live_callbacks += 1

    def remove_done_callback(self, fn) -> int:  # type: ignore[override]
        removed = super().remove_done_callback(fn)
        self.live_callbacks -= removed
        return removed


class FailingCloseSource(CountingSource):
    """``CountingSource`` whose ``aclose`` raises after recording the call."""

    async def aclose(self) -> None:
        self.closed = True
        raise OSError("close failed")
