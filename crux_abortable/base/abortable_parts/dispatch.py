"""Single entry point choosing the value or sequence form.

``abortable(work, signal)`` returns a coroutine for awaitables and an async
iterator for async iterables, so call sites read the same either way::

    value = await abortable(fetch(), signal)
    async for item in abortable(stream(), signal):
        ...
"""
from __future__ import annotations

import inspect
from collections.abc import AsyncIterable
from typing import Any, AsyncIterator, Awaitable, Coroutine, TypeVar, Union, overload

from ..dto.race_outcome import RaceOutcome
from ..interfaces_parts.supports_abort import SupportsAbort
from .race import abortable_awaitable, settle
from .sequence import abortable_iterable

T = TypeVar("T")


@overload
def abortable(work: Awaitable[T], signal: SupportsAbort) -> Coroutine[Any, Any, T]: ...


@overload
def abortable(work: AsyncIterable[T], signal: SupportsAbort) -> AsyncIterator[T]: ...


def abortable(
    work: Union[Awaitable[T], AsyncIterable[T]],
    signal: SupportsAbort,
) -> Union[Coroutine[Any, Any, T], AsyncIterator[T]]:
    """Wrap ``work`` so it stops when ``signal`` aborts.

    Raises:
        TypeError: ``work`` is neither awaitable nor an async iterable.
    """
    if inspect.isawaitable(work):
        return abortable_awaitable(work, signal)
    if isinstance(work, AsyncIterable):
        return abortable_iterable(work, signal)
    raise TypeError(f"abortable() expects an awaitable or async iterable, got {type(work).__name__}")


async def race_outcome(work: Awaitable[T], signal: SupportsAbort) -> RaceOutcome:
    """Race ``work`` against ``signal`` and return the tagged outcome.

    Unlike ``abortable`` nothing is raised for a failed or aborted race; the
    caller inspects ``outcome.kind`` or calls ``outcome.unwrap()``.
    """
    return await settle(work, signal, operation="outcome")


__all__ = ["abortable", "race_outcome"]
