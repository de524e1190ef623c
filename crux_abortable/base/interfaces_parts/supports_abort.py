"""SupportsAbort / Releasable Protocols (collaborator contracts).

Races accept any signal matching ``SupportsAbort``, not only the concrete
``AbortSignal``, so adapters over other cancellation sources can be plugged
in without subclassing.
"""

from __future__ import annotations

from typing import Any, Callable, Protocol, runtime_checkable


@runtime_checkable
class Releasable(Protocol):
    """Handle for a live listener registration."""

    def release(self) -> None:  # pragma: no cover - interface
        """Unregister the listener; must be idempotent."""
        ...


@runtime_checkable
class SupportsAbort(Protocol):
    """Signal contract consumed by the race primitive.

    Implementations must deliver the listener synchronously from
    ``subscribe`` when already aborted, and at most once overall.
    """

    @property
    def aborted(self) -> bool:  # pragma: no cover - interface
        ...

    @property
    def reason(self) -> Any:  # pragma: no cover - interface
        ...

    def subscribe(self, listener: Callable[[Any], None]) -> Releasable:  # pragma: no cover - interface
        ...

    def unsubscribe(self, handle: Releasable) -> None:  # pragma: no cover - interface
        """Release ``handle``; same effect as ``handle.release()``."""
        ...


__all__ = ["Releasable", "SupportsAbort"]
