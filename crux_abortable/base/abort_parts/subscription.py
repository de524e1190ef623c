"""One-shot listener registration on an ``AbortSignal``.

A ``Subscription`` is the handle returned by ``AbortSignal.subscribe``. It is
a small explicit state machine::

    PENDING --fire()----> FIRED
    PENDING --release()-> RELEASED

Both terminal states are absorbing: the listener is delivered at most once
and never after the handle was released.
"""

from __future__ import annotations

from enum import Enum
from threading import Lock
from typing import TYPE_CHECKING, Any, Callable, Optional

if TYPE_CHECKING:
    from .abort_signal import AbortSignal

AbortListener = Callable[[Any], None]


class SubscriptionState(str, Enum):
    """Lifecycle of a single listener registration."""

    PENDING = "pending"
    FIRED = "fired"
    RELEASED = "released"


class Subscription:
    """Handle for one listener registered on an abort signal.

    Usable as a context manager; leaving the block releases the handle.
    """

    __slots__ = ("_listener", "_owner", "_state", "_lock")

    def __init__(self, listener: AbortListener, owner: "AbortSignal") -> None:
        self._listener = listener
        self._owner: Optional["AbortSignal"] = owner
        self._state = SubscriptionState.PENDING
        self._lock = Lock()

    @property
    def state(self) -> SubscriptionState:  # noqa: D401 - short form
        """Current lifecycle state."""
        return self._state

    @property
    def active(self) -> bool:  # noqa: D401 - short form
        """Whether the listener can still be delivered."""
        return self._state is SubscriptionState.PENDING

    def fire(self, reason: Any) -> bool:
        """Deliver ``reason`` to the listener once.

        Returns ``True`` when the listener ran, ``False`` when the handle had
        already fired or been released. Exceptions from the listener
        propagate to the caller.
        """
        with self._lock:
            if self._state is not SubscriptionState.PENDING:
                return False
            self._state = SubscriptionState.FIRED
            self._owner = None
        self._listener(reason)
        return True

    def release(self) -> None:
        """Unregister the listener (idempotent)."""
        with self._lock:
            if self._state is SubscriptionState.PENDING:
                self._state = SubscriptionState.RELEASED
            owner, self._owner = self._owner, None
        if owner is not None:
            owner._discard(self)

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"Subscription(state={self._state.value})"


__all__ = ["AbortListener", "Subscription", "SubscriptionState"]
