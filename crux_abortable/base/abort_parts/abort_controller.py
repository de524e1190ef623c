"""Abort controller implementation.

``AbortController`` owns an ``AbortSignal`` and is the only party allowed to
abort it. Controllers can be linked to a parent signal so that aborting the
parent cascades to every child.
"""

from __future__ import annotations

from typing import Any, Optional

from ..interfaces_parts.supports_abort import Releasable, SupportsAbort
from .abort_signal import AbortSignal


class AbortController:
    """Owner of a single ``AbortSignal``.

    ``abort`` is idempotent: only the first call sets the reason and notifies
    listeners. When ``parent`` is given, the controller aborts with the
    parent's reason as soon as the parent aborts (immediately if it already
    has).
    """

    def __init__(self, *, parent: Optional[SupportsAbort] = None) -> None:
        self._signal = AbortSignal()
        self._parent_sub: Optional[Releasable] = None
        if parent is not None:
            self._parent_sub = parent.subscribe(self.abort)
            if self._signal.aborted:
                self._release_parent()

    @property
    def signal(self) -> AbortSignal:  # noqa: D401 - short form
        """The signal controlled by this instance."""
        return self._signal

    def abort(self, reason: Any = None) -> None:
        """Abort the signal with ``reason`` (an ``AbortError`` when omitted)."""
        if self._signal._abort(reason):
            self._release_parent()

    def child(self) -> "AbortController":
        """Create a controller linked to this controller's signal."""
        return AbortController(parent=self._signal)

    def _release_parent(self) -> None:
        sub, self._parent_sub = self._parent_sub, None
        if sub is not None:
            sub.release()

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"AbortController(signal={self._signal!r})"


__all__ = ["AbortController"]
