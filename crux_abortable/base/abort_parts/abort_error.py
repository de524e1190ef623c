"""Abort error type.

Defines the public ``AbortError`` raised when a race observes an aborted
signal whose reason is not itself an exception. Kept isolated to satisfy the
one-class-per-file policy.
"""

from __future__ import annotations

from typing import Any

from ...config.defaults import ABORT_ERROR_DEFAULT_MESSAGE, ABORT_ERROR_NAME


class AbortError(RuntimeError):
    """Raised when an operation is aborted through its signal.

    ``name`` is always ``"AbortError"`` so callers can match on it
    structurally (for example when logging or serializing errors), mirroring
    the DOM ``AbortError`` contract. ``reason`` holds the raw abort reason
    when the signal was aborted with a value that is not an exception.
    """

    name = ABORT_ERROR_NAME

    def __init__(self, message: str = ABORT_ERROR_DEFAULT_MESSAGE, *, reason: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.reason = reason

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"AbortError({self.message!r}, reason={self.reason!r})"


def abort_exception(reason: Any) -> BaseException:
    """Return the exception a race raises for ``reason``.

    Exception instances are returned unchanged (identity preserved), ``None``
    maps to a fresh default ``AbortError`` and any other value is wrapped in
    an ``AbortError`` exposing it as ``reason``.
    """
    if isinstance(reason, BaseException):
        return reason
    if reason is None:
        return AbortError()
    return AbortError(reason=reason)


__all__ = ["AbortError", "abort_exception"]
