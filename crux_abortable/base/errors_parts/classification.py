"""
Error classification helpers mapping exceptions to normalized ErrorCode values.
"""
from __future__ import annotations

import asyncio

from ..abort_parts.abort_error import AbortError
from .error_code import ErrorCode


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. ``AbortError`` and ``asyncio.CancelledError`` -> ``CANCELLED``.
        2. Timeout exceptions (sync/async) -> ``TIMEOUT``.
        3. ``TypeError`` / ``ValueError`` -> ``VALIDATION``.
        4. ``UNKNOWN`` fallback.

    A custom abort reason is classified by its own type; callers that know an
    error came from the signal should use ``ErrorCode.CANCELLED`` directly.
    """
    if isinstance(exc, (AbortError, asyncio.CancelledError)):
        return ErrorCode.CANCELLED
    if isinstance(exc, (TimeoutError, asyncio.TimeoutError)):
        return ErrorCode.TIMEOUT
    if isinstance(exc, (TypeError, ValueError)):
        return ErrorCode.VALIDATION
    return ErrorCode.UNKNOWN


__all__ = ["classify_exception"]
