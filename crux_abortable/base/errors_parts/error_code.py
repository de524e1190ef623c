"""
Normalized error codes (taxonomy).

Defines the `ErrorCode` enumeration used to classify race outcomes for
logging and metrics. Values are lowercase snake_case and are considered a
stable public contract for logging and analytics.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    CANCELLED = "cancelled"
    TIMEOUT = "timeout"
    VALIDATION = "validation"
    INTERNAL = "internal"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]
