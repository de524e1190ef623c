"""Unified error taxonomy public surface.

Re-exports the one-class-per-file implementations under
``crux_abortable.base.errors_parts`` together with ``AbortError`` so callers
have a single import path for everything a race can raise or report.
"""

from .abort_parts.abort_error import AbortError
from .errors_parts.error_code import ErrorCode
from .errors_parts.classification import classify_exception

__all__ = ["AbortError", "ErrorCode", "classify_exception"]
