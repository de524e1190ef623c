"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `crux_abortable.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .classification import classify_exception

__all__ = ["ErrorCode", "classify_exception"]
