"""Protocol parts for collaborator contracts."""

from .supports_abort import Releasable, SupportsAbort

__all__ = ["Releasable", "SupportsAbort"]
