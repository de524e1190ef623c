"""
Collaborator interfaces (Protocols) for crux_abortable.

Re-exports Protocols split into single-class modules under
``crux_abortable.base.interfaces_parts`` to keep imports stable.
"""

from __future__ import annotations

from .interfaces_parts import Releasable, SupportsAbort

__all__ = ["Releasable", "SupportsAbort"]
