"""Internal state holder for abort signals.

Dataclass used by ``AbortSignal`` to track the aborted flag, the stored
reason and when the abort happened.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional


@dataclass
class SignalState:
    """Internal state for abort signals."""

    aborted: bool = False
    reason: Any = None
    aborted_at: Optional[datetime] = None


__all__ = ["SignalState"]
