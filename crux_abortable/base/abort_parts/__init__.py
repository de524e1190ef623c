"""One-class-per-file parts for abort signalling."""

from .abort_error import AbortError, abort_exception
from .abort_signal import AbortSignal
from .abort_controller import AbortController
from .state import SignalState
from .subscription import AbortListener, Subscription, SubscriptionState

__all__ = [
    "AbortController",
    "AbortError",
    "AbortListener",
    "AbortSignal",
    "SignalState",
    "Subscription",
    "SubscriptionState",
    "abort_exception",
]
