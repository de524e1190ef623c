"""crux_abortable package

Race asyncio work against an abort signal without leaking listeners.

Public API (re-exported):
    - Version: ``__version__``
    - Signalling: :class:`AbortController`, :class:`AbortSignal`,
      :class:`AbortError`
    - Races: :func:`abortable`, :func:`abortable_awaitable`,
      :func:`abortable_iterable`, :func:`race_outcome`
    - Result type: :class:`RaceOutcome`

Example::

    controller = AbortController()
    value = await abortable(fetch(), controller.signal)
"""

from .base.abort_signal import AbortController, AbortError, AbortSignal, Subscription
from .base.abortable import abortable, abortable_awaitable, abortable_iterable, race_outcome
from .base.dto import RaceOutcome
from .base.errors import ErrorCode

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "AbortController",
    "AbortError",
    "AbortSignal",
    "Subscription",
    "abortable",
    "abortable_awaitable",
    "abortable_iterable",
    "race_outcome",
    "RaceOutcome",
    "ErrorCode",
]
