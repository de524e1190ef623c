"""Race outcome DTO returned by ``race_outcome``.

A tagged result of exactly one of: a value produced by the work, an error
raised by the work, or the abort reason of the signal.

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for validation of the tag/payload pairing.
"""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, model_validator

from ..errors_parts.error_code import ErrorCode

OutcomeKind = Literal["value", "error", "aborted"]


class RaceOutcome(BaseModel):
    """Settled result of a single race.

    Attributes:
        kind: Which side settled the race.
        value: Value returned by the work when ``kind == "value"``.
        error: Exception raised by the work (``"error"``) or the abort
            exception (``"aborted"``); identity is preserved.
        code: Normalized classification of ``error``.
        latency_ms: Time from race start to settlement.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    kind: OutcomeKind
    value: Any = None
    error: Optional[BaseException] = None
    code: Optional[ErrorCode] = None
    latency_ms: Optional[int] = None

    @model_validator(mode="after")
    def check_payload(self) -> "RaceOutcome":
        if self.kind == "value":
            if self.error is not None:
                raise ValueError("value outcome must not carry an error")
        elif self.error is None:
            raise ValueError(f"{self.kind} outcome requires an error")
        return self

    @property
    def ok(self) -> bool:
        return self.kind == "value"

    @property
    def aborted(self) -> bool:
        return self.kind == "aborted"

    def unwrap(self) -> Any:
        """Return the value or raise the stored exception."""
        if self.error is not None:
            raise self.error
        return self.value


__all__ = ["OutcomeKind", "RaceOutcome"]
