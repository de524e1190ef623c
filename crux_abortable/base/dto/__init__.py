"""DTO package for race results."""

from .race_outcome import OutcomeKind, RaceOutcome

__all__ = ["OutcomeKind", "RaceOutcome"]
