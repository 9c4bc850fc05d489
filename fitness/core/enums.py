"""Shared enums for models and API."""

from enum import Enum


class MeasuredIn(str, Enum):
    """Which metric(s) an exercise is tracked by."""

    DURATION = "duration"  # seconds, e.g. Running, Plank
    REPS = "reps"  # bodyweight reps, e.g. Pull-ups
    REPS_AND_WEIGHT = "reps_and_weight"


class SetType(str, Enum):
    WARMUP = "warmup"
    WORKING = "working"


class MoveDirection(str, Enum):
    """Direction for reordering a member one position within its parent."""

    UP = "up"
    DOWN = "down"


def enum_values(enum_cls: type[Enum]) -> list[str]:
    """Persist enum values (not member names) in SQLAlchemy Enum columns."""
    return [member.value for member in enum_cls]
