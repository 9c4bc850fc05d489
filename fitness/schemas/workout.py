"""Workout, SetGroup and WorkoutSet schemas, plus free-text metric parsing."""

import math
import re
from collections.abc import Callable
from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic_core import PydanticCustomError

from fitness.core.constants import METRIC_INT_MAX
from fitness.core.enums import SetType
from fitness.schemas.exercise import ExerciseRead
from fitness.schemas.template import TemplateSummary

REPS_MESSAGE = "Reps must be a positive integer"
WEIGHT_MESSAGE = "Weight must be a positive number"
DURATION_MESSAGE = "Duration must be a positive integer in seconds"

_DECIMAL = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")
_PREFIXED = re.compile(r"0([xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)")


def _to_number(value, message: str) -> float | None:
    """Blank (or missing) input means "no value"; anything else must be a finite number.

    Accepts decimal text with an optional exponent and 0x/0o/0b integer literals.
    """
    text = "" if value is None else str(value).strip()
    if text == "":
        return None
    try:
        if _PREFIXED.fullmatch(text):
            number = float(int(text, 0))
        elif _DECIMAL.fullmatch(text):
            number = float(text)
        else:
            raise ValueError(text)
    except (ValueError, OverflowError):
        raise PydanticCustomError("metric_value", message) from None
    if not math.isfinite(number) or number <= 0:
        raise PydanticCustomError("metric_value", message)
    return number


def _positive_int(message: str) -> Callable:
    def parse(value):
        number = _to_number(value, message)
        if number is None:
            return None
        if not number.is_integer() or number > METRIC_INT_MAX:
            raise PydanticCustomError("metric_value", message)
        return int(number)

    return parse


def _positive_float(message: str) -> Callable:
    def parse(value):
        return _to_number(value, message)

    return parse


class SetMetrics(BaseModel):
    """Parsed metric inputs. ``None`` means the field was left blank."""

    reps: Annotated[int | None, BeforeValidator(_positive_int(REPS_MESSAGE))] = None
    weight: Annotated[float | None, BeforeValidator(_positive_float(WEIGHT_MESSAGE))] = None
    duration: Annotated[int | None, BeforeValidator(_positive_int(DURATION_MESSAGE))] = None


class SetMetricsForm(BaseModel):
    """Raw metric text as typed by the user; parsed by the progress service."""

    reps: str | None = None
    weight: str | None = None
    duration: str | None = None


class WorkoutSetRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    index: int
    type: SetType
    reps: int | None = None
    weight: float | None = None
    duration: int | None = None
    finished_at: datetime | None = None


class SetGroupRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    index: int
    rest_duration_seconds: int
    is_superset: bool
    exercise: ExerciseRead
    sets: list[WorkoutSetRead] = []


class WorkoutSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    started_at: datetime
    finished_at: datetime | None = None
    template: TemplateSummary


class WorkoutRead(WorkoutSummary):
    set_groups: list[SetGroupRead] = []


class StartWorkoutRequest(BaseModel):
    template_id: int
