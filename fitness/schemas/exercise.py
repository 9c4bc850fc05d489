"""Exercise schemas."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, StringConstraints

from fitness.core.constants import EXERCISE_NAME_MAX_LENGTH
from fitness.core.enums import MeasuredIn

ExerciseName = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=EXERCISE_NAME_MAX_LENGTH)
]


class ExerciseCreate(BaseModel):
    name: ExerciseName
    measured_in: MeasuredIn


class ExerciseRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    name: str
    measured_in: MeasuredIn
