"""Workout template schemas."""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, StringConstraints

from fitness.core.constants import TEMPLATE_NAME_MAX_LENGTH
from fitness.core.enums import MoveDirection, SetType
from fitness.schemas.exercise import ExerciseRead

TemplateName = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=TEMPLATE_NAME_MAX_LENGTH)
]


class TemplateNameIn(BaseModel):
    name: TemplateName


class TemplateSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    name: str


class TemplateSetRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    index: int
    type: SetType


class TemplateSetGroupRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    index: int
    rest_duration_seconds: int
    is_superset: bool
    exercise: ExerciseRead
    sets: list[TemplateSetRead] = []


class TemplateRead(TemplateSummary):
    created_at: datetime
    set_groups: list[TemplateSetGroupRead] = []


class SetGroupCreate(BaseModel):
    exercise_id: PositiveInt


class MoveRequest(BaseModel):
    direction: MoveDirection


class CreatedId(BaseModel):
    """Id of a newly created row (used by clients for navigation)."""

    id: int = Field(..., gt=0)
