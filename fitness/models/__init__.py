"""ORM models - import all so Base.metadata is complete for migrations."""

from fitness.models.exercise import Exercise
from fitness.models.template import Template, TemplateSet, TemplateSetGroup
from fitness.models.workout import SetGroup, Workout, WorkoutSet

__all__ = [
    "Exercise",
    "SetGroup",
    "Template",
    "TemplateSet",
    "TemplateSetGroup",
    "Workout",
    "WorkoutSet",
]
