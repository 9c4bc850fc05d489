"""Workout progress: record set metrics and toggle set / workout completion.

A set is complete iff ``finished_at`` is set; a workout is finished iff its own
``finished_at`` is set. The two are independent toggles.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

import pydantic
from sqlalchemy.ext.asyncio import AsyncSession

from fitness.core.enums import MeasuredIn
from fitness.core.errors import NotFoundError, ValidationError
from fitness.db import repository
from fitness.models.workout import WorkoutSet
from fitness.schemas.workout import SetMetrics

logger = logging.getLogger(__name__)

SET_NOT_FOUND = "Set not found for workout"

MISSING_METRIC_MESSAGES = {
    MeasuredIn.DURATION: "Duration is required to complete this set",
    MeasuredIn.REPS: "Reps are required to complete this set",
    MeasuredIn.REPS_AND_WEIGHT: "Reps and weight are required to complete this set",
}


def parse_metrics(reps: str | None = None, weight: str | None = None, duration: str | None = None) -> SetMetrics:
    """Parse free-text metric inputs; any invalid field rejects the whole input."""
    try:
        return SetMetrics(reps=reps, weight=weight, duration=duration)
    except pydantic.ValidationError as e:
        raise ValidationError({str(err["loc"][0]): err["msg"] for err in e.errors()}) from None


def filter_metrics(measured_in: MeasuredIn, metrics: SetMetrics) -> dict:
    """Only the fields a measurement kind tracks survive; the rest are forced to None."""
    if measured_in is MeasuredIn.DURATION:
        return {"duration": metrics.duration, "reps": None, "weight": None}
    if measured_in is MeasuredIn.REPS:
        return {"reps": metrics.reps, "weight": None, "duration": None}
    return {"reps": metrics.reps, "weight": metrics.weight, "duration": None}


def has_required_metrics(measured_in: MeasuredIn, metrics: SetMetrics) -> bool:
    if measured_in is MeasuredIn.DURATION:
        return metrics.duration is not None
    if measured_in is MeasuredIn.REPS:
        return metrics.reps is not None
    return metrics.reps is not None and metrics.weight is not None


async def _get_set(db: AsyncSession, workout_id: int, set_id: int) -> WorkoutSet:
    workout_set = await repository.get_set_in_workout(db, workout_id, set_id)
    if workout_set is None:
        raise NotFoundError(SET_NOT_FOUND)
    return workout_set


def _apply(workout_set: WorkoutSet, values: dict) -> None:
    for k, v in values.items():
        setattr(workout_set, k, v)


async def update_set_metrics(
    db: AsyncSession,
    workout_id: int,
    set_id: int,
    reps: str | None = None,
    weight: str | None = None,
    duration: str | None = None,
) -> WorkoutSet:
    """Overwrite the set's metrics with the parsed inputs (blank clears a field)."""
    workout_set = await _get_set(db, workout_id, set_id)
    metrics = parse_metrics(reps, weight, duration)

    _apply(workout_set, filter_metrics(MeasuredIn(workout_set.exercise.measured_in), metrics))
    await db.flush()
    return workout_set


async def toggle_set_complete(
    db: AsyncSession,
    workout_id: int,
    set_id: int,
    reps: str | None = None,
    weight: str | None = None,
    duration: str | None = None,
) -> WorkoutSet:
    """Flip completion. Supplied metrics are merged over stored ones (blanks keep the
    stored value); completing requires the metric(s) of the exercise's measurement kind.
    """
    workout_set = await _get_set(db, workout_id, set_id)
    parsed = parse_metrics(reps, weight, duration)

    merged = SetMetrics.model_construct(
        reps=parsed.reps if parsed.reps is not None else workout_set.reps,
        weight=parsed.weight if parsed.weight is not None else workout_set.weight,
        duration=parsed.duration if parsed.duration is not None else workout_set.duration,
    )
    measured_in = MeasuredIn(workout_set.exercise.measured_in)
    completing = workout_set.finished_at is None

    if completing and not has_required_metrics(measured_in, merged):
        raise ValidationError({"set_id": MISSING_METRIC_MESSAGES[measured_in]})

    _apply(workout_set, filter_metrics(measured_in, merged))
    workout_set.finished_at = datetime.now(timezone.utc) if completing else None
    await db.flush()
    logger.debug("Set %s of workout %s complete=%s", set_id, workout_id, completing)
    return workout_set


async def toggle_workout_complete(db: AsyncSession, workout_id: int) -> bool:
    """Flip the workout's finished state; returns True if it is now finished."""
    workout = await repository.get_workout(db, workout_id)
    if workout is None:
        raise NotFoundError("Workout not found")

    workout.finished_at = None if workout.finished_at is not None else datetime.now(timezone.utc)
    await db.flush()
    logger.info("Workout %s finished=%s", workout_id, workout.finished_at is not None)
    return workout.finished_at is not None
