"""Workout-scoped structure edits and reads (set-groups and sets of a started workout)."""

from __future__ import annotations

import logging

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from fitness.core.constants import DEFAULT_REST_DURATION_SECONDS
from fitness.core.enums import MoveDirection, SetType
from fitness.core.errors import NotFoundError
from fitness.db import repository
from fitness.models.workout import Workout, WorkoutSet
from fitness.services.ordering import (
    WORKOUT_SET_GROUPS,
    WORKOUT_SETS,
    append_member,
    find_member,
    move_member,
    remove_member,
)

logger = logging.getLogger(__name__)

WORKOUT_NOT_FOUND = "Workout not found"
SET_GROUP_NOT_FOUND = "Set group not found for workout"
SET_NOT_FOUND = "Set not found in set group for workout"


async def get_workout_by_id(db: AsyncSession, workout_id: int) -> Workout | None:
    return await repository.load_workout_structure(db, workout_id)


async def get_current_workout(db: AsyncSession) -> Workout | None:
    """Most recently started workout that is still in progress (with its template)."""
    return await repository.get_latest_unfinished_workout(db)


async def delete_workout(db: AsyncSession, workout_id: int) -> None:
    """Delete a workout; set-groups and sets go with it. Unknown ids are ignored."""
    await db.execute(delete(Workout).where(Workout.id == workout_id))
    logger.info("Deleted workout %s", workout_id)


async def add_set_group(db: AsyncSession, workout_id: int, exercise_id: int) -> int:
    if await repository.get_workout(db, workout_id) is None:
        raise NotFoundError(WORKOUT_NOT_FOUND)
    if await repository.get_exercise(db, exercise_id) is None:
        raise NotFoundError("Exercise not found")

    set_group = await append_member(
        db,
        WORKOUT_SET_GROUPS,
        workout_id,
        exercise_id=exercise_id,
        rest_duration_seconds=DEFAULT_REST_DURATION_SECONDS,
        is_superset=False,
    )
    return set_group.id


async def remove_set_group(db: AsyncSession, workout_id: int, set_group_id: int) -> None:
    await remove_member(db, WORKOUT_SET_GROUPS, workout_id, set_group_id, not_found=SET_GROUP_NOT_FOUND)


async def move_set_group(
    db: AsyncSession,
    workout_id: int,
    set_group_id: int,
    direction: MoveDirection,
) -> None:
    await move_member(
        db, WORKOUT_SET_GROUPS, workout_id, set_group_id, direction, not_found=SET_GROUP_NOT_FOUND
    )


async def add_set_to_group(db: AsyncSession, workout_id: int, set_group_id: int) -> int:
    """Append an incomplete working set with no metrics."""
    set_group = await find_member(db, WORKOUT_SET_GROUPS, workout_id, set_group_id)
    if set_group is None:
        raise NotFoundError(SET_GROUP_NOT_FOUND)

    workout_set = await append_member(
        db,
        WORKOUT_SETS,
        set_group_id,
        workout_id=workout_id,
        exercise_id=set_group.exercise_id,
        type=SetType.WORKING,
    )
    return workout_set.id


async def remove_set_from_group(db: AsyncSession, workout_id: int, set_group_id: int, set_id: int) -> None:
    if await find_member(db, WORKOUT_SET_GROUPS, workout_id, set_group_id) is None:
        raise NotFoundError(SET_GROUP_NOT_FOUND)
    await remove_member(
        db,
        WORKOUT_SETS,
        set_group_id,
        set_id,
        not_found=SET_NOT_FOUND,
        extra_criteria=(WorkoutSet.workout_id == workout_id,),
    )


async def move_set_in_group(
    db: AsyncSession,
    workout_id: int,
    set_group_id: int,
    set_id: int,
    direction: MoveDirection,
) -> None:
    if await find_member(db, WORKOUT_SET_GROUPS, workout_id, set_group_id) is None:
        raise NotFoundError(SET_GROUP_NOT_FOUND)
    await move_member(db, WORKOUT_SETS, set_group_id, set_id, direction, not_found=SET_NOT_FOUND)
