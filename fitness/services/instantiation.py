"""Start a workout by deep-copying a template's current structure.

The copy is a snapshot: later template edits never reach a started workout.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from fitness.core.errors import InternalError
from fitness.models.template import TemplateSet, TemplateSetGroup
from fitness.models.workout import SetGroup, Workout, WorkoutSet

logger = logging.getLogger(__name__)


async def _copy_structure(db: AsyncSession, template_id: int) -> int:
    workout = Workout(template_id=template_id, started_at=datetime.now(timezone.utc), finished_at=None)
    db.add(workout)
    await db.flush()

    result = await db.execute(
        select(TemplateSetGroup)
        .where(TemplateSetGroup.template_id == template_id)
        .order_by(TemplateSetGroup.index.asc())
    )
    for template_group in result.scalars().all():
        set_group = SetGroup(
            workout_id=workout.id,
            exercise_id=template_group.exercise_id,
            index=template_group.index,
            rest_duration_seconds=template_group.rest_duration_seconds,
            is_superset=template_group.is_superset,
        )
        db.add(set_group)
        await db.flush()

        sets_result = await db.execute(
            select(TemplateSet)
            .where(TemplateSet.template_set_group_id == template_group.id)
            .order_by(TemplateSet.index.asc())
        )
        # Fresh sets: no metrics, not finished.
        rows = [
            {
                "workout_id": workout.id,
                "set_group_id": set_group.id,
                "exercise_id": template_set.exercise_id,
                "index": template_set.index,
                "type": template_set.type,
            }
            for template_set in sets_result.scalars().all()
        ]
        if rows:
            await db.execute(insert(WorkoutSet), rows)

    return workout.id


async def start_workout(db: AsyncSession, template_id: int) -> int:
    """Create a workout from ``template_id`` and return its id.

    Any store failure raises InternalError; the caller's unit of work then rolls
    back so no partial workout survives.
    """
    try:
        workout_id = await _copy_structure(db, template_id)
    except SQLAlchemyError as e:
        logger.exception("Starting workout from template %s failed", template_id)
        raise InternalError("Failed to create workout") from e
    logger.info("Started workout %s from template %s", workout_id, template_id)
    return workout_id
