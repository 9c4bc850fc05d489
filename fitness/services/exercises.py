"""Exercise catalog: the picker list and adding new exercises."""

from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from fitness.core.enums import MeasuredIn
from fitness.core.errors import ConflictError
from fitness.models.exercise import Exercise

logger = logging.getLogger(__name__)


async def list_exercises(db: AsyncSession) -> list[Exercise]:
    result = await db.execute(select(Exercise).order_by(Exercise.name.asc()))
    return list(result.scalars().all())


async def create_exercise(db: AsyncSession, name: str, measured_in: MeasuredIn) -> int:
    """Add an exercise. Names must be unique ignoring case and surrounding whitespace."""
    name = name.strip()
    result = await db.execute(
        select(Exercise.id).where(func.lower(func.trim(Exercise.name)) == name.lower())
    )
    if result.first() is not None:
        raise ConflictError("Exercise name already exists")

    exercise = Exercise(name=name, measured_in=MeasuredIn(measured_in))
    db.add(exercise)
    await db.flush()
    logger.info("Created exercise %s (%r, %s)", exercise.id, name, exercise.measured_in.value)
    return exercise.id
