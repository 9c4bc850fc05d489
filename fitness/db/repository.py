"""Typed reads shared by the services: single rows and eager nested structures.

Nested collections are loaded with ``selectinload`` and sorted by ``index`` in memory
afterwards; the store gives no ordering guarantee for related rows. Structure loads use
``populate_existing`` so a long-lived session never serves stale nested collections.
The refresh stops at the loaded tree: a workout's template is attached from the identity
map, so a template structure loaded earlier in the session keeps its collections.
"""

from __future__ import annotations

from operator import attrgetter

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.orm.attributes import set_committed_value

from fitness.models.exercise import Exercise
from fitness.models.template import Template, TemplateSetGroup
from fitness.models.workout import SetGroup, Workout, WorkoutSet

_by_index = attrgetter("index")


async def _attach_template(db: AsyncSession, workout: Workout) -> None:
    # db.get reuses an already-loaded Template instead of repopulating it.
    template = await db.get(Template, workout.template_id)
    set_committed_value(workout, "template", template)


async def get_exercise(db: AsyncSession, exercise_id: int) -> Exercise | None:
    return await db.get(Exercise, exercise_id)


async def get_template(db: AsyncSession, template_id: int) -> Template | None:
    result = await db.execute(select(Template).where(Template.id == template_id))
    return result.scalar_one_or_none()


async def get_template_by_name(db: AsyncSession, name: str) -> Template | None:
    result = await db.execute(select(Template).where(Template.name == name))
    return result.scalar_one_or_none()


async def get_workout(db: AsyncSession, workout_id: int) -> Workout | None:
    result = await db.execute(select(Workout).where(Workout.id == workout_id))
    return result.scalar_one_or_none()


async def load_template_structure(db: AsyncSession, template_id: int) -> Template | None:
    """Template with set-groups (and their exercise and sets), all sorted by index."""
    result = await db.execute(
        select(Template)
        .where(Template.id == template_id)
        .execution_options(populate_existing=True)
        .options(
            selectinload(Template.set_groups).selectinload(TemplateSetGroup.exercise),
            selectinload(Template.set_groups).selectinload(TemplateSetGroup.sets),
        )
    )
    template = result.scalar_one_or_none()
    if template is None:
        return None
    template.set_groups.sort(key=_by_index)
    for set_group in template.set_groups:
        set_group.sets.sort(key=_by_index)
    return template


async def load_workout_structure(db: AsyncSession, workout_id: int) -> Workout | None:
    """Workout with its template and set-groups (exercise, sets), all sorted by index."""
    result = await db.execute(
        select(Workout)
        .where(Workout.id == workout_id)
        .execution_options(populate_existing=True)
        .options(
            selectinload(Workout.set_groups).selectinload(SetGroup.exercise),
            selectinload(Workout.set_groups).selectinload(SetGroup.sets),
        )
    )
    workout = result.scalar_one_or_none()
    if workout is None:
        return None
    await _attach_template(db, workout)
    workout.set_groups.sort(key=_by_index)
    for set_group in workout.set_groups:
        set_group.sets.sort(key=_by_index)
    return workout


async def get_latest_unfinished_workout(db: AsyncSession) -> Workout | None:
    result = await db.execute(
        select(Workout)
        .where(Workout.finished_at.is_(None))
        .execution_options(populate_existing=True)
        .order_by(Workout.started_at.desc(), Workout.id.desc())
        .limit(1)
    )
    workout = result.scalar_one_or_none()
    if workout is not None:
        await _attach_template(db, workout)
    return workout


async def get_set_in_workout(db: AsyncSession, workout_id: int, set_id: int) -> WorkoutSet | None:
    """A set scoped to its workout, with the exercise loaded (for ``measured_in``)."""
    result = await db.execute(
        select(WorkoutSet)
        .where(WorkoutSet.id == set_id, WorkoutSet.workout_id == workout_id)
        .execution_options(populate_existing=True)
        .options(selectinload(WorkoutSet.exercise))
    )
    return result.scalar_one_or_none()
