"""Template authoring: create/rename/delete templates and edit their set-group/set structure.

Every function runs inside the caller's transaction and never commits; a raised
error leaves the unit of work to roll back everything written in the call.
"""

from __future__ import annotations

import logging

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from fitness.core.constants import DEFAULT_REST_DURATION_SECONDS, TEMPLATES_PAGE_SIZE
from fitness.core.enums import MoveDirection, SetType
from fitness.core.errors import ConflictError, NotFoundError
from fitness.db import repository
from fitness.models.template import Template, TemplateSet
from fitness.models.workout import Workout
from fitness.services.ordering import (
    TEMPLATE_SET_GROUPS,
    TEMPLATE_SETS,
    append_member,
    find_member,
    move_member,
    remove_member,
)

logger = logging.getLogger(__name__)

TEMPLATE_NOT_FOUND = "Template not found"
SET_GROUP_NOT_FOUND = "Set group not found for template"
SET_NOT_FOUND = "Set not found in set group for template"
DUPLICATE_NAME = "Template name already exists"


async def list_templates(db: AsyncSession, offset: int = 0) -> list[Template]:
    """One page of templates, sorted by name."""
    result = await db.execute(
        select(Template).order_by(Template.name.asc()).offset(offset).limit(TEMPLATES_PAGE_SIZE)
    )
    return list(result.scalars().all())


async def get_template_by_id(db: AsyncSession, template_id: int) -> Template | None:
    return await repository.load_template_structure(db, template_id)


async def create_template(db: AsyncSession, name: str) -> int:
    if await repository.get_template_by_name(db, name) is not None:
        raise ConflictError(DUPLICATE_NAME)
    template = Template(name=name)
    db.add(template)
    await db.flush()
    logger.info("Created template %s (%r)", template.id, name)
    return template.id


async def rename_template(db: AsyncSession, template_id: int, name: str) -> None:
    template = await repository.get_template(db, template_id)
    if template is None:
        raise NotFoundError(TEMPLATE_NOT_FOUND)

    result = await db.execute(
        select(Template.id).where(Template.name == name, Template.id != template_id)
    )
    if result.first() is not None:
        raise ConflictError(DUPLICATE_NAME)

    template.name = name
    await db.flush()


async def delete_template(db: AsyncSession, template_id: int) -> None:
    """Delete a template and (by cascade) its structure. Refused while workouts use it."""
    result = await db.execute(select(Workout.id).where(Workout.template_id == template_id).limit(1))
    if result.first() is not None:
        raise ConflictError("Cannot delete a template that has workouts")

    await db.execute(delete(Template).where(Template.id == template_id))
    logger.info("Deleted template %s", template_id)


async def add_template_set_group(db: AsyncSession, template_id: int, exercise_id: int) -> int:
    """Append a set-group for ``exercise_id``; returns the new set-group id."""
    if await repository.get_template(db, template_id) is None:
        raise NotFoundError(TEMPLATE_NOT_FOUND)
    if await repository.get_exercise(db, exercise_id) is None:
        raise NotFoundError("Exercise not found")

    set_group = await append_member(
        db,
        TEMPLATE_SET_GROUPS,
        template_id,
        exercise_id=exercise_id,
        rest_duration_seconds=DEFAULT_REST_DURATION_SECONDS,
        is_superset=False,
    )
    return set_group.id


async def remove_template_set_group(db: AsyncSession, template_id: int, set_group_id: int) -> None:
    await remove_member(db, TEMPLATE_SET_GROUPS, template_id, set_group_id, not_found=SET_GROUP_NOT_FOUND)


async def move_template_set_group(
    db: AsyncSession,
    template_id: int,
    set_group_id: int,
    direction: MoveDirection,
) -> None:
    await move_member(
        db, TEMPLATE_SET_GROUPS, template_id, set_group_id, direction, not_found=SET_GROUP_NOT_FOUND
    )


async def add_set_to_template_group(db: AsyncSession, template_id: int, set_group_id: int) -> int:
    """Append a working set; the exercise is taken from the owning set-group."""
    set_group = await find_member(db, TEMPLATE_SET_GROUPS, template_id, set_group_id)
    if set_group is None:
        raise NotFoundError(SET_GROUP_NOT_FOUND)

    template_set = await append_member(
        db,
        TEMPLATE_SETS,
        set_group_id,
        template_id=template_id,
        exercise_id=set_group.exercise_id,
        type=SetType.WORKING,
    )
    return template_set.id


async def remove_set_from_template_group(
    db: AsyncSession,
    template_id: int,
    set_group_id: int,
    set_id: int,
) -> None:
    if await find_member(db, TEMPLATE_SET_GROUPS, template_id, set_group_id) is None:
        raise NotFoundError(SET_GROUP_NOT_FOUND)
    await remove_member(
        db,
        TEMPLATE_SETS,
        set_group_id,
        set_id,
        not_found=SET_NOT_FOUND,
        extra_criteria=(TemplateSet.template_id == template_id,),
    )


async def move_set_in_template_group(
    db: AsyncSession,
    template_id: int,
    set_group_id: int,
    set_id: int,
    direction: MoveDirection,
) -> None:
    if await find_member(db, TEMPLATE_SET_GROUPS, template_id, set_group_id) is None:
        raise NotFoundError(SET_GROUP_NOT_FOUND)
    await move_member(db, TEMPLATE_SETS, set_group_id, set_id, direction, not_found=SET_NOT_FOUND)
