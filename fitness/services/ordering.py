"""Parent-scoped ordered collections: append, remove and move with contiguous indices.

Four tables share this shape (template set-groups per template, template sets per
template set-group, set-groups per workout, sets per set-group). Each is protected by
a unique ``(parent, index)`` constraint, so renumbering is done in two phases inside
the caller's transaction:

1. shift every member of the parent by ``INDEX_OFFSET``;
2. assign each member its final position, matching on both id and parent.

Positions written in phase 2 are all below ``INDEX_OFFSET``, so no intermediate
statement can collide with a value still present.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from fitness.core.constants import INDEX_OFFSET
from fitness.core.enums import MoveDirection
from fitness.core.errors import NotFoundError
from fitness.models.template import TemplateSet, TemplateSetGroup
from fitness.models.workout import SetGroup, WorkoutSet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrderedCollection:
    """A table whose ``index`` column is unique per value of ``parent_attr``."""

    model: Any
    parent_attr: str

    @property
    def parent_column(self):
        return getattr(self.model, self.parent_attr)

    def in_scope(self, parent_id: int):
        return self.parent_column == parent_id

    def __str__(self) -> str:
        return f"{self.model.__tablename__}.{self.parent_attr}"


TEMPLATE_SET_GROUPS = OrderedCollection(TemplateSetGroup, "template_id")
TEMPLATE_SETS = OrderedCollection(TemplateSet, "template_set_group_id")
WORKOUT_SET_GROUPS = OrderedCollection(SetGroup, "workout_id")
WORKOUT_SETS = OrderedCollection(WorkoutSet, "set_group_id")


async def ordered_member_ids(db: AsyncSession, collection: OrderedCollection, parent_id: int) -> list[int]:
    """Member ids of ``parent_id`` in ascending index order."""
    model = collection.model
    result = await db.execute(
        select(model.id).where(collection.in_scope(parent_id)).order_by(model.index.asc())
    )
    return list(result.scalars().all())


async def find_member(
    db: AsyncSession,
    collection: OrderedCollection,
    parent_id: int,
    member_id: int,
    *extra_criteria,
) -> Any | None:
    """The member row if it belongs to ``parent_id``, else None."""
    model = collection.model
    result = await db.execute(
        select(model).where(model.id == member_id, collection.in_scope(parent_id), *extra_criteria)
    )
    return result.scalar_one_or_none()


async def next_index(db: AsyncSession, collection: OrderedCollection, parent_id: int) -> int:
    """Index for appending: one past the current maximum, or 0 when empty."""
    result = await db.execute(
        select(func.max(collection.model.index)).where(collection.in_scope(parent_id))
    )
    current_max = result.scalar()
    return 0 if current_max is None else current_max + 1


async def reindex(
    db: AsyncSession,
    collection: OrderedCollection,
    parent_id: int,
    ordered_ids: list[int],
) -> None:
    """Rewrite indices so ``ordered_ids[i]`` ends up at index ``i``."""
    model = collection.model
    await db.execute(
        update(model)
        .where(collection.in_scope(parent_id))
        .values(index=model.index + INDEX_OFFSET)
    )
    for position, member_id in enumerate(ordered_ids):
        await db.execute(
            update(model)
            .where(model.id == member_id, collection.in_scope(parent_id))
            .values(index=position)
        )
    logger.debug("Reindexed %s=%s: %s", collection, parent_id, ordered_ids)


async def append_member(db: AsyncSession, collection: OrderedCollection, parent_id: int, **values) -> Any:
    """Insert a new member at the end of the parent's ordering."""
    member = collection.model(
        index=await next_index(db, collection, parent_id),
        **{collection.parent_attr: parent_id},
        **values,
    )
    db.add(member)
    await db.flush()
    return member


async def remove_member(
    db: AsyncSession,
    collection: OrderedCollection,
    parent_id: int,
    member_id: int,
    *,
    not_found: str,
    extra_criteria: tuple = (),
) -> None:
    """Delete a member and close the gap it leaves.

    Raises NotFoundError (before any write) if the member is not in the parent's scope.
    """
    if await find_member(db, collection, parent_id, member_id, *extra_criteria) is None:
        raise NotFoundError(not_found)

    model = collection.model
    await db.execute(delete(model).where(model.id == member_id))
    survivors = await ordered_member_ids(db, collection, parent_id)
    await reindex(db, collection, parent_id, survivors)


async def move_member(
    db: AsyncSession,
    collection: OrderedCollection,
    parent_id: int,
    member_id: int,
    direction: MoveDirection,
    *,
    not_found: str,
) -> bool:
    """Swap a member with its neighbour. Returns False (and writes nothing) at the boundary."""
    ordered_ids = await ordered_member_ids(db, collection, parent_id)
    try:
        current = ordered_ids.index(member_id)
    except ValueError:
        raise NotFoundError(not_found) from None

    target = current - 1 if MoveDirection(direction) is MoveDirection.UP else current + 1
    if target < 0 or target >= len(ordered_ids):
        return False

    ordered_ids.insert(target, ordered_ids.pop(current))
    await reindex(db, collection, parent_id, ordered_ids)
    return True
