import pytest
from sqlalchemy import func, select

from fitness.core.enums import MoveDirection, SetType
from fitness.core.errors import ConflictError, NotFoundError
from fitness.db.session import session_scope
from fitness.models.template import Template, TemplateSet, TemplateSetGroup
from fitness.services import instantiation, templates, workouts


async def _count(db, model, *criteria):
    result = await db.execute(select(func.count()).select_from(model).where(*criteria))
    return result.scalar_one()


async def test_create_template_returns_id(db):
    template_id = await templates.create_template(db, "Leg Day")
    await db.commit()

    template = await templates.get_template_by_id(db, template_id)
    assert template.name == "Leg Day"
    assert template.set_groups == []


async def test_create_duplicate_name_conflicts(db):
    await templates.create_template(db, "Leg Day")
    await db.commit()

    with pytest.raises(ConflictError, match="already exists"):
        await templates.create_template(db, "Leg Day")


async def test_list_templates_pages_by_name(db):
    for i in reversed(range(12)):
        await templates.create_template(db, f"Template {i:02d}")
    await db.commit()

    first = await templates.list_templates(db, 0)
    second = await templates.list_templates(db, 10)

    assert [t.name for t in first] == [f"Template {i:02d}" for i in range(10)]
    assert [t.name for t in second] == ["Template 10", "Template 11"]


async def test_rename_template(db):
    template_id = await templates.create_template(db, "Push")
    await templates.create_template(db, "Pull")
    await db.commit()

    # Renaming to its own name is not a conflict.
    await templates.rename_template(db, template_id, "Push")
    await templates.rename_template(db, template_id, "Push Day")
    await db.commit()
    assert (await templates.get_template_by_id(db, template_id)).name == "Push Day"

    with pytest.raises(ConflictError):
        await templates.rename_template(db, template_id, "Pull")
    with pytest.raises(NotFoundError):
        await templates.rename_template(db, 999, "Anything")


async def test_delete_template_cascades_structure(db, exercise_ids):
    template_id = await templates.create_template(db, "Push")
    group_id = await templates.add_template_set_group(db, template_id, exercise_ids["Bench Press"])
    await templates.add_set_to_template_group(db, template_id, group_id)
    await db.commit()

    await templates.delete_template(db, template_id)
    await db.commit()

    assert await templates.get_template_by_id(db, template_id) is None
    assert await _count(db, TemplateSetGroup) == 0
    assert await _count(db, TemplateSet) == 0


async def test_delete_template_with_workout_conflicts(db, exercise_ids):
    template_id = await templates.create_template(db, "Push")
    await templates.add_template_set_group(db, template_id, exercise_ids["Bench Press"])
    workout_id = await instantiation.start_workout(db, template_id)
    await db.commit()

    with pytest.raises(ConflictError, match="has workouts"):
        await templates.delete_template(db, template_id)
    await db.rollback()

    assert await templates.get_template_by_id(db, template_id) is not None
    assert await workouts.get_workout_by_id(db, workout_id) is not None

    await workouts.delete_workout(db, workout_id)
    await templates.delete_template(db, template_id)
    await db.commit()
    assert await _count(db, Template) == 0


async def test_add_set_group_requires_template_and_exercise(db, exercise_ids):
    template_id = await templates.create_template(db, "Push")
    await db.commit()

    with pytest.raises(NotFoundError, match="Template not found"):
        await templates.add_template_set_group(db, 999, exercise_ids["Bench Press"])
    with pytest.raises(NotFoundError, match="Exercise not found"):
        await templates.add_template_set_group(db, template_id, 999)


async def test_add_set_group_uses_defaults(db, exercise_ids):
    template_id = await templates.create_template(db, "Push")
    await templates.add_template_set_group(db, template_id, exercise_ids["Bench Press"])
    await db.commit()

    template = await templates.get_template_by_id(db, template_id)
    (group,) = template.set_groups
    assert group.index == 0
    assert group.rest_duration_seconds == 150
    assert group.is_superset is False
    assert group.exercise.name == "Bench Press"


async def test_sets_copy_exercise_and_default_to_working(db, exercise_ids):
    template_id = await templates.create_template(db, "Pull")
    group_id = await templates.add_template_set_group(db, template_id, exercise_ids["Pull-ups"])
    first = await templates.add_set_to_template_group(db, template_id, group_id)
    second = await templates.add_set_to_template_group(db, template_id, group_id)
    await db.commit()

    template = await templates.get_template_by_id(db, template_id)
    sets = template.set_groups[0].sets
    assert [(s.id, s.index, s.type) for s in sets] == [(first, 0, SetType.WORKING), (second, 1, SetType.WORKING)]
    assert all(s.exercise_id == exercise_ids["Pull-ups"] and s.template_id == template_id for s in sets)


async def test_set_operations_are_scoped_to_template(db, exercise_ids):
    template_id = await templates.create_template(db, "Push")
    other_id = await templates.create_template(db, "Pull")
    group_id = await templates.add_template_set_group(db, template_id, exercise_ids["Bench Press"])
    set_id = await templates.add_set_to_template_group(db, template_id, group_id)
    await db.commit()

    with pytest.raises(NotFoundError, match="Set group not found for template"):
        await templates.add_set_to_template_group(db, other_id, group_id)
    with pytest.raises(NotFoundError, match="Set group not found for template"):
        await templates.remove_set_from_template_group(db, other_id, group_id, set_id)
    with pytest.raises(NotFoundError, match="Set not found in set group for template"):
        await templates.remove_set_from_template_group(db, template_id, group_id, 999)
    with pytest.raises(NotFoundError):
        await templates.remove_template_set_group(db, other_id, group_id)
    with pytest.raises(NotFoundError):
        await templates.move_template_set_group(db, other_id, group_id, MoveDirection.UP)


async def test_remove_set_reindexes_siblings(db, exercise_ids):
    template_id = await templates.create_template(db, "Push")
    group_id = await templates.add_template_set_group(db, template_id, exercise_ids["Bench Press"])
    set_ids = [await templates.add_set_to_template_group(db, template_id, group_id) for _ in range(3)]
    await db.commit()

    await templates.remove_set_from_template_group(db, template_id, group_id, set_ids[0])
    await db.commit()

    template = await templates.get_template_by_id(db, template_id)
    assert [(s.id, s.index) for s in template.set_groups[0].sets] == [(set_ids[1], 0), (set_ids[2], 1)]


async def test_move_set_within_group(db, exercise_ids):
    template_id = await templates.create_template(db, "Push")
    group_id = await templates.add_template_set_group(db, template_id, exercise_ids["Bench Press"])
    set_ids = [await templates.add_set_to_template_group(db, template_id, group_id) for _ in range(2)]
    await db.commit()

    await templates.move_set_in_template_group(db, template_id, group_id, set_ids[1], MoveDirection.UP)
    await db.commit()

    template = await templates.get_template_by_id(db, template_id)
    assert [s.id for s in template.set_groups[0].sets] == [set_ids[1], set_ids[0]]


async def test_remove_set_group_cascades_its_sets(db, exercise_ids):
    template_id = await templates.create_template(db, "Push")
    first = await templates.add_template_set_group(db, template_id, exercise_ids["Bench Press"])
    second = await templates.add_template_set_group(db, template_id, exercise_ids["Pull-ups"])
    await templates.add_set_to_template_group(db, template_id, first)
    await templates.add_set_to_template_group(db, template_id, second)
    await db.commit()

    await templates.remove_template_set_group(db, template_id, first)
    await db.commit()

    template = await templates.get_template_by_id(db, template_id)
    assert [(g.id, g.index) for g in template.set_groups] == [(second, 0)]
    assert await _count(db, TemplateSet, TemplateSet.template_set_group_id == first) == 0


async def test_failed_call_rolls_back_whole_unit_of_work(session_maker, exercise_ids):
    async with session_scope(session_maker) as db:
        template_id = await templates.create_template(db, "Push")

    with pytest.raises(NotFoundError):
        async with session_scope(session_maker) as db:
            await templates.add_template_set_group(db, template_id, exercise_ids["Bench Press"])
            await templates.remove_template_set_group(db, template_id, 999)

    async with session_scope(session_maker) as db:
        template = await templates.get_template_by_id(db, template_id)
        assert template.set_groups == []
