import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from fitness.core.enums import MoveDirection, SetType
from fitness.core.errors import InternalError
from fitness.db.session import session_scope
from fitness.models.template import TemplateSet, TemplateSetGroup
from fitness.models.workout import SetGroup, Workout, WorkoutSet
from fitness.services import instantiation, templates, workouts


@pytest.fixture
async def push_day(db, exercise_ids):
    """Bench (warmup + 2 working, superset, 90s rest) then Running (1 working)."""
    template_id = await templates.create_template(db, "Push Day")
    bench = await templates.add_template_set_group(db, template_id, exercise_ids["Bench Press"])
    running = await templates.add_template_set_group(db, template_id, exercise_ids["Running"])
    for _ in range(3):
        await templates.add_set_to_template_group(db, template_id, bench)
    await templates.add_set_to_template_group(db, template_id, running)

    bench_group = await db.get(TemplateSetGroup, bench)
    bench_group.rest_duration_seconds = 90
    bench_group.is_superset = True
    first_set = (
        await db.execute(select(TemplateSet).where(TemplateSet.template_set_group_id == bench, TemplateSet.index == 0))
    ).scalar_one()
    first_set.type = SetType.WARMUP
    await db.commit()
    return template_id


def _shape(set_groups):
    return [
        (
            g.exercise_id,
            g.index,
            g.rest_duration_seconds,
            g.is_superset,
            [(s.exercise_id, s.index, s.type) for s in g.sets],
        )
        for g in set_groups
    ]


async def test_start_workout_copies_structure(db, push_day):
    workout_id = await instantiation.start_workout(db, push_day)
    await db.commit()

    template = await templates.get_template_by_id(db, push_day)
    workout = await workouts.get_workout_by_id(db, workout_id)

    assert workout.template_id == push_day
    assert workout.started_at is not None
    assert workout.finished_at is None
    assert _shape(workout.set_groups) == _shape(template.set_groups)
    for group in workout.set_groups:
        for workout_set in group.sets:
            assert workout_set.workout_id == workout_id
            assert (workout_set.reps, workout_set.weight, workout_set.duration) == (None, None, None)
            assert workout_set.finished_at is None


async def test_workout_reads_keep_loaded_template_structure(db, push_day):
    workout_id = await instantiation.start_workout(db, push_day)
    await db.commit()

    template = await templates.get_template_by_id(db, push_day)
    current = await workouts.get_current_workout(db)
    workout = await workouts.get_workout_by_id(db, workout_id)

    assert current.template is template
    assert workout.template is template
    assert len(template.set_groups) == 2
    assert [len(g.sets) for g in template.set_groups] == [3, 1]


async def test_started_workout_is_a_snapshot(db, push_day, exercise_ids):
    workout_id = await instantiation.start_workout(db, push_day)
    await db.commit()
    before = _shape((await workouts.get_workout_by_id(db, workout_id)).set_groups)

    template = await templates.get_template_by_id(db, push_day)
    bench, running = (g.id for g in template.set_groups)
    await templates.move_template_set_group(db, push_day, running, MoveDirection.UP)
    await templates.remove_set_from_template_group(db, push_day, bench, template.set_groups[0].sets[0].id)
    await templates.add_template_set_group(db, push_day, exercise_ids["Pull-ups"])
    await templates.rename_template(db, push_day, "Push Day v2")
    await db.commit()

    after = _shape((await workouts.get_workout_by_id(db, workout_id)).set_groups)
    assert after == before


async def test_start_workout_from_empty_template(db):
    template_id = await templates.create_template(db, "Rest Day")
    workout_id = await instantiation.start_workout(db, template_id)
    await db.commit()

    workout = await workouts.get_workout_by_id(db, workout_id)
    assert workout.set_groups == []
    assert workout.template.name == "Rest Day"


async def test_start_workout_for_missing_template_is_internal_and_leaves_nothing(session_maker):
    with pytest.raises(InternalError, match="Failed to create workout"):
        async with session_scope(session_maker) as db:
            await instantiation.start_workout(db, 999)

    async with session_scope(session_maker) as db:
        result = await db.execute(select(func.count()).select_from(Workout))
        assert result.scalar_one() == 0


async def test_failure_mid_copy_rolls_back_everything(session_maker, push_day, monkeypatch):
    async def failing_execute(self, statement, *args, **kwargs):
        # Fail on the bulk insert of copied sets.
        if args and isinstance(args[0], list):
            raise SQLAlchemyError("disk full")
        return await real_execute(self, statement, *args, **kwargs)

    real_execute = AsyncSession.execute
    monkeypatch.setattr(AsyncSession, "execute", failing_execute)

    with pytest.raises(InternalError):
        async with session_scope(session_maker) as db:
            await instantiation.start_workout(db, push_day)

    monkeypatch.undo()
    async with session_scope(session_maker) as db:
        for model in (Workout, SetGroup, WorkoutSet):
            result = await db.execute(select(func.count()).select_from(model))
            assert result.scalar_one() == 0


async def test_workout_ordered_collections_reindex(db, push_day, exercise_ids):
    workout_id = await instantiation.start_workout(db, push_day)
    extra = await workouts.add_set_group(db, workout_id, exercise_ids["Pull-ups"])
    await db.commit()

    workout = await workouts.get_workout_by_id(db, workout_id)
    bench, running, pullups = (g.id for g in workout.set_groups)
    assert pullups == extra

    await workouts.move_set_group(db, workout_id, pullups, MoveDirection.UP)
    await workouts.remove_set_group(db, workout_id, bench)
    new_set = await workouts.add_set_to_group(db, workout_id, running)
    await db.commit()

    workout = await workouts.get_workout_by_id(db, workout_id)
    assert [(g.id, g.index) for g in workout.set_groups] == [(pullups, 0), (running, 1)]
    running_sets = workout.set_groups[1].sets
    assert [s.index for s in running_sets] == [0, 1]
    assert running_sets[1].id == new_set
    assert running_sets[1].type is SetType.WORKING

    await workouts.move_set_in_group(db, workout_id, running, new_set, MoveDirection.UP)
    await workouts.remove_set_from_group(db, workout_id, running, running_sets[0].id)
    await db.commit()

    workout = await workouts.get_workout_by_id(db, workout_id)
    assert [(s.id, s.index) for s in workout.set_groups[1].sets] == [(new_set, 0)]
