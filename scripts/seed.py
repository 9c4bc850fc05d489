"""Seed sample exercises and templates.

Usage: python scripts/seed.py [--reset]
  --reset  drop and recreate all tables first (local/dev databases only)
"""

import asyncio
import os
import sys

# Add parent directory to path so we can import fitness modules
sys.path.append(os.path.join(os.path.dirname(__file__), ".."))

from fitness.core.enums import MeasuredIn, SetType
from fitness.db.base import Base
from fitness.db.session import engine, session_scope
from fitness.models import *  # noqa: F401, F403 - register all models
from fitness.models.template import TemplateSet, TemplateSetGroup
from fitness.services import exercises, templates

EXERCISES = [
    ("Bench Press", MeasuredIn.REPS_AND_WEIGHT),
    ("Squat", MeasuredIn.REPS_AND_WEIGHT),
    ("Deadlift", MeasuredIn.REPS_AND_WEIGHT),
    ("Pull-ups", MeasuredIn.REPS),
    ("Push-ups", MeasuredIn.REPS),
    ("Running", MeasuredIn.DURATION),
    ("Plank", MeasuredIn.DURATION),
]

TEMPLATES = ["Push Day", "Pull Day", "Leg Day", "Full Body"]

# Push Day: (exercise, rest seconds, set types)
PUSH_DAY = [
    ("Bench Press", 120, [SetType.WARMUP, SetType.WORKING, SetType.WORKING]),
    ("Push-ups", 90, [SetType.WORKING, SetType.WORKING]),
    ("Running", 60, [SetType.WORKING]),
]


async def reset_schema() -> None:
    print("Dropping and recreating all tables...")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)


async def seed() -> None:
    async with session_scope() as db:
        print("Seeding exercises...")
        exercise_ids = {}
        for name, measured_in in EXERCISES:
            exercise_ids[name] = await exercises.create_exercise(db, name, measured_in)

        print("Seeding templates...")
        template_ids = {}
        for name in TEMPLATES:
            template_ids[name] = await templates.create_template(db, name)

        print("Seeding Push Day structure...")
        push_day = template_ids["Push Day"]
        for exercise_name, rest, set_types in PUSH_DAY:
            group_id = await templates.add_template_set_group(db, push_day, exercise_ids[exercise_name])
            set_group = await db.get(TemplateSetGroup, group_id)
            set_group.rest_duration_seconds = rest
            for set_type in set_types:
                set_id = await templates.add_set_to_template_group(db, push_day, group_id)
                template_set = await db.get(TemplateSet, set_id)
                template_set.type = set_type
        await db.flush()
    print("Seeding complete.")


async def main():
    if "--reset" in sys.argv:
        await reset_schema()
    await seed()
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
