"""Shared fixtures: a fresh in-memory SQLite schema per test."""

import os

# Point the app's global engine at SQLite before any fitness module reads settings.
os.environ.setdefault("DATABASE_DSN", "sqlite+aiosqlite:///:memory:")

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from fitness.core.enums import MeasuredIn
from fitness.db.base import Base
from fitness.db.session import build_session_maker, enable_sqlite_foreign_keys
from fitness.models import *  # noqa: F401, F403 - register all models
from fitness.services import exercises as exercise_service


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_foreign_keys(engine.sync_engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    return build_session_maker(engine)


@pytest.fixture
async def db(session_maker):
    async with session_maker() as session:
        yield session


@pytest.fixture
async def exercise_ids(db):
    """Name -> id for one exercise of each measurement kind."""
    ids = {
        "Bench Press": await exercise_service.create_exercise(db, "Bench Press", MeasuredIn.REPS_AND_WEIGHT),
        "Pull-ups": await exercise_service.create_exercise(db, "Pull-ups", MeasuredIn.REPS),
        "Running": await exercise_service.create_exercise(db, "Running", MeasuredIn.DURATION),
    }
    await db.commit()
    return ids


@pytest.fixture
def index_pairs(db):
    """Async helper: (id, index) pairs of a parent's members in index order."""

    async def _pairs(model, parent_column, parent_id):
        result = await db.execute(
            select(model.id, model.index).where(parent_column == parent_id).order_by(model.index)
        )
        return [tuple(row) for row in result.all()]

    return _pairs
