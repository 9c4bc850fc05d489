"""Exercise catalog endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fitness.db.session import get_db
from fitness.schemas.exercise import ExerciseCreate, ExerciseRead
from fitness.schemas.template import CreatedId
from fitness.services import exercises as exercise_service

router = APIRouter()


@router.get("", response_model=list[ExerciseRead])
async def list_exercises(db: AsyncSession = Depends(get_db)):
    """All exercises sorted by name (for the set-group picker)."""
    return await exercise_service.list_exercises(db)


@router.post("", response_model=CreatedId, status_code=201)
async def create_exercise(
    payload: ExerciseCreate,
    db: AsyncSession = Depends(get_db),
):
    exercise_id = await exercise_service.create_exercise(db, payload.name, payload.measured_in)
    return CreatedId(id=exercise_id)
