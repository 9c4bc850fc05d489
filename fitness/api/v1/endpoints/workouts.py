"""Workout endpoints: start from a template, edit structure, record progress."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path
from sqlalchemy.ext.asyncio import AsyncSession

from fitness.db.session import get_db
from fitness.schemas.template import CreatedId, MoveRequest, SetGroupCreate
from fitness.schemas.workout import (
    SetMetricsForm,
    StartWorkoutRequest,
    WorkoutRead,
    WorkoutSetRead,
    WorkoutSummary,
)
from fitness.services import instantiation, progress
from fitness.services import workouts as workout_service

router = APIRouter()

Id = Annotated[int, Path(gt=0)]


@router.post("", response_model=CreatedId, status_code=201)
async def start_workout(
    payload: StartWorkoutRequest,
    db: AsyncSession = Depends(get_db),
):
    """Start a workout by copying the template's current structure."""
    workout_id = await instantiation.start_workout(db, payload.template_id)
    return CreatedId(id=workout_id)


@router.get("/current", response_model=WorkoutSummary | None)
async def get_current_workout(db: AsyncSession = Depends(get_db)):
    """Most recently started unfinished workout, or null."""
    return await workout_service.get_current_workout(db)


@router.get("/{workout_id}", response_model=WorkoutRead)
async def get_workout(
    workout_id: Id,
    db: AsyncSession = Depends(get_db),
):
    workout = await workout_service.get_workout_by_id(db, workout_id)
    if not workout:
        raise HTTPException(status_code=404, detail="Workout not found")
    return workout


@router.delete("/{workout_id}", status_code=204)
async def delete_workout(
    workout_id: Id,
    db: AsyncSession = Depends(get_db),
):
    """Delete a workout with its set-groups and sets."""
    await workout_service.delete_workout(db, workout_id)


@router.post("/{workout_id}/toggle-complete")
async def toggle_workout_complete(
    workout_id: Id,
    db: AsyncSession = Depends(get_db),
):
    finished = await progress.toggle_workout_complete(db, workout_id)
    return {"finished": finished}


@router.post("/{workout_id}/set-groups", response_model=CreatedId, status_code=201)
async def add_set_group(
    workout_id: Id,
    payload: SetGroupCreate,
    db: AsyncSession = Depends(get_db),
):
    set_group_id = await workout_service.add_set_group(db, workout_id, payload.exercise_id)
    return CreatedId(id=set_group_id)


@router.delete("/{workout_id}/set-groups/{set_group_id}", status_code=204)
async def remove_set_group(
    workout_id: Id,
    set_group_id: Id,
    db: AsyncSession = Depends(get_db),
):
    await workout_service.remove_set_group(db, workout_id, set_group_id)


@router.post("/{workout_id}/set-groups/{set_group_id}/move", status_code=204)
async def move_set_group(
    workout_id: Id,
    set_group_id: Id,
    payload: MoveRequest,
    db: AsyncSession = Depends(get_db),
):
    await workout_service.move_set_group(db, workout_id, set_group_id, payload.direction)


@router.post("/{workout_id}/set-groups/{set_group_id}/sets", response_model=CreatedId, status_code=201)
async def add_set(
    workout_id: Id,
    set_group_id: Id,
    db: AsyncSession = Depends(get_db),
):
    set_id = await workout_service.add_set_to_group(db, workout_id, set_group_id)
    return CreatedId(id=set_id)


@router.delete("/{workout_id}/set-groups/{set_group_id}/sets/{set_id}", status_code=204)
async def remove_set(
    workout_id: Id,
    set_group_id: Id,
    set_id: Id,
    db: AsyncSession = Depends(get_db),
):
    await workout_service.remove_set_from_group(db, workout_id, set_group_id, set_id)


@router.post("/{workout_id}/set-groups/{set_group_id}/sets/{set_id}/move", status_code=204)
async def move_set(
    workout_id: Id,
    set_group_id: Id,
    set_id: Id,
    payload: MoveRequest,
    db: AsyncSession = Depends(get_db),
):
    await workout_service.move_set_in_group(db, workout_id, set_group_id, set_id, payload.direction)


@router.patch("/{workout_id}/sets/{set_id}", response_model=WorkoutSetRead)
async def update_set_metrics(
    workout_id: Id,
    set_id: Id,
    payload: SetMetricsForm,
    db: AsyncSession = Depends(get_db),
):
    """Overwrite reps/weight/duration (free text; blank clears)."""
    return await progress.update_set_metrics(
        db, workout_id, set_id, payload.reps, payload.weight, payload.duration
    )


@router.post("/{workout_id}/sets/{set_id}/toggle-complete", response_model=WorkoutSetRead)
async def toggle_set_complete(
    workout_id: Id,
    set_id: Id,
    payload: SetMetricsForm | None = None,
    db: AsyncSession = Depends(get_db),
):
    """Complete / reopen a set; metrics sent along are merged before the completeness check."""
    payload = payload or SetMetricsForm()
    return await progress.toggle_set_complete(
        db, workout_id, set_id, payload.reps, payload.weight, payload.duration
    )
