"""Workout templates - author the reusable set-group/set structure."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from fitness.db.session import get_db
from fitness.schemas.template import (
    CreatedId,
    MoveRequest,
    SetGroupCreate,
    TemplateNameIn,
    TemplateRead,
    TemplateSummary,
)
from fitness.services import templates as template_service

router = APIRouter()

Id = Annotated[int, Path(gt=0)]


@router.get("", response_model=list[TemplateSummary])
async def list_templates(
    db: AsyncSession = Depends(get_db),
    offset: int = Query(0, ge=0),
):
    """One page (10) of templates sorted by name."""
    return await template_service.list_templates(db, offset)


@router.post("", response_model=CreatedId, status_code=201)
async def create_template(
    payload: TemplateNameIn,
    db: AsyncSession = Depends(get_db),
):
    template_id = await template_service.create_template(db, payload.name)
    return CreatedId(id=template_id)


@router.get("/{template_id}", response_model=TemplateRead)
async def get_template(
    template_id: Id,
    db: AsyncSession = Depends(get_db),
):
    """Template with set-groups and sets, sorted by index."""
    template = await template_service.get_template_by_id(db, template_id)
    if not template:
        raise HTTPException(status_code=404, detail="Template not found")
    return template


@router.patch("/{template_id}", status_code=204)
async def rename_template(
    template_id: Id,
    payload: TemplateNameIn,
    db: AsyncSession = Depends(get_db),
):
    await template_service.rename_template(db, template_id, payload.name)


@router.delete("/{template_id}", status_code=204)
async def delete_template(
    template_id: Id,
    db: AsyncSession = Depends(get_db),
):
    """Delete a template (409 while workouts were started from it)."""
    await template_service.delete_template(db, template_id)


@router.post("/{template_id}/set-groups", response_model=CreatedId, status_code=201)
async def add_set_group(
    template_id: Id,
    payload: SetGroupCreate,
    db: AsyncSession = Depends(get_db),
):
    set_group_id = await template_service.add_template_set_group(db, template_id, payload.exercise_id)
    return CreatedId(id=set_group_id)


@router.delete("/{template_id}/set-groups/{set_group_id}", status_code=204)
async def remove_set_group(
    template_id: Id,
    set_group_id: Id,
    db: AsyncSession = Depends(get_db),
):
    await template_service.remove_template_set_group(db, template_id, set_group_id)


@router.post("/{template_id}/set-groups/{set_group_id}/move", status_code=204)
async def move_set_group(
    template_id: Id,
    set_group_id: Id,
    payload: MoveRequest,
    db: AsyncSession = Depends(get_db),
):
    """Move one position up/down; no-op at either end."""
    await template_service.move_template_set_group(db, template_id, set_group_id, payload.direction)


@router.post("/{template_id}/set-groups/{set_group_id}/sets", response_model=CreatedId, status_code=201)
async def add_set(
    template_id: Id,
    set_group_id: Id,
    db: AsyncSession = Depends(get_db),
):
    set_id = await template_service.add_set_to_template_group(db, template_id, set_group_id)
    return CreatedId(id=set_id)


@router.delete("/{template_id}/set-groups/{set_group_id}/sets/{set_id}", status_code=204)
async def remove_set(
    template_id: Id,
    set_group_id: Id,
    set_id: Id,
    db: AsyncSession = Depends(get_db),
):
    await template_service.remove_set_from_template_group(db, template_id, set_group_id, set_id)


@router.post("/{template_id}/set-groups/{set_group_id}/sets/{set_id}/move", status_code=204)
async def move_set(
    template_id: Id,
    set_group_id: Id,
    set_id: Id,
    payload: MoveRequest,
    db: AsyncSession = Depends(get_db),
):
    await template_service.move_set_in_template_group(
        db, template_id, set_group_id, set_id, payload.direction
    )
