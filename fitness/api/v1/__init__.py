"""API v1 router aggregation."""

from fastapi import APIRouter

from fitness.api.v1.endpoints import exercises, health, templates, workouts

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(exercises.router, prefix="/exercises", tags=["exercises"])
api_router.include_router(templates.router, prefix="/templates", tags=["templates"])
api_router.include_router(workouts.router, prefix="/workouts", tags=["workouts"])
