"""API v1 router aggregation."""

from fastapi import APIRouter

from liftium.api.v1.endpoints import (
    health,
    photos,
    progress,
    splits,
    templates,
    users,
    workouts,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(splits.router, prefix="/splits", tags=["splits"])
api_router.include_router(templates.router, prefix="/templates", tags=["templates"])
api_router.include_router(workouts.router, prefix="/workouts", tags=["workouts"])
api_router.include_router(progress.router, prefix="/progress", tags=["progress"])
api_router.include_router(photos.router, prefix="/photos", tags=["photos"])
