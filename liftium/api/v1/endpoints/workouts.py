"""Workout session and set endpoints."""

from fastapi import APIRouter, Depends, Query

from liftium.api.deps import get_workout_repository
from liftium.core.constants import RECENT_SESSIONS_DEFAULT_LIMIT
from liftium.core.security import require_user
from liftium.repositories.workouts import WorkoutRepository
from liftium.schemas.workout import Session, SessionCreate, WorkoutSet, WorkoutSetCreate

router = APIRouter(dependencies=[Depends(require_user)])


@router.get("/sessions", response_model=list[Session])
async def list_sessions(
    workouts: WorkoutRepository = Depends(get_workout_repository),
    limit: int = Query(RECENT_SESSIONS_DEFAULT_LIMIT, ge=1, le=100),
):
    """Most recently started sessions first."""
    return await workouts.get_recent_sessions(limit=limit)


@router.post("/sessions", response_model=Session, status_code=201)
async def start_session(
    payload: SessionCreate,
    workouts: WorkoutRepository = Depends(get_workout_repository),
):
    """Start a workout for a split day (dated today)."""
    return await workouts.create_session(payload.split_day_id)


@router.post("/sessions/{session_id}/complete", response_model=Session)
async def complete_session(
    session_id: str,
    workouts: WorkoutRepository = Depends(get_workout_repository),
):
    return await workouts.complete_session(session_id)


@router.get("/sessions/{session_id}/sets", response_model=list[WorkoutSet])
async def list_session_sets(
    session_id: str,
    workouts: WorkoutRepository = Depends(get_workout_repository),
):
    """Sets of a session by set number."""
    return await workouts.get_sets_for_session(session_id)


@router.post("/sessions/{session_id}/sets", response_model=WorkoutSet, status_code=201)
async def save_set(
    session_id: str,
    payload: WorkoutSetCreate,
    workouts: WorkoutRepository = Depends(get_workout_repository),
):
    return await workouts.save_set(session_id, payload)


@router.get("/exercises/{exercise_id}/sets", response_model=list[WorkoutSet])
async def list_exercise_sets(
    exercise_id: str,
    workouts: WorkoutRepository = Depends(get_workout_repository),
):
    """Every recorded set of an exercise."""
    return await workouts.get_sets_for_exercise(exercise_id)


@router.get("/exercises/{exercise_id}/previous", response_model=list[WorkoutSet])
async def previous_exercise_sets(
    exercise_id: str,
    workouts: WorkoutRepository = Depends(get_workout_repository),
):
    """Sets from the last completed session that included the exercise (empty if none)."""
    return await workouts.get_previous_sets_for_exercise(exercise_id)
