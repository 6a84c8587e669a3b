"""Progress statistics endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from liftium.api.deps import get_progress_session_limit, get_split_repository, get_workout_repository
from liftium.core.security import require_user
from liftium.repositories.splits import SplitRepository
from liftium.repositories.workouts import WorkoutRepository
from liftium.schemas.progress import ExerciseProgress, ProgressStats
from liftium.services.progress import compute_progress_stats, get_exercise_progress

router = APIRouter(dependencies=[Depends(require_user)])


@router.get("/stats", response_model=ProgressStats)
async def progress_stats(
    workouts: WorkoutRepository = Depends(get_workout_repository),
    session_limit: int = Depends(get_progress_session_limit),
):
    """
    Totals over the user's recent sessions: workout count, current streak
    (ending today or yesterday), total volume and highest-volume exercise.
    """
    return await compute_progress_stats(workouts, session_limit=session_limit)


@router.get("/exercises/{exercise_id}", response_model=ExerciseProgress)
async def exercise_progress(
    exercise_id: str,
    splits: SplitRepository = Depends(get_split_repository),
    workouts: WorkoutRepository = Depends(get_workout_repository),
):
    """Max weight, max reps, total volume and last performed date for one exercise."""
    progress = await get_exercise_progress(exercise_id, splits, workouts)
    if progress is None:
        raise HTTPException(status_code=404, detail="No progress recorded for this exercise")
    return progress
