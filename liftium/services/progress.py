"""Progress aggregation: streaks, training volume, favourite exercise, per-exercise progress.

Volume is weight x reps summed over sets. Statistics are computed in memory
from the user's recent sessions; nothing derived here is persisted.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date, datetime, timedelta, timezone

from liftium.core.constants import PLACEHOLDER_AVERAGE_WORKOUT_MINUTES, PROGRESS_SESSIONS_LIMIT
from liftium.repositories.splits import SplitRepository
from liftium.repositories.workouts import WorkoutRepository
from liftium.schemas.progress import ExerciseProgress, ProgressStats
from liftium.schemas.split import Exercise
from liftium.schemas.workout import Session, WorkoutSet

logger = logging.getLogger(__name__)


def current_streak(session_dates: Iterable[date], today: date) -> int:
    """
    Consecutive-day streak ending today or yesterday.

    Dates are walked newest first with a cursor starting at ``today``. The
    newest date may be today or yesterday; every later date must equal the
    cursor, which moves to the day before each counted date. Anything else
    ends the walk, including a second session on an already counted day.
    """
    streak = 0
    cursor = today
    for d in sorted(session_dates, reverse=True):
        if d == cursor or (streak == 0 and d == cursor - timedelta(days=1)):
            streak += 1
            cursor = d - timedelta(days=1)
        else:
            break
    return streak


def accumulate_volume(sets: Iterable[WorkoutSet]) -> tuple[float, dict[str, float]]:
    """Total volume and per-exercise volume (in first-seen exercise order)."""
    total = 0.0
    per_exercise: dict[str, float] = {}
    for s in sets:
        volume = s.weight * s.reps
        total += volume
        per_exercise[s.exercise_id] = per_exercise.get(s.exercise_id, 0.0) + volume
    return total, per_exercise


def favorite_exercise(volumes: dict[str, float]) -> str | None:
    """Exercise id with the highest volume; on ties the first one seen wins."""
    best_id: str | None = None
    best_volume = 0.0
    for exercise_id, volume in volumes.items():
        if best_id is None or volume > best_volume:
            best_id, best_volume = exercise_id, volume
    return best_id


def build_progress_stats(
    sessions: list[Session],
    sets: Iterable[WorkoutSet],
    today: date,
) -> ProgressStats:
    streak = current_streak((s.date for s in sessions), today)
    total_volume, volumes = accumulate_volume(sets)
    return ProgressStats(
        total_workouts=len(sessions),
        current_streak=streak,
        # Only the current streak is tracked; longest mirrors it
        longest_streak=streak,
        total_volume=total_volume,
        favorite_exercise=favorite_exercise(volumes),
        average_workout_duration=PLACEHOLDER_AVERAGE_WORKOUT_MINUTES,
    )


def build_exercise_progress(
    exercise: Exercise,
    sets: list[WorkoutSet],
    sessions: Iterable[Session],
) -> ExerciseProgress | None:
    """
    Progress for one exercise, or None when it has no sets.

    Max weight and max reps are independent maxima and may come from
    different sets. ``last_performed`` is the latest date among the given
    sessions that contain one of the sets.
    """
    sets = [s for s in sets if s.exercise_id == exercise.id]
    if not sets:
        return None
    session_ids = {s.session_id for s in sets}
    performed = [session.date for session in sessions if session.id in session_ids]
    return ExerciseProgress(
        exercise_id=exercise.id,
        exercise_name=exercise.name,
        max_weight=max(s.weight for s in sets),
        max_reps=max(s.reps for s in sets),
        total_volume=sum(s.weight * s.reps for s in sets),
        last_performed=max(performed) if performed else None,
    )


async def compute_progress_stats(
    workouts: WorkoutRepository,
    *,
    session_limit: int = PROGRESS_SESSIONS_LIMIT,
    today: date | None = None,
) -> ProgressStats:
    """
    Stats over the current user's most recent ``session_limit`` sessions.

    Raises Unauthenticated before any query when there is no current user;
    store failures propagate, no partial stats are returned.
    """
    # Resolve the user first so an anonymous call never reaches the store
    user_id = workouts.user_id
    sessions = await workouts.get_recent_sessions(limit=session_limit)
    sets: list[WorkoutSet] = []
    for session in sessions:
        sets.extend(await workouts.get_sets_for_session(session.id))
    stats = build_progress_stats(sessions, sets, today or datetime.now(timezone.utc).date())
    logger.debug(
        "Progress stats for %s: %d workouts, %d sets, streak %d",
        user_id, stats.total_workouts, len(sets), stats.current_streak,
    )
    return stats


async def get_exercise_progress(
    exercise_id: str,
    splits: SplitRepository,
    workouts: WorkoutRepository,
) -> ExerciseProgress | None:
    """Progress for an exercise; None when the exercise is unknown or has no sets."""
    exercise = await splits.get_exercise(exercise_id)
    if exercise is None:
        return None
    sets = await workouts.get_sets_for_exercise(exercise_id)
    if not sets:
        return None
    sessions: list[Session] = []
    for session_id in dict.fromkeys(s.session_id for s in sets):
        session = await workouts.get_session(session_id)
        if session is not None:
            sessions.append(session)
    return build_exercise_progress(exercise, sets, sessions)
