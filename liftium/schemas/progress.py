"""Derived progress statistics (never persisted)."""

from datetime import date

from pydantic import BaseModel


class ProgressStats(BaseModel):
    total_workouts: int
    current_streak: int
    longest_streak: int
    total_volume: float
    favorite_exercise: str | None = None  # exercise id with the highest volume
    average_workout_duration: int  # minutes


class ExerciseProgress(BaseModel):
    exercise_id: str
    exercise_name: str
    max_weight: float
    max_reps: int
    total_volume: float
    last_performed: date | None = None
