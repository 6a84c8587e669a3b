"""Session and WorkoutSet schemas."""

from datetime import date, datetime

from pydantic import BaseModel, Field


class Session(BaseModel):
    """One performance of a split day; completed_at is set once when the workout ends."""

    id: str
    user_id: str
    split_day_id: str
    date: date
    created_at: datetime
    completed_at: datetime | None = None
    is_completed: bool = False


class SessionCreate(BaseModel):
    split_day_id: str = Field(..., min_length=1)


class WorkoutSet(BaseModel):
    """One recorded set; weight 0 means bodyweight."""

    id: str
    session_id: str
    exercise_id: str
    set_number: int
    reps: int
    weight: float


class WorkoutSetCreate(BaseModel):
    exercise_id: str = Field(..., min_length=1)
    set_number: int = Field(..., ge=1)
    reps: int = Field(..., ge=0)
    weight: float = Field(0.0, ge=0)
