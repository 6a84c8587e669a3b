"""Split, SplitDay and Exercise schemas."""

from datetime import datetime

from pydantic import BaseModel, Field


class Split(BaseModel):
    id: str
    user_id: str
    name: str
    created_at: datetime


class SplitCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)


class SplitDay(BaseModel):
    id: str
    split_id: str
    day_of_week: int  # 0 (Sunday) .. 6 (Saturday)
    name: str
    is_rest_day: bool = False


class SplitDayCreate(BaseModel):
    day_of_week: int
    name: str = Field(..., min_length=1, max_length=255)
    is_rest_day: bool = False


class Exercise(BaseModel):
    id: str
    split_day_id: str
    name: str
    default_sets: int
    rest_time_sec: int
    note: str | None = None
    exercise_order: int  # 1-based position within the split day
    muscle_groups: str  # free text, possibly comma-joined


class ExerciseCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    default_sets: int = Field(3, ge=1)
    rest_time_sec: int = Field(90, ge=0)
    note: str | None = None
    exercise_order: int | None = Field(None, ge=1)  # next free position when omitted
    muscle_groups: str = ""


class SplitDayWithExercises(BaseModel):
    split_day: SplitDay
    exercises: list[Exercise] = []


class SplitWithDays(BaseModel):
    split: Split
    split_days: list[SplitDayWithExercises] = []
