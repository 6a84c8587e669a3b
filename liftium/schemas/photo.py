"""Progress photo schemas."""

from datetime import date, datetime

from pydantic import BaseModel, Field


class ProgressPhoto(BaseModel):
    id: str
    user_id: str
    image_path: str
    weight: float | None = None
    notes: str | None = None
    date: date
    created_at: datetime


class ProgressPhotoCreate(BaseModel):
    image_path: str = Field(..., min_length=1)
    weight: float | None = Field(None, ge=0)
    notes: str | None = None
