"""User schemas."""

from datetime import datetime

from pydantic import BaseModel, Field


class User(BaseModel):
    id: str
    email: str
    user_name: str
    created_at: datetime


class UserUpsert(BaseModel):
    """Profile data sent on signup / re-login; email falls back to the identity's email."""

    user_name: str = Field(..., min_length=1, max_length=255)
    email: str | None = None
