"""Split, split day and exercise endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from liftium.api.deps import get_split_repository
from liftium.core.security import require_user
from liftium.repositories.splits import SplitRepository
from liftium.schemas.split import (
    Exercise,
    ExerciseCreate,
    Split,
    SplitCreate,
    SplitDay,
    SplitDayCreate,
    SplitWithDays,
)

router = APIRouter(dependencies=[Depends(require_user)])


@router.get("", response_model=list[Split])
async def list_splits(splits: SplitRepository = Depends(get_split_repository)):
    """Current user's splits, newest first."""
    return await splits.get_user_splits()


@router.post("", response_model=Split, status_code=201)
async def create_split(
    payload: SplitCreate,
    splits: SplitRepository = Depends(get_split_repository),
):
    """Create an empty split (add days and exercises afterwards)."""
    return await splits.create_split(payload.name)


@router.get("/{split_id}", response_model=SplitWithDays)
async def get_split(
    split_id: str,
    splits: SplitRepository = Depends(get_split_repository),
):
    """Split with its days (by day of week) and their exercises (by order)."""
    split = await splits.get_split_with_days(split_id)
    if split is None:
        raise HTTPException(status_code=404, detail="Split not found")
    return split


@router.delete("/{split_id}", status_code=204)
async def delete_split(
    split_id: str,
    splits: SplitRepository = Depends(get_split_repository),
):
    """Delete a split with all its days and exercises."""
    await splits.delete_split(split_id)
    return None


@router.get("/{split_id}/today", response_model=SplitDay | None)
async def todays_split_day(
    split_id: str,
    splits: SplitRepository = Depends(get_split_repository),
):
    """Split day scheduled for today's weekday, or null."""
    return await splits.get_todays_split_day(split_id)


@router.post("/{split_id}/days", response_model=SplitDay, status_code=201)
async def create_split_day(
    split_id: str,
    payload: SplitDayCreate,
    splits: SplitRepository = Depends(get_split_repository),
):
    return await splits.create_split_day(split_id, payload)


@router.post("/days/{split_day_id}/exercises", response_model=Exercise, status_code=201)
async def create_exercise(
    split_day_id: str,
    payload: ExerciseCreate,
    splits: SplitRepository = Depends(get_split_repository),
):
    """Add an exercise to a split day; without exercise_order it goes last."""
    return await splits.create_exercise(split_day_id, payload)
