"""Splits, split days and their exercises."""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone

from liftium.core.constants import EXERCISES_COLLECTION, SPLIT_DAYS_COLLECTION, SPLITS_COLLECTION
from liftium.core.enums import Weekday
from liftium.core.errors import Conflict, NotFound
from liftium.repositories.base import Repository, new_id
from liftium.schemas.split import (
    Exercise,
    ExerciseCreate,
    Split,
    SplitDay,
    SplitDayCreate,
    SplitDayWithExercises,
    SplitWithDays,
)
from liftium.services.codec import EXERCISE_CODEC, SPLIT_CODEC, SPLIT_DAY_CODEC, utc_now
from liftium.services.saga import WriteSaga

logger = logging.getLogger(__name__)


class SplitRepository(Repository):
    def new_split(self, name: str) -> Split:
        """Split owned by the current user (not yet written)."""
        return Split(id=new_id(), user_id=self.user_id, name=name, created_at=utc_now())

    async def create_split(self, name: str) -> Split:
        split = self.new_split(name)
        await self.store.set(SPLITS_COLLECTION, split.id, SPLIT_CODEC.encode(split))
        logger.debug("Split created: %s for user %s", split.id, split.user_id)
        return split

    async def get_user_splits(self) -> list[Split]:
        """Current user's splits, newest first."""
        documents = await self.store.query(SPLITS_COLLECTION, "userId", self.user_id)
        splits = SPLIT_CODEC.decode_many(documents)
        logger.debug("Found %d split documents, %d valid", len(documents), len(splits))
        return sorted(splits, key=lambda s: s.created_at, reverse=True)

    async def get_split(self, split_id: str) -> Split | None:
        """Split by id if it belongs to the current user."""
        user_id = self.user_id
        document = await self.store.get(SPLITS_COLLECTION, split_id)
        if document is None:
            return None
        split = SPLIT_CODEC.decode_one(document)
        if split is None or split.user_id != user_id:
            return None
        return split

    async def _owned_split(self, split_id: str) -> Split:
        split = await self.get_split(split_id)
        if split is None:
            raise NotFound("Split not found")
        return split

    async def create_split_day(self, split_id: str, payload: SplitDayCreate) -> SplitDay:
        await self._owned_split(split_id)
        day = SplitDay(
            id=new_id(),
            split_id=split_id,
            day_of_week=payload.day_of_week,
            name=payload.name,
            is_rest_day=payload.is_rest_day,
        )
        await self.store.set(SPLIT_DAYS_COLLECTION, day.id, SPLIT_DAY_CODEC.encode(day))
        logger.debug("Split day created: %s", day.id)
        return day

    async def get_split_day(self, split_day_id: str) -> SplitDay | None:
        document = await self.store.get(SPLIT_DAYS_COLLECTION, split_day_id)
        return SPLIT_DAY_CODEC.decode_one(document) if document is not None else None

    async def get_split_days(self, split_id: str) -> list[SplitDay]:
        """Days of a split ordered by day of week."""
        documents = await self.store.query(SPLIT_DAYS_COLLECTION, "splitId", split_id)
        return sorted(SPLIT_DAY_CODEC.decode_many(documents), key=lambda d: d.day_of_week)

    async def create_exercise(self, split_day_id: str, payload: ExerciseCreate) -> Exercise:
        day = await self.get_split_day(split_day_id)
        if day is None:
            raise NotFound("Split day not found")
        await self._owned_split(day.split_id)

        existing = await self.get_exercises_for_split_day(split_day_id)
        taken = {e.exercise_order for e in existing}
        order = payload.exercise_order
        if order is None:
            order = max(taken, default=0) + 1
        elif order in taken:
            raise Conflict(f"Exercise order {order} already used in this split day")

        exercise = Exercise(
            id=new_id(),
            split_day_id=split_day_id,
            name=payload.name,
            default_sets=payload.default_sets,
            rest_time_sec=payload.rest_time_sec,
            note=payload.note,
            exercise_order=order,
            muscle_groups=payload.muscle_groups,
        )
        await self.store.set(EXERCISES_COLLECTION, exercise.id, EXERCISE_CODEC.encode(exercise))
        logger.debug("Exercise created: %s", exercise.id)
        return exercise

    async def get_exercise(self, exercise_id: str) -> Exercise | None:
        document = await self.store.get(EXERCISES_COLLECTION, exercise_id)
        return EXERCISE_CODEC.decode_one(document) if document is not None else None

    async def get_exercises_for_split_day(self, split_day_id: str) -> list[Exercise]:
        """Exercises of a day in exercise order."""
        documents = await self.store.query(EXERCISES_COLLECTION, "splitDayId", split_day_id)
        return sorted(EXERCISE_CODEC.decode_many(documents), key=lambda e: e.exercise_order)

    async def get_split_with_days(self, split_id: str) -> SplitWithDays | None:
        split = await self.get_split(split_id)
        if split is None:
            return None
        days = []
        for day in await self.get_split_days(split_id):
            exercises = await self.get_exercises_for_split_day(day.id)
            days.append(SplitDayWithExercises(split_day=day, exercises=exercises))
        return SplitWithDays(split=split, split_days=days)

    async def delete_split(self, split_id: str) -> int:
        """Cascade delete in dependency order: each day's exercises, the day, then the split.

        Returns the number of documents deleted. A failure midway leaves the
        already-deleted documents deleted.
        """
        await self._owned_split(split_id)
        saga = WriteSaga(f"delete split {split_id}")
        for day in await self.get_split_days(split_id):
            for exercise in await self.get_exercises_for_split_day(day.id):
                saga.delete(EXERCISES_COLLECTION, exercise.id)
            saga.delete(SPLIT_DAYS_COLLECTION, day.id)
        saga.delete(SPLITS_COLLECTION, split_id)
        deleted = await saga.execute(self.store)
        logger.info("Split deleted: %s (%d documents)", split_id, deleted)
        return deleted

    async def get_todays_split_day(self, split_id: str, today: date | None = None) -> SplitDay | None:
        """Split day scheduled for today's weekday (0 = Sunday), if any."""
        await self._owned_split(split_id)
        weekday = Weekday.from_date(today or datetime.now(timezone.utc).date())
        for day in await self.get_split_days(split_id):
            if day.day_of_week == weekday:
                return day
        return None
