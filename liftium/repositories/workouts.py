"""Workout sessions and the sets logged in them."""

from __future__ import annotations

import logging
from datetime import date

from liftium.core.constants import (
    PREVIOUS_SETS_SESSIONS_LIMIT,
    RECENT_SESSIONS_DEFAULT_LIMIT,
    SESSIONS_COLLECTION,
    SETS_COLLECTION,
    SPLIT_DAYS_COLLECTION,
)
from liftium.core.errors import NotFound
from liftium.repositories.base import Repository, new_id
from liftium.schemas.workout import Session, WorkoutSet, WorkoutSetCreate
from liftium.services.codec import SESSION_CODEC, SET_CODEC, encode_timestamp, utc_now

logger = logging.getLogger(__name__)


class WorkoutRepository(Repository):
    async def create_session(self, split_day_id: str, today: date | None = None) -> Session:
        """Start a workout for a split day."""
        user_id = self.user_id
        if await self.store.get(SPLIT_DAYS_COLLECTION, split_day_id) is None:
            raise NotFound("Split day not found")
        now = utc_now()
        session = Session(
            id=new_id(),
            user_id=user_id,
            split_day_id=split_day_id,
            date=today or now.date(),
            created_at=now,
        )
        await self.store.set(SESSIONS_COLLECTION, session.id, SESSION_CODEC.encode(session))
        logger.debug("Session created: %s", session.id)
        return session

    async def get_session(self, session_id: str) -> Session | None:
        document = await self.store.get(SESSIONS_COLLECTION, session_id)
        return SESSION_CODEC.decode_one(document) if document is not None else None

    async def _owned_session(self, session_id: str) -> Session:
        user_id = self.user_id
        session = await self.get_session(session_id)
        if session is None or session.user_id != user_id:
            raise NotFound("Session not found")
        return session

    async def get_recent_sessions(self, limit: int = RECENT_SESSIONS_DEFAULT_LIMIT) -> list[Session]:
        """Current user's sessions, most recently started first."""
        documents = await self.store.query(SESSIONS_COLLECTION, "userId", self.user_id)
        sessions = SESSION_CODEC.decode_many(documents)
        return sorted(sessions, key=lambda s: s.created_at, reverse=True)[:limit]

    async def save_set(self, session_id: str, payload: WorkoutSetCreate) -> WorkoutSet:
        """Record one set; sets are never modified afterwards."""
        await self._owned_session(session_id)
        workout_set = WorkoutSet(
            id=new_id(),
            session_id=session_id,
            exercise_id=payload.exercise_id,
            set_number=payload.set_number,
            reps=payload.reps,
            weight=payload.weight,
        )
        await self.store.set(SETS_COLLECTION, workout_set.id, SET_CODEC.encode(workout_set))
        logger.debug("Set saved: %s", workout_set.id)
        return workout_set

    async def complete_session(self, session_id: str) -> Session:
        """Mark a session completed (once); returns the stored session."""
        session = await self._owned_session(session_id)
        if session.is_completed:
            return session
        completed_at = utc_now()
        await self.store.update(
            SESSIONS_COLLECTION,
            session_id,
            {"completedAt": encode_timestamp(completed_at), "isCompleted": True},
        )
        logger.debug("Session completed: %s", session_id)
        updated = await self.get_session(session_id)
        if updated is None:
            raise NotFound("Session not found")
        return updated

    async def get_sets_for_session(self, session_id: str) -> list[WorkoutSet]:
        documents = await self.store.query(SETS_COLLECTION, "sessionId", session_id)
        return sorted(SET_CODEC.decode_many(documents), key=lambda s: s.set_number)

    async def get_sets_for_exercise(self, exercise_id: str) -> list[WorkoutSet]:
        """Every recorded set of an exercise across sessions."""
        documents = await self.store.query(SETS_COLLECTION, "exerciseId", exercise_id)
        return sorted(SET_CODEC.decode_many(documents), key=lambda s: s.set_number)

    async def get_previous_sets_for_exercise(self, exercise_id: str) -> list[WorkoutSet]:
        """Sets from the most recent completed session that included the exercise."""
        sessions = await self.get_recent_sessions(limit=PREVIOUS_SETS_SESSIONS_LIMIT)
        for session in sessions:
            if not session.is_completed:
                continue
            sets = [s for s in await self.get_sets_for_session(session.id) if s.exercise_id == exercise_id]
            if sets:
                logger.debug("Found %d previous sets for exercise %s", len(sets), exercise_id)
                return sets
        return []
