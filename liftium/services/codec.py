"""Entity codec: domain models <-> flat documents.

Documents use camelCase keys. Timestamps are stored as integer epoch seconds
(UTC), calendar dates as integer epoch days. Optional fields are written as
null so every document of a kind has the same keys.

Decoding is fail-soft for batches: ``EntityCodec.decode`` returns a
``DecodeResult`` (entity or error) per document, and ``decode_many`` keeps the
good ones and logs the rest. A missing ``createdAt`` decodes to "now" rather
than failing.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from liftium.core.constants import (
    EXERCISES_COLLECTION,
    PROGRESS_PHOTOS_COLLECTION,
    SESSIONS_COLLECTION,
    SETS_COLLECTION,
    SPLIT_DAYS_COLLECTION,
    SPLITS_COLLECTION,
    USERS_COLLECTION,
)
from liftium.core.errors import DecodeSkip
from liftium.schemas.photo import ProgressPhoto
from liftium.schemas.split import Exercise, Split, SplitDay
from liftium.schemas.user import User
from liftium.schemas.workout import Session, WorkoutSet
from liftium.store.base import Document

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

EPOCH_DAY = date(1970, 1, 1)


# --- date encoding ---------------------------------------------------------


def encode_timestamp(value: datetime) -> int:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return int(value.timestamp())


def decode_timestamp(value: int) -> datetime:
    return datetime.fromtimestamp(value, tz=timezone.utc)


def encode_date(value: date) -> int:
    return (value - EPOCH_DAY).days


def decode_date(value: int) -> date:
    return EPOCH_DAY + timedelta(days=value)


def utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(microsecond=0)


# --- field readers -----------------------------------------------------------


class _Reader:
    """Typed access to one document; missing/invalid required fields raise DecodeSkip."""

    def __init__(self, kind: str, document: Document) -> None:
        self.kind = kind
        self.doc = document
        raw_id = document.get("id")
        self.doc_id = raw_id if isinstance(raw_id, str) else None

    def _skip(self, reason: str) -> DecodeSkip:
        return DecodeSkip(self.kind, self.doc_id, reason)

    def string(self, key: str) -> str:
        value = self.doc.get(key)
        if value is None:
            raise self._skip(f"missing {key}")
        if not isinstance(value, str):
            raise self._skip(f"{key} is not a string")
        return value

    def optional_string(self, key: str, default: str | None = None) -> str | None:
        value = self.doc.get(key)
        if value is None:
            return default
        if not isinstance(value, str):
            raise self._skip(f"{key} is not a string")
        return value

    def integer(self, key: str) -> int:
        value = self.optional_integer(key)
        if value is None:
            raise self._skip(f"missing {key}")
        return value

    def optional_integer(self, key: str) -> int | None:
        value = self.doc.get(key)
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise self._skip(f"{key} is not a number")
        if isinstance(value, float) and not value.is_integer():
            raise self._skip(f"{key} is not an integer")
        return int(value)

    def number(self, key: str) -> float:
        value = self.optional_number(key)
        if value is None:
            raise self._skip(f"missing {key}")
        return value

    def optional_number(self, key: str) -> float | None:
        value = self.doc.get(key)
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise self._skip(f"{key} is not a number")
        return float(value)

    def flag(self, key: str) -> bool:
        value = self.doc.get(key)
        if value is None:
            return False
        if not isinstance(value, bool):
            raise self._skip(f"{key} is not a boolean")
        return value

    def timestamp(self, key: str) -> datetime:
        # Missing timestamps become "now" (lossy fallback kept from the mobile app)
        value = self.optional_timestamp(key)
        return value if value is not None else utc_now()

    def optional_timestamp(self, key: str) -> datetime | None:
        value = self.optional_integer(key)
        if value is None:
            return None
        try:
            return decode_timestamp(value)
        except (OverflowError, OSError, ValueError):
            raise self._skip(f"{key} is out of range") from None

    def calendar_date(self, key: str, *, fallback_today: bool = False) -> date:
        value = self.optional_integer(key)
        if value is None:
            if fallback_today:
                return datetime.now(timezone.utc).date()
            raise self._skip(f"missing {key}")
        try:
            return decode_date(value)
        except OverflowError:
            raise self._skip(f"{key} is out of range") from None


# --- per-entity encoders / decoders -------------------------------------------


def _encode_user(user: User) -> Document:
    return {
        "id": user.id,
        "email": user.email,
        "userName": user.user_name,
        "createdAt": encode_timestamp(user.created_at),
    }


def _decode_user(r: _Reader) -> User:
    return User(
        id=r.string("id"),
        email=r.optional_string("email", ""),
        user_name=r.optional_string("userName", ""),
        created_at=r.timestamp("createdAt"),
    )


def _encode_split(split: Split) -> Document:
    return {
        "id": split.id,
        "userId": split.user_id,
        "name": split.name,
        "createdAt": encode_timestamp(split.created_at),
    }


def _decode_split(r: _Reader) -> Split:
    return Split(
        id=r.string("id"),
        user_id=r.string("userId"),
        name=r.string("name"),
        created_at=r.timestamp("createdAt"),
    )


def _encode_split_day(day: SplitDay) -> Document:
    return {
        "id": day.id,
        "splitId": day.split_id,
        "dayOfWeek": day.day_of_week,
        "name": day.name,
        "isRestDay": day.is_rest_day,
    }


def _decode_split_day(r: _Reader) -> SplitDay:
    return SplitDay(
        id=r.string("id"),
        split_id=r.string("splitId"),
        day_of_week=r.integer("dayOfWeek"),
        name=r.string("name"),
        is_rest_day=r.flag("isRestDay"),
    )


def _encode_exercise(exercise: Exercise) -> Document:
    return {
        "id": exercise.id,
        "splitDayId": exercise.split_day_id,
        "name": exercise.name,
        "defaultSets": exercise.default_sets,
        "restTimeSec": exercise.rest_time_sec,
        "note": exercise.note,
        "exerciseOrder": exercise.exercise_order,
        "muscleGroups": exercise.muscle_groups,
    }


def _decode_exercise(r: _Reader) -> Exercise:
    return Exercise(
        id=r.string("id"),
        split_day_id=r.string("splitDayId"),
        name=r.string("name"),
        default_sets=r.integer("defaultSets"),
        rest_time_sec=r.integer("restTimeSec"),
        note=r.optional_string("note"),
        exercise_order=r.integer("exerciseOrder"),
        muscle_groups=r.string("muscleGroups"),
    )


def _encode_session(session: Session) -> Document:
    return {
        "id": session.id,
        "userId": session.user_id,
        "splitDayId": session.split_day_id,
        "date": encode_date(session.date),
        "createdAt": encode_timestamp(session.created_at),
        "completedAt": encode_timestamp(session.completed_at) if session.completed_at else None,
        "isCompleted": session.is_completed,
    }


def _decode_session(r: _Reader) -> Session:
    return Session(
        id=r.string("id"),
        user_id=r.string("userId"),
        split_day_id=r.string("splitDayId"),
        date=r.calendar_date("date", fallback_today=True),
        created_at=r.timestamp("createdAt"),
        completed_at=r.optional_timestamp("completedAt"),
        is_completed=r.flag("isCompleted"),
    )


def _encode_set(workout_set: WorkoutSet) -> Document:
    return {
        "id": workout_set.id,
        "sessionId": workout_set.session_id,
        "exerciseId": workout_set.exercise_id,
        "setNumber": workout_set.set_number,
        "reps": workout_set.reps,
        "weight": workout_set.weight,
    }


def _decode_set(r: _Reader) -> WorkoutSet:
    return WorkoutSet(
        id=r.string("id"),
        session_id=r.string("sessionId"),
        exercise_id=r.string("exerciseId"),
        set_number=r.integer("setNumber"),
        reps=r.integer("reps"),
        weight=r.number("weight"),
    )


def _encode_photo(photo: ProgressPhoto) -> Document:
    return {
        "id": photo.id,
        "userId": photo.user_id,
        "imagePath": photo.image_path,
        "weight": photo.weight,
        "notes": photo.notes,
        "date": encode_date(photo.date),
        "createdAt": encode_timestamp(photo.created_at),
    }


def _decode_photo(r: _Reader) -> ProgressPhoto:
    return ProgressPhoto(
        id=r.string("id"),
        user_id=r.string("userId"),
        image_path=r.string("imagePath"),
        weight=r.optional_number("weight"),
        notes=r.optional_string("notes"),
        date=r.calendar_date("date"),
        created_at=r.timestamp("createdAt"),
    )


# --- codec objects -------------------------------------------------------------


@dataclass(frozen=True)
class DecodeError:
    kind: str
    document_id: str | None
    reason: str


@dataclass(frozen=True)
class DecodeResult(Generic[T]):
    """Outcome of decoding one document: exactly one of entity / error is set."""

    entity: T | None = None
    error: DecodeError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class EntityCodec(Generic[T]):
    def __init__(
        self,
        kind: str,
        collection: str,
        model: type[T],
        encoder: Callable[[T], Document],
        decoder: Callable[[_Reader], T],
    ) -> None:
        self.kind = kind
        self.collection = collection
        self.model = model
        self._encoder = encoder
        self._decoder = decoder

    def encode(self, entity: T) -> Document:
        return self._encoder(entity)

    def decode(self, document: Any) -> DecodeResult[T]:
        if not isinstance(document, dict):
            return DecodeResult(error=DecodeError(self.kind, None, "document is not a mapping"))
        reader = _Reader(self.kind, document)
        try:
            return DecodeResult(entity=self._decoder(reader))
        except DecodeSkip as e:
            return DecodeResult(error=DecodeError(self.kind, e.document_id, e.reason))
        except (TypeError, ValueError, OverflowError, OSError) as e:
            # pydantic ValidationError is a ValueError
            return DecodeResult(error=DecodeError(self.kind, reader.doc_id, str(e)))

    def decode_one(self, document: Any) -> T | None:
        result = self.decode(document)
        if not result.ok:
            _report(result.error)
        return result.entity

    def decode_results(self, documents: Iterable[Any]) -> list[DecodeResult[T]]:
        return [self.decode(doc) for doc in documents]

    def decode_many(self, documents: Iterable[Any]) -> list[T]:
        """Decode a batch, dropping (and logging) malformed documents."""
        entities: list[T] = []
        for result in self.decode_results(documents):
            if result.ok:
                entities.append(result.entity)
            else:
                _report(result.error)
        return entities


def _report(error: DecodeError | None) -> None:
    if error is not None:
        logger.warning("Skipping %s document %s: %s", error.kind, error.document_id or "<no id>", error.reason)


USER_CODEC = EntityCodec("user", USERS_COLLECTION, User, _encode_user, _decode_user)
SPLIT_CODEC = EntityCodec("split", SPLITS_COLLECTION, Split, _encode_split, _decode_split)
SPLIT_DAY_CODEC = EntityCodec("split_day", SPLIT_DAYS_COLLECTION, SplitDay, _encode_split_day, _decode_split_day)
EXERCISE_CODEC = EntityCodec("exercise", EXERCISES_COLLECTION, Exercise, _encode_exercise, _decode_exercise)
SESSION_CODEC = EntityCodec("session", SESSIONS_COLLECTION, Session, _encode_session, _decode_session)
SET_CODEC = EntityCodec("set", SETS_COLLECTION, WorkoutSet, _encode_set, _decode_set)
PHOTO_CODEC = EntityCodec("progress_photo", PROGRESS_PHOTOS_COLLECTION, ProgressPhoto, _encode_photo, _decode_photo)

_CODECS_BY_MODEL: dict[type, EntityCodec] = {
    codec.model: codec
    for codec in (USER_CODEC, SPLIT_CODEC, SPLIT_DAY_CODEC, EXERCISE_CODEC, SESSION_CODEC, SET_CODEC, PHOTO_CODEC)
}


def codec_for(entity_type: type[T]) -> EntityCodec[T]:
    try:
        return _CODECS_BY_MODEL[entity_type]
    except KeyError:
        raise TypeError(f"No codec for {entity_type.__name__}") from None


def encode(entity: BaseModel) -> Document:
    """Encode any known entity to its document."""
    return codec_for(type(entity)).encode(entity)
