from datetime import date, datetime, timedelta, timezone

import pytest

from liftium.schemas.photo import ProgressPhoto
from liftium.schemas.split import Exercise, Split, SplitDay
from liftium.schemas.user import User
from liftium.schemas.workout import Session, WorkoutSet
from liftium.services.codec import (
    EXERCISE_CODEC,
    SESSION_CODEC,
    SET_CODEC,
    SPLIT_CODEC,
    SPLIT_DAY_CODEC,
    USER_CODEC,
    codec_for,
    decode_date,
    encode,
    encode_date,
    encode_timestamp,
)

CREATED = datetime(2025, 4, 12, 9, 30, 15, tzinfo=timezone.utc)
DAY = date(2025, 4, 12)


def _session_doc(i: int) -> dict:
    return {
        "id": f"s{i}",
        "userId": "u1",
        "splitDayId": "d1",
        "date": encode_date(DAY) - i,
        "createdAt": encode_timestamp(CREATED) - i * 86400,
        "completedAt": None,
        "isCompleted": False,
    }


ENTITIES = [
    User(id="u1", email="a@b.c", user_name="Alex", created_at=CREATED),
    Split(id="sp1", user_id="u1", name="PPL", created_at=CREATED),
    SplitDay(id="d1", split_id="sp1", day_of_week=1, name="Push", is_rest_day=False),
    SplitDay(id="d2", split_id="sp1", day_of_week=4, name="Rest", is_rest_day=True),
    Exercise(
        id="e1", split_day_id="d1", name="Bench Press", default_sets=4, rest_time_sec=180,
        note="Retract shoulders", exercise_order=1, muscle_groups="Chest",
    ),
    Exercise(
        id="e2", split_day_id="d1", name="Face Pulls", default_sets=3, rest_time_sec=60,
        exercise_order=2, muscle_groups="Shoulders, Back",
    ),
    Session(id="s1", user_id="u1", split_day_id="d1", date=DAY, created_at=CREATED),
    Session(
        id="s2", user_id="u1", split_day_id="d1", date=DAY, created_at=CREATED,
        completed_at=CREATED + timedelta(hours=1), is_completed=True,
    ),
    WorkoutSet(id="w1", session_id="s1", exercise_id="e1", set_number=1, reps=8, weight=185.0),
    WorkoutSet(id="w2", session_id="s1", exercise_id="e1", set_number=2, reps=12, weight=0.0),
    ProgressPhoto(
        id="p1", user_id="u1", image_path="https://img/1.jpg", weight=82.5,
        notes="Week 4", date=DAY, created_at=CREATED,
    ),
    ProgressPhoto(id="p2", user_id="u1", image_path="https://img/2.jpg", date=DAY, created_at=CREATED),
]


@pytest.mark.parametrize("entity", ENTITIES, ids=lambda e: f"{type(e).__name__}-{e.id}")
def test_encode_decode_encode_is_stable(entity):
    codec = codec_for(type(entity))
    document = encode(entity)
    decoded = codec.decode(document)
    assert decoded.ok
    assert encode(decoded.entity) == document
    assert decoded.entity == entity


def test_dates_are_stored_as_epoch_units():
    assert encode_date(date(1970, 1, 2)) == 1
    assert decode_date(encode_date(DAY)) == DAY
    doc = encode(Session(id="s", user_id="u", split_day_id="d", date=DAY, created_at=CREATED))
    assert doc["date"] == (DAY - date(1970, 1, 1)).days
    assert doc["createdAt"] == int(CREATED.timestamp())
    assert doc["completedAt"] is None


def test_naive_timestamps_are_treated_as_utc():
    naive = datetime(2025, 4, 12, 9, 30, 15)
    assert encode_timestamp(naive) == encode_timestamp(CREATED)


def test_optional_fields_are_written_as_null():
    doc = EXERCISE_CODEC.encode(ENTITIES[5])
    assert "note" in doc and doc["note"] is None


def test_batch_decode_drops_only_the_malformed_document():
    documents = [_session_doc(i) for i in range(5)]
    broken = dict(documents[2])
    del broken["userId"]
    documents[2] = broken

    sessions = SESSION_CODEC.decode_many(documents)

    assert [s.id for s in sessions] == ["s0", "s1", "s3", "s4"]


@pytest.mark.parametrize(
    "garbage",
    [
        None,
        "not a document",
        {},
        {"id": 42, "userId": "u1", "splitDayId": "d1"},
        {"id": "x", "userId": None},
        {**_session_doc(9), "createdAt": 10**18},
        {**_session_doc(9), "completedAt": -(10**18)},
        {**_session_doc(9), "date": 10**12},
    ],
)
def test_batch_decode_never_raises_on_garbage(garbage):
    documents = [_session_doc(0), garbage, _session_doc(1)]
    assert len(SESSION_CODEC.decode_many(documents)) == 2


def test_decode_results_report_the_reason():
    doc = {"id": "w1", "sessionId": "s1", "exerciseId": "e1", "setNumber": 1, "reps": "eight", "weight": 100}
    results = SET_CODEC.decode_results([doc])
    assert not results[0].ok
    assert results[0].entity is None
    assert results[0].error.document_id == "w1"
    assert "reps" in results[0].error.reason


def test_decode_skip_is_logged(caplog):
    SPLIT_CODEC.decode_many([{"id": "sp1", "userId": "u1"}])
    assert "Skipping split document sp1: missing name" in caplog.text


@pytest.mark.parametrize("field", ["id", "splitId", "name", "dayOfWeek"])
def test_split_day_required_fields(field):
    doc = SPLIT_DAY_CODEC.encode(ENTITIES[2])
    del doc[field]
    assert SPLIT_DAY_CODEC.decode_one(doc) is None


def test_missing_flags_default_to_false():
    doc = SPLIT_DAY_CODEC.encode(ENTITIES[3])
    del doc["isRestDay"]
    assert SPLIT_DAY_CODEC.decode_one(doc).is_rest_day is False


def test_missing_created_at_falls_back_to_now():
    doc = SPLIT_CODEC.encode(ENTITIES[1])
    del doc["createdAt"]
    before = datetime.now(timezone.utc).replace(microsecond=0)
    split = SPLIT_CODEC.decode_one(doc)
    after = datetime.now(timezone.utc)
    assert split is not None
    assert before <= split.created_at <= after


def test_session_without_date_decodes_as_today():
    doc = _session_doc(0)
    del doc["date"]
    session = SESSION_CODEC.decode_one(doc)
    assert session.date == datetime.now(timezone.utc).date()


def test_user_name_and_email_are_lenient():
    user = USER_CODEC.decode_one({"id": "u1", "createdAt": encode_timestamp(CREATED)})
    assert user.email == ""
    assert user.user_name == ""


def test_integral_numbers_are_accepted_for_weight():
    doc = SET_CODEC.encode(ENTITIES[8])
    doc["weight"] = 185
    assert SET_CODEC.decode_one(doc).weight == 185.0


def test_unknown_entity_type_has_no_codec():
    with pytest.raises(TypeError):
        codec_for(dict)


def test_out_of_range_timestamp_is_reported():
    result = SESSION_CODEC.decode({**_session_doc(0), "createdAt": 10**18})
    assert not result.ok
    assert result.error.reason == "createdAt is out of range"


@pytest.mark.parametrize("field", ["reps", "setNumber"])
def test_fractional_integers_are_rejected(field):
    doc = SET_CODEC.encode(ENTITIES[8])
    doc[field] = 8.9
    result = SET_CODEC.decode(doc)
    assert not result.ok
    assert result.error.reason == f"{field} is not an integer"


def test_integral_floats_are_accepted_for_integers():
    doc = SET_CODEC.encode(ENTITIES[8])
    doc["reps"] = 8.0
    assert SET_CODEC.decode_one(doc).reps == 8
