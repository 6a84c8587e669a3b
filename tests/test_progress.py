from datetime import date, timedelta

import pytest

from liftium.core.errors import StoreFailure, Unauthenticated
from liftium.repositories.splits import SplitRepository
from liftium.repositories.workouts import WorkoutRepository
from liftium.schemas.split import Exercise
from liftium.schemas.workout import Session, WorkoutSet
from liftium.services.progress import (
    accumulate_volume,
    build_exercise_progress,
    build_progress_stats,
    compute_progress_stats,
    current_streak,
    favorite_exercise,
    get_exercise_progress,
)
from tests.conftest import USER_ID
from tests.factories import RecordingStore, at, seed_day, seed_exercise, seed_session, seed_set, seed_split

TODAY = date(2025, 4, 12)


def _session(session_id: str, d: date) -> Session:
    return Session(id=session_id, user_id=USER_ID, split_day_id="day-1", date=d, created_at=at(d))


def _set(set_id, session_id, exercise_id, reps, weight) -> WorkoutSet:
    return WorkoutSet(id=set_id, session_id=session_id, exercise_id=exercise_id, set_number=1, reps=reps, weight=weight)


BENCH = Exercise(
    id="bench", split_day_id="day-1", name="Bench Press", default_sets=4,
    rest_time_sec=180, exercise_order=1, muscle_groups="Chest",
)


class TestCurrentStreak:
    def test_three_consecutive_days_ending_today(self):
        dates = [TODAY, TODAY - timedelta(days=1), TODAY - timedelta(days=2)]
        assert current_streak(dates, TODAY) == 3

    def test_gap_ends_the_streak(self):
        dates = [TODAY, TODAY - timedelta(days=2)]
        assert current_streak(dates, TODAY) == 1

    def test_streak_may_end_yesterday(self):
        dates = [TODAY - timedelta(days=1), TODAY - timedelta(days=2)]
        assert current_streak(dates, TODAY) == 2

    def test_old_sessions_only(self):
        assert current_streak([TODAY - timedelta(days=3)], TODAY) == 0

    def test_no_sessions(self):
        assert current_streak([], TODAY) == 0

    def test_input_order_does_not_matter(self):
        dates = [TODAY - timedelta(days=2), TODAY, TODAY - timedelta(days=1)]
        assert current_streak(dates, TODAY) == 3

    def test_yesterday_slack_only_applies_to_the_newest_session(self):
        dates = [TODAY, TODAY - timedelta(days=2), TODAY - timedelta(days=3)]
        assert current_streak(dates, TODAY) == 1
        assert current_streak([TODAY - timedelta(days=1), TODAY - timedelta(days=3)], TODAY) == 1

    def test_second_session_on_a_counted_day_ends_the_walk(self):
        dates = [TODAY, TODAY, TODAY - timedelta(days=1)]
        assert current_streak(dates, TODAY) == 1


class TestVolume:
    def test_two_sets_of_one_exercise(self):
        sets = [_set("1", "s1", "bench", 8, 185.0), _set("2", "s1", "bench", 6, 195.0)]
        stats = build_progress_stats([_session("s1", TODAY)], sets, TODAY)
        assert stats.total_volume == 2650.0
        assert stats.favorite_exercise == "bench"

    def test_total_and_per_exercise_volume(self):
        sets = [
            _set("1", "s1", "bench", 10, 100.0),
            _set("2", "s1", "bench", 8, 110.0),
            _set("3", "s1", "squat", 5, 150.0),
        ]
        total, per_exercise = accumulate_volume(sets)
        assert total == 2630.0
        assert per_exercise == {"bench": 1880.0, "squat": 750.0}
        assert favorite_exercise(per_exercise) == "bench"

    def test_bodyweight_sets_add_no_volume(self):
        total, per_exercise = accumulate_volume([_set("1", "s1", "dips", 12, 0.0)])
        assert total == 0.0
        assert per_exercise == {"dips": 0.0}

    def test_tie_goes_to_the_first_exercise_seen(self):
        assert favorite_exercise({"row": 500.0, "press": 500.0}) == "row"

    def test_no_sets_means_no_favorite(self):
        assert favorite_exercise({}) is None


def test_build_progress_stats():
    sessions = [_session("s1", TODAY), _session("s2", TODAY - timedelta(days=1))]
    sets = [
        _set("1", "s1", "bench", 10, 100.0),
        _set("2", "s1", "bench", 8, 110.0),
        _set("3", "s2", "squat", 5, 150.0),
        _set("4", "s2", "bench", 2, 10.0),
    ]

    stats = build_progress_stats(sessions, sets, TODAY)

    assert stats.total_workouts == 2
    assert stats.current_streak == 2
    assert stats.longest_streak == stats.current_streak
    assert stats.total_volume == 2650.0
    assert stats.favorite_exercise == "bench"
    assert stats.average_workout_duration == 60


def test_build_progress_stats_without_sessions():
    stats = build_progress_stats([], [], TODAY)
    assert stats.total_workouts == 0
    assert stats.current_streak == 0
    assert stats.total_volume == 0.0
    assert stats.favorite_exercise is None


class TestExerciseProgress:
    def test_none_without_sets(self):
        assert build_exercise_progress(BENCH, [], []) is None

    def test_single_set(self):
        progress = build_exercise_progress(BENCH, [_set("1", "s1", "bench", 8, 100.0)], [_session("s1", TODAY)])
        assert progress.max_weight == 100.0
        assert progress.max_reps == 8
        assert progress.total_volume == 800.0
        assert progress.last_performed == TODAY
        assert progress.exercise_name == "Bench Press"

    def test_maxima_are_independent(self):
        sets = [_set("1", "s1", "bench", 12, 60.0), _set("2", "s2", "bench", 3, 120.0)]
        sessions = [_session("s1", TODAY - timedelta(days=7)), _session("s2", TODAY - timedelta(days=3))]

        progress = build_exercise_progress(BENCH, sets, sessions)

        assert progress.max_weight == 120.0
        assert progress.max_reps == 12
        assert progress.total_volume == 1080.0
        assert progress.last_performed == TODAY - timedelta(days=3)

    def test_sets_of_other_exercises_are_ignored(self):
        sets = [_set("1", "s1", "squat", 5, 150.0)]
        assert build_exercise_progress(BENCH, sets, [_session("s1", TODAY)]) is None


async def test_compute_progress_stats_from_store(store, workouts):
    await seed_session(store, "s1", USER_ID, TODAY)
    await seed_session(store, "s2", USER_ID, TODAY - timedelta(days=1))
    await seed_session(store, "s3", USER_ID, TODAY - timedelta(days=5))
    await seed_session(store, "theirs", "someone-else", TODAY)
    await seed_set(store, "x1", "s1", "bench", 10, 100.0)
    await seed_set(store, "x2", "s2", "squat", 5, 150.0, set_number=1)
    await seed_set(store, "x3", "s3", "squat", 5, 150.0, set_number=1)
    await seed_set(store, "x4", "theirs", "curl", 100, 100.0)

    stats = await compute_progress_stats(workouts, today=TODAY)

    assert stats.total_workouts == 3
    assert stats.current_streak == 2
    assert stats.total_volume == 2500.0
    assert stats.favorite_exercise == "squat"


async def test_compute_progress_stats_caps_sessions(store, workouts):
    for i in range(5):
        await seed_session(store, f"s{i}", USER_ID, TODAY - timedelta(days=i))

    stats = await compute_progress_stats(workouts, session_limit=3, today=TODAY)

    assert stats.total_workouts == 3
    assert stats.current_streak == 3


async def test_stats_streak_stops_at_a_missed_day(store, workouts):
    await seed_session(store, "s1", USER_ID, TODAY)
    await seed_session(store, "s2", USER_ID, TODAY - timedelta(days=2))

    stats = await compute_progress_stats(workouts, today=TODAY)

    assert stats.current_streak == 1
    assert stats.longest_streak == 1


async def test_anonymous_stats_fail_before_querying():
    store = RecordingStore()
    with pytest.raises(Unauthenticated):
        await compute_progress_stats(WorkoutRepository(store, None), today=TODAY)
    assert store.calls == []


async def test_store_failure_is_not_turned_into_partial_stats(user):
    store = RecordingStore(fail_query_on="sets")
    await seed_session(store, "s1", USER_ID, TODAY)

    with pytest.raises(StoreFailure):
        await compute_progress_stats(WorkoutRepository(store, user), today=TODAY)


async def test_get_exercise_progress_reads_sessions_for_dates(store, user):
    await seed_split(store, "split-1", USER_ID)
    await seed_day(store, "day-1", "split-1", 1)
    await seed_exercise(store, "bench", "day-1", 1, name="Bench Press")
    await seed_session(store, "s1", USER_ID, TODAY - timedelta(days=2))
    await seed_session(store, "s2", USER_ID, TODAY)
    await seed_set(store, "x1", "s1", "bench", 5, 100.0, set_number=1)
    await seed_set(store, "x2", "s2", "bench", 5, 105.0, set_number=1)

    progress = await get_exercise_progress("bench", SplitRepository(store, user), WorkoutRepository(store, user))

    assert progress.exercise_name == "Bench Press"
    assert progress.max_weight == 105.0
    assert progress.total_volume == 1025.0
    assert progress.last_performed == TODAY


async def test_get_exercise_progress_unknown_exercise(splits, workouts):
    assert await get_exercise_progress("missing", splits, workouts) is None
