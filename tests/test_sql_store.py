import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from liftium.core.errors import NotFound, StoreFailure
from liftium.core.routine_templates import default_catalog
from liftium.db.base import Base
from liftium.models import StoredDocument  # noqa: F401 - registers the table
from liftium.repositories.splits import SplitRepository
from liftium.repositories.workouts import WorkoutRepository
from liftium.schemas.split import ExerciseCreate, SplitDayCreate
from liftium.schemas.workout import WorkoutSetCreate
from liftium.services.progress import compute_progress_stats
from liftium.services.template_instantiation import TemplateInstantiator
from liftium.store.sql import SqlDocumentStore


@pytest.fixture
async def sql_store(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'documents.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield SqlDocumentStore(async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False))
    await engine.dispose()


async def test_set_get_and_replace(sql_store):
    await sql_store.set("splits", "a", {"id": "a", "name": "PPL"})
    assert await sql_store.get("splits", "a") == {"id": "a", "name": "PPL"}

    await sql_store.set("splits", "a", {"id": "a", "name": "Upper/Lower"})
    assert await sql_store.get("splits", "a") == {"id": "a", "name": "Upper/Lower"}
    assert await sql_store.get("splits", "missing") is None
    assert await sql_store.get("sessions", "a") is None


async def test_query_by_string_field(sql_store):
    await sql_store.set("splits", "a", {"id": "a", "userId": "u1"})
    await sql_store.set("splits", "b", {"id": "b", "userId": "u2"})
    await sql_store.set("split_days", "c", {"id": "c", "userId": "u1"})

    found = await sql_store.query("splits", "userId", "u1")

    assert [d["id"] for d in found] == ["a"]


async def test_query_by_integer_and_boolean_fields(sql_store):
    await sql_store.set("split_days", "mon", {"id": "mon", "dayOfWeek": 1, "isRestDay": False})
    await sql_store.set("split_days", "thu", {"id": "thu", "dayOfWeek": 4, "isRestDay": True})

    assert [d["id"] for d in await sql_store.query("split_days", "dayOfWeek", 4)] == ["thu"]
    assert [d["id"] for d in await sql_store.query("split_days", "isRestDay", False)] == ["mon"]


async def test_update_merges_fields(sql_store):
    await sql_store.set("sessions", "s1", {"id": "s1", "isCompleted": False, "completedAt": None})

    await sql_store.update("sessions", "s1", {"isCompleted": True, "completedAt": 1744450000})

    assert await sql_store.get("sessions", "s1") == {"id": "s1", "isCompleted": True, "completedAt": 1744450000}


async def test_update_missing_document(sql_store):
    with pytest.raises(NotFound):
        await sql_store.update("sessions", "missing", {"isCompleted": True})


async def test_delete_is_idempotent(sql_store):
    await sql_store.set("sets", "x", {"id": "x"})
    await sql_store.delete("sets", "x")
    await sql_store.delete("sets", "x")
    assert await sql_store.get("sets", "x") is None


async def test_ping(sql_store):
    await sql_store.ping()


async def test_missing_table_is_a_store_failure(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'empty.db'}")
    store = SqlDocumentStore(async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False))
    try:
        with pytest.raises(StoreFailure) as excinfo:
            await store.get("splits", "a")
        assert excinfo.value.__cause__ is not None
    finally:
        await engine.dispose()


async def test_instantiate_and_read_back(sql_store, user):
    splits = SplitRepository(sql_store, user)
    result = await TemplateInstantiator(default_catalog(), splits).instantiate(
        "Push/Pull/Legs", "PPL", {1: "Push", 3: "Pull", 6: "Rest"}
    )

    stored = await splits.get_split_with_days(result.split.id)

    assert stored == result
    assert [len(d.exercises) for d in stored.split_days] == [5, 5, 0]
    assert await splits.delete_split(result.split.id) == 14
    assert await splits.get_user_splits() == []


async def test_workout_flow(sql_store, user):
    splits = SplitRepository(sql_store, user)
    workouts = WorkoutRepository(sql_store, user)
    split = await splits.create_split("Mine")
    day = await splits.create_split_day(split.id, SplitDayCreate(day_of_week=1, name="Push"))
    bench = await splits.create_exercise(day.id, ExerciseCreate(name="Bench Press"))
    session = await workouts.create_session(day.id)
    await workouts.save_set(session.id, WorkoutSetCreate(exercise_id=bench.id, set_number=1, reps=5, weight=100))
    await workouts.complete_session(session.id)

    stats = await compute_progress_stats(workouts)

    assert stats.total_workouts == 1
    assert stats.total_volume == 500.0
    assert stats.favorite_exercise == bench.id
    assert [s.reps for s in await workouts.get_previous_sets_for_exercise(bench.id)] == [5]


class _UnreachableDatabase:
    """Session factory whose sessions fail like a refused database connection."""

    def __call__(self):
        return self

    async def __aenter__(self):
        raise ConnectionRefusedError("connection refused")

    async def __aexit__(self, *exc_info):
        return False


async def test_connection_errors_are_store_failures():
    store = SqlDocumentStore(_UnreachableDatabase())

    with pytest.raises(StoreFailure) as excinfo:
        await store.query("sessions", "userId", "u1")
    assert isinstance(excinfo.value.__cause__, ConnectionRefusedError)

    with pytest.raises(StoreFailure):
        await store.ping()
