import os

# Must be set before liftium modules read settings
os.environ.setdefault("STORE_BACKEND", "memory")
os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite+aiosqlite://")

import pytest
from fastapi.testclient import TestClient

from liftium.core.security import CurrentUser
from liftium.main import create_application
from liftium.repositories.photos import ProgressPhotoRepository
from liftium.repositories.splits import SplitRepository
from liftium.repositories.users import UserRepository
from liftium.repositories.workouts import WorkoutRepository
from liftium.store.memory import InMemoryDocumentStore

USER_ID = "user-1"
OTHER_USER_ID = "user-2"


@pytest.fixture
def store():
    return InMemoryDocumentStore()


@pytest.fixture
def user():
    return CurrentUser(user_id=USER_ID, email="lifter@example.com")


@pytest.fixture
def other_user():
    return CurrentUser(user_id=OTHER_USER_ID, email="other@example.com")


@pytest.fixture
def splits(store, user):
    return SplitRepository(store, user)


@pytest.fixture
def workouts(store, user):
    return WorkoutRepository(store, user)


@pytest.fixture
def photos(store, user):
    return ProgressPhotoRepository(store, user)


@pytest.fixture
def users(store, user):
    return UserRepository(store, user)


@pytest.fixture
def client(store):
    return TestClient(create_application(store=store))


@pytest.fixture
def auth_headers():
    return {"X-User-Id": USER_ID, "X-User-Email": "lifter@example.com"}
