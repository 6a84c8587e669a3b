"""FastAPI dependencies: document store, template catalog and user-scoped repositories."""

from fastapi import Depends, Request

from liftium.core.config import get_settings
from liftium.core.routine_templates import TemplateCatalog
from liftium.core.security import CurrentUser, get_current_user
from liftium.repositories.photos import ProgressPhotoRepository
from liftium.repositories.splits import SplitRepository
from liftium.repositories.users import UserRepository
from liftium.repositories.workouts import WorkoutRepository
from liftium.services.template_instantiation import TemplateInstantiator
from liftium.store.base import DocumentStore


def get_store(request: Request) -> DocumentStore:
    return request.app.state.store


def get_catalog(request: Request) -> TemplateCatalog:
    return request.app.state.template_catalog


def get_user_repository(
    store: DocumentStore = Depends(get_store),
    current_user: CurrentUser | None = Depends(get_current_user),
) -> UserRepository:
    return UserRepository(store, current_user)


def get_split_repository(
    store: DocumentStore = Depends(get_store),
    current_user: CurrentUser | None = Depends(get_current_user),
) -> SplitRepository:
    return SplitRepository(store, current_user)


def get_workout_repository(
    store: DocumentStore = Depends(get_store),
    current_user: CurrentUser | None = Depends(get_current_user),
) -> WorkoutRepository:
    return WorkoutRepository(store, current_user)


def get_photo_repository(
    store: DocumentStore = Depends(get_store),
    current_user: CurrentUser | None = Depends(get_current_user),
) -> ProgressPhotoRepository:
    return ProgressPhotoRepository(store, current_user)


def get_instantiator(
    catalog: TemplateCatalog = Depends(get_catalog),
    splits: SplitRepository = Depends(get_split_repository),
) -> TemplateInstantiator:
    return TemplateInstantiator(catalog, splits)


def get_progress_session_limit() -> int:
    return get_settings().progress_session_limit
