"""Shared plumbing for repositories: store access scoped to the current user."""

from __future__ import annotations

import uuid

from liftium.core.errors import Unauthenticated
from liftium.core.security import CurrentUser
from liftium.store.base import DocumentStore


def new_id() -> str:
    """Writer-generated document id."""
    return str(uuid.uuid4())


class Repository:
    def __init__(self, store: DocumentStore, current_user: CurrentUser | None = None) -> None:
        self.store = store
        self.current_user = current_user

    @property
    def user_id(self) -> str:
        if self.current_user is None:
            raise Unauthenticated()
        return self.current_user.user_id
