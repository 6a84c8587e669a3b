"""User documents (one per authenticated account, keyed by the identity's user id)."""

from __future__ import annotations

import logging

from liftium.core.constants import USERS_COLLECTION
from liftium.repositories.base import Repository
from liftium.schemas.user import User
from liftium.services.codec import USER_CODEC, utc_now

logger = logging.getLogger(__name__)


class UserRepository(Repository):
    async def create_or_update_user(self, user_id: str, email: str, user_name: str) -> User:
        """Upsert: the whole document is replaced, including createdAt."""
        user = User(id=user_id, email=email, user_name=user_name, created_at=utc_now())
        await self.store.set(USERS_COLLECTION, user.id, USER_CODEC.encode(user))
        logger.debug("User created/updated: %s", user.id)
        return user

    async def get_user(self, user_id: str) -> User | None:
        document = await self.store.get(USERS_COLLECTION, user_id)
        if document is None:
            return None
        # Older documents may lack their own id field
        if not document.get("id"):
            document = {**document, "id": user_id}
        return USER_CODEC.decode_one(document)

    async def get_current_user(self) -> User | None:
        if self.current_user is None:
            return None
        return await self.get_user(self.current_user.user_id)
