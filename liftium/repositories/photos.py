"""Progress photo metadata (image bytes live in external storage)."""

from __future__ import annotations

import logging
from datetime import date

from liftium.core.constants import PROGRESS_PHOTOS_COLLECTION
from liftium.core.errors import NotFound
from liftium.repositories.base import Repository, new_id
from liftium.schemas.photo import ProgressPhoto, ProgressPhotoCreate
from liftium.services.codec import PHOTO_CODEC, utc_now

logger = logging.getLogger(__name__)


class ProgressPhotoRepository(Repository):
    async def create_photo(self, payload: ProgressPhotoCreate, today: date | None = None) -> ProgressPhoto:
        now = utc_now()
        photo = ProgressPhoto(
            id=new_id(),
            user_id=self.user_id,
            image_path=payload.image_path,
            weight=payload.weight,
            notes=payload.notes,
            date=today or now.date(),
            created_at=now,
        )
        await self.store.set(PROGRESS_PHOTOS_COLLECTION, photo.id, PHOTO_CODEC.encode(photo))
        logger.debug("Progress photo saved: %s", photo.id)
        return photo

    async def list_photos(self) -> list[ProgressPhoto]:
        """Current user's photos, newest date first."""
        documents = await self.store.query(PROGRESS_PHOTOS_COLLECTION, "userId", self.user_id)
        photos = PHOTO_CODEC.decode_many(documents)
        return sorted(photos, key=lambda p: (p.date, p.created_at), reverse=True)

    async def delete_photo(self, photo_id: str) -> None:
        user_id = self.user_id
        document = await self.store.get(PROGRESS_PHOTOS_COLLECTION, photo_id)
        photo = PHOTO_CODEC.decode_one(document) if document is not None else None
        if photo is None or photo.user_id != user_id:
            raise NotFound("Photo not found")
        await self.store.delete(PROGRESS_PHOTOS_COLLECTION, photo_id)
        logger.debug("Progress photo deleted: %s", photo_id)
