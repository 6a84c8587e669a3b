"""Progress photo metadata endpoints."""

from fastapi import APIRouter, Depends

from liftium.api.deps import get_photo_repository
from liftium.core.security import require_user
from liftium.repositories.photos import ProgressPhotoRepository
from liftium.schemas.photo import ProgressPhoto, ProgressPhotoCreate

router = APIRouter(dependencies=[Depends(require_user)])


@router.get("", response_model=list[ProgressPhoto])
async def list_photos(photos: ProgressPhotoRepository = Depends(get_photo_repository)):
    """Newest first."""
    return await photos.list_photos()


@router.post("", response_model=ProgressPhoto, status_code=201)
async def create_photo(
    payload: ProgressPhotoCreate,
    photos: ProgressPhotoRepository = Depends(get_photo_repository),
):
    """Record a photo already uploaded to image storage (image_path is its URL)."""
    return await photos.create_photo(payload)


@router.delete("/{photo_id}", status_code=204)
async def delete_photo(
    photo_id: str,
    photos: ProgressPhotoRepository = Depends(get_photo_repository),
):
    await photos.delete_photo(photo_id)
    return None
