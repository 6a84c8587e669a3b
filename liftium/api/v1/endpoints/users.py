"""Current user profile endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from liftium.api.deps import get_user_repository
from liftium.core.security import CurrentUser, require_user
from liftium.repositories.users import UserRepository
from liftium.schemas.user import User, UserUpsert

router = APIRouter()


@router.put("/me", response_model=User)
async def upsert_me(
    payload: UserUpsert,
    current_user: CurrentUser = Depends(require_user),
    users: UserRepository = Depends(get_user_repository),
):
    """Create or replace the current user's profile (called after signup / login)."""
    return await users.create_or_update_user(
        current_user.user_id,
        payload.email or current_user.email,
        payload.user_name,
    )


@router.get("/me", response_model=User)
async def get_me(
    current_user: CurrentUser = Depends(require_user),
    users: UserRepository = Depends(get_user_repository),
):
    user = await users.get_current_user()
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user
