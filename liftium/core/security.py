"""Identity of the calling user.

Authentication itself happens upstream (gateway / identity provider); the API
trusts the user id and email it forwards in request headers.
"""

from dataclasses import dataclass

from fastapi import Depends, Header

from liftium.core.errors import Unauthenticated


@dataclass(frozen=True)
class CurrentUser:
    user_id: str
    email: str = ""


def get_current_user(
    x_user_id: str | None = Header(default=None),
    x_user_email: str | None = Header(default=None),
) -> CurrentUser | None:
    """Current user from forwarded identity headers, or None when unauthenticated."""
    if not x_user_id or not x_user_id.strip():
        return None
    return CurrentUser(user_id=x_user_id.strip(), email=(x_user_email or "").strip())


def require_user(current_user: CurrentUser | None = Depends(get_current_user)) -> CurrentUser:
    if current_user is None:
        raise Unauthenticated()
    return current_user
