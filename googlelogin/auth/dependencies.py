"""Authentication dependencies for FastAPI."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from googlelogin.auth.session import get_access_token
from googlelogin.constants import SESSION_USER_KEY
from googlelogin.db import get_db
from googlelogin.models.user import User


async def get_optional_user(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User | None:
    """Get current user from session if logged in."""
    user_id = request.session.get(SESSION_USER_KEY)
    if not user_id:
        return None

    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()

    # If user_id in session but user doesn't exist in DB, clear stale session
    if not user:
        request.session.clear()

    return user


async def get_current_user(
    user: Annotated[User | None, Depends(get_optional_user)],
) -> User:
    """Get current user, raising 401 if not authenticated."""
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return user


async def get_optional_access_token(request: Request) -> str | None:
    """Google access token from the session, None when absent or expired."""
    return get_access_token(request)


async def require_access_token(
    access_token: Annotated[str | None, Depends(get_optional_access_token)],
) -> str:
    """Google access token, raising 401 if the user is not logged in."""
    if not access_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not logged in with Google",
        )
    return access_token
