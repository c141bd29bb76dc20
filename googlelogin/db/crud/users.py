"""User CRUD operations."""

from datetime import UTC, datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from googlelogin.auth.models import GoogleUser
from googlelogin.models.user import User


async def get_user_by_google_id(db: AsyncSession, google_id: str) -> User | None:
    result = await db.execute(select(User).where(User.google_id == google_id))
    return result.scalar_one_or_none()


async def _get_user_by_email(db: AsyncSession, email: str | None) -> User | None:
    if not email:
        return None
    result = await db.execute(select(User).where(User.email == email))
    return result.scalars().first()


async def upsert_google_user(db: AsyncSession, profile: GoogleUser) -> User:
    """Create or refresh the user row for a Google profile and record the login.

    A returning Google id updates the existing row. An unknown id whose
    email matches an existing row is linked to that row.
    """
    user = await get_user_by_google_id(db, profile.id)

    if not user:
        user = await _get_user_by_email(db, profile.email)
        if user:
            user.google_id = profile.id

    if not user:
        user = User(
            google_id=profile.id,
            email=profile.email,
            display_name=profile.display_name,
            avatar_url=profile.picture,
            login_count=0,
        )
        db.add(user)
    else:
        user.display_name = profile.display_name
        if profile.picture:
            user.avatar_url = profile.picture
        if profile.email and not user.email:
            user.email = profile.email

    user.login_count = (user.login_count or 0) + 1
    user.last_login_at = datetime.now(UTC)
    await db.flush()
    return user
