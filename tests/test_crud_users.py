"""Tests for user CRUD operations."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from googlelogin.auth.models import GoogleUser
from googlelogin.db.crud import get_user_by_google_id, upsert_google_user
from googlelogin.models.user import User


class TestUpsertGoogleUser:

    @pytest.mark.asyncio
    async def test_creates_user(self, db_session: AsyncSession, google_profile: GoogleUser):
        user = await upsert_google_user(db_session, google_profile)
        await db_session.commit()

        assert user.id is not None
        assert user.google_id == "109876543210"
        assert user.avatar_url == "https://lh3.googleusercontent.com/a/ada"
        assert user.login_count == 1

        found = await get_user_by_google_id(db_session, "109876543210")
        assert found is not None
        assert found.id == user.id

    @pytest.mark.asyncio
    async def test_updates_returning_user(self, db_session: AsyncSession, google_profile: GoogleUser):
        first = await upsert_google_user(db_session, google_profile)
        renamed = google_profile.model_copy(update={"name": "Augusta Ada King", "picture": None})
        second = await upsert_google_user(db_session, renamed)

        assert second.id == first.id
        assert second.display_name == "Augusta Ada King"
        # A missing picture does not wipe the stored one
        assert second.avatar_url == "https://lh3.googleusercontent.com/a/ada"
        assert second.login_count == 2

    @pytest.mark.asyncio
    async def test_links_by_email(
        self, db_session: AsyncSession, existing_user: User, google_profile: GoogleUser
    ):
        user = await upsert_google_user(db_session, google_profile)

        assert user.id == existing_user.id
        assert user.google_id == "109876543210"
        assert user.login_count == 4

    @pytest.mark.asyncio
    async def test_profile_without_email(self, db_session: AsyncSession):
        user = await upsert_google_user(db_session, GoogleUser(id="42", given_name="Grace"))
        assert user.email is None
        assert user.display_name == "Grace"

    @pytest.mark.asyncio
    async def test_unknown_google_id(self, db_session: AsyncSession):
        assert await get_user_by_google_id(db_session, "missing") is None
