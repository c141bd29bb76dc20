"""Tests for the HTML pages and htmx fragments."""

from pathlib import Path

import pytest
from httpx import AsyncClient

import googlelogin
from googlelogin.services.google import ProfileFetchError, TokenExpiredError
from googlelogin.web.router import TEMPLATES_DIR


class TestHomePage:
    """Tests for /."""

    @pytest.mark.asyncio
    async def test_home_logged_out(self, client: AsyncClient):
        """Visitors see the login button and the logged-out placeholder."""
        response = await client.get("/")
        assert response.status_code == 200

        html = response.text
        assert "Login via Google" in html
        assert 'href="/api/auth/google/login"' in html
        assert "not logged in" in html
        assert "hx-get" not in html

    @pytest.mark.asyncio
    async def test_home_logged_in(self, signed_in_client: AsyncClient):
        """Signed-in users get a logout button and a read-out that loads itself."""
        response = await signed_in_client.get("/")
        assert response.status_code == 200

        html = response.text
        assert "Logout" in html
        assert 'href="/api/auth/logout"' in html
        assert "getting user details" in html
        assert 'hx-get="/partials/user-info"' in html

    @pytest.mark.asyncio
    async def test_home_shows_oauth_error(self, client: AsyncClient):
        response = await client.get("/", params={"error": "oauth"})
        assert "cancelled or failed" in response.text

    @pytest.mark.asyncio
    async def test_home_ignores_unknown_error(self, client: AsyncClient):
        response = await client.get("/", params={"error": "<script>"})
        assert response.status_code == 200
        assert "<script>" not in response.text

    @pytest.mark.asyncio
    async def test_stylesheet_served_from_package(self, client: AsyncClient):
        """Templates and static files live inside the installed package."""
        assert TEMPLATES_DIR.parent == Path(googlelogin.__file__).resolve().parent
        response = await client.get("/static/css/app.css")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/css")

    @pytest.mark.asyncio
    async def test_security_headers(self, client: AsyncClient):
        response = await client.get("/")
        assert response.headers["X-Frame-Options"] == "DENY"
        assert "frame-ancestors 'none'" in response.headers["Content-Security-Policy"]


class TestUserInfoPartial:
    """Tests for /partials/user-info."""

    @pytest.mark.asyncio
    async def test_user_info_logged_out(self, client: AsyncClient, profile_service):
        response = await client.get("/partials/user-info")
        assert response.status_code == 200
        assert "not logged in" in response.text
        assert "hx-trigger" not in response.text
        assert profile_service.calls == []

    @pytest.mark.asyncio
    async def test_user_info_resolved(self, signed_in_client: AsyncClient):
        """Once the profile resolves the display name is shown and polling stops."""
        response = await signed_in_client.get("/partials/user-info")
        assert response.status_code == 200
        assert "Ada Lovelace" in response.text
        assert "hx-trigger" not in response.text

    @pytest.mark.asyncio
    async def test_user_info_pending(self, signed_in_client: AsyncClient, profile_service):
        """While Google does not answer the placeholder keeps polling."""
        profile_service.error = ProfileFetchError("timeout")

        response = await signed_in_client.get("/partials/user-info")
        assert "getting user details" in response.text
        assert 'hx-trigger="load delay:3s"' in response.text

    @pytest.mark.asyncio
    async def test_user_info_token_rejected(self, signed_in_client: AsyncClient, profile_service):
        """A rejected token flips the read-out back to logged out."""
        profile_service.error = TokenExpiredError("401")

        response = await signed_in_client.get("/partials/user-info")
        assert "not logged in" in response.text

        status = (await signed_in_client.get("/api/auth/status")).json()
        assert status["logged_in"] is False

    @pytest.mark.asyncio
    async def test_user_info_after_logout(self, signed_in_client: AsyncClient):
        await signed_in_client.get("/api/auth/logout", follow_redirects=False)

        response = await signed_in_client.get("/partials/user-info")
        assert "not logged in" in response.text


class TestAuthButtonPartial:
    """Tests for /partials/auth-button."""

    @pytest.mark.asyncio
    async def test_button_logged_out(self, client: AsyncClient):
        response = await client.get("/partials/auth-button")
        assert "btn-login" in response.text
        assert "Login via Google" in response.text

    @pytest.mark.asyncio
    async def test_button_logged_in(self, signed_in_client: AsyncClient):
        response = await signed_in_client.get("/partials/auth-button")
        assert "btn-logout" in response.text
        assert "Logout" in response.text
