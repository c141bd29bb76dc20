"""Authentication API endpoints."""

import logging
from typing import Annotated

from authlib.integrations.starlette_client import OAuthError
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from googlelogin.auth import get_current_user, oauth
from googlelogin.auth.models import AuthStatus
from googlelogin.auth.session import (
    clear_auth,
    clear_user,
    drop_token,
    get_session_token,
    is_logged_in,
    set_user,
    store_token,
)
from googlelogin.config import get_settings
from googlelogin.db import get_db
from googlelogin.db.crud import upsert_google_user
from googlelogin.models.user import User
from googlelogin.services.google import (
    GoogleProfileService,
    ProfileFetchError,
    TokenExpiredError,
    get_profile_service,
)
from googlelogin.utils.logging import LogContext
from googlelogin.utils.metrics import metrics

router = APIRouter()
settings = get_settings()
logger = logging.getLogger(__name__)


def _home_redirect(error: str | None = None) -> RedirectResponse:
    url = f"/?error={error}" if error else "/"
    return RedirectResponse(url=url, status_code=302)


# ============== Google OAuth ==============

@router.get("/google/login", name="google_login")
async def google_login(request: Request) -> RedirectResponse:
    """Initiate Google OAuth login."""
    if not settings.google_configured:
        raise HTTPException(status_code=501, detail="Google OAuth not configured")

    # A new login replaces whatever account the browser was signed in with
    drop_token(request)
    clear_user(request)

    return await oauth.google.authorize_redirect(
        request,
        settings.google_redirect_uri,
        access_type="offline",
        prompt="select_account",
    )


@router.get("/google/callback", name="google_callback")
async def google_callback(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
    profile_service: Annotated[GoogleProfileService, Depends(get_profile_service)],
) -> RedirectResponse:
    """Handle Google OAuth callback."""
    try:
        token = await oauth.google.authorize_access_token(request)
    except OAuthError as e:
        logger.warning(f"Google OAuth callback rejected: {e.error} {e.description or ''}".strip())
        metrics.oauth_logins_total.inc(result="oauth_error")
        clear_auth(request)
        return _home_redirect("oauth")

    session_token = store_token(request, token)

    try:
        profile = await profile_service.get_profile(session_token.access_token)
    except TokenExpiredError:
        logger.warning("Fresh Google token rejected by userinfo endpoint")
        metrics.oauth_logins_total.inc(result="token_rejected")
        clear_auth(request)
        return _home_redirect("token")
    except ProfileFetchError as e:
        # Token is kept, the user-info read-out keeps retrying.
        # Any earlier user_id belongs to a different token.
        logger.warning(f"Profile lookup failed after login: {e}")
        clear_user(request)
        metrics.oauth_logins_total.inc(result="profile_pending")
        return _home_redirect()

    user = await upsert_google_user(db, profile)
    await db.commit()
    set_user(request, user.id)

    LogContext(logger, user=user.id).info(f"Google login ({user.login_count} total)")
    metrics.oauth_logins_total.inc(result="success")
    return _home_redirect()


# ============== Common ==============

@router.get("/logout", name="logout")
async def logout(
    request: Request,
    profile_service: Annotated[GoogleProfileService, Depends(get_profile_service)],
) -> RedirectResponse:
    """Log out, revoke the Google token and send the browser on."""
    # An expired access token still carries a live refresh token
    token = get_session_token(request, allow_expired=True)
    revoked = False
    if token:
        await profile_service.forget_profile(token.access_token)
        # Revoking the refresh token also invalidates its access tokens
        revoked = await profile_service.revoke_token(token.refresh_token or token.access_token)

    clear_auth(request)
    metrics.oauth_logouts_total.inc(revoked=str(revoked).lower())
    return RedirectResponse(url=settings.resolved_logout_url, status_code=302)


@router.get("/status")
async def auth_status(request: Request) -> AuthStatus:
    """Logged-in flag plus the URLs the login/logout button uses."""
    return AuthStatus(
        logged_in=is_logged_in(request),
        login_url=str(request.app.url_path_for("google_login")),
        logout_url=str(request.app.url_path_for("logout")),
    )


@router.get("/me")
async def get_me(user: Annotated[User, Depends(get_current_user)]) -> dict:
    """Get current authenticated user."""
    return {
        "id": user.id,
        "google_id": user.google_id,
        "email": user.email,
        "display_name": user.display_name,
        "avatar_url": user.avatar_url,
        "login_count": user.login_count,
        "last_login_at": user.last_login_at.isoformat() if user.last_login_at else None,
    }
