"""Template context helpers."""

from typing import Any

from fastapi import Request

from googlelogin.auth.session import is_logged_in
from googlelogin.config import get_settings
from googlelogin.constants import USER_INFO_POLL_SECONDS
from googlelogin.web.components import auth_button

settings = get_settings()


def get_base_context(request: Request) -> dict[str, Any]:
    """Get base context for all templates."""
    logged_in = is_logged_in(request)
    return {
        "request": request,
        "app_name": settings.app_name,
        "logged_in": logged_in,
        "auth_button": auth_button(
            logged_in,
            login_url=str(request.app.url_path_for("google_login")),
            logout_url=str(request.app.url_path_for("logout")),
        ),
        "poll_seconds": USER_INFO_POLL_SECONDS,
    }
