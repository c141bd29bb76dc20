"""Web routes for Jinja2 templates."""

import logging
from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from googlelogin.auth import get_optional_access_token
from googlelogin.auth.session import drop_token
from googlelogin.constants import FETCHING_PROFILE_TEXT, NOT_LOGGED_IN_TEXT
from googlelogin.services.google import GoogleProfileService, get_profile_service
from googlelogin.web.components import resolve_user_info
from googlelogin.web.context import get_base_context

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

web_router = APIRouter()
templates = Jinja2Templates(directory=TEMPLATES_DIR)

ERROR_MESSAGES = {
    "oauth": "Google sign-in was cancelled or failed, please try again.",
    "token": "Google did not accept the new session, please try again.",
}


@web_router.get("/", response_class=HTMLResponse)
async def home(
    request: Request,
    access_token: Annotated[str | None, Depends(get_optional_access_token)],
    error: str | None = None,
) -> HTMLResponse:
    """Render the home page.

    The read-out starts on its placeholder and is filled in by
    /partials/user-info once the page has loaded.
    """
    context = get_base_context(request)
    context["user_info_text"] = FETCHING_PROFILE_TEXT if access_token else NOT_LOGGED_IN_TEXT
    context["user_info_pending"] = access_token is not None
    context["error_message"] = ERROR_MESSAGES.get(error) if error else None
    return templates.TemplateResponse(request, "pages/home.html", context)


@web_router.get("/partials/user-info", response_class=HTMLResponse)
async def user_info_partial(
    request: Request,
    access_token: Annotated[str | None, Depends(get_optional_access_token)],
    profile_service: Annotated[GoogleProfileService, Depends(get_profile_service)],
) -> HTMLResponse:
    """User-info read-out fragment, swapped in by htmx."""
    info = await resolve_user_info(access_token, profile_service)
    if info.token_rejected:
        logger.info("Session token rejected by Google, dropping it")
        drop_token(request)

    context = get_base_context(request)
    context["info"] = info
    return templates.TemplateResponse(request, "partials/user_info.html", context)


@web_router.get("/partials/auth-button", response_class=HTMLResponse)
async def auth_button_partial(request: Request) -> HTMLResponse:
    """Login/logout button fragment."""
    return templates.TemplateResponse(
        request, "partials/auth_button.html", get_base_context(request)
    )
