"""Reading and writing the OAuth token kept in the session cookie."""

from typing import Any

from fastapi import Request
from pydantic import ValidationError

from googlelogin.auth.models import SessionToken
from googlelogin.constants import SESSION_TOKEN_KEY, SESSION_USER_KEY


def store_token(request: Request, token: dict[str, Any]) -> SessionToken:
    """Keep the parts of an Authlib token the app needs."""
    session_token = SessionToken.from_oauth(token)
    request.session[SESSION_TOKEN_KEY] = session_token.model_dump(exclude_none=True)
    return session_token


def get_session_token(request: Request, allow_expired: bool = False) -> SessionToken | None:
    """Return the stored token, or None when missing, malformed or expired.

    With allow_expired the token is returned past its expiry, for callers that
    still need the refresh token.
    """
    raw = request.session.get(SESSION_TOKEN_KEY)
    if not raw:
        return None

    try:
        token = SessionToken.model_validate(raw)
    except ValidationError:
        request.session.pop(SESSION_TOKEN_KEY, None)
        return None

    if token.is_expired() and not allow_expired:
        return None
    return token


def get_access_token(request: Request) -> str | None:
    token = get_session_token(request)
    return token.access_token if token else None


def is_logged_in(request: Request) -> bool:
    return get_access_token(request) is not None


def drop_token(request: Request) -> None:
    request.session.pop(SESSION_TOKEN_KEY, None)


def set_user(request: Request, user_id: int) -> None:
    request.session[SESSION_USER_KEY] = user_id


def clear_user(request: Request) -> None:
    request.session.pop(SESSION_USER_KEY, None)


def clear_auth(request: Request) -> None:
    """Forget everything about the signed-in user."""
    request.session.clear()
