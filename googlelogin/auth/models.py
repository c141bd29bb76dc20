"""Authentication-related Pydantic models."""

import time
from typing import Any

from pydantic import BaseModel

from googlelogin.constants import TOKEN_EXPIRY_LEEWAY_SECONDS


class GoogleUser(BaseModel):
    """Profile returned by Google's oauth2/v2/userinfo endpoint."""

    id: str
    email: str | None = None
    verified_email: bool | None = None
    name: str | None = None
    given_name: str | None = None
    family_name: str | None = None
    picture: str | None = None
    locale: str | None = None

    @property
    def display_name(self) -> str:
        """Best human-readable name Google gave us."""
        if self.name:
            return self.name
        if self.given_name:
            return self.given_name
        if self.email:
            return self.email.split("@")[0]
        return self.id


class SessionToken(BaseModel):
    """The subset of Authlib's token dict kept in the session cookie."""

    access_token: str
    token_type: str = "Bearer"
    expires_at: int | None = None
    refresh_token: str | None = None
    scope: str | None = None

    @classmethod
    def from_oauth(cls, token: dict[str, Any]) -> "SessionToken":
        expires_at = token.get("expires_at")
        if expires_at is None and token.get("expires_in"):
            expires_at = int(time.time()) + int(token["expires_in"])
        return cls(
            access_token=token["access_token"],
            token_type=token.get("token_type") or "Bearer",
            expires_at=int(expires_at) if expires_at is not None else None,
            refresh_token=token.get("refresh_token"),
            scope=token.get("scope"),
        )

    def is_expired(self, now: float | None = None) -> bool:
        if self.expires_at is None:
            return False
        now = time.time() if now is None else now
        return self.expires_at - TOKEN_EXPIRY_LEEWAY_SECONDS <= now


class AuthStatus(BaseModel):
    """What the UI needs to draw the login/logout button."""

    logged_in: bool
    login_url: str
    logout_url: str
