"""UI building blocks: the login/logout button and the user-info read-out."""

from dataclasses import dataclass
from typing import TypeVar

from googlelogin.constants import (
    FETCHING_PROFILE_TEXT,
    LOGIN_BUTTON_TEXT,
    LOGOUT_BUTTON_TEXT,
    NOT_LOGGED_IN_TEXT,
)
from googlelogin.services.google import (
    GoogleProfileService,
    ProfileFetchError,
    TokenExpiredError,
)

T = TypeVar("T")


class Pending(Exception):
    """Raised by need() when a value the UI waits on is not there yet."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def need(value: T | None, message: str) -> T:
    """Return value, or raise Pending(message) when it is falsy."""
    if not value:
        raise Pending(message)
    return value


@dataclass(frozen=True)
class AuthButton:
    label: str
    href: str
    logged_in: bool

    @property
    def css_class(self) -> str:
        return "btn btn-logout" if self.logged_in else "btn btn-login"


def auth_button(logged_in: bool, login_url: str, logout_url: str) -> AuthButton:
    """Logout button for a logged-in session, login button otherwise."""
    if logged_in:
        return AuthButton(label=LOGOUT_BUTTON_TEXT, href=logout_url, logged_in=True)
    return AuthButton(label=LOGIN_BUTTON_TEXT, href=login_url, logged_in=False)


@dataclass(frozen=True)
class UserInfo:
    """What the read-out shows.

    pending is true only while a logged-in user's profile has not
    resolved, which is when the page should keep polling.
    """

    text: str
    pending: bool = False
    resolved: bool = False
    token_rejected: bool = False


async def resolve_user_info(
    access_token: str | None,
    profile_service: GoogleProfileService,
) -> UserInfo:
    """Display name of the signed-in user, or the placeholder to show instead."""
    try:
        token = need(access_token, NOT_LOGGED_IN_TEXT)

        profile = None
        try:
            profile = await profile_service.get_profile(token)
        except TokenExpiredError:
            return UserInfo(text=NOT_LOGGED_IN_TEXT, token_rejected=True)
        except ProfileFetchError:
            pass

        profile = need(profile, FETCHING_PROFILE_TEXT)
        return UserInfo(text=profile.display_name, resolved=True)
    except Pending as p:
        return UserInfo(text=p.message, pending=p.message == FETCHING_PROFILE_TEXT)
