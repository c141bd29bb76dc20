"""Authentication module."""

from googlelogin.auth.dependencies import (
    get_current_user,
    get_optional_access_token,
    get_optional_user,
    require_access_token,
)
from googlelogin.auth.oauth import oauth

__all__ = [
    "get_current_user",
    "get_optional_access_token",
    "get_optional_user",
    "oauth",
    "require_access_token",
]
