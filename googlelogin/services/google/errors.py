"""Errors raised when talking to Google's APIs."""


class GoogleAPIError(Exception):
    """Base error for Google API calls."""


class TokenExpiredError(GoogleAPIError):
    """Google rejected the access token (expired or revoked)."""


class ProfileFetchError(GoogleAPIError):
    """The user profile could not be fetched."""
