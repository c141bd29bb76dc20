"""Google API integration."""

from googlelogin.services.google.errors import (
    GoogleAPIError,
    ProfileFetchError,
    TokenExpiredError,
)
from googlelogin.services.google.profile import (
    GoogleProfileService,
    get_profile_service,
    google_profile_service,
)

__all__ = [
    "GoogleAPIError",
    "GoogleProfileService",
    "ProfileFetchError",
    "TokenExpiredError",
    "get_profile_service",
    "google_profile_service",
]
