"""Application constants - centralized configuration values."""

# =============================================================================
# Google OAuth
# =============================================================================
GOOGLE_AUTHORIZE_URL = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
GOOGLE_API_BASE_URL = "https://www.googleapis.com/oauth2/v2/"
GOOGLE_USERINFO_URL = "https://www.googleapis.com/oauth2/v2/userinfo"
GOOGLE_REVOKE_URL = "https://oauth2.googleapis.com/revoke"

DEFAULT_GOOGLE_SCOPES = (
    "https://www.googleapis.com/auth/userinfo.email",
    "https://www.googleapis.com/auth/userinfo.profile",
)

# =============================================================================
# UI placeholders
# =============================================================================
NOT_LOGGED_IN_TEXT = "not logged in"
FETCHING_PROFILE_TEXT = "getting user details"
LOGIN_BUTTON_TEXT = "Login via Google"
LOGOUT_BUTTON_TEXT = "Logout"
USER_INFO_POLL_SECONDS = 3

# =============================================================================
# Session
# =============================================================================
SESSION_COOKIE_NAME = "googlelogin_session"
SESSION_TIMEOUT_DAYS = 7
SESSION_TOKEN_KEY = "google_token"
SESSION_USER_KEY = "user_id"
# Treat tokens this close to expiry as already expired
TOKEN_EXPIRY_LEEWAY_SECONDS = 30

# =============================================================================
# Cache TTLs (in seconds)
# =============================================================================
CACHE_TTL_PROFILE = 15 * 60

# =============================================================================
# API Timeouts (in seconds)
# =============================================================================
API_TIMEOUT_EXTERNAL = 15.0
