"""Google OAuth configuration using Authlib."""

from authlib.integrations.starlette_client import OAuth

from googlelogin.config import get_settings
from googlelogin.constants import GOOGLE_API_BASE_URL, GOOGLE_AUTHORIZE_URL, GOOGLE_TOKEN_URL

settings = get_settings()

oauth = OAuth()

# Endpoints are given explicitly so no discovery request is made at login time
oauth.register(
    name="google",
    client_id=settings.google_client_id,
    client_secret=settings.google_client_secret,
    authorize_url=GOOGLE_AUTHORIZE_URL,
    access_token_url=GOOGLE_TOKEN_URL,
    api_base_url=GOOGLE_API_BASE_URL,
    client_kwargs={"scope": " ".join(settings.google_scopes)},
)
