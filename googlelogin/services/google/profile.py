"""Google profile lookups and token revocation.

Documentation: https://developers.google.com/identity/protocols/oauth2/web-server
"""

import logging
import time

import httpx
from pydantic import ValidationError

from googlelogin.auth.models import GoogleUser
from googlelogin.constants import CACHE_TTL_PROFILE, GOOGLE_REVOKE_URL, GOOGLE_USERINFO_URL
from googlelogin.services.google.errors import ProfileFetchError, TokenExpiredError
from googlelogin.utils.cache import RedisCache, cache, token_cache_key
from googlelogin.utils.http_client import get_google_client
from googlelogin.utils.metrics import metrics
from googlelogin.utils.retry import DEFAULT_RETRY_CONFIG, RetryConfig, retry_async

logger = logging.getLogger(__name__)

PROFILE_CACHE_NAMESPACE = "google:profile"


class GoogleProfileService:
    """Reads the signed-in user's Google profile with their access token."""

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        profile_cache: RedisCache | None = None,
        retry_config: RetryConfig = DEFAULT_RETRY_CONFIG,
    ) -> None:
        self._client = client
        self._cache = profile_cache if profile_cache is not None else cache
        self._retry_config = retry_config

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client or get_google_client()

    async def _request(self, endpoint: str, method: str, url: str, **kwargs) -> httpx.Response | None:
        start = time.monotonic()
        try:
            response = await retry_async(
                self.client.request,
                method,
                url,
                config=self._retry_config,
                operation_name=f"google {endpoint}",
                **kwargs,
            )
        except httpx.HTTPError as e:
            metrics.google_api_requests_total.inc(endpoint=endpoint, status="error")
            raise ProfileFetchError(f"Google {endpoint} request failed: {e}") from e
        finally:
            metrics.google_api_duration_seconds.observe(time.monotonic() - start, endpoint=endpoint)

        status = str(response.status_code) if response is not None else "exhausted"
        metrics.google_api_requests_total.inc(endpoint=endpoint, status=status)
        return response

    async def fetch_profile(self, access_token: str) -> GoogleUser:
        """Fetch the profile straight from Google.

        Raises:
            TokenExpiredError: Google answered 401.
            ProfileFetchError: Any other failure, after retries.
        """
        response = await self._request(
            "userinfo",
            "GET",
            GOOGLE_USERINFO_URL,
            headers={
                "Authorization": f"Bearer {access_token}",
                "Accept": "application/json",
            },
        )

        if response is None:
            raise ProfileFetchError("Google userinfo unavailable after retries")
        if response.status_code == 401:
            raise TokenExpiredError("Google rejected the access token")
        if response.status_code != 200:
            raise ProfileFetchError(f"Google userinfo returned {response.status_code}")

        try:
            return GoogleUser.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise ProfileFetchError(f"Unexpected userinfo payload: {e}") from e

    async def get_profile(self, access_token: str) -> GoogleUser:
        """Cached variant of fetch_profile."""
        key = token_cache_key(PROFILE_CACHE_NAMESPACE, access_token)

        cached = await self._cache.get(key)
        if cached is not None:
            logger.debug(f"Cache HIT: {key}")
            return GoogleUser.model_validate(cached)

        logger.debug(f"Cache MISS: {key}")
        profile = await self.fetch_profile(access_token)
        await self._cache.set(key, profile.model_dump(), CACHE_TTL_PROFILE)
        return profile

    async def forget_profile(self, access_token: str) -> None:
        await self._cache.delete(token_cache_key(PROFILE_CACHE_NAMESPACE, access_token))

    async def revoke_token(self, token: str) -> bool:
        """Revoke an access or refresh token. Never raises."""
        try:
            response = await self._request(
                "revoke",
                "POST",
                GOOGLE_REVOKE_URL,
                data={"token": token},
                headers={"Content-Type": "application/x-www-form-urlencoded"},
            )
        except ProfileFetchError as e:
            logger.warning(f"Token revocation failed: {e}")
            return False

        if response is None or response.status_code != 200:
            status = response.status_code if response is not None else "no response"
            logger.warning(f"Token revocation rejected by Google: {status}")
            return False
        return True


google_profile_service = GoogleProfileService()


def get_profile_service() -> GoogleProfileService:
    """FastAPI dependency returning the shared profile service."""
    return google_profile_service
