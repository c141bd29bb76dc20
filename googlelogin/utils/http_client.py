"""Shared persistent httpx client for Google API calls.

Reusing one client keeps connections to googleapis.com pooled instead of
paying a TLS handshake on every profile lookup.
"""

import httpx

from googlelogin.constants import API_TIMEOUT_EXTERNAL

_POOL_LIMITS = httpx.Limits(
    max_connections=20,
    max_keepalive_connections=10,
    keepalive_expiry=30,
)

_google_client: httpx.AsyncClient | None = None


def get_google_client() -> httpx.AsyncClient:
    """Get persistent httpx client for Google API calls."""
    global _google_client
    if _google_client is None:
        _google_client = httpx.AsyncClient(
            timeout=API_TIMEOUT_EXTERNAL,
            limits=_POOL_LIMITS,
            http2=False,
        )
    return _google_client


async def close_all_clients() -> None:
    """Close all persistent httpx clients. Call during app shutdown."""
    global _google_client
    if _google_client is not None:
        await _google_client.aclose()
        _google_client = None
