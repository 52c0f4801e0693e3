"""
Shared HTTP clients.

Module-level connection pools so repeated chart refreshes reuse TCP/TLS
connections instead of opening new ones per request.
"""

from typing import Optional

import httpx

from config import config


_async_client: Optional[httpx.AsyncClient] = None
_sync_client: Optional[httpx.Client] = None

_LIMITS = httpx.Limits(max_keepalive_connections=10, max_connections=20, keepalive_expiry=30.0)


def get_async_client() -> httpx.AsyncClient:
    """Get or create the shared async HTTP client."""
    global _async_client
    if _async_client is None or _async_client.is_closed:
        _async_client = httpx.AsyncClient(timeout=config.http_timeout, limits=_LIMITS)
    return _async_client


def get_sync_client() -> httpx.Client:
    """Get or create the shared sync HTTP client."""
    global _sync_client
    if _sync_client is None or _sync_client.is_closed:
        _sync_client = httpx.Client(timeout=config.http_timeout, limits=_LIMITS)
    return _sync_client


async def close_clients() -> None:
    global _async_client, _sync_client
    if _async_client is not None:
        await _async_client.aclose()
        _async_client = None
    if _sync_client is not None:
        _sync_client.close()
        _sync_client = None


def status_error(response: httpx.Response, what: str) -> Optional[str]:
    """Describe a failed HTTP status, or None if the response is usable."""
    if response.status_code == 429:
        return f"Rate limit exceeded fetching {what}. Please wait and retry."
    if response.status_code == 404:
        return f"{what} not found."
    if response.status_code >= 500:
        return f"Server error ({response.status_code}) fetching {what}."
    if response.status_code >= 400:
        return f"Bad request ({response.status_code}) for {what}."
    return None
