"""Shared HTTP client utilities: reusable httpx client."""

import httpx

from api.config import get_settings

# Module-level shared client (created lazily, lives for the process lifetime)
_client: httpx.AsyncClient | None = None


def get_shared_client() -> httpx.AsyncClient:
    """Return a shared httpx.AsyncClient, creating it on first call."""
    global _client
    if _client is None or _client.is_closed:
        _client = httpx.AsyncClient(timeout=get_settings().http_timeout)
    return _client


async def close_shared_client() -> None:
    """Close the shared client if one was created."""
    global _client
    if _client is not None and not _client.is_closed:
        await _client.aclose()
    _client = None


def github_headers(token: str, user_agent: str = "") -> dict[str, str]:
    """Build standard GitHub API request headers.

    Includes the Authorization header only when a token is given.
    """
    headers: dict[str, str] = {
        "Accept": "application/vnd.github+json",
        "X-GitHub-Api-Version": "2022-11-28",
    }
    if user_agent:
        headers["User-Agent"] = user_agent
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers
