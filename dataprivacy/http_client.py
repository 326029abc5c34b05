"""HTTP helpers shared by the platform API clients."""

from typing import Optional

from . import __version__

USER_AGENT = f"dataprivacy-tool/{__version__}"

DEFAULT_TIMEOUT = 60


def get_default_headers(token: Optional[str] = None, accept: Optional[str] = "application/json") -> dict:
    """
    Build request headers with the tool's User-Agent.

    Args:
        token: Bearer token, omitted when empty
        accept: Accept header value, omitted when None

    Returns:
        Dictionary of HTTP headers
    """
    headers = {"User-Agent": USER_AGENT}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    if accept:
        headers["Accept"] = accept
    return headers


def join_url(base_url: str, endpoint: str) -> str:
    """Join an API base URL and an endpoint path with exactly one slash between them."""
    return f"{base_url.rstrip('/')}/{endpoint.lstrip('/')}"
