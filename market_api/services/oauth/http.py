"""
Process-wide HTTP client for outbound OAuth provider calls.

Created lazily on first use and closed by the application lifespan.
"""

import threading

import httpx

from shared.config.settings import settings
from shared.config.logging import get_logger

logger = get_logger(__name__)

_client: httpx.Client | None = None
_lock = threading.Lock()


def get_http_client() -> httpx.Client:
    """Return the shared client, creating it on first call."""
    global _client
    if _client is None:
        with _lock:
            if _client is None:
                _client = httpx.Client(
                    timeout=httpx.Timeout(settings.oauth_timeout_seconds),
                    headers={"Accept": "application/json"},
                )
                logger.debug("OAuth HTTP client created", timeout=settings.oauth_timeout_seconds)
    return _client


def close_http_client() -> None:
    """Close the shared client if it was ever created."""
    global _client
    with _lock:
        if _client is not None:
            _client.close()
            _client = None
            logger.info("OAuth HTTP client closed")
