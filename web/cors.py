"""Allowed-origin filtering for the booking API's CORS middleware."""

from typing import List
from urllib.parse import urlsplit

from loguru import logger

_LOOPBACK_HOSTS = frozenset({"localhost", "127.0.0.1", "::1", "0.0.0.0"})

# Environments where local front-end dev servers must be able to call the API
_PERMISSIVE_ENVIRONMENTS = frozenset({"development", "testing"})


def _is_local_origin(origin: str) -> bool:
    """True for loopback origins, ``*.localhost`` and ``localhost.*`` included."""
    try:
        host = (urlsplit(origin).hostname or "").lower()
    except ValueError:
        return False
    return (
        host in _LOOPBACK_HOSTS
        or host.endswith(".localhost")
        or host.startswith("localhost.")
    )


def validate_cors_origins(origins: List[str], env: str) -> List[str]:
    """
    Filter configured origins for the current environment.

    Development and testing accept every origin. Elsewhere the wildcard and
    loopback origins are dropped with a warning.

    Raises:
        ValueError: If the wildcard is configured in production
    """
    if "*" in origins and env == "production":
        raise ValueError("CORS_ALLOWED_ORIGINS must not contain '*' in production")

    if env in _PERMISSIVE_ENVIRONMENTS:
        return list(origins)

    rejected = [o for o in origins if o == "*" or _is_local_origin(o)]
    if rejected:
        logger.warning(f"Ignoring CORS origins not allowed in {env}: {rejected}")
    return [o for o in origins if o not in rejected]
