"""Resilience-related constants (retries, connection pooling)."""

from typing import Final


class Retries:
    """Retry configuration for read-only directory calls."""

    MAX_DIRECTORY: Final[int] = 3
    BACKOFF_MULTIPLIER: Final[float] = 0.5
    BACKOFF_MIN_SECONDS: Final[float] = 0.5
    BACKOFF_MAX_SECONDS: Final[float] = 4.0


class Pools:
    """HTTP connection pool limits."""

    HTTP_LIMIT: Final[int] = 50
    HTTP_LIMIT_PER_HOST: Final[int] = 20
    DNS_CACHE_TTL: Final[int] = 120
    KEEPALIVE_TIMEOUT: Final[int] = 30
