"""Timing-related constants (timeouts, windows, expiry)."""

from typing import Final


class Timeouts:
    """Timeout values in SECONDS."""

    HTTP_REQUEST_SECONDS: Final[int] = 30
    HTTP_CONNECT_SECONDS: Final[int] = 10
    HTTP_SOCK_READ_SECONDS: Final[int] = 20
    SHUTDOWN_SECONDS: Final[int] = 10


class Windows:
    """Scheduling windows."""

    AVAILABILITY_DAYS_DEFAULT: Final[int] = 14
    AVAILABILITY_DAYS_MAX: Final[int] = 60
    SESSION_TTL_SECONDS_DEFAULT: Final[int] = 3600
