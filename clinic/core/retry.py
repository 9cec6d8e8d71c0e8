"""tenacity policies for backend reads that are safe to repeat.

Availability fetches and booking writes are never retried automatically.
"""

import logging as stdlib_logging
from typing import Callable

from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from clinic.constants import Retries
from clinic.core.exceptions import ClinicApiError

# before_sleep_log needs a stdlib logger; InterceptHandler forwards it to Loguru
_stdlib_logger = stdlib_logging.getLogger(__name__)


def is_transient(exception: BaseException) -> bool:
    """5xx, 429 and transport failures are flagged recoverable by the client."""
    return isinstance(exception, ClinicApiError) and exception.recoverable


def _make_retry(attempts: int, wait_strategy: object) -> Callable:
    """
    Build a retry decorator for transient clinic API errors.

    Args:
        attempts: Maximum number of attempts, the first call included
        wait_strategy: Tenacity wait strategy between attempts
    """
    return retry(
        retry=retry_if_exception(is_transient),
        stop=stop_after_attempt(attempts),
        wait=wait_strategy,
        before_sleep=before_sleep_log(_stdlib_logger, stdlib_logging.WARNING),
        reraise=True,
    )


def get_directory_retry(attempts: int = Retries.MAX_DIRECTORY) -> Callable:
    """Retry policy for specialty and doctor lookups: short exponential backoff."""
    return _make_retry(
        attempts,
        wait_exponential(
            multiplier=Retries.BACKOFF_MULTIPLIER,
            min=Retries.BACKOFF_MIN_SECONDS,
            max=Retries.BACKOFF_MAX_SECONDS,
        ),
    )
