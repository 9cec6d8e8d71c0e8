"""Tests for retry strategies."""

import pytest

from clinic.core.exceptions import ClinicApiError
from clinic.core.retry import get_directory_retry


def test_get_directory_retry():
    """Test directory retry decorator can be created."""
    assert get_directory_retry() is not None


@pytest.mark.asyncio
async def test_transient_error_is_retried(monkeypatch):
    """Test recoverable API errors are retried until success."""
    attempts = [0]

    @get_directory_retry(attempts=3)
    async def flaky():
        attempts[0] += 1
        if attempts[0] < 3:
            raise ClinicApiError("unavailable", recoverable=True, status=503)
        return "ok"

    flaky.retry.sleep = _no_sleep
    assert await flaky() == "ok"
    assert attempts[0] == 3


@pytest.mark.asyncio
async def test_permanent_error_is_not_retried():
    """Test non-recoverable API errors fail on the first attempt."""
    attempts = [0]

    @get_directory_retry(attempts=3)
    async def rejected():
        attempts[0] += 1
        raise ClinicApiError("bad request", recoverable=False, status=400)

    with pytest.raises(ClinicApiError):
        await rejected()
    assert attempts[0] == 1


@pytest.mark.asyncio
async def test_gives_up_after_max_attempts():
    attempts = [0]

    @get_directory_retry(attempts=2)
    async def down():
        attempts[0] += 1
        raise ClinicApiError("unavailable", recoverable=True, status=503)

    down.retry.sleep = _no_sleep
    with pytest.raises(ClinicApiError):
        await down()
    assert attempts[0] == 2


async def _no_sleep(seconds):
    return None
