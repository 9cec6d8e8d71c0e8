"""Shared request handling for the clinic API sub-modules."""

import asyncio
from typing import Any, Callable, Dict, Optional

import aiohttp
from loguru import logger

from clinic.core.exceptions import ClinicApiError


class ApiResource:
    """Base for API sub-modules sharing the parent client's HTTP session."""

    def __init__(
        self,
        base_url: str,
        http_session_getter: Callable[[], aiohttp.ClientSession],
    ):
        """
        Initialize API resource.

        Args:
            base_url: REST API base URL (no trailing slash)
            http_session_getter: Callable that returns the HTTP session
        """
        self._base_url = base_url
        self._http_session_getter = http_session_getter

    @property
    def _session(self) -> aiohttp.ClientSession:
        """Get HTTP session from parent client."""
        return self._http_session_getter()

    async def _request(
        self,
        method: str,
        table: str,
        params: Optional[Dict[str, str]] = None,
        payload: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """
        Perform one request against a table endpoint and decode the JSON body.

        Raises:
            ClinicApiError: On transport failure, error status or non-JSON body.
                5xx, 429 and transport failures are flagged recoverable.
        """
        url = f"{self._base_url}/{table}"
        try:
            async with self._session.request(
                method, url, params=params, json=payload, headers=headers
            ) as response:
                if response.status == 429 or response.status >= 500:
                    body = await response.text()
                    logger.error(
                        f"Clinic API {method} {table} failed (status={response.status}): "
                        f"{body[:200]}"
                    )
                    raise ClinicApiError(
                        f"Clinic API unavailable: {response.status}",
                        recoverable=True,
                        status=response.status,
                    )
                if response.status >= 400:
                    body = await response.text()
                    logger.error(
                        f"Clinic API rejected {method} {table} (status={response.status}): "
                        f"{body[:200]}"
                    )
                    raise ClinicApiError(
                        f"Clinic API rejected request: {response.status}",
                        recoverable=False,
                        status=response.status,
                    )

                try:
                    return await response.json()
                except (aiohttp.ContentTypeError, ValueError):
                    error_text = await response.text()
                    logger.error(
                        f"Unexpected non-JSON response (status={response.status}): "
                        f"{error_text[:200]}..."
                    )
                    raise ClinicApiError(
                        f"Non-JSON response from clinic API: {response.status}",
                        recoverable=False,
                        status=response.status,
                    )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning(f"Clinic API {method} {table} transport error: {e!r}")
            raise ClinicApiError(f"Clinic API unreachable: {e!r}", recoverable=True) from e
