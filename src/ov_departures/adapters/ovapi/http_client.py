"""HTTP client for OV API requests.

Uses the public v0.ovapi.nl API. Certificate validation is disabled by default
because the upstream certificate chain does not always validate; set
``OVAPI_VERIFY_SSL=true`` to turn it back on.
"""

import json
import logging
import time
from typing import TYPE_CHECKING, Any

import aiohttp

from ov_departures.adapters.ovapi.constants import (
    DEFAULT_HEADERS,
    DEFAULT_TIMEOUT_SECONDS,
    OVAPI_BASE_URL,
    STOP_AREA_PATH,
    STOP_AREAS_TIMEOUT_SECONDS,
)
from ov_departures.domain.errors import (
    MalformedResponseError,
    NetworkTimeoutError,
    OvApiError,
    UpstreamStatusError,
)

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientSession


class OvApiHttpClient:
    """HTTP client for OV API requests using an injected aiohttp session."""

    def __init__(
        self,
        session: "ClientSession",
        base_url: str = OVAPI_BASE_URL,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        stop_areas_timeout_seconds: float = STOP_AREAS_TIMEOUT_SECONDS,
        verify_ssl: bool = False,
        log_requests: bool = False,
    ) -> None:
        """Initialize with an aiohttp session.

        Args:
            session: aiohttp ClientSession for HTTP requests.
            base_url: API base URL without trailing slash.
            timeout_seconds: Total timeout for departure requests.
            stop_areas_timeout_seconds: Total timeout for the stop directory request.
            verify_ssl: Whether to validate the upstream TLS certificate.
            log_requests: Log every request and its outcome at INFO instead of DEBUG.
        """
        self._session = session
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds
        self._stop_areas_timeout_seconds = stop_areas_timeout_seconds
        self._verify_ssl = verify_ssl
        self._traffic_level = logging.INFO if log_requests else logging.DEBUG

    async def get_json(self, endpoint: str, timeout_seconds: float | None = None) -> Any:
        """GET an endpoint and return the decoded JSON body.

        Raises:
            NetworkTimeoutError: The request did not complete within the timeout.
            MalformedResponseError: The body is not valid JSON.
            UpstreamStatusError: The status code is not 200.
            OvApiError: Any other connection problem.
        """
        url = f"{self._base_url}{endpoint}"
        timeout = timeout_seconds if timeout_seconds is not None else self._timeout_seconds
        logger.log(self._traffic_level, f"GET {url} (timeout {timeout}s)")
        started = time.monotonic()

        try:
            async with self._session.get(
                url,
                headers=DEFAULT_HEADERS,
                timeout=aiohttp.ClientTimeout(total=timeout),
                ssl=self._verify_ssl,
            ) as response:
                if response.status != 200:
                    body = await response.text()
                    logger.debug(f"OV API error body for {url}: {body[:200]}")
                    raise UpstreamStatusError(response.status, url)
                text = await response.text()
                logger.log(
                    self._traffic_level,
                    f"{response.status} from {url}: {len(text)} bytes in "
                    f"{(time.monotonic() - started) * 1000:.0f} ms",
                )
        except TimeoutError as e:
            raise NetworkTimeoutError(f"Request timeout after {timeout}s: {url}") from e
        except aiohttp.ClientError as e:
            raise OvApiError(f"Connection error for {url}: {e}") from e

        try:
            return json.loads(text)
        except ValueError as e:
            raise MalformedResponseError(f"Invalid JSON response from {url}") from e

    async def fetch_stop_areas(self) -> dict[str, Any]:
        """Fetch the full stop area directory keyed by stop area code."""
        data = await self.get_json(STOP_AREA_PATH, self._stop_areas_timeout_seconds)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise MalformedResponseError(
                f"Expected a mapping of stop areas, got {type(data).__name__}"
            )
        return data

    async def fetch_stop_area_passes(self, stop_area_code: str) -> dict[str, Any]:
        """Fetch the sub-stops (with their ``Passes``) of one stop area."""
        data = await self.get_json(f"{STOP_AREA_PATH}{stop_area_code}")
        if not isinstance(data, dict):
            raise MalformedResponseError(
                f"Expected a mapping for stop area {stop_area_code}, got {type(data).__name__}"
            )
        stop_data = data.get(stop_area_code) or {}
        if not isinstance(stop_data, dict):
            raise MalformedResponseError(f"Unexpected stop area payload for {stop_area_code}")
        return stop_data
