"""OV API stop area repository adapter."""

import logging
from typing import TYPE_CHECKING

from ov_departures.adapters.cache.stop_directory_cache import StopDirectoryCache
from ov_departures.adapters.ovapi.constants import MAX_SEARCH_RESULTS, MIN_SEARCH_QUERY_LENGTH
from ov_departures.adapters.ovapi.departure_parser import parse_stop_areas
from ov_departures.domain.clock import Clock, now_millis
from ov_departures.domain.errors import OvApiError
from ov_departures.domain.models.stop_area import StopArea

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from ov_departures.adapters.ovapi.http_client import OvApiHttpClient


class OvApiStopAreaRepository:
    """Adapter for the OV API stop area directory."""

    def __init__(
        self,
        http_client: "OvApiHttpClient",
        cache: StopDirectoryCache,
        clock: Clock = now_millis,
    ) -> None:
        """Initialize with an HTTP client and the two-tier directory cache.

        Args:
            http_client: Client used for the directory request.
            cache: Memory + durable snapshot of the directory.
            clock: Millisecond clock used for freshness checks.
        """
        self._http_client = http_client
        self._cache = cache
        self._clock = clock

    async def get_all_stop_areas(self) -> list[StopArea]:
        """Get all stop areas, refreshed at most once per freshness window.

        Returns:
            The stop directory. On failure, the last snapshot held in memory,
            which may be empty.
        """
        now = self._clock()
        cached = self._cache.get_fresh(now)
        if cached is not None:
            return cached

        try:
            data = await self._http_client.fetch_stop_areas()
        except OvApiError as e:
            logger.error(f"Failed to fetch stop areas: {e}")
            return self._cache.last_known()
        except Exception as e:
            logger.exception(f"Unexpected error fetching stop areas: {e}")
            return self._cache.last_known()

        stop_areas = parse_stop_areas(data)
        self._cache.store(stop_areas, now)
        logger.info(f"Fetched {len(stop_areas)} stop areas")
        return stop_areas

    async def search(self, query: str) -> list[StopArea]:
        """Search stop areas whose name, town or code contains the query.

        Args:
            query: Case-insensitive search text, at least two characters.

        Returns:
            Up to 15 matching stop areas in directory order.
        """
        if not query or len(query) < MIN_SEARCH_QUERY_LENGTH:
            return []

        query_lower = query.lower()
        stop_areas = await self.get_all_stop_areas()

        matches = []
        for stop in stop_areas:
            if (
                query_lower in stop.name.lower()
                or query_lower in stop.town.lower()
                or query_lower in stop.code.lower()
            ):
                matches.append(stop)
                if len(matches) >= MAX_SEARCH_RESULTS:
                    break
        return matches

    def invalidate(self) -> None:
        """Force the next directory lookup to hit the network."""
        self._cache.invalidate()
