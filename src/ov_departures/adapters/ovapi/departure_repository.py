"""OV API departure repository adapter."""

import logging
from typing import TYPE_CHECKING

from ov_departures.adapters.cache.departure_cache import DepartureCache
from ov_departures.adapters.ovapi.constants import (
    DEFAULT_DEPARTURES_LIMIT,
    DEPARTURES_CACHE_TTL_MS,
    DESTINATIONS_LOOKAHEAD,
    DISPLAY_TIMEZONE,
)
from ov_departures.adapters.ovapi.departure_parser import DepartureParser
from ov_departures.domain.clock import Clock, now_millis
from ov_departures.domain.errors import InvalidInputError, OvApiError
from ov_departures.domain.models.autocomplete_item import AutocompleteItem
from ov_departures.domain.models.departure import Departure
from ov_departures.domain.models.departure_cache_entry import DepartureCacheEntry

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from ov_departures.adapters.ovapi.http_client import OvApiHttpClient


class OvApiDepartureRepository:
    """Adapter for OV API real-time departures with a short-lived per-station cache."""

    def __init__(
        self,
        http_client: "OvApiHttpClient",
        cache: DepartureCache | None = None,
        ttl_ms: int = DEPARTURES_CACHE_TTL_MS,
        timezone: str = DISPLAY_TIMEZONE,
        clock: Clock = now_millis,
    ) -> None:
        """Initialize the repository.

        Args:
            http_client: Client used for stop area requests.
            cache: Shared per-station cache; a private one is created if omitted.
            ttl_ms: Freshness window of a cache entry.
            timezone: IANA timezone for formatted departure times.
            clock: Millisecond clock used for freshness checks.
        """
        self._http_client = http_client
        self._cache = cache if cache is not None else DepartureCache()
        self._ttl_ms = ttl_ms
        self._timezone = timezone
        self._clock = clock

    async def get_departures(
        self, station_code: str, limit: int = DEFAULT_DEPARTURES_LIMIT
    ) -> list[Departure]:
        """Get upcoming departures for a stop area.

        Never raises: an empty station code or any upstream failure is logged
        and yields an empty list.

        Args:
            station_code: Stop area code (e.g., "asdcs").
            limit: Maximum number of departures to return.

        Returns:
            Departures sorted ascending by timestamp.
        """
        try:
            departures = await self._get_all_departures(station_code)
        except InvalidInputError as e:
            logger.debug(f"Skipping departures lookup: {e}")
            return []
        except OvApiError as e:
            logger.error(f"Failed to fetch departures for {station_code}: {e}")
            return []
        except Exception as e:
            logger.exception(f"Unexpected error fetching departures for {station_code}: {e}")
            return []

        return list(departures[:limit])

    async def get_destinations(self, station_code: str) -> list[AutocompleteItem]:
        """Get unique destinations among the next departures, in first-seen order."""
        departures = await self.get_departures(station_code, DESTINATIONS_LOOKAHEAD)
        destinations: dict[str, AutocompleteItem] = {}

        for departure in departures:
            if departure.destination and departure.destination not in destinations:
                destinations[departure.destination] = AutocompleteItem(
                    name=departure.destination,
                    description=f"Line {departure.line}",
                )

        return list(destinations.values())

    async def _get_all_departures(self, station_code: str) -> tuple[Departure, ...]:
        """Serve from cache while fresh, otherwise fetch and replace the entry."""
        if not station_code:
            raise InvalidInputError("Missing station id")

        now = self._clock()
        cached = self._cache.get_fresh(station_code, now, self._ttl_ms)
        if cached is not None:
            return cached.data

        stop_data = await self._http_client.fetch_stop_area_passes(station_code)
        departures = DepartureParser.parse_stop_area_departures(
            station_code, stop_data, self._timezone
        )
        entry = DepartureCacheEntry(time=now, data=tuple(departures))
        self._cache.set(station_code, entry)
        logger.debug(f"Cached {len(departures)} departures for {station_code}")
        return entry.data
