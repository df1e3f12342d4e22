"""Transport client combining the OV API stop area and departure repositories."""

from typing import TYPE_CHECKING

from ov_departures.adapters.cache.departure_cache import DepartureCache
from ov_departures.adapters.cache.stop_directory_cache import StopDirectoryCache
from ov_departures.adapters.ovapi.constants import DEFAULT_DEPARTURES_LIMIT
from ov_departures.adapters.ovapi.departure_repository import OvApiDepartureRepository
from ov_departures.adapters.ovapi.http_client import OvApiHttpClient
from ov_departures.adapters.ovapi.stop_area_repository import OvApiStopAreaRepository
from ov_departures.domain.clock import Clock, now_millis
from ov_departures.domain.models.autocomplete_item import AutocompleteItem
from ov_departures.domain.models.departure import Departure
from ov_departures.domain.models.stop_area import StopArea
from ov_departures.domain.ports.transport_client import TransportClient

if TYPE_CHECKING:
    from aiohttp import ClientSession

    from ov_departures.adapters.config.app_config import AppConfig
    from ov_departures.domain.ports.key_value_store import KeyValueStore


class OvApiTransportClient(TransportClient):
    """Fail-soft client for stop areas and departures."""

    def __init__(
        self,
        stop_areas: OvApiStopAreaRepository,
        departures: OvApiDepartureRepository,
        clock: Clock = now_millis,
    ) -> None:
        self._stop_areas = stop_areas
        self._departures = departures
        self._clock = clock

    @classmethod
    def from_config(
        cls,
        config: "AppConfig",
        session: "ClientSession",
        store: "KeyValueStore",
        clock: Clock = now_millis,
    ) -> "OvApiTransportClient":
        """Build a client with both cache tiers from application configuration."""
        http_client = OvApiHttpClient(
            session=session,
            base_url=config.ovapi_base_url,
            timeout_seconds=config.ovapi_timeout_seconds,
            stop_areas_timeout_seconds=config.ovapi_stop_areas_timeout_seconds,
            verify_ssl=config.ovapi_verify_ssl,
            log_requests=config.ovapi_log_requests,
        )
        stop_areas = OvApiStopAreaRepository(
            http_client,
            StopDirectoryCache(store, ttl_ms=config.stop_areas_cache_ttl_seconds * 1000),
            clock=clock,
        )
        departures = OvApiDepartureRepository(
            http_client,
            DepartureCache(),
            ttl_ms=config.departures_cache_ttl_seconds * 1000,
            timezone=config.timezone,
            clock=clock,
        )
        return cls(stop_areas, departures, clock=clock)

    async def fetch_stop_directory(self) -> list[StopArea]:
        return await self._stop_areas.get_all_stop_areas()

    async def search_stops(self, query: str) -> list[StopArea]:
        return await self._stop_areas.search(query)

    def invalidate_stop_directory(self) -> None:
        self._stop_areas.invalidate()

    async def fetch_departures(
        self, station_code: str, limit: int = DEFAULT_DEPARTURES_LIMIT
    ) -> list[Departure]:
        return await self._departures.get_departures(station_code, limit)

    async def list_destinations(self, station_code: str) -> list[AutocompleteItem]:
        return await self._departures.get_destinations(station_code)

    def minutes_until(self, departure: Departure) -> int:
        return departure.minutes_until(self._clock())
