"""Transport client port."""

from typing import Protocol

from ov_departures.domain.models.autocomplete_item import AutocompleteItem
from ov_departures.domain.models.departure import Departure
from ov_departures.domain.models.stop_area import StopArea


class TransportClient(Protocol):
    """Port for retrieving stop areas and departures.

    Implementations fail soft: upstream problems yield empty results, never
    exceptions.
    """

    async def fetch_stop_directory(self) -> list[StopArea]:
        """Get all stop areas."""
        ...

    async def search_stops(self, query: str) -> list[StopArea]:
        """Search stop areas by name, town or code."""
        ...

    async def fetch_departures(self, station_code: str, limit: int = 10) -> list[Departure]:
        """Get upcoming departures for a stop area, sorted by timestamp."""
        ...

    async def list_destinations(self, station_code: str) -> list[AutocompleteItem]:
        """Get unique destinations among the next departures."""
        ...

    def minutes_until(self, departure: Departure) -> int:
        """Whole minutes until a departure, never negative."""
        ...
