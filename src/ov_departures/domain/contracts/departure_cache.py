"""Protocol for departure caching."""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ov_departures.domain.models.departure_cache_entry import DepartureCacheEntry


class DepartureCacheProtocol(Protocol):
    """Protocol for caching departures by station code."""

    def get_fresh(
        self, station_code: str, now_ms: int, ttl_ms: int
    ) -> "DepartureCacheEntry | None":
        """Get the cache entry for a station while it is younger than ``ttl_ms``."""
        ...

    def set(self, station_code: str, entry: "DepartureCacheEntry") -> None:
        """Replace the cache entry for a station.

        Args:
            station_code: The stop area code.
            entry: The freshly fetched entry.
        """
        ...
