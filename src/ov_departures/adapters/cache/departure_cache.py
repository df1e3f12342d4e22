"""Per-station departure cache implementation."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ov_departures.domain.contracts.departure_cache import DepartureCacheProtocol

if TYPE_CHECKING:
    from ov_departures.domain.models.departure_cache_entry import DepartureCacheEntry

logger = logging.getLogger(__name__)


class DepartureCache(DepartureCacheProtocol):
    """In-memory cache of fetched departures by station code.

    Entries expire independently; writers replace whole entries, last writer wins.
    """

    def __init__(self) -> None:
        """Initialize the cache."""
        self._cache: dict[str, DepartureCacheEntry] = {}

    def get_fresh(self, station_code: str, now_ms: int, ttl_ms: int) -> DepartureCacheEntry | None:
        """Get the cache entry only while it is within the freshness window."""
        entry = self._cache.get(station_code)
        if entry is not None and entry.is_fresh(now_ms, ttl_ms):
            return entry
        return None

    def set(self, station_code: str, entry: DepartureCacheEntry) -> None:
        """Replace the cache entry for a station.

        Args:
            station_code: The stop area code.
            entry: The freshly fetched entry.
        """
        self._cache[station_code] = entry

