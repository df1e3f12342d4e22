"""Per-station departure cache entry."""

from dataclasses import dataclass

from ov_departures.domain.models.departure import Departure


@dataclass(frozen=True)
class DepartureCacheEntry:
    """Departures fetched for one station at one instant."""

    time: int  # Fetch instant in ms since epoch
    data: tuple[Departure, ...]  # Sorted ascending by timestamp

    def is_fresh(self, now_ms: int, ttl_ms: int) -> bool:
        """Return True while the entry is younger than the TTL."""
        return (now_ms - self.time) < ttl_ms
