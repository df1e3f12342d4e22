"""Two-tier cache for the stop area directory.

The volatile tier lives in process memory; the durable tier is a host key/value
store that survives restarts. Both are gated by the same TTL and clock.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ov_departures.domain.models.stop_area import StopArea

if TYPE_CHECKING:
    from ov_departures.domain.ports.key_value_store import KeyValueStore

logger = logging.getLogger(__name__)

# Durable store keys for the directory snapshot and its fetch instant
STOP_AREAS_CACHE_KEY = "stop_areas_cache"
STOP_AREAS_CACHE_TIME_KEY = "stop_areas_cache_time"
STOP_AREAS_CACHE_TTL_MS = 24 * 60 * 60 * 1000


class StopDirectoryCache:
    """Stop directory snapshot backed by memory and a durable store."""

    def __init__(self, store: KeyValueStore, ttl_ms: int = STOP_AREAS_CACHE_TTL_MS) -> None:
        """Initialize the cache.

        Args:
            store: Durable key/value store used as restart fallback.
            ttl_ms: Freshness window for both tiers.
        """
        self._store = store
        self._ttl_ms = ttl_ms
        self._stop_areas: list[StopArea] | None = None
        self._fetched_at: int = 0

    def get_fresh(self, now_ms: int) -> list[StopArea] | None:
        """Return a fresh snapshot from memory, then the durable store, else None."""
        if self._stop_areas is not None and (now_ms - self._fetched_at) < self._ttl_ms:
            return self._stop_areas

        durable = self._load_durable(now_ms)
        if durable is not None:
            self._stop_areas, self._fetched_at = durable
            return self._stop_areas

        return None

    def store(self, stop_areas: list[StopArea], now_ms: int) -> None:
        """Replace both tiers with a freshly fetched snapshot."""
        self._stop_areas = stop_areas
        self._fetched_at = now_ms
        try:
            self._store.set(STOP_AREAS_CACHE_KEY, [stop.to_dict() for stop in stop_areas])
            self._store.set(STOP_AREAS_CACHE_TIME_KEY, now_ms)
        except Exception as e:
            logger.warning(f"Failed to persist stop area snapshot: {e}")

    def last_known(self) -> list[StopArea]:
        """Last snapshot held in memory, regardless of age."""
        return self._stop_areas or []

    def invalidate(self) -> None:
        """Drop both tiers so the next lookup goes to the network."""
        self._stop_areas = None
        self._fetched_at = 0
        try:
            self._store.set(STOP_AREAS_CACHE_TIME_KEY, 0)
        except Exception as e:
            logger.warning(f"Failed to invalidate persisted stop area snapshot: {e}")

    def _load_durable(self, now_ms: int) -> tuple[list[StopArea], int] | None:
        """Read the durable snapshot if it exists and is fresh."""
        try:
            cached: Any = self._store.get(STOP_AREAS_CACHE_KEY)
            cached_time: Any = self._store.get(STOP_AREAS_CACHE_TIME_KEY)
        except Exception as e:
            logger.warning(f"Failed to read persisted stop area snapshot: {e}")
            return None

        if not isinstance(cached, list):
            return None
        fetched_at = _as_millis(cached_time)
        if fetched_at is None:
            if cached_time is not None:
                logger.warning(f"Ignoring persisted stop area snapshot time {cached_time!r}")
            return None
        if not fetched_at or (now_ms - fetched_at) >= self._ttl_ms:
            return None

        stop_areas = [StopArea.from_dict(item) for item in cached if isinstance(item, dict)]
        logger.debug(f"Loaded {len(stop_areas)} stop areas from durable cache")
        return stop_areas, fetched_at


def _as_millis(value: Any) -> int | None:
    """Epoch milliseconds from a persisted number; None for anything else."""
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    try:
        return int(value)
    except (ValueError, OverflowError):
        return None
