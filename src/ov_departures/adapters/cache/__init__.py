"""Cache adapters."""

from ov_departures.adapters.cache.departure_cache import DepartureCache
from ov_departures.adapters.cache.stop_directory_cache import StopDirectoryCache

__all__ = ["DepartureCache", "StopDirectoryCache"]
