"""Domain models for OV departures."""

from ov_departures.domain.models.autocomplete_item import AutocompleteItem
from ov_departures.domain.models.departure import (
    DEPARTURE_STATUSES,
    TRANSPORT_TYPES,
    Departure,
    build_departure_uid,
)
from ov_departures.domain.models.departure_cache_entry import DepartureCacheEntry
from ov_departures.domain.models.departure_info import DepartureInfo
from ov_departures.domain.models.stop_area import StopArea
from ov_departures.domain.models.trigger_rule import (
    TriggerKind,
    TriggerMode,
    TriggerRule,
    TriggerState,
)

__all__ = [
    "DEPARTURE_STATUSES",
    "TRANSPORT_TYPES",
    "AutocompleteItem",
    "Departure",
    "DepartureCacheEntry",
    "DepartureInfo",
    "StopArea",
    "TriggerKind",
    "TriggerMode",
    "TriggerRule",
    "TriggerState",
    "build_departure_uid",
]
