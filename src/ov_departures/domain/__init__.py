"""Domain layer - core models, ports and errors."""

from ov_departures.domain.models import (
    Departure,
    StopArea,
    TriggerKind,
    TriggerRule,
    TriggerState,
)
from ov_departures.domain.ports import (
    KeyValueStore,
    TransportClient,
    TriggerCard,
)

__all__ = [
    "Departure",
    "KeyValueStore",
    "StopArea",
    "TransportClient",
    "TriggerCard",
    "TriggerKind",
    "TriggerRule",
    "TriggerState",
]
