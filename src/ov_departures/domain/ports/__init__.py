"""Ports (interfaces) for the ports-and-adapters architecture."""

from ov_departures.domain.ports.key_value_store import KeyValueStore
from ov_departures.domain.ports.transport_client import TransportClient
from ov_departures.domain.ports.trigger_card import TriggerCard

__all__ = [
    "KeyValueStore",
    "TransportClient",
    "TriggerCard",
]
