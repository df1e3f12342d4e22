"""Storage adapters."""

from ov_departures.adapters.storage.key_value_store import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
)

__all__ = ["InMemoryKeyValueStore", "JsonFileKeyValueStore"]
