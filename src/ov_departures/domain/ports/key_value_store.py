"""Durable key/value store port."""

from typing import Any, Protocol


class KeyValueStore(Protocol):
    """Port for the host-provided settings store."""

    def get(self, key: str) -> Any:
        """Return the stored value, or None when the key is unset."""
        ...

    def set(self, key: str, value: Any) -> None:
        """Store a JSON-serializable value."""
        ...
