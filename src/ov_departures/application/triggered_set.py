"""Dedup state for once-mode triggers."""

import logging

from ov_departures.domain.models.trigger_rule import TriggerKind

logger = logging.getLogger(__name__)

DEFAULT_RETENTION_MS = 60 * 60 * 1000


def dedup_key(kind: TriggerKind, uid: str) -> str:
    """Key recording that ``uid`` already fired a trigger of ``kind``."""
    return f"{kind.value}_{uid}"


def planned_instant_of(key: str) -> int:
    """Planned instant embedded as the last ``_`` segment of a key, 0 if unreadable."""
    try:
        return int(key.rsplit("_", 1)[-1])
    except ValueError:
        return 0


class TriggeredSet:
    """Departures that already fired, one key set per trigger kind.

    Owned by a single trigger engine for the lifetime of the process.
    """

    def __init__(self, retention_ms: int = DEFAULT_RETENTION_MS) -> None:
        self._retention_ms = retention_ms
        self._keys: dict[TriggerKind, set[str]] = {kind: set() for kind in TriggerKind}

    def __contains__(self, item: tuple[TriggerKind, str]) -> bool:
        kind, key = item
        return key in self._keys[kind]

    def __len__(self) -> int:
        return sum(len(keys) for keys in self._keys.values())

    def add(self, kind: TriggerKind, key: str) -> None:
        self._keys[kind].add(key)

    def discard(self, kind: TriggerKind, key: str) -> None:
        self._keys[kind].discard(key)

    def keys(self, kind: TriggerKind) -> frozenset[str]:
        return frozenset(self._keys[kind])

    def purge(self, now_ms: int) -> int:
        """Remove keys whose planned instant lies more than the retention window back.

        Keys without a readable planned instant are kept.

        Returns:
            Number of removed keys.
        """
        cutoff = now_ms - self._retention_ms
        removed = 0
        for kind, keys in self._keys.items():
            stale = {key for key in keys if 0 < planned_instant_of(key) < cutoff}
            if stale:
                keys.difference_update(stale)
                removed += len(stale)
                logger.debug(f"Purged {len(stale)} {kind.value} trigger key(s)")
        return removed
