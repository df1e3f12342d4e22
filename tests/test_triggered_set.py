"""Tests for once-mode dedup state."""

from ov_departures.application.triggered_set import TriggeredSet, dedup_key, planned_instant_of
from ov_departures.domain.models import TriggerKind, build_departure_uid
from tests.fakes import NOW_MS

HOUR_MS = 60 * 60 * 1000


def _key(kind: TriggerKind, planned_ms: int) -> str:
    return dedup_key(kind, build_departure_uid("asdcs", "22", "Utrecht Centraal", planned_ms))


def test_dedup_key_prefixes_kind() -> None:
    """Given a uid, when building the dedup key, then the kind is prefixed."""
    assert dedup_key(TriggerKind.SOON, "asdcs_22_Utrecht_1000") == "soon_asdcs_22_Utrecht_1000"


def test_planned_instant_of_reads_last_segment() -> None:
    """Given keys with and without a numeric suffix, when reading, then the instant or 0 is returned."""
    assert planned_instant_of("soon_asdcs_22_Utrecht_1000") == 1000
    assert planned_instant_of("soon_asdcs_22_Utrecht_abc") == 0


def test_kinds_are_tracked_separately() -> None:
    """Given a soon key, when checking the delayed kind, then it is not present."""
    triggered = TriggeredSet()
    key = _key(TriggerKind.SOON, NOW_MS)

    triggered.add(TriggerKind.SOON, key)

    assert (TriggerKind.SOON, key) in triggered
    assert (TriggerKind.DELAYED, key) not in triggered
    assert len(triggered) == 1


def test_purge_removes_only_keys_older_than_retention() -> None:
    """Given keys planned two hours ago and 30 minutes ago, when purging, then only the old one is removed."""
    triggered = TriggeredSet()
    old = _key(TriggerKind.SOON, NOW_MS - 2 * HOUR_MS)
    recent = _key(TriggerKind.SOON, NOW_MS - HOUR_MS // 2)
    old_delayed = _key(TriggerKind.DELAYED, NOW_MS - 2 * HOUR_MS)
    triggered.add(TriggerKind.SOON, old)
    triggered.add(TriggerKind.SOON, recent)
    triggered.add(TriggerKind.DELAYED, old_delayed)

    removed = triggered.purge(NOW_MS)

    assert removed == 2
    assert triggered.keys(TriggerKind.SOON) == frozenset({recent})
    assert triggered.keys(TriggerKind.DELAYED) == frozenset()


def test_purge_keeps_keys_without_planned_instant() -> None:
    """Given a key with planned instant 0, when purging, then it is kept."""
    triggered = TriggeredSet()
    key = _key(TriggerKind.SOON, 0)
    triggered.add(TriggerKind.SOON, key)

    assert triggered.purge(NOW_MS) == 0
    assert (TriggerKind.SOON, key) in triggered


def test_purge_uses_configured_retention() -> None:
    """Given a ten minute retention, when purging, then a key planned 30 minutes ago is removed."""
    triggered = TriggeredSet(retention_ms=10 * 60 * 1000)
    triggered.add(TriggerKind.DELAYED, _key(TriggerKind.DELAYED, NOW_MS - HOUR_MS // 2))

    assert triggered.purge(NOW_MS) == 1


def test_discard_removes_key() -> None:
    """Given a recorded key, when discarding, then it is gone."""
    triggered = TriggeredSet()
    key = _key(TriggerKind.SOON, NOW_MS)
    triggered.add(TriggerKind.SOON, key)

    triggered.discard(TriggerKind.SOON, key)

    assert len(triggered) == 0
