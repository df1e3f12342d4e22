"""Shared departure matching rules used by conditions and triggers.

All functions are pure: they work on an already fetched, timestamp-ordered
departure sequence and return False, None or an empty list when nothing matches.
"""

from collections.abc import Iterable, Sequence

from ov_departures.domain.models.departure import Departure

MATCH_TYPE_LINE = "line"
MATCH_TYPE_DESTINATION = "destination"


def matches_destination(departure: Departure, destination: str | None) -> bool:
    """Case-insensitive substring match; an empty filter matches everything."""
    if not destination:
        return True
    return destination.lower() in departure.destination.lower()


def filter_by_destination(
    departures: Iterable[Departure], destination: str | None
) -> list[Departure]:
    return [d for d in departures if matches_destination(d, destination)]


def next_departure_matches(
    departures: Sequence[Departure], match_type: str, match_value: str | None
) -> bool:
    """Check the first departure by line (exact) or destination (substring)."""
    if not departures:
        return False

    next_departure = departures[0]
    value = (match_value or "").lower()

    if match_type == MATCH_TYPE_LINE:
        return next_departure.line.lower() == value
    if match_type == MATCH_TYPE_DESTINATION:
        return value in next_departure.destination.lower()
    return False


def departures_due_within(
    departures: Iterable[Departure], minutes: int, now_ms: int
) -> list[Departure]:
    return [d for d in departures if d.minutes_until(now_ms) <= minutes]


def departures_delayed_beyond(departures: Iterable[Departure], minutes: int) -> list[Departure]:
    return [d for d in departures if d.delay_minutes > minutes]


def any_departure_within(
    departures: Iterable[Departure], minutes: int, destination: str | None, now_ms: int
) -> bool:
    """True if a departure towards ``destination`` leaves within ``minutes``."""
    matching = filter_by_destination(departures, destination)
    return bool(departures_due_within(matching, minutes, now_ms))


def any_departure_delayed(
    departures: Iterable[Departure], minutes: int, destination: str | None
) -> bool:
    """True if a departure towards ``destination`` is delayed by more than ``minutes``."""
    matching = filter_by_destination(departures, destination)
    return bool(departures_delayed_beyond(matching, minutes))


def first_matching_departure(
    departures: Sequence[Departure], destination: str | None
) -> Departure | None:
    """First departure towards ``destination``, or the very first without a filter."""
    for departure in departures:
        if matches_destination(departure, destination):
            return departure
    return None
