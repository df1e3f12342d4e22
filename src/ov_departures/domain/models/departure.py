"""Departure domain model."""

import math
from dataclasses import dataclass

DEPARTURE_STATUSES = ("planned", "passed", "cancelled", "unknown")
TRANSPORT_TYPES = ("bus", "tram", "metro", "train", "ferry")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards positive infinity."""
    return math.floor(value + 0.5)


@dataclass(frozen=True)
class Departure:
    """Represents a single real-time departure from a stop area."""

    line: str
    destination: str
    status: str
    planned_time: str  # "HH:MM" in the display timezone, "" when unknown
    expected_time: str
    delay_minutes: int
    transport_type: str
    operator: str
    timestamp: int  # Expected (else planned) instant in ms since epoch
    uid: str  # Stable across polls for the same physical departure

    def minutes_until(self, now_ms: int) -> int:
        """Whole minutes from now until this departure, never negative."""
        return max(0, round_half_up((self.timestamp - now_ms) / 60000))


def build_departure_uid(
    station_code: str, line: str, destination: str, planned_ms: int | None
) -> str:
    """Build the dedup identifier of a physical departure.

    The planned instant is always the last ``_`` separated segment so it can be
    recovered from dedup keys later on.
    """
    return f"{station_code}_{line}_{destination}_{planned_ms or 0}"
