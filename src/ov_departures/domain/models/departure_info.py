"""Departure info projection returned by the info action."""

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class DepartureInfo:
    """Flat view of a departure for on-demand lookups."""

    line: str
    destination: str
    minutes_until: int
    delay_minutes: int
    planned_time: str
    expected_time: str
    transport_type: str

    @classmethod
    def empty(cls) -> "DepartureInfo":
        """Placeholder used when no departure matches."""
        return cls(
            line="",
            destination="",
            minutes_until=0,
            delay_minutes=0,
            planned_time="",
            expected_time="",
            transport_type="",
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
