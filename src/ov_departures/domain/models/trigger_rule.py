"""Trigger rule configuration and the state sent with fired events."""

from dataclasses import dataclass
from enum import Enum
from typing import Any

DEFAULT_THRESHOLD_MINUTES = 5


class TriggerKind(str, Enum):
    """Kinds of departure triggers."""

    SOON = "soon"
    DELAYED = "delayed"

    @property
    def threshold_arg(self) -> str:
        """Name of the host argument that carries the threshold."""
        return "minutes" if self is TriggerKind.SOON else "min_delay"


class TriggerMode(str, Enum):
    """Whether a departure may fire repeatedly."""

    ONCE = "once"
    ALWAYS = "always"


def _nested_value(args: dict[str, Any], name: str, key: str) -> str:
    value = args.get(name)
    if isinstance(value, dict):
        return str(value.get(key) or "")
    return ""


@dataclass(frozen=True)
class TriggerRule:
    """One configured trigger instance, keyed by kind and argument set."""

    kind: TriggerKind
    station_id: str
    destination: str
    threshold_minutes: int
    trigger_mode: str

    @property
    def once(self) -> bool:
        """True when each departure may fire at most once."""
        return self.trigger_mode == TriggerMode.ONCE.value

    @classmethod
    def from_args(cls, kind: TriggerKind, args: dict[str, Any]) -> "TriggerRule":
        """Parse a host argument mapping.

        Expected shape::

            {"station": {"id": "..."}, "destination": {"name": "..."} | None,
             "minutes" | "min_delay": 5, "trigger_mode": "once" | "always"}
        """
        threshold = args.get(kind.threshold_arg) or DEFAULT_THRESHOLD_MINUTES
        return cls(
            kind=kind,
            station_id=_nested_value(args, "station", "id"),
            destination=_nested_value(args, "destination", "name"),
            threshold_minutes=int(threshold),
            trigger_mode=str(args.get("trigger_mode") or ""),
        )


@dataclass(frozen=True)
class TriggerState:
    """Matching state attached to a fired trigger event."""

    station_id: str
    destination: str
