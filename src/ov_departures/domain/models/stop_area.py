"""Stop area domain model."""

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class StopArea:
    """Represents a named physical transit location."""

    code: str
    name: str
    town: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StopArea":
        """Rebuild a stop area from its serialized form."""
        return cls(
            code=str(data.get("code") or ""),
            name=str(data.get("name") or ""),
            town=str(data.get("town") or ""),
        )

    def to_dict(self) -> dict[str, str]:
        """Serialize for the durable key/value store."""
        return asdict(self)
