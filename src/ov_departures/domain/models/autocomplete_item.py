"""Autocomplete result item."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AutocompleteItem:
    """Entry offered by the station and destination autocomplete providers."""

    name: str
    description: str
    id: str | None = None

    def to_dict(self) -> dict[str, str]:
        result = {"name": self.name, "description": self.description}
        if self.id is not None:
            result["id"] = self.id
        return result
