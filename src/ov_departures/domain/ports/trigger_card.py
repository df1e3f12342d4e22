"""Trigger card port exposed by the host automation runtime."""

from typing import Any, Protocol

from ov_departures.domain.models.trigger_rule import TriggerState


class TriggerCard(Protocol):
    """Port for one kind of host trigger."""

    async def get_argument_values(self) -> list[dict[str, Any]]:
        """Return the argument sets of every configured instance of this trigger."""
        ...

    async def trigger(self, tokens: dict[str, Any], state: TriggerState) -> None:
        """Fire the trigger with tokens and matching state."""
        ...
