"""Protocol for one trigger evaluation pass."""

from typing import Protocol


class TriggerCheckerProtocol(Protocol):
    """Protocol for evaluating all configured triggers once."""

    async def check_triggers(self) -> None:
        """Run one poll tick."""
        ...
