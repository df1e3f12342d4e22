"""Protocol for trigger polling."""

from typing import Protocol


class TriggerPollerProtocol(Protocol):
    """Protocol for running trigger checks on a fixed interval."""

    async def start(self) -> None:
        """Start the trigger poller."""
        ...

    async def stop(self) -> None:
        """Stop the trigger poller."""
        ...
