"""Trigger card implementation for running without a host automation runtime."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from ov_departures.domain.models.trigger_rule import TriggerKind, TriggerState
from ov_departures.domain.ports.trigger_card import TriggerCard

logger = logging.getLogger(__name__)

RunListener = Callable[[dict[str, Any], TriggerState], bool]
EventListener = Callable[[TriggerKind, dict[str, Any], dict[str, Any]], Awaitable[None]]


class ConfiguredTriggerCard(TriggerCard):
    """Trigger card whose instances come from configuration.

    Like a host runtime, a fired event is delivered to every configured instance
    accepted by the run listener; the rest ignore it.
    """

    def __init__(
        self,
        kind: TriggerKind,
        argument_sets: list[dict[str, Any]],
        run_listener: RunListener,
    ) -> None:
        """Initialize the card.

        Args:
            kind: Trigger kind served by this card.
            argument_sets: Host-shaped argument mapping per configured instance.
            run_listener: Decides whether an event applies to an instance.
        """
        self.kind = kind
        self._argument_sets = list(argument_sets)
        self._run_listener = run_listener
        self._listeners: list[EventListener] = []

    def add_listener(self, listener: EventListener) -> None:
        """Register a coroutine called with (kind, args, tokens) for each delivery."""
        self._listeners.append(listener)

    async def get_argument_values(self) -> list[dict[str, Any]]:
        return list(self._argument_sets)

    async def trigger(self, tokens: dict[str, Any], state: TriggerState) -> None:
        for args in self._argument_sets:
            if not self._run_listener(args, state):
                continue

            logger.info(
                f"[{self.kind.value}] {tokens.get('line')} to {tokens.get('destination')} "
                f"at {state.station_id}: {self._describe(tokens)}"
            )
            for listener in self._listeners:
                try:
                    await listener(self.kind, args, tokens)
                except Exception as e:
                    logger.error(f"Trigger listener failed for {self.kind.value}: {e}")

    def _describe(self, tokens: dict[str, Any]) -> str:
        if self.kind is TriggerKind.SOON:
            return f"departs in {tokens.get('minutes_until')} min ({tokens.get('expected_time')})"
        return (
            f"delayed {tokens.get('delay_minutes')} min "
            f"(planned {tokens.get('planned_time')}, expected {tokens.get('expected_time')})"
        )
