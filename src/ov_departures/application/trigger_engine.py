"""Trigger engine: periodic, deduplicated departure event detection."""

import logging
from typing import TYPE_CHECKING, Any

from ov_departures.application import rule_evaluator
from ov_departures.application.triggered_set import TriggeredSet, dedup_key
from ov_departures.domain.clock import Clock, now_millis
from ov_departures.domain.contracts.trigger_checker import TriggerCheckerProtocol
from ov_departures.domain.models.departure import Departure
from ov_departures.domain.models.trigger_rule import TriggerKind, TriggerRule, TriggerState

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from ov_departures.domain.ports import TransportClient, TriggerCard


class TriggerEngine(TriggerCheckerProtocol):
    """Evaluates every configured trigger instance against live departures.

    At most one event fires per instance per tick. In once-mode a departure
    fires a given trigger kind at most once over its lifetime.
    """

    def __init__(
        self,
        transport_client: "TransportClient",
        trigger_cards: "dict[TriggerKind, TriggerCard]",
        triggered: TriggeredSet | None = None,
        departures_limit: int = 10,
        clock: Clock = now_millis,
    ) -> None:
        """Initialize the engine.

        Args:
            transport_client: Fail-soft source of departures.
            trigger_cards: Host trigger card per trigger kind.
            triggered: Dedup state; a fresh one is created if omitted.
            departures_limit: Number of upcoming departures evaluated per instance.
            clock: Millisecond clock for minutes-until and cleanup.
        """
        self._transport_client = transport_client
        self._trigger_cards = trigger_cards
        self.triggered = triggered if triggered is not None else TriggeredSet()
        self._departures_limit = departures_limit
        self._clock = clock

    async def check_triggers(self) -> None:
        """Run one poll tick over all trigger kinds, then purge stale dedup keys."""
        for kind in TriggerKind:
            card = self._trigger_cards.get(kind)
            if card is None:
                continue
            try:
                argument_sets = await card.get_argument_values()
            except Exception as e:
                logger.error(f"Error listing {kind.value} trigger instances: {e}")
                continue

            for args in argument_sets:
                try:
                    await self.check_rule(TriggerRule.from_args(kind, args), card)
                except Exception as e:
                    logger.error(f"Error checking {kind.value} trigger {args!r}: {e}")

        removed = self.triggered.purge(self._clock())
        if removed:
            logger.debug(f"Cleaned up {removed} triggered departure(s)")

    async def check_rule(self, rule: TriggerRule, card: "TriggerCard") -> bool:
        """Evaluate one trigger instance and fire for the first eligible departure.

        Returns:
            True if an event was fired.
        """
        if not rule.station_id:
            return False

        departures = await self._transport_client.fetch_departures(
            rule.station_id, self._departures_limit
        )
        now = self._clock()
        candidates = self._qualifying_departures(rule, departures, now)

        for departure in candidates:
            key = dedup_key(rule.kind, departure.uid)
            already_triggered = (rule.kind, key) in self.triggered
            if rule.once and already_triggered:
                continue

            # Recorded before awaiting so an interleaved evaluation cannot fire it again
            self.triggered.add(rule.kind, key)
            state = TriggerState(station_id=rule.station_id, destination=departure.destination)
            try:
                await card.trigger(self._build_tokens(rule.kind, departure, now), state)
            except Exception:
                if not already_triggered:
                    self.triggered.discard(rule.kind, key)
                raise
            logger.info(
                f"Fired {rule.kind.value} trigger for line {departure.line} "
                f"to {departure.destination} at {rule.station_id}"
            )
            return True

        return False

    @staticmethod
    def _qualifying_departures(
        rule: TriggerRule, departures: list[Departure], now_ms: int
    ) -> list[Departure]:
        matching = rule_evaluator.filter_by_destination(departures, rule.destination)
        if rule.kind is TriggerKind.SOON:
            return rule_evaluator.departures_due_within(matching, rule.threshold_minutes, now_ms)
        return rule_evaluator.departures_delayed_beyond(matching, rule.threshold_minutes)

    @staticmethod
    def _build_tokens(kind: TriggerKind, departure: Departure, now_ms: int) -> dict[str, Any]:
        tokens: dict[str, Any] = {
            "line": departure.line,
            "destination": departure.destination,
        }
        if kind is TriggerKind.SOON:
            tokens["minutes_until"] = departure.minutes_until(now_ms)
        else:
            tokens["delay_minutes"] = departure.delay_minutes
        tokens["planned_time"] = departure.planned_time
        tokens["expected_time"] = departure.expected_time
        return tokens
