"""Condition, action and autocomplete handlers exposed to the host runtime."""

import logging
from typing import TYPE_CHECKING, Any

from ov_departures.application import rule_evaluator
from ov_departures.domain.clock import Clock, now_millis
from ov_departures.domain.models.autocomplete_item import AutocompleteItem
from ov_departures.domain.models.departure_info import DepartureInfo
from ov_departures.domain.models.trigger_rule import TriggerState

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from ov_departures.domain.ports import TransportClient


def trigger_matches_state(args: dict[str, Any], state: TriggerState) -> bool:
    """Run listener deciding whether a fired event applies to a configured instance.

    The station must match exactly. When both the instance and the event carry a
    destination, the event destination must contain the configured one.
    """
    station = args.get("station") or {}
    if station.get("id") != state.station_id:
        return False

    destination = (args.get("destination") or {}).get("name")
    if destination and state.destination:
        return destination.lower() in state.destination.lower()
    return True


class FlowCardService:
    """On-demand departure checks backed by the fail-soft transport client."""

    def __init__(self, transport_client: "TransportClient", clock: Clock = now_millis) -> None:
        """Initialize with a transport client and the clock used for minutes-until."""
        self._transport_client = transport_client
        self._clock = clock

    async def next_departure_is(self, station_id: str, match_type: str, match_value: str) -> bool:
        """Condition: the next departure has the given line or destination."""
        departures = await self._transport_client.fetch_departures(station_id)
        return rule_evaluator.next_departure_matches(departures, match_type, match_value)

    async def departure_within_minutes(
        self, station_id: str, minutes: int, destination: str | None = None
    ) -> bool:
        """Condition: a matching departure leaves within the given minutes."""
        departures = await self._transport_client.fetch_departures(station_id)
        return rule_evaluator.any_departure_within(departures, minutes, destination, self._clock())

    async def is_delayed(
        self, station_id: str, minutes: int, destination: str | None = None
    ) -> bool:
        """Condition: a matching departure is delayed by more than the given minutes."""
        departures = await self._transport_client.fetch_departures(station_id)
        return rule_evaluator.any_departure_delayed(departures, minutes, destination)

    async def get_departure_info(
        self, station_id: str, destination: str | None = None
    ) -> DepartureInfo:
        """Action: describe the first matching departure, or an empty placeholder."""
        departures = await self._transport_client.fetch_departures(station_id)
        departure = rule_evaluator.first_matching_departure(departures, destination)
        if departure is None:
            logger.debug(f"No departure found for {station_id} (destination: {destination!r})")
            return DepartureInfo.empty()

        return DepartureInfo(
            line=departure.line,
            destination=departure.destination,
            minutes_until=self._transport_client.minutes_until(departure),
            delay_minutes=departure.delay_minutes,
            planned_time=departure.planned_time,
            expected_time=departure.expected_time,
            transport_type=departure.transport_type,
        )

    async def autocomplete_station(self, query: str) -> list[AutocompleteItem]:
        """Station argument autocomplete from free text."""
        stops = await self._transport_client.search_stops(query)
        return [AutocompleteItem(id=s.code, name=s.name, description=s.town) for s in stops]

    async def autocomplete_destination(
        self, query: str, station_id: str | None
    ) -> list[AutocompleteItem]:
        """Destination argument autocomplete for the selected station."""
        if not station_id:
            return []

        destinations = await self._transport_client.list_destinations(station_id)
        if query:
            query_lower = query.lower()
            return [d for d in destinations if query_lower in d.name.lower()]
        return destinations
