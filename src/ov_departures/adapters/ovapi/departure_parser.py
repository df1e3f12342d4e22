"""Parser for OV API stop area responses."""

import logging
from datetime import datetime
from typing import Any

from ov_departures.adapters.ovapi.constants import (
    DEFAULT_TRANSPORT_TYPE,
    DISPLAY_TIMEZONE,
    STATUS_MAP,
    TRANSPORT_TYPE_MAP,
)
from ov_departures.adapters.ovapi.time_normalizer import (
    format_clock_time,
    parse_ovapi_datetime,
    to_epoch_millis,
)
from ov_departures.domain.models.departure import Departure, build_departure_uid, round_half_up
from ov_departures.domain.models.stop_area import StopArea

logger = logging.getLogger(__name__)


class DepartureParser:
    """Parses OV API ``Passes`` records into Departure objects."""

    @staticmethod
    def parse_stop_area_departures(
        stop_area_code: str,
        stop_data: dict[str, Any],
        timezone: str = DISPLAY_TIMEZONE,
    ) -> list[Departure]:
        """Parse all passes of all sub-stops of a stop area.

        Passed departures and departures without any usable time are dropped.

        Args:
            stop_area_code: The stop area the passes belong to.
            stop_data: Mapping of sub-stop code to sub-stop record.
            timezone: IANA timezone for the ``HH:MM`` display fields.

        Returns:
            Departures sorted ascending by timestamp.
        """
        departures: list[Departure] = []

        for sub_stop in stop_data.values():
            if not isinstance(sub_stop, dict):
                continue
            passes = sub_stop.get("Passes") or {}
            if not isinstance(passes, dict):
                continue

            for raw in passes.values():
                if not isinstance(raw, dict):
                    continue
                departure = DepartureParser._parse_departure(stop_area_code, raw, timezone)
                if departure:
                    departures.append(departure)

        departures.sort(key=lambda d: d.timestamp)
        return departures

    @staticmethod
    def _calculate_delay(planned: datetime | None, expected: datetime | None) -> int:
        """Delay in whole minutes, 0 when either side is unknown."""
        if planned is None or expected is None:
            return 0
        return round_half_up((expected - planned).total_seconds() / 60)

    @staticmethod
    def _parse_departure(
        stop_area_code: str, raw: dict[str, Any], timezone: str
    ) -> Departure | None:
        """Parse a single pass record, or None when it must be skipped."""
        try:
            planned = parse_ovapi_datetime(raw.get("TargetDepartureTime"))
            expected = parse_ovapi_datetime(raw.get("ExpectedDepartureTime"))
            planned_ms = to_epoch_millis(planned) if planned else 0
            expected_ms = to_epoch_millis(expected) if expected else 0

            status = DepartureParser._map_status(raw.get("TripStopStatus"))
            timestamp = expected_ms or planned_ms
            if status == "passed" or timestamp == 0:
                return None

            line = str(raw.get("LinePublicNumber") or "")
            destination = str(raw.get("DestinationName50") or raw.get("DestinationName") or "")

            return Departure(
                line=line,
                destination=destination,
                status=status,
                planned_time=format_clock_time(planned, timezone) if planned else "",
                expected_time=format_clock_time(expected, timezone) if expected else "",
                delay_minutes=DepartureParser._calculate_delay(planned, expected),
                transport_type=DepartureParser._map_transport_type(raw.get("TransportType")),
                operator=str(raw.get("OperatorCode") or ""),
                timestamp=timestamp,
                uid=build_departure_uid(stop_area_code, line, destination, planned_ms),
            )
        except Exception as e:
            logger.warning(f"Error parsing departure for {stop_area_code}: {e}")
            return None

    @staticmethod
    def _map_status(status: Any) -> str:
        """Map TripStopStatus to a normalized status."""
        return STATUS_MAP.get(str(status or "").upper(), "unknown")

    @staticmethod
    def _map_transport_type(transport_type: Any) -> str:
        """Map TransportType to a normalized transport type."""
        return TRANSPORT_TYPE_MAP.get(str(transport_type or "").lower(), DEFAULT_TRANSPORT_TYPE)


def parse_stop_areas(data: dict[str, Any]) -> list[StopArea]:
    """Parse the stop area directory, preserving upstream order."""
    stop_areas = []
    for record in data.values():
        if not isinstance(record, dict):
            continue
        stop_areas.append(
            StopArea(
                code=str(record.get("StopAreaCode") or ""),
                name=str(record.get("TimingPointName") or ""),
                town=str(record.get("TimingPointTown") or ""),
            )
        )
    return stop_areas
