"""Tests for the OV API departure parser."""

from datetime import UTC, datetime
from typing import Any

import pytest

from ov_departures.adapters.ovapi.departure_parser import DepartureParser, parse_stop_areas
from ov_departures.adapters.ovapi.time_normalizer import to_epoch_millis
from ov_departures.domain.models import StopArea


def _pass(**overrides: Any) -> dict[str, Any]:
    record: dict[str, Any] = {
        "LinePublicNumber": "22",
        "DestinationName50": "Utrecht Centraal",
        "TargetDepartureTime": "2025-06-14T13:40:00",
        "ExpectedDepartureTime": "2025-06-14T13:42:00",
        "TripStopStatus": "DRIVING",
        "TransportType": "BUS",
        "OperatorCode": "GVB",
    }
    record.update(overrides)
    return record


def _stop_data(*passes: dict[str, Any]) -> dict[str, Any]:
    return {"30005002": {"Passes": {str(i): p for i, p in enumerate(passes)}}}


class TestParseStopAreaDepartures:
    """Tests for DepartureParser.parse_stop_area_departures."""

    def test_when_valid_pass_then_all_fields_are_mapped(self) -> None:
        """Given a driving bus pass, when parsing, then times, delay and identifiers are filled in."""
        departures = DepartureParser.parse_stop_area_departures("asdcs", _stop_data(_pass()))

        assert len(departures) == 1
        departure = departures[0]
        planned_ms = to_epoch_millis(datetime(2025, 6, 14, 11, 40, tzinfo=UTC))
        assert departure.line == "22"
        assert departure.destination == "Utrecht Centraal"
        assert departure.status == "planned"
        assert departure.planned_time == "13:40"
        assert departure.expected_time == "13:42"
        assert departure.delay_minutes == 2
        assert departure.transport_type == "bus"
        assert departure.operator == "GVB"
        assert departure.timestamp == planned_ms + 2 * 60 * 1000
        assert departure.uid == f"asdcs_22_Utrecht Centraal_{planned_ms}"

    def test_when_multiple_passes_then_sorted_by_timestamp(self) -> None:
        """Given passes across two sub-stops out of order, when parsing, then results are ascending."""
        stop_data = {
            "a": {"Passes": {"1": _pass(LinePublicNumber="late", ExpectedDepartureTime=None,
                                        TargetDepartureTime="2025-06-14T14:00:00")}},
            "b": {"Passes": {"2": _pass(LinePublicNumber="early", ExpectedDepartureTime=None,
                                        TargetDepartureTime="2025-06-14T13:10:00")}},
        }

        departures = DepartureParser.parse_stop_area_departures("asdcs", stop_data)

        assert [d.line for d in departures] == ["early", "late"]

    def test_when_only_planned_time_then_timestamp_uses_planned(self) -> None:
        """Given no expected time, when parsing, then the planned instant is the timestamp."""
        departures = DepartureParser.parse_stop_area_departures(
            "asdcs", _stop_data(_pass(ExpectedDepartureTime=None))
        )

        assert departures[0].timestamp == to_epoch_millis(datetime(2025, 6, 14, 11, 40, tzinfo=UTC))
        assert departures[0].expected_time == ""
        assert departures[0].delay_minutes == 0

    def test_when_only_expected_time_then_uid_uses_zero(self) -> None:
        """Given no planned time, when parsing, then the uid ends in 0."""
        departures = DepartureParser.parse_stop_area_departures(
            "asdcs", _stop_data(_pass(TargetDepartureTime=None))
        )

        assert departures[0].uid == "asdcs_22_Utrecht Centraal_0"
        assert departures[0].planned_time == ""

    def test_when_passed_or_timeless_then_skipped(self) -> None:
        """Given a passed pass and a pass without times, when parsing, then both are dropped."""
        departures = DepartureParser.parse_stop_area_departures(
            "asdcs",
            _stop_data(
                _pass(TripStopStatus="PASSED"),
                _pass(TargetDepartureTime=None, ExpectedDepartureTime=None),
                _pass(LinePublicNumber="keep"),
            ),
        )

        assert [d.line for d in departures] == ["keep"]

    def test_when_destination_name50_missing_then_falls_back(self) -> None:
        """Given only DestinationName, when parsing, then it is used as destination."""
        departures = DepartureParser.parse_stop_area_departures(
            "asdcs", _stop_data(_pass(DestinationName50=None, DestinationName="Centraal"))
        )

        assert departures[0].destination == "Centraal"

    def test_when_half_minute_delay_then_rounds_up(self) -> None:
        """Given a 2.5 minute delay, when parsing, then the delay rounds half up to 3."""
        departures = DepartureParser.parse_stop_area_departures(
            "asdcs", _stop_data(_pass(ExpectedDepartureTime="2025-06-14T13:42:30"))
        )

        assert departures[0].delay_minutes == 3

    def test_when_early_then_delay_is_negative(self) -> None:
        """Given an expected time before the planned time, when parsing, then the delay is negative."""
        departures = DepartureParser.parse_stop_area_departures(
            "asdcs", _stop_data(_pass(ExpectedDepartureTime="2025-06-14T13:38:00"))
        )

        assert departures[0].delay_minutes == -2

    def test_when_malformed_records_then_ignored(self) -> None:
        """Given non-mapping sub-stops and passes, when parsing, then they are skipped."""
        stop_data = {"x": "junk", "y": {"Passes": ["junk"]}, "z": {"Passes": {"1": 7}}}

        assert DepartureParser.parse_stop_area_departures("asdcs", stop_data) == []

    def test_when_custom_timezone_then_display_times_follow_it(self) -> None:
        """Given UTC as display timezone, when parsing, then times are shown in UTC."""
        departures = DepartureParser.parse_stop_area_departures(
            "asdcs", _stop_data(_pass()), timezone="UTC"
        )

        assert departures[0].planned_time == "11:40"
        assert departures[0].expected_time == "11:42"


class TestDepartureUid:
    """Departure identity across polls."""

    PAYLOAD = _stop_data(
        _pass(),
        _pass(
            TargetDepartureTime="2025-06-14T13:55:00",
            ExpectedDepartureTime="2025-06-14T13:55:00",
        ),
        _pass(DestinationName50="Utrecht Overvecht"),
        _pass(ExpectedDepartureTime="2025-06-14T13:50:00"),
    )

    def test_when_payload_parsed_twice_then_uids_are_identical(self) -> None:
        """Given the same upstream payload on two polls, when parsing both, then uids match one to one."""
        first = DepartureParser.parse_stop_area_departures("asdcs", self.PAYLOAD)
        second = DepartureParser.parse_stop_area_departures("asdcs", self.PAYLOAD)

        assert [d.uid for d in first] == [d.uid for d in second]

    def test_when_planned_time_or_destination_differs_then_uids_differ(self) -> None:
        """Given line 22 at two planned times and to two destinations, when parsing, then each uid is distinct."""
        departures = DepartureParser.parse_stop_area_departures("asdcs", self.PAYLOAD)
        uids = {d.uid for d in departures}

        # The last pass only differs in its expected time, so it shares the first uid
        assert len(departures) == 4
        assert len(uids) == 3

    def test_when_only_expected_time_changes_then_uid_is_kept(self) -> None:
        """Given a pass that gets delayed between polls, when parsing both, then the uid is unchanged."""
        on_time = DepartureParser.parse_stop_area_departures("asdcs", _stop_data(_pass()))
        delayed = DepartureParser.parse_stop_area_departures(
            "asdcs", _stop_data(_pass(ExpectedDepartureTime="2025-06-14T13:52:00"))
        )

        assert on_time[0].uid == delayed[0].uid
        assert delayed[0].delay_minutes == 12


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("PLANNED", "planned"),
        ("DRIVING", "planned"),
        ("ARRIVED", "planned"),
        ("CANCEL", "cancelled"),
        ("PASSED", "passed"),
        ("OFFROUTE", "unknown"),
        (None, "unknown"),
    ],
)
def test_map_status(raw: str | None, expected: str) -> None:
    """Given a TripStopStatus, when mapping, then the normalized status is returned."""
    assert DepartureParser._map_status(raw) == expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("BUS", "bus"),
        ("TRAM", "tram"),
        ("METRO", "metro"),
        ("TREIN", "train"),
        ("TRAIN", "train"),
        ("VEER", "ferry"),
        ("FERRY", "ferry"),
        ("BOAT", "bus"),
        (None, "bus"),
    ],
)
def test_map_transport_type(raw: str | None, expected: str) -> None:
    """Given a TransportType, when mapping, then the normalized type is returned."""
    assert DepartureParser._map_transport_type(raw) == expected


def test_parse_stop_areas_maps_directory_fields() -> None:
    """Given a directory payload, when parsing, then code, name and town are mapped in order."""
    data = {
        "asdcs": {
            "StopAreaCode": "asdcs",
            "TimingPointName": "Centraal Station",
            "TimingPointTown": "Amsterdam",
        },
        "bogus": "junk",
        "utcs": {"StopAreaCode": "utcs", "TimingPointName": "Centraal Station"},
    }

    result = parse_stop_areas(data)

    assert result == [
        StopArea(code="asdcs", name="Centraal Station", town="Amsterdam"),
        StopArea(code="utcs", name="Centraal Station", town=""),
    ]
