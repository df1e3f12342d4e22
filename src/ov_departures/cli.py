"""CLI helpers for looking up OV stop areas and departures."""

import asyncio
import json
import sys
from typing import Any

import aiohttp

from ov_departures.adapters.config import AppConfig
from ov_departures.adapters.ovapi import OvApiTransportClient
from ov_departures.application import FlowCardService
from ov_departures.domain.models import Departure
from ov_departures.main import create_store
from ov_departures.main import main as run_service


def _format_departure_line(departure: Departure, minutes_until: int) -> str:
    """Format a departure as a single display line."""
    delay = f" (+{departure.delay_minutes})" if departure.delay_minutes > 0 else ""
    status = "" if departure.status == "planned" else f" [{departure.status}]"
    return (
        f"  {departure.expected_time:>5}{delay:<5} {departure.line:<6} "
        f"{departure.destination} - {minutes_until} min{status}"
    )


def _departure_to_cli_format(departure: Departure, minutes_until: int) -> dict[str, Any]:
    """Convert a departure to CLI JSON format."""
    return {
        "line": departure.line,
        "destination": departure.destination,
        "status": departure.status,
        "planned_time": departure.planned_time,
        "expected_time": departure.expected_time,
        "delay_minutes": departure.delay_minutes,
        "minutes_until": minutes_until,
        "transport_type": departure.transport_type,
        "operator": departure.operator,
    }


async def _handle_search_command(
    client: OvApiTransportClient, query: str, output_json: bool
) -> None:
    """Handle the search command."""
    results = await client.search_stops(query)

    if output_json:
        print(json.dumps([s.to_dict() for s in results], indent=2, ensure_ascii=False))
        return

    if not results:
        print(f"No stop areas found for '{query}'", file=sys.stderr)
        sys.exit(1)

    print(f"\nFound {len(results)} stop area(s):\n")
    for stop_area in results:
        print(f"  {stop_area.name} ({stop_area.town or 'Unknown'})")
        print(f"    Code: {stop_area.code}")
        print()


async def _handle_departures_command(
    client: OvApiTransportClient, station_code: str, limit: int, output_json: bool
) -> None:
    """Handle the departures command."""
    departures = await client.fetch_departures(station_code, limit)

    if output_json:
        results = [_departure_to_cli_format(d, client.minutes_until(d)) for d in departures]
        print(json.dumps(results, indent=2, ensure_ascii=False))
        return

    if not departures:
        print(f"No departures found for '{station_code}'", file=sys.stderr)
        sys.exit(1)

    print(f"\nNext {len(departures)} departure(s) from {station_code}:\n")
    for departure in departures:
        print(_format_departure_line(departure, client.minutes_until(departure)))


async def _handle_destinations_command(
    client: OvApiTransportClient, station_code: str, output_json: bool
) -> None:
    """Handle the destinations command."""
    destinations = await client.list_destinations(station_code)

    if output_json:
        print(json.dumps([d.to_dict() for d in destinations], indent=2, ensure_ascii=False))
        return

    if not destinations:
        print(f"No destinations found for '{station_code}'", file=sys.stderr)
        sys.exit(1)

    print(f"\nDestinations from {station_code}:\n")
    for destination in destinations:
        print(f"  {destination.name} ({destination.description})")


async def _handle_info_command(
    client: OvApiTransportClient, station_code: str, destination: str | None, output_json: bool
) -> None:
    """Handle the info command."""
    info = await FlowCardService(client).get_departure_info(station_code, destination)

    if output_json:
        print(json.dumps(info.to_dict(), indent=2, ensure_ascii=False))
        return

    if not info.line:
        print(f"No matching departure at '{station_code}'", file=sys.stderr)
        sys.exit(1)

    print("\nNext departure:")
    print(f"  Line: {info.line} ({info.transport_type})")
    print(f"  Destination: {info.destination}")
    print(f"  Planned: {info.planned_time}  Expected: {info.expected_time}")
    print(f"  Delay: {info.delay_minutes} min")
    print(f"  Leaves in: {info.minutes_until} min")


def _setup_argparse() -> Any:
    """Set up and configure argument parser."""
    import argparse

    parser = argparse.ArgumentParser(
        description="OV Departures (Dutch public transport) helper",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Search for stop areas
  ov-departures search "amsterdam centraal"

  # Show the next departures of a stop area
  ov-departures departures asdcs

  # List destinations served from a stop area
  ov-departures destinations asdcs

  # Show the next departure towards a destination
  ov-departures info asdcs --destination Utrecht

  # Run the trigger service with the configured [[triggers]]
  ov-departures run

API: https://v0.ovapi.nl (no auth)
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    search_parser = subparsers.add_parser("search", help="Search for stop areas")
    search_parser.add_argument("query", help="Stop name, town or code to search for")
    search_parser.add_argument("--json", action="store_true", help="Output as JSON")

    departures_parser = subparsers.add_parser("departures", help="Show upcoming departures")
    departures_parser.add_argument("station_code", help="Stop area code (e.g., asdcs)")
    departures_parser.add_argument(
        "--limit", type=int, default=10, help="Number of departures to show"
    )
    departures_parser.add_argument("--json", action="store_true", help="Output as JSON")

    destinations_parser = subparsers.add_parser(
        "destinations", help="List destinations served from a stop area"
    )
    destinations_parser.add_argument("station_code", help="Stop area code")
    destinations_parser.add_argument("--json", action="store_true", help="Output as JSON")

    info_parser = subparsers.add_parser("info", help="Show the next matching departure")
    info_parser.add_argument("station_code", help="Stop area code")
    info_parser.add_argument("--destination", help="Destination filter (substring)")
    info_parser.add_argument("--json", action="store_true", help="Output as JSON")

    subparsers.add_parser("run", help="Run the trigger service")

    return parser


async def _execute_command(args: Any) -> None:
    """Execute the appropriate command based on args."""
    if args.command == "run":
        await run_service()
        return

    config = AppConfig()
    async with aiohttp.ClientSession() as session:
        client = OvApiTransportClient.from_config(config, session, create_store(config))

        if args.command == "search":
            await _handle_search_command(client, args.query, args.json)
        elif args.command == "departures":
            await _handle_departures_command(client, args.station_code, args.limit, args.json)
        elif args.command == "destinations":
            await _handle_destinations_command(client, args.station_code, args.json)
        elif args.command == "info":
            await _handle_info_command(client, args.station_code, args.destination, args.json)


async def main() -> None:
    """Main CLI entry point."""
    parser = _setup_argparse()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        await _execute_command(args)
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def cli_main() -> None:
    """Synchronous entry point for the CLI command."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    cli_main()
