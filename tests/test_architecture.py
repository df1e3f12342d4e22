"""Import boundaries between the trigger engine, the OV API adapter and the runtime."""

from pytest_archon import archrule


def test_domain_imports_nothing_outside_domain() -> None:
    """Models, ports and contracts are shared by every layer and depend on none of them."""
    (
        archrule("domain is self-contained")
        .match("ov_departures.domain*")
        .should_not_import("ov_departures.adapters*")
        .should_not_import("ov_departures.application*")
        .should_not_import("aiohttp*")
        .should_not_import("pydantic*")
        .check("ov_departures")
    )


def test_trigger_engine_only_sees_the_transport_port() -> None:
    """The engine and flow cards reach the OV API only through the TransportClient port."""
    (
        archrule("application uses ports")
        .match("ov_departures.application*")
        .should_not_import("ov_departures.adapters*")
        .should_not_import("aiohttp*")
        .check("ov_departures")
    )


def test_ovapi_adapter_stays_a_data_source() -> None:
    """Fetching and caching never reach into triggers, polling or the lifecycle."""
    (
        archrule("ovapi is a data source")
        .match("ov_departures.adapters.ovapi*", "ov_departures.adapters.cache*")
        .should_not_import("ov_departures.application*")
        .should_not_import("ov_departures.adapters.pollers*")
        .should_not_import("ov_departures.adapters.runtime*")
        .should_not_import("ov_departures.adapters.flow*")
        .check("ov_departures", only_direct_imports=True)
    )


def test_run_listener_is_injected_into_trigger_cards() -> None:
    """Configured trigger cards get trigger_matches_state from main instead of importing it."""
    (
        archrule("flow cards do not import the engine")
        .match(
            "ov_departures.adapters.flow*",
            "ov_departures.adapters.pollers*",
            "ov_departures.adapters.runtime*",
        )
        .should_not_import("ov_departures.application*")
        .check("ov_departures", only_direct_imports=True)
    )
