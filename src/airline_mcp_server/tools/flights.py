"""Flight status tools: delay lookup and alternative-flight search."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Literal

from pydantic import Field

from airline_mcp.errors import MCPError, raise_mcp_error
from airline_mcp.tools import ToolDefinition, ToolOutput, ToolParameters
from airline_mcp_server.store import Item, Store, StoreError
from airline_mcp_server.tools.common import (
    PassengerTier,
    database_error,
    is_delayed_status,
    is_on_time_status,
    normalized_status,
)

logger = logging.getLogger(__name__)

Severity = Literal["minor", "major", "severe", "all"]

ESTIMATED_PASSENGERS_PER_FLIGHT = 150
MAX_ALTERNATIVES = 5

RECOMMENDATION_REASONS: dict[str, str] = {
    "senator": "Premium service prioritized for Senator status",
    "frequent_traveler": "Earliest available departure for frequent traveler",
}


class CheckFlightDelaysParams(ToolParameters):
    """Parameters for check_flight_delays."""

    airport: str = Field(
        default="FRA", description="Airport code (default: FRA), or 'all'"
    )
    severity: Severity = Field(
        default="all",
        description=(
            "Delay severity: minor (30-60min), major (60-120min), "
            "severe (120min+, cancelled, diverted)"
        ),
    )


class FindAlternativeFlightsParams(ToolParameters):
    """Parameters for find_alternative_flights."""

    origin: str = Field(min_length=1, description="Origin airport code")
    destination: str = Field(min_length=1, description="Destination airport code")
    passenger_tier: PassengerTier = Field(
        default="regular", description="Passenger status level"
    )
    departure_preference: Literal["earliest", "same_day", "flexible"] | None = Field(
        default=None, description="Preferred departure timing"
    )


def _delay_minutes(flight: Item) -> float:
    value = flight.get("DelayMinutes")
    if isinstance(value, bool):
        return 0
    if isinstance(value, str):
        # some feeds store minutes as text
        try:
            return float(value.strip())
        except ValueError:
            return 0
    return value if isinstance(value, (int, float)) else 0


def has_genuine_delay(flight: Item) -> bool:
    """Return whether a flight is really disrupted, not merely listed."""
    return _delay_minutes(flight) > 0 or is_delayed_status(flight.get("Status"))


def matches_severity(flight: Item, severity: Severity) -> bool:
    """Return whether a disrupted flight falls into the ``severity`` bucket."""
    if not has_genuine_delay(flight):
        return False
    if severity == "all":
        return True
    minutes = _delay_minutes(flight)
    # cancelled and diverted flights are severe whatever their delay minutes
    severe = minutes > 120 or normalized_status(flight.get("Status")) in (
        "cancelled",
        "diverted",
    )
    if severity == "severe":
        return severe
    if severity == "minor":
        return not severe and 30 <= minutes <= 60
    return not severe and 60 < minutes <= 120


def _departure_sort_key(flight: Item) -> tuple[int, datetime]:
    raw = flight.get("ScheduledDepartureTime")
    if isinstance(raw, str):
        try:
            parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
        except ValueError:
            parsed = None
        if parsed is not None:
            if parsed.tzinfo is None:
                parsed = parsed.replace(tzinfo=timezone.utc)
            return (0, parsed)
    return (1, datetime.max.replace(tzinfo=timezone.utc))


def _project_delay(flight: Item) -> dict[str, Any]:
    return {
        "flightNumber": flight.get("FlightNumber"),
        "origin": flight.get("Origin"),
        "destination": flight.get("Destination"),
        "status": flight.get("Status"),
        "delayMinutes": flight.get("DelayMinutes"),
        "reason": flight.get("DelayReason"),
        "scheduledDeparture": flight.get("ScheduledDepartureTime"),
        "estimatedDeparture": flight.get("EstimatedDepartureTime"),
    }


def check_flight_delays_tool(store: Store) -> ToolDefinition:
    """Create the check_flight_delays tool."""
    flights_table = store.settings.tables.flights

    def handler(params: CheckFlightDelaysParams) -> ToolOutput:
        try:
            filters = {"Origin": params.airport} if params.airport != "all" else None
            flights = [
                flight
                for flight in store.scan(flights_table, filters)
                if matches_severity(flight, params.severity)
            ]
            logger.debug(
                "Found %d delayed/disrupted flights at %s (severity=%s)",
                len(flights),
                params.airport,
                params.severity,
            )
            if not flights:
                return ToolOutput(
                    summary=(
                        "No delayed, cancelled, or diverted flights found at "
                        f"{params.airport}. Checked the Status field for "
                        "delay-related statuses. This could mean:\n"
                        '- All flights are on time (Status: "on_time")\n'
                        "- No flights in this severity range\n"
                        "- No flights scheduled from this airport"
                    )
                )
            return ToolOutput(
                summary=(
                    f"Found {len(flights)} delayed/disrupted flights at "
                    f"{params.airport} (based on the Status field):"
                ),
                data={
                    "total_delays": len(flights),
                    # rough estimate, not occupancy data
                    "affected_passengers": len(flights)
                    * ESTIMATED_PASSENGERS_PER_FLIGHT,
                    "flights": [_project_delay(flight) for flight in flights],
                },
            )
        except StoreError as error:
            raise database_error(store, error, flights_table) from error
        except MCPError as error:
            raise error
        except Exception as exc:  # pragma: no cover - defensive path
            raise_mcp_error("DelayLookupError", "Failed to check delays", str(exc))

    return ToolDefinition(
        name="check_flight_delays",
        description=(
            "Check the Status field for delayed, cancelled, or diverted flights "
            "and affected passengers at an airport hub"
        ),
        parameters_model=CheckFlightDelaysParams,
        handler=handler,
    )


def find_alternative_flights_tool(store: Store) -> ToolDefinition:
    """Create the find_alternative_flights tool."""
    flights_table = store.settings.tables.flights

    def handler(params: FindAlternativeFlightsParams) -> ToolOutput:
        try:
            candidates = store.scan(
                flights_table,
                {"Origin": params.origin, "Destination": params.destination},
            )
            flights = sorted(
                (f for f in candidates if is_on_time_status(f.get("Status"))),
                key=_departure_sort_key,
            )[:MAX_ALTERNATIVES]
            reason = RECOMMENDATION_REASONS.get(
                params.passenger_tier, "Available alternative flight"
            )
            return ToolOutput(
                summary=(
                    f"Found {len(flights)} alternative flights for "
                    f"{params.passenger_tier} passenger:"
                ),
                data={
                    "passenger_tier": params.passenger_tier,
                    "origin": params.origin,
                    "destination": params.destination,
                    "options": [
                        {
                            "flightNumber": flight.get("FlightNumber"),
                            "origin": flight.get("Origin"),
                            "destination": flight.get("Destination"),
                            "scheduledDeparture": flight.get("ScheduledDepartureTime"),
                            "scheduledArrival": flight.get("ScheduledArrivalTime"),
                            "aircraft": flight.get("AircraftType"),
                            "status": flight.get("Status"),
                            "availableSeats": flight.get("AvailableSeats"),
                            "recommendation_reason": reason,
                        }
                        for flight in flights
                    ],
                },
            )
        except StoreError as error:
            raise database_error(store, error, flights_table) from error
        except MCPError as error:
            raise error
        except Exception as exc:  # pragma: no cover - defensive path
            raise_mcp_error(
                "AlternativesError", "Failed to find alternative flights", str(exc)
            )

    return ToolDefinition(
        name="find_alternative_flights",
        description="Find alternative flights for rebooking based on passenger tier",
        parameters_model=FindAlternativeFlightsParams,
        handler=handler,
    )
