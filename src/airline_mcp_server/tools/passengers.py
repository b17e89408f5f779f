"""Lookup of passengers booked on a disrupted flight."""

from __future__ import annotations

import logging

from pydantic import Field

from airline_mcp.errors import MCPError, raise_mcp_error
from airline_mcp.tools import ToolDefinition, ToolOutput, ToolParameters
from airline_mcp_server.config import FLIGHT_BOOKINGS_INDEX
from airline_mcp_server.store import Item, Store, StoreError
from airline_mcp_server.tools.common import database_error, tier_rank

logger = logging.getLogger(__name__)


class AffectedPassengersParams(ToolParameters):
    """Parameters for get_affected_passengers."""

    flight_number: str = Field(min_length=1, description="Flight number (e.g., LH441)")


def _fetch_passenger(store: Store, booking: Item) -> Item | None:
    key = {
        "PassengerId": booking.get("PassengerId"),
        "BookingReference": booking.get("BookingReference"),
    }
    try:
        return store.get(store.settings.tables.passengers, key)
    except StoreError as error:
        logger.warning(
            "Skipping passenger %s: %s", key["PassengerId"], error.message
        )
        return None


def get_affected_passengers_tool(store: Store) -> ToolDefinition:
    """Create the get_affected_passengers tool."""
    tables = store.settings.tables

    def handler(params: AffectedPassengersParams) -> ToolOutput:
        try:
            bookings = store.query(
                tables.bookings,
                {"FlightNumber": params.flight_number},
                index=FLIGHT_BOOKINGS_INDEX,
            )
            passengers = [
                passenger
                for passenger in (_fetch_passenger(store, b) for b in bookings)
                if passenger is not None
            ]
            # sorted() is stable, so equal tiers keep booking order
            passengers = sorted(
                passengers,
                key=lambda p: tier_rank(p.get("FrequentFlyerTier")),
                reverse=True,
            )
            return ToolOutput(
                summary=(
                    f"Found {len(passengers)} passengers on flight "
                    f"{params.flight_number}:"
                ),
                data=passengers,
            )
        except StoreError as error:
            raise database_error(store, error, tables.bookings) from error
        except MCPError as error:
            raise error
        except Exception as exc:  # pragma: no cover - defensive path
            raise_mcp_error(
                "PassengerLookupError", "Failed to fetch affected passengers", str(exc)
            )

    return ToolDefinition(
        name="get_affected_passengers",
        description="Get passengers affected by a specific flight delay",
        parameters_model=AffectedPassengersParams,
        handler=handler,
    )
