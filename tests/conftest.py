"""Shared test fixtures."""

from __future__ import annotations

import pytest

from airline_mcp_server.store import StoreError
from tests.fakes import InMemoryStore


@pytest.fixture()
def anyio_backend() -> str:
    """Run anyio-marked tests on asyncio, the backend the FastMCP client needs."""
    return "asyncio"


@pytest.fixture()
def store() -> InMemoryStore:
    """Provide an empty in-memory store."""
    return InMemoryStore()


@pytest.fixture()
def unreachable_store() -> InMemoryStore:
    """Provide a store whose every call fails like an unreachable endpoint."""
    broken = InMemoryStore()
    broken.failure = StoreError(
        "Could not connect to the endpoint URL",
        error_code="EndpointConnectionError",
        table="Flights",
        operation="scan",
    )
    return broken


@pytest.fixture()
def flights_store(store: InMemoryStore) -> InMemoryStore:
    """Provide a store seeded with a representative mix of FRA flights."""
    store.seed(
        "Flights",
        {
            "FlightNumber": "LH400",
            "Origin": "FRA",
            "Destination": "JFK",
            "Status": "DELAYED",
            "DelayMinutes": 45,
            "DelayReason": "weather",
            "ScheduledDepartureTime": "2024-06-01T10:00:00Z",
            "EstimatedDepartureTime": "2024-06-01T10:45:00Z",
        },
        {
            "FlightNumber": "LH401",
            "Origin": "FRA",
            "Destination": "JFK",
            "Status": "delayed",
            "DelayMinutes": 90,
            "DelayReason": "crew",
        },
        {
            "FlightNumber": "LH402",
            "Origin": "FRA",
            "Destination": "ORD",
            "Status": "delayed",
            "DelayMinutes": 180,
        },
        {
            "FlightNumber": "LH403",
            "Origin": "FRA",
            "Destination": "LHR",
            "Status": "Cancelled",
            "DelayMinutes": 0,
        },
        {
            "FlightNumber": "LH404",
            "Origin": "FRA",
            "Destination": "CDG",
            "Status": "diverted",
        },
        {
            "FlightNumber": "LH405",
            "Origin": "FRA",
            "Destination": "MUC",
            "Status": "on_time",
            "DelayMinutes": 0,
        },
        {
            "FlightNumber": "LH406",
            "Origin": "FRA",
            "Destination": "VIE",
            "Status": "delayed",
            "DelayMinutes": 15,
        },
        {
            "FlightNumber": "LH900",
            "Origin": "MUC",
            "Destination": "FRA",
            "Status": "delayed",
            "DelayMinutes": 50,
        },
    )
    return store
