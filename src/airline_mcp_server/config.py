"""Store settings shared by both airline servers."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

DEFAULT_REGION = "us-east-1"


class TableNames(BaseModel):
    """Names of the DynamoDB tables the servers read and write."""

    model_config = ConfigDict(frozen=True)

    flights: str = "Flights"
    passengers: str = "Passengers"
    bookings: str = "Bookings"
    delay_notifications: str = "DelayNotifications"
    rebooking_options: str = "RebookingOptions"
    support_sessions: str = "CustomerSupportSessions"
    passenger_preferences: str = "PassengerPreferences"


FLIGHT_BOOKINGS_INDEX = "FlightBookingsIndex"


class StoreSettings(BaseModel):
    """Connection settings for the document store.

    Attributes:
        region: AWS region hosting the tables.
        endpoint_url: Optional endpoint override, e.g. DynamoDB Local.
        tables: Table names in use.
    """

    model_config = ConfigDict(frozen=True)

    region: str = DEFAULT_REGION
    endpoint_url: str | None = None
    tables: TableNames = TableNames()
