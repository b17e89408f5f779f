"""Tracking records written by customer service."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import Field

from airline_mcp.errors import MCPError, raise_mcp_error
from airline_mcp.tools import ToolDefinition, ToolOutput, ToolParameters
from airline_mcp_server.store import Store, StoreError
from airline_mcp_server.tools.common import database_error, generate_id, utc_now

logger = logging.getLogger(__name__)


class DelayNotificationParams(ToolParameters):
    """Parameters for create_delay_notification."""

    passenger_id: str = Field(min_length=1)
    flight_number: str = Field(min_length=1)
    delay_minutes: int = Field(ge=0)
    notification_type: str = Field(
        default="email", description="Delivery channel, e.g. email, sms, push"
    )
    message_content: str = ""


class SupportSessionParams(ToolParameters):
    """Parameters for start_support_session."""

    passenger_id: str = Field(min_length=1)
    issue_type: str = Field(min_length=1, description="e.g. flight_delay, rebooking")
    agent_id: str = "ai_assistant"
    context: dict[str, Any] = Field(default_factory=dict)
    initial_message: str | None = None


def create_delay_notification_tool(store: Store) -> ToolDefinition:
    """Create the create_delay_notification tool."""
    table = store.settings.tables.delay_notifications

    def handler(params: DelayNotificationParams) -> ToolOutput:
        try:
            now = utc_now()
            record = {
                "NotificationId": generate_id("NOTIFY"),
                "PassengerId": params.passenger_id,
                "FlightNumber": params.flight_number,
                "DelayMinutes": params.delay_minutes,
                "NotificationType": params.notification_type,
                "MessageContent": params.message_content,
                "Status": "sent",
                "CreatedAt": now,
                "SentAt": now,
            }
            store.put(table, record)
            logger.info(
                "Created delay notification %s for passenger %s",
                record["NotificationId"],
                params.passenger_id,
            )
            return ToolOutput(
                summary="Delay notification created successfully:",
                data={
                    "notification_id": record["NotificationId"],
                    "passenger_id": params.passenger_id,
                    "flight_number": params.flight_number,
                    "delay_minutes": params.delay_minutes,
                    "notification_type": params.notification_type,
                    "message_content": params.message_content,
                    "status": record["Status"],
                    "created_at": now,
                },
            )
        except StoreError as error:
            raise database_error(store, error, table) from error
        except MCPError as error:
            raise error
        except Exception as exc:  # pragma: no cover - defensive path
            raise_mcp_error(
                "NotificationError", "Failed to create delay notification", str(exc)
            )

    return ToolDefinition(
        name="create_delay_notification",
        description="Record a delay notification sent to a passenger",
        parameters_model=DelayNotificationParams,
        handler=handler,
    )


def start_support_session_tool(store: Store) -> ToolDefinition:
    """Create the start_support_session tool."""
    table = store.settings.tables.support_sessions

    def handler(params: SupportSessionParams) -> ToolOutput:
        try:
            now = utc_now()
            messages = []
            if params.initial_message:
                messages.append(
                    {
                        "sender": params.agent_id,
                        "content": params.initial_message,
                        "timestamp": now,
                    }
                )
            record = {
                "SessionId": generate_id("SESSION"),
                "PassengerId": params.passenger_id,
                "AgentId": params.agent_id,
                "IssueType": params.issue_type,
                "Context": params.context,
                "Status": "active",
                "Messages": messages,
                "Resolution": None,
                "CreatedAt": now,
                "UpdatedAt": now,
            }
            store.put(table, record)
            logger.info(
                "Started support session %s for passenger %s",
                record["SessionId"],
                params.passenger_id,
            )
            return ToolOutput(
                summary="Customer support session started:",
                data={
                    "session_id": record["SessionId"],
                    "passenger_id": params.passenger_id,
                    "agent_id": params.agent_id,
                    "issue_type": params.issue_type,
                    "context": params.context,
                    "status": record["Status"],
                    "messages": messages,
                    "created_at": now,
                },
            )
        except StoreError as error:
            raise database_error(store, error, table) from error
        except MCPError as error:
            raise error
        except Exception as exc:  # pragma: no cover - defensive path
            raise_mcp_error(
                "SessionError", "Failed to start support session", str(exc)
            )

    return ToolDefinition(
        name="start_support_session",
        description="Open a customer support session record for a passenger",
        parameters_model=SupportSessionParams,
        handler=handler,
    )
