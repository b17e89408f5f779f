"""Proactive delay messaging for customer service."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from airline_mcp.errors import MCPError, raise_mcp_error
from airline_mcp.tools import ToolDefinition, ToolOutput, ToolParameters
from airline_mcp_server.store import Item, Store, StoreError
from airline_mcp_server.tools.common import database_error

RECOMMENDED_ACTIONS = [
    "Present alternative flights",
    "Offer compensation if applicable",
    "Provide rebooking options",
]

SENATOR_TEMPLATE = """Dear Valued Senator Member,

I wanted to personally reach out about your flight {flight_number}.

Due to {reason}, your departure has been delayed by {delay_minutes} minutes. \
I've already identified several premium alternatives that prioritize your \
schedule and comfort preferences.

{alternatives_line}

As our way of apologizing for this inconvenience, I'll ensure you receive:
- Priority rebooking on your preferred flight
- Lounge access during your wait
- Meal vouchers for any extended delays

Would you like me to proceed with rebooking, or would you prefer to speak with \
our premium service team?

Best regards,
Lufthansa Customer Care"""

GENERIC_TEMPLATE = """Hello,

Your flight {flight_number} has been delayed by {delay_minutes} minutes due to \
{reason}.

I've found several alternative flights that can get you to your destination. \
You can:

1. Select from the alternatives I'll show you
2. Keep your original booking (new departure time: [calculated time])
3. Speak with our customer service team

Let me know your preference and I'll take care of the rest!

Safe travels,
Lufthansa"""


class DelayInfo(BaseModel):
    """Details of the delay the message refers to."""

    model_config = ConfigDict(extra="allow")

    flight_number: str
    reason: str = "operational reasons"
    delay_minutes: int = Field(ge=0)


class ProactiveMessageParams(ToolParameters):
    """Parameters for generate_proactive_message."""

    passenger_id: str = Field(min_length=1)
    delay_info: DelayInfo
    alternatives: list[Any] | None = None
    message_tone: Literal["apologetic", "solution_focused", "premium_service"] = (
        "solution_focused"
    )


def render_message(tier: str, delay_info: DelayInfo, has_alternatives: bool) -> str:
    """Fill the template for ``tier``; only senators get the premium wording."""
    if tier == "senator":
        return SENATOR_TEMPLATE.format(
            flight_number=delay_info.flight_number,
            reason=delay_info.reason,
            delay_minutes=delay_info.delay_minutes,
            alternatives_line=(
                "Your priority rebooking options:"
                if has_alternatives
                else "I'm currently securing the best alternatives for you."
            ),
        )
    return GENERIC_TEMPLATE.format(
        flight_number=delay_info.flight_number,
        reason=delay_info.reason,
        delay_minutes=delay_info.delay_minutes,
    )


def _find_passenger(store: Store, passenger_id: str) -> Item | None:
    matches = store.query(
        store.settings.tables.passengers, {"PassengerId": passenger_id}, limit=1
    )
    return matches[0] if matches else None


def generate_proactive_message_tool(store: Store) -> ToolDefinition:
    """Create the generate_proactive_message tool."""
    passengers_table = store.settings.tables.passengers

    def handler(params: ProactiveMessageParams) -> ToolOutput:
        try:
            passenger = _find_passenger(store, params.passenger_id)
            if passenger is None:
                return ToolOutput(summary=f"Passenger {params.passenger_id} not found")
            tier = passenger.get("FrequentFlyerTier") or "regular"
            payload: dict[str, Any] = {
                "passenger_id": params.passenger_id,
                "passenger_tier": tier,
                "message_type": "proactive_delay_notification",
                "message_tone": params.message_tone,
                "message": render_message(
                    tier, params.delay_info, params.alternatives is not None
                ),
                "recommended_actions": list(RECOMMENDED_ACTIONS),
            }
            if params.alternatives is not None:
                payload["alternatives"] = params.alternatives
            return ToolOutput(data=payload)
        except StoreError as error:
            raise database_error(store, error, passengers_table) from error
        except MCPError as error:
            raise error
        except Exception as exc:  # pragma: no cover - defensive path
            raise_mcp_error("MessageError", "Failed to generate message", str(exc))

    return ToolDefinition(
        name="generate_proactive_message",
        description=(
            "Generate personalized proactive message for delayed flight passengers"
        ),
        parameters_model=ProactiveMessageParams,
        handler=handler,
    )
