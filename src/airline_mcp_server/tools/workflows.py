"""Rebooking plans and human-agent escalation; neither touches the store."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from airline_mcp.errors import MCPError, raise_mcp_error
from airline_mcp.tools import ToolDefinition, ToolOutput, ToolParameters
from airline_mcp_server.tools.common import generate_id

APPROVAL_FARE_THRESHOLD = 500

IssueComplexity = Literal[
    "simple_rebooking",
    "complex_itinerary",
    "compensation_required",
    "vip_handling",
]

PRIORITIES: dict[str, str] = {
    "vip_handling": "HIGH",
    "compensation_required": "MEDIUM",
}

AGENT_TYPES: dict[str, str] = {
    "vip_handling": "Senior VIP Agent",
    "complex_itinerary": "Specialist Agent",
}

HANDOFF_REASONS: dict[str, str] = {
    "vip_handling": (
        "VIP customer requires personalized attention and premium service"
    ),
    "complex_itinerary": (
        "Multiple flights/complex routing requires specialist handling"
    ),
    "compensation_required": (
        "Customer may be entitled to compensation - requires policy expertise"
    ),
    "simple_rebooking": (
        "Standard rebooking that couldn't be completed automatically"
    ),
}

PREPARATION_NOTES = [
    "Customer is already aware of delay",
    "Alternative options have been presented",
    "Customer preferences are documented in profile",
]


class SelectedAlternative(BaseModel):
    """Flight the passenger picked, as returned by find_alternative_flights."""

    model_config = ConfigDict(extra="allow")

    flight_number: str
    origin: str | None = None
    destination: str | None = None
    fare_difference: float = 0.0


class RebookingWorkflowParams(ToolParameters):
    """Parameters for create_rebooking_workflow."""

    passenger_id: str = Field(min_length=1)
    selected_alternative: SelectedAlternative
    additional_services: list[str] = Field(
        default_factory=list,
        description="Additional services like lounge access, meal vouchers",
    )


class EscalationHandoffParams(ToolParameters):
    """Parameters for escalation_handoff."""

    passenger_id: str = Field(min_length=1)
    issue_complexity: IssueComplexity
    conversation_history: list[Any] = Field(default_factory=list)


def rebooking_steps(params: RebookingWorkflowParams) -> list[dict[str, Any]]:
    """Describe the five rebooking steps an agent would carry out."""
    alternative = params.selected_alternative
    services = params.additional_services
    return [
        {
            "step": 1,
            "action": "Cancel original booking",
            "details": (
                f"Cancel existing reservation for passenger {params.passenger_id}"
            ),
        },
        {
            "step": 2,
            "action": "Book alternative flight",
            "details": (
                f"Book {alternative.flight_number} from {alternative.origin} "
                f"to {alternative.destination}"
            ),
        },
        {
            "step": 3,
            "action": "Process seat assignment",
            "details": "Assign preferred seat based on passenger profile",
        },
        {
            "step": 4,
            "action": "Add additional services",
            "details": (
                f"Add services: {', '.join(services)}"
                if services
                else "No additional services requested"
            ),
        },
        {
            "step": 5,
            "action": "Send confirmation",
            "details": "Send booking confirmation and updated itinerary",
        },
    ]


def create_rebooking_workflow_tool() -> ToolDefinition:
    """Create the create_rebooking_workflow tool."""

    def handler(params: RebookingWorkflowParams) -> ToolOutput:
        try:
            return ToolOutput(
                data={
                    "workflow_id": generate_id("WF"),
                    "passenger_id": params.passenger_id,
                    "steps": rebooking_steps(params),
                    "estimated_completion": "5-10 minutes",
                    "requires_agent_approval": (
                        params.selected_alternative.fare_difference
                        > APPROVAL_FARE_THRESHOLD
                    ),
                }
            )
        except MCPError as error:
            raise error
        except Exception as exc:  # pragma: no cover - defensive path
            raise_mcp_error("WorkflowError", "Failed to build workflow", str(exc))

    return ToolDefinition(
        name="create_rebooking_workflow",
        description="Create step-by-step rebooking workflow for customer service",
        parameters_model=RebookingWorkflowParams,
        handler=handler,
    )


def escalation_handoff_tool() -> ToolDefinition:
    """Create the escalation_handoff tool."""

    def handler(params: EscalationHandoffParams) -> ToolOutput:
        complexity = params.issue_complexity
        history = params.conversation_history
        return ToolOutput(
            data={
                "escalation_id": generate_id("ESC"),
                "passenger_id": params.passenger_id,
                "issue_complexity": complexity,
                "priority": PRIORITIES.get(complexity, "NORMAL"),
                "context": {
                    "conversation_summary": (
                        f"Customer has had {len(history)} previous interactions"
                        if history
                        else "First contact"
                    ),
                    "recommended_agent_type": AGENT_TYPES.get(
                        complexity, "Standard Agent"
                    ),
                    "preparation_notes": list(PREPARATION_NOTES),
                },
                "handoff_reason": HANDOFF_REASONS.get(
                    complexity, "General customer service assistance required"
                ),
            }
        )

    return ToolDefinition(
        name="escalation_handoff",
        description="Prepare context for human agent handoff",
        parameters_model=EscalationHandoffParams,
        handler=handler,
    )
