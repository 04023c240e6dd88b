"""Pydantic API schemas for the Ordering domain."""

from pydantic import BaseModel


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------
class ValidateTransitionRequest(BaseModel):
    from_status: str
    to_status: str
    order_id: str | None = None


class ReplayWorkflowRequest(BaseModel):
    initial_status: str = "pending"
    statuses: list[str]


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------
class TransitionResultResponse(BaseModel):
    from_status: str
    to_status: str
    valid: bool
    reason: str


class StatusTransitionsResponse(BaseModel):
    status: str
    transitions_from: list[str]
    transitions_to: list[str]
    terminal: bool


class StatusChangeResponse(BaseModel):
    from_status: str
    to_status: str


class WorkflowReplayResponse(BaseModel):
    initial_status: str
    final_status: str
    invalid_transitions: list[StatusChangeResponse]
