"""FastAPI routes for the Ordering domain.

Order-management tools call these before committing a status change to the
order store. A rejected transition is a normal 200 response with
``valid: false``; only an unknown status in a path is a 404.
"""

from fastapi import APIRouter, HTTPException

from ordering.api.schemas import (
    ReplayWorkflowRequest,
    StatusChangeResponse,
    StatusTransitionsResponse,
    TransitionResultResponse,
    ValidateTransitionRequest,
    WorkflowReplayResponse,
)
from ordering.order.status import OrderStatus
from ordering.order.workflow import OrderWorkflow

order_status_router = APIRouter(prefix="/orders", tags=["order-status"])

_workflow = OrderWorkflow()


@order_status_router.get("/statuses", response_model=list[StatusTransitionsResponse])
async def list_statuses() -> list[StatusTransitionsResponse]:
    """Every order status with its outgoing and incoming transitions."""
    return [_status_transitions(status) for status in OrderStatus]


@order_status_router.get("/statuses/{status}/transitions", response_model=StatusTransitionsResponse)
async def get_status_transitions(status: str) -> StatusTransitionsResponse:
    parsed = OrderStatus.parse(status)
    if parsed is None:
        raise HTTPException(status_code=404, detail=f"Unknown order status: {status}")
    return _status_transitions(parsed)


@order_status_router.post("/status-transitions/validate", response_model=TransitionResultResponse)
async def validate_transition(body: ValidateTransitionRequest) -> TransitionResultResponse:
    result = _workflow.transition(body.from_status, body.to_status, order_id=body.order_id)
    return TransitionResultResponse(
        from_status=result.from_status,
        to_status=result.to_status,
        valid=result.valid,
        reason=result.reason,
    )


@order_status_router.post("/status-transitions/replay", response_model=WorkflowReplayResponse)
async def replay_workflow(body: ReplayWorkflowRequest) -> WorkflowReplayResponse:
    if OrderStatus.parse(body.initial_status) is None:
        raise HTTPException(status_code=400, detail=f"Unknown order status: {body.initial_status}")

    replay = _workflow.replay(body.initial_status, body.statuses)
    return WorkflowReplayResponse(
        initial_status=replay.initial_status,
        final_status=replay.final_status,
        invalid_transitions=[
            StatusChangeResponse(from_status=change.from_status, to_status=change.to_status)
            for change in replay.invalid_transitions or []
        ],
    )


def _status_transitions(status: OrderStatus) -> StatusTransitionsResponse:
    validator = _workflow.validator
    return StatusTransitionsResponse(
        status=status.value,
        transitions_from=[target.value for target in validator.transitions_from(status)],
        transitions_to=[source.value for source in validator.transitions_to(status)],
        terminal=validator.is_terminal(status),
    )
