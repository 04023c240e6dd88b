"""Order workflow — the single entry point order-management actions call.

`OrderWorkflow.transition` validates a requested status change before the
caller commits it to the order store. Rejections are logged, the same way the
storefront flagged unusual status changes, and returned to the caller.

`OrderWorkflow.replay` walks a sequence of requested statuses from a starting
status, skipping and recording every step the graph does not allow.
"""

import structlog
from protean.fields import List, String, Text, ValueObject

from ordering.domain import ordering
from ordering.order.status import OrderStatus
from ordering.order.validator import OrderStatusValidator, TransitionResult

logger = structlog.get_logger(__name__)


@ordering.value_object
class StatusChange:
    """A single requested ``from → to`` step."""

    from_status = Text(required=True)
    to_status = Text(required=True)


@ordering.value_object
class WorkflowReplay:
    """Where a replayed sequence ended, and which steps were refused."""

    initial_status = String(required=True, max_length=50)
    final_status = String(required=True, max_length=50)
    invalid_transitions = List(content_type=ValueObject(StatusChange), default=list)

    @property
    def is_clean(self) -> bool:
        return not self.invalid_transitions


class OrderWorkflow:
    def __init__(self, validator: OrderStatusValidator | None = None):
        self.validator = validator or OrderStatusValidator()

    def transition(self, current_status, requested_status, order_id: str | None = None) -> TransitionResult:
        result = self.validator.validate_transition(current_status, requested_status)

        if not result.valid:
            logger.warning(
                "Order status transition rejected",
                order_id=order_id,
                from_status=result.from_status,
                to_status=result.to_status,
                reason=result.reason,
            )
        else:
            logger.debug(
                "Order status transition accepted",
                order_id=order_id,
                from_status=result.from_status,
                to_status=result.to_status,
            )

        return result

    def replay(self, initial_status, requested_statuses) -> WorkflowReplay:
        current = OrderStatus.parse(initial_status)
        if current is None:
            raise ValueError(f"Unknown order status: {initial_status}")
        initial = current

        invalid = []
        for requested in requested_statuses:
            result = self.validator.validate_transition(current, requested)
            if result.valid:
                current = OrderStatus(result.to_status)
            else:
                invalid.append(StatusChange(from_status=result.from_status, to_status=result.to_status))

        if invalid:
            logger.info(
                "Workflow replay finished with rejected steps",
                initial_status=initial.value,
                final_status=current.value,
                rejected=len(invalid),
            )

        return WorkflowReplay(
            initial_status=initial.value,
            final_status=current.value,
            invalid_transitions=invalid,
        )
