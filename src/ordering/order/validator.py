"""Order status validator — accept or reject a proposed status change.

The validator is a pure decision function over a `StatusTransitionTable`.
A rejected transition is an ordinary `TransitionResult`, never an exception,
so order-management callers can surface the reason to the user.
"""

from protean.fields import Boolean, Text

from ordering.domain import ordering
from ordering.order.status import DEFAULT_TRANSITION_TABLE, OrderStatus, StatusTransitionTable


@ordering.value_object
class TransitionResult:
    """Outcome of validating a single ``from → to`` status change."""

    from_status = Text()
    to_status = Text()
    valid = Boolean(default=False)
    reason = Text(required=True)


# Unrecognised input is echoed back shortened
_MAX_LABEL_LENGTH = 50


def _label(value) -> str:
    if isinstance(value, OrderStatus):
        return value.value

    text = "" if value is None else str(value)
    if not text.strip():
        return repr(text)
    if len(text) > _MAX_LABEL_LENGTH:
        return text[: _MAX_LABEL_LENGTH - 3] + "..."
    return text


class OrderStatusValidator:
    def __init__(self, table: StatusTransitionTable = DEFAULT_TRANSITION_TABLE):
        self._table = table

    @property
    def table(self) -> StatusTransitionTable:
        return self._table

    def validate_transition(self, from_status, to_status) -> TransitionResult:
        current = OrderStatus.parse(from_status)
        requested = OrderStatus.parse(to_status)

        if current is None or requested is None:
            unknown = from_status if current is None else to_status
            return TransitionResult(
                from_status=_label(from_status),
                to_status=_label(to_status),
                valid=False,
                reason=f"Unknown order status: {_label(unknown)}",
            )

        if current == requested:
            return TransitionResult(
                from_status=current.value,
                to_status=requested.value,
                valid=False,
                reason="Status unchanged - not a valid transition",
            )

        if self._table.allows(current, requested):
            return TransitionResult(
                from_status=current.value,
                to_status=requested.value,
                valid=True,
                reason=f"Transition from {current.value} to {requested.value} is allowed",
            )

        return TransitionResult(
            from_status=current.value,
            to_status=requested.value,
            valid=False,
            reason=f"Cannot transition from {current.value} to {requested.value}",
        )

    def is_valid_transition(self, from_status, to_status) -> bool:
        return self.validate_transition(from_status, to_status).valid

    def transitions_from(self, status) -> tuple[OrderStatus, ...]:
        """Statuses reachable in one step from ``status`` (empty when terminal)."""
        return self._table[self._require(status)]

    def transitions_to(self, status) -> tuple[OrderStatus, ...]:
        """Statuses that may move directly into ``status``."""
        return self._table.sources_of(self._require(status))

    def is_terminal(self, status) -> bool:
        return len(self.transitions_from(status)) == 0

    @staticmethod
    def _require(status) -> OrderStatus:
        parsed = OrderStatus.parse(status)
        if parsed is None:
            raise ValueError(f"Unknown order status: {_label(status)}")
        return parsed
