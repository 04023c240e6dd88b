"""Order statuses and the transition graph between them.

State Machine (8 states):
    pending → processing → shipped → completed → refunded
    pending/processing ⇄ on-hold
    {pending, processing, on-hold, failed} → cancelled → {pending, processing}
    {pending, on-hold} → failed → {pending, processing, cancelled}
    processing → {completed, refunded}

`refunded` is the only terminal status. The on-hold/processing and
cancelled/pending edges run both ways: held orders can be released and
cancelled orders can be reactivated.
"""

from collections.abc import Iterable, Mapping
from enum import Enum
from types import MappingProxyType

STATUS_PREFIX = "wc-"


class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    ON_HOLD = "on-hold"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"
    FAILED = "failed"

    @classmethod
    def parse(cls, value):
        """Return the status for a member or wire value, or None if unrecognised.

        The storefront backend stores statuses with a ``wc-`` prefix
        (``wc-on-hold``); the prefix is stripped before lookup.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None

        normalized = value.strip().lower()
        if normalized.startswith(STATUS_PREFIX):
            normalized = normalized[len(STATUS_PREFIX) :]

        try:
            return cls(normalized)
        except ValueError:
            return None


# Current status -> allowed next statuses, in display order
_VALID_TRANSITIONS = {
    OrderStatus.PENDING: (
        OrderStatus.PROCESSING,
        OrderStatus.ON_HOLD,
        OrderStatus.CANCELLED,
        OrderStatus.FAILED,
    ),
    OrderStatus.PROCESSING: (
        OrderStatus.SHIPPED,
        OrderStatus.COMPLETED,
        OrderStatus.ON_HOLD,
        OrderStatus.CANCELLED,
        OrderStatus.REFUNDED,
    ),
    OrderStatus.SHIPPED: (OrderStatus.COMPLETED, OrderStatus.REFUNDED),
    OrderStatus.ON_HOLD: (
        OrderStatus.PROCESSING,
        OrderStatus.PENDING,  # Hold released before payment
        OrderStatus.CANCELLED,
        OrderStatus.FAILED,
    ),
    OrderStatus.COMPLETED: (OrderStatus.REFUNDED,),
    OrderStatus.CANCELLED: (OrderStatus.PENDING, OrderStatus.PROCESSING),  # Reactivation
    OrderStatus.REFUNDED: (),  # Terminal
    OrderStatus.FAILED: (
        OrderStatus.PENDING,  # Payment retry
        OrderStatus.PROCESSING,
        OrderStatus.CANCELLED,
    ),
}


class StatusTransitionTable:
    """Read-only directed graph of allowed order status changes.

    Every status must appear as a key. Target order is preserved so that
    listings (admin dropdowns, API responses) stay stable.
    """

    def __init__(self, transitions: Mapping[OrderStatus, Iterable[OrderStatus]]):
        missing = [status.value for status in OrderStatus if status not in transitions]
        if missing:
            raise ValueError(f"Transition table is missing statuses: {', '.join(missing)}")

        edges = {}
        for status in OrderStatus:
            targets = []
            for target in transitions[status]:
                if not isinstance(target, OrderStatus):
                    raise ValueError(f"Invalid target status {target!r} for {status.value}")
                if target not in targets:
                    targets.append(target)
            edges[status] = tuple(targets)

        self._edges = MappingProxyType(edges)

    def __getitem__(self, status: OrderStatus) -> tuple[OrderStatus, ...]:
        return self._edges[status]

    def __contains__(self, status) -> bool:
        return status in self._edges

    def __iter__(self):
        return iter(self._edges)

    def __len__(self) -> int:
        return len(self._edges)

    def items(self):
        return self._edges.items()

    def allows(self, from_status: OrderStatus, to_status: OrderStatus) -> bool:
        return to_status in self._edges[from_status]

    def sources_of(self, status: OrderStatus) -> tuple[OrderStatus, ...]:
        """Statuses with an edge into ``status``, in declaration order."""
        return tuple(source for source, targets in self._edges.items() if status in targets)

    def terminal_statuses(self) -> tuple[OrderStatus, ...]:
        return tuple(status for status, targets in self._edges.items() if not targets)


DEFAULT_TRANSITION_TABLE = StatusTransitionTable(_VALID_TRANSITIONS)
