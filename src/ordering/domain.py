"""Ordering bounded context — Order status workflow.

Decides which order status changes are allowed before the order-management
backend persists them. Holds no state of its own: the transition graph is
static configuration and every decision is a pure function of its input.
"""

import structlog
from protean.domain import Domain

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
