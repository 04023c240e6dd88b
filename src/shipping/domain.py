"""Shipping bounded context — Zones, rates and free-shipping quotes.

Resolves a destination address to a configured rate zone, prices the package
with the zone's flat or weight-tiered strategy, and applies the cart-subtotal
free-shipping policy. Zones and the threshold are read-only configuration.
"""

import structlog
from protean.domain import Domain

shipping = Domain(name="shipping")

logger = structlog.get_logger(__name__)
