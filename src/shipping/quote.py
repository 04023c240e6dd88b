"""Shipping quote service — the single call the checkout makes.

Wires zone resolution, cost calculation and the free-shipping policy:

    address ─► ShippingZoneResolver ─► ShippingCostCalculator ─► FreeShippingPolicy ─► ShippingQuote

An address outside every configured zone yields a quote with no zone and no
cost. Callers must check ``quote.is_supported`` before showing a price.
"""

import structlog

from shipping import config
from shipping.rate.calculator import ShippingCostCalculator
from shipping.rate.free_shipping import FreeShippingPolicy, ShippingQuote
from shipping.rate.package import Package
from shipping.zone.resolver import ShippingZoneResolver
from shipping.zone.zone import Address

logger = structlog.get_logger(__name__)

_service_instance = None


class ShippingQuoteService:
    def __init__(
        self,
        resolver: ShippingZoneResolver,
        policy: FreeShippingPolicy,
        calculator: ShippingCostCalculator | None = None,
    ):
        self.resolver = resolver
        self.policy = policy
        self.calculator = calculator or ShippingCostCalculator()

    @classmethod
    def from_config(cls) -> "ShippingQuoteService":
        return cls(
            resolver=ShippingZoneResolver(config.default_zones()),
            policy=FreeShippingPolicy(config.free_shipping_threshold()),
        )

    @property
    def threshold(self) -> int:
        return self.policy.threshold

    def quote(self, address: Address, package: Package, subtotal) -> ShippingQuote:
        zone = self.resolver.resolve(address)
        if zone is None:
            logger.info(
                "Unsupported shipping destination",
                country=address.country,
                state=address.state,
            )
            return ShippingQuote(
                zone=None,
                base_cost=0,
                weight_surcharge=0,
                total_cost=0,
                free_shipping_applied=False,
                amount_remaining_for_free_shipping=0,
            )

        cost = self.calculator.calculate_cost(zone, package.weight_grams)
        quote = self.policy.apply(cost, subtotal, zone=zone)

        logger.debug(
            "Shipping quoted",
            zone=zone.name,
            weight_grams=package.weight_grams,
            subtotal=subtotal,
            total_cost=quote.total_cost,
            free_shipping_applied=quote.free_shipping_applied,
        )
        return quote


def get_quote_service() -> ShippingQuoteService:
    """Return the configured quote service (singleton)."""
    global _service_instance
    if _service_instance is None:
        _service_instance = ShippingQuoteService.from_config()
    return _service_instance


def reset_quote_service():
    """Reset the quote service singleton (useful for testing)."""
    global _service_instance
    _service_instance = None
