"""Shipping cost calculation for a resolved zone.

Flat-rate zones never vary with package size. Weight-tiered zones bill the
base rate for the first weight unit and a surcharge for every started unit
after it:

    units     = ceil(weight / unit_grams)      (0 g → 0 units, billed as 1)
    surcharge = max(0, units - 1) × per_unit_rate
    total     = base_rate + surcharge

With 35,000 base, 5,000 per unit and 500 g units: up to 500 g costs 35,000,
501–1,000 g costs 40,000, 1,001–1,500 g costs 45,000.
"""

import math

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Integer

from shipping.domain import shipping
from shipping.zone.zone import PricingKind, PricingStrategy, ShippingZone


@shipping.value_object
class CostBreakdown:
    base_cost = Integer(required=True, min_value=0)
    weight_surcharge = Integer(default=0, min_value=0)
    total_cost = Integer(required=True, min_value=0)

    @invariant.post
    def total_must_add_up(self):
        if self.total_cost != self.base_cost + self.weight_surcharge:
            raise ValidationError({"total_cost": ["Total cost must equal base cost plus weight surcharge"]})


def billable_units(weight_grams: float, unit_grams: int) -> int:
    """Number of started weight units, never less than one."""
    if weight_grams < 0:
        raise ValueError(f"Package weight cannot be negative: {weight_grams}")
    return max(1, math.ceil(weight_grams / unit_grams))


def _flat_rate(pricing: PricingStrategy) -> CostBreakdown:
    return CostBreakdown(base_cost=pricing.amount, weight_surcharge=0, total_cost=pricing.amount)


def _weight_tiered(pricing: PricingStrategy, weight_grams: float) -> CostBreakdown:
    extra_units = billable_units(weight_grams, pricing.unit_grams) - 1
    surcharge = extra_units * pricing.per_unit_rate
    return CostBreakdown(
        base_cost=pricing.base_rate,
        weight_surcharge=surcharge,
        total_cost=pricing.base_rate + surcharge,
    )


class ShippingCostCalculator:
    def calculate_cost(self, zone: ShippingZone, weight_grams: float = 0) -> CostBreakdown:
        if weight_grams < 0:
            raise ValueError(f"Package weight cannot be negative: {weight_grams}")

        pricing = zone.pricing
        if pricing.kind == PricingKind.FLAT_RATE.value:
            return _flat_rate(pricing)
        if pricing.kind == PricingKind.WEIGHT_TIERED.value:
            return _weight_tiered(pricing, weight_grams)

        raise ValueError(f"Unsupported pricing kind: {pricing.kind}")


def calculate_cost(zone: ShippingZone, weight_grams: float = 0) -> CostBreakdown:
    return ShippingCostCalculator().calculate_cost(zone, weight_grams)
