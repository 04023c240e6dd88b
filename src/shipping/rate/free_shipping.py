"""Free-shipping threshold policy and the final shipping quote.

A cart whose subtotal reaches the threshold ships free: the quote's total is
forced to zero however large the priced cost was. Below the threshold the
priced cost stands and the quote reports how much more the buyer needs to
spend. The comparison is inclusive, so a subtotal equal to the threshold
qualifies.
"""

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, Float, Integer, ValueObject

from shipping.domain import shipping
from shipping.rate.calculator import CostBreakdown
from shipping.zone.zone import ShippingZone

DEFAULT_FREE_SHIPPING_THRESHOLD = 500_000  # VND


@shipping.value_object
class ShippingQuote:
    """Shipping price surfaced to the buyer at checkout.

    ``zone`` is None when the destination is not shipped to. That case is
    distinct from ``free_shipping_applied``, which is a promotion on a
    supported destination.
    """

    zone = ValueObject(ShippingZone)
    base_cost = Integer(default=0, min_value=0)
    weight_surcharge = Integer(default=0, min_value=0)
    total_cost = Integer(default=0, min_value=0)
    free_shipping_applied = Boolean(default=False)
    amount_remaining_for_free_shipping = Float(default=0.0, min_value=0.0)

    @invariant.post
    def total_must_match_pricing(self):
        if self.free_shipping_applied:
            if self.total_cost != 0:
                raise ValidationError({"total_cost": ["Free shipping quotes must cost nothing"]})
            if self.amount_remaining_for_free_shipping:
                raise ValidationError(
                    {"amount_remaining_for_free_shipping": ["Nothing remains once free shipping applies"]}
                )
        elif self.total_cost != self.base_cost + self.weight_surcharge:
            raise ValidationError({"total_cost": ["Total cost must equal base cost plus weight surcharge"]})

    @property
    def is_supported(self) -> bool:
        return self.zone is not None

    @property
    def undiscounted_cost(self) -> int:
        return self.base_cost + self.weight_surcharge


class FreeShippingPolicy:
    def __init__(self, threshold: int = DEFAULT_FREE_SHIPPING_THRESHOLD):
        if threshold < 0:
            raise ValueError(f"Free shipping threshold cannot be negative: {threshold}")
        self.threshold = threshold

    def qualifies(self, subtotal) -> bool:
        return subtotal >= self.threshold

    def amount_remaining(self, subtotal):
        if self.qualifies(subtotal):
            return 0
        return self.threshold - subtotal

    def apply(self, cost, subtotal, zone: ShippingZone | None = None) -> ShippingQuote:
        """Turn a priced cost (a `CostBreakdown` or an earlier quote) into a quote."""
        if self.qualifies(subtotal):
            return ShippingQuote(
                zone=zone,
                base_cost=cost.base_cost,
                weight_surcharge=cost.weight_surcharge,
                total_cost=0,
                free_shipping_applied=True,
                amount_remaining_for_free_shipping=0,
            )

        return ShippingQuote(
            zone=zone,
            base_cost=cost.base_cost,
            weight_surcharge=cost.weight_surcharge,
            total_cost=cost.base_cost + cost.weight_surcharge,
            free_shipping_applied=False,
            amount_remaining_for_free_shipping=self.threshold - subtotal,
        )

    def progress_message(self, subtotal) -> str | None:
        """Cart nudge shown while the subtotal is below the threshold."""
        if self.qualifies(subtotal):
            return None
        return f"Mua thêm {format_vnd(self.amount_remaining(subtotal))} để được miễn phí vận chuyển!"


def apply_threshold(cost: CostBreakdown | ShippingQuote, subtotal, threshold: int) -> ShippingQuote:
    zone = cost.zone if isinstance(cost, ShippingQuote) else None
    return FreeShippingPolicy(threshold).apply(cost, subtotal, zone=zone)


def format_vnd(amount) -> str:
    """Format an amount the way the storefront prints prices: ``25.000 ₫``."""
    return f"{int(round(amount)):,} ₫".replace(",", ".")
