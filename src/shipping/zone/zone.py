"""Shipping zone value objects.

A zone maps a country, and optionally one state of that country, to a price
strategy. A zone whose state code is the wildcard ``*`` covers every state of
its country that has no zone of its own.

Pricing is a tagged variant: a `PricingStrategy` is either a flat rate or a
weight-tiered rate, selected by its ``kind``. Amounts are integers in the
currency's minor unit (VND has no subdivision).
"""

from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Integer, String, ValueObject

from shipping.domain import shipping

WILDCARD = "*"


def normalize_code(code: str | None) -> str:
    """Comparable form of a country or state code."""
    return (code or "").strip().upper()


class PricingKind(Enum):
    FLAT_RATE = "flat_rate"
    WEIGHT_TIERED = "weight_tiered"


@shipping.value_object
class Address:
    """Destination address supplied by the cart. Only country and state are matched."""

    country = String(required=True, max_length=100)
    state = String(max_length=100)
    city = String(max_length=100)
    postcode = String(max_length=20)


@shipping.value_object
class ZoneMatchRule:
    """Country/state location a zone applies to.

    Accepts the storefront's combined location notation, so
    ``ZoneMatchRule.parse("VN:SG")`` and ``ZoneMatchRule.parse("VN")``
    describe a state zone and a country-wide zone respectively.
    """

    country_code = String(required=True, max_length=2)
    state_code = String(max_length=50, default=WILDCARD)

    @classmethod
    def parse(cls, location: str) -> "ZoneMatchRule":
        country, _, state = location.partition(":")
        return cls(country_code=country.strip(), state_code=state.strip() or WILDCARD)

    @property
    def country_key(self) -> str:
        return normalize_code(self.country_code)

    @property
    def state_key(self) -> str:
        return normalize_code(self.state_code)

    @property
    def is_wildcard(self) -> bool:
        return self.state_key in ("", WILDCARD)

    def matches_country(self, country: str | None) -> bool:
        return bool(normalize_code(country)) and self.country_key == normalize_code(country)

    def matches_state(self, country: str | None, state: str | None) -> bool:
        if self.is_wildcard or not normalize_code(state):
            return False
        return self.matches_country(country) and self.state_key == normalize_code(state)


@shipping.value_object
class PricingStrategy:
    """Flat or weight-tiered price for a zone.

    Weight-tiered pricing bills ``base_rate`` for the first ``unit_grams``
    and ``per_unit_rate`` for every started unit after that.
    """

    kind = String(required=True, max_length=20, choices=PricingKind)
    amount = Integer(min_value=0)
    base_rate = Integer(min_value=0)
    per_unit_rate = Integer(min_value=0)
    unit_grams = Integer(min_value=1)

    @classmethod
    def flat(cls, amount: int) -> "PricingStrategy":
        return cls(kind=PricingKind.FLAT_RATE.value, amount=amount)

    @classmethod
    def weight_tiered(cls, base_rate: int, per_unit_rate: int, unit_grams: int = 500) -> "PricingStrategy":
        return cls(
            kind=PricingKind.WEIGHT_TIERED.value,
            base_rate=base_rate,
            per_unit_rate=per_unit_rate,
            unit_grams=unit_grams,
        )

    @property
    def is_flat(self) -> bool:
        return self.kind == PricingKind.FLAT_RATE.value

    @invariant.post
    def parameters_must_match_kind(self):
        if self.kind == PricingKind.FLAT_RATE.value:
            if self.amount is None:
                raise ValidationError({"amount": ["Flat rate pricing requires an amount"]})
        elif self.kind == PricingKind.WEIGHT_TIERED.value:
            missing = [
                name for name in ("base_rate", "per_unit_rate", "unit_grams") if getattr(self, name) is None
            ]
            if missing:
                raise ValidationError({name: ["Weight-tiered pricing requires this value"] for name in missing})


@shipping.value_object
class ShippingZone:
    name = String(required=True, max_length=100)
    match_rule = ValueObject(ZoneMatchRule, required=True)
    pricing = ValueObject(PricingStrategy, required=True)

    @property
    def country_code(self) -> str:
        return self.match_rule.country_code

    @property
    def state_code(self) -> str:
        return self.match_rule.state_code

    @property
    def is_wildcard(self) -> bool:
        return self.match_rule.is_wildcard
