"""Storefront shipping configuration for Vietnam.

Three zones: Hồ Chí Minh and Hà Nội ship at a flat rate, every other province
is priced by weight. Orders from 500,000 VND ship free. The threshold can be
overridden with the FREE_SHIPPING_THRESHOLD environment variable.
"""

import os

from shipping.rate.free_shipping import DEFAULT_FREE_SHIPPING_THRESHOLD
from shipping.zone.zone import PricingStrategy, ShippingZone, ZoneMatchRule

CURRENCY = "VND"

SHIPPING_RATES = {
    "ho_chi_minh": {
        "name": "Hồ Chí Minh",
        "location": "VN:SG",
        "flat_rate": 25_000,
    },
    "ha_noi": {
        "name": "Hà Nội",
        "location": "VN:HN",
        "flat_rate": 30_000,
    },
    "other_provinces": {
        "name": "Tỉnh Thành Khác",
        "location": "VN",
        "base_rate": 35_000,
        "weight_rate": 5_000,  # Per 500g
        "weight_unit": 500,
    },
}


def _zone_from_rate(rate: dict) -> ShippingZone:
    if "flat_rate" in rate:
        pricing = PricingStrategy.flat(rate["flat_rate"])
    else:
        pricing = PricingStrategy.weight_tiered(
            base_rate=rate["base_rate"],
            per_unit_rate=rate["weight_rate"],
            unit_grams=rate["weight_unit"],
        )
    return ShippingZone(
        name=rate["name"],
        match_rule=ZoneMatchRule.parse(rate["location"]),
        pricing=pricing,
    )


def default_zones() -> tuple[ShippingZone, ...]:
    return tuple(_zone_from_rate(rate) for rate in SHIPPING_RATES.values())


def free_shipping_threshold() -> int:
    """Configured threshold in VND, from FREE_SHIPPING_THRESHOLD when set."""
    value = os.environ.get("FREE_SHIPPING_THRESHOLD")
    if value is None or value.strip() == "":
        return DEFAULT_FREE_SHIPPING_THRESHOLD
    try:
        threshold = int(value)
    except ValueError:
        raise ValueError(f"FREE_SHIPPING_THRESHOLD must be an integer amount, got {value!r}") from None
    if threshold < 0:
        raise ValueError(f"FREE_SHIPPING_THRESHOLD cannot be negative, got {threshold}")
    return threshold
