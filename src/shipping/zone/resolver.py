"""Shipping zone resolution.

A state-specific zone always wins over its country's wildcard zone, whatever
order the zones were configured in. A country with no zone at all is an
unsupported destination and resolves to ``None``.
"""

from collections.abc import Iterable

import structlog

from shipping.zone.zone import Address, ShippingZone, normalize_code

logger = structlog.get_logger(__name__)


def resolve_zone(address: Address, zones: Iterable[ShippingZone]) -> ShippingZone | None:
    country_zones = [zone for zone in zones if zone.match_rule.matches_country(address.country)]
    if not country_zones:
        return None

    for zone in country_zones:
        if zone.match_rule.matches_state(address.country, address.state):
            return zone

    for zone in country_zones:
        if zone.is_wildcard:
            return zone

    return None


class ShippingZoneResolver:
    """Resolves addresses against a fixed zone configuration.

    The configuration is indexed once: at most one wildcard zone per country,
    any number of state zones. Conflicting entries are rejected up front so
    that resolution never depends on list order.
    """

    def __init__(self, zones: Iterable[ShippingZone]):
        self._zones = tuple(zones)
        self._state_zones: dict[tuple[str, str], ShippingZone] = {}
        self._country_zones: dict[str, ShippingZone] = {}
        self._countries: set[str] = set()

        for zone in self._zones:
            country = zone.match_rule.country_key
            self._countries.add(country)
            if zone.is_wildcard:
                if country in self._country_zones:
                    raise ValueError(f"Country {country} has more than one country-wide zone")
                self._country_zones[country] = zone
            else:
                key = (country, zone.match_rule.state_key)
                if key in self._state_zones:
                    raise ValueError(f"State {country}:{zone.state_code} is covered by more than one zone")
                self._state_zones[key] = zone

    @property
    def zones(self) -> tuple[ShippingZone, ...]:
        return self._zones

    def supports(self, country: str | None) -> bool:
        return normalize_code(country) in self._countries

    def resolve(self, address: Address) -> ShippingZone | None:
        if not self.supports(address.country):
            logger.debug("No shipping zone for country", country=address.country)
            return None

        country = normalize_code(address.country)
        state = normalize_code(address.state)
        if state:
            zone = self._state_zones.get((country, state))
            if zone is not None:
                return zone

        return self._country_zones.get(country)
