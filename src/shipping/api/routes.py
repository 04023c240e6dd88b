"""FastAPI routes for the Shipping domain."""

from fastapi import APIRouter, HTTPException
from protean.exceptions import ValidationError

from shipping.api.schemas import (
    CalculateShippingRequest,
    ShippingQuoteResponse,
    ZoneListResponse,
    ZoneResponse,
)
from shipping.config import CURRENCY
from shipping.quote import get_quote_service
from shipping.rate.free_shipping import format_vnd
from shipping.rate.package import Package, PackageItem
from shipping.zone.zone import Address, ShippingZone

shipping_router = APIRouter(prefix="/shipping", tags=["shipping"])


def _zone_response(zone: ShippingZone) -> ZoneResponse:
    pricing = zone.pricing
    if pricing.is_flat:
        return ZoneResponse(
            name=zone.name,
            country_code=zone.country_code,
            state_code=zone.state_code,
            type=pricing.kind,
            rate=pricing.amount,
        )
    return ZoneResponse(
        name=zone.name,
        country_code=zone.country_code,
        state_code=zone.state_code,
        type=pricing.kind,
        base_rate=pricing.base_rate,
        weight_rate=pricing.per_unit_rate,
        weight_unit=pricing.unit_grams,
    )


@shipping_router.get("/zones", response_model=ZoneListResponse)
async def list_zones() -> ZoneListResponse:
    """Configured shipping zones and the free-shipping threshold."""
    service = get_quote_service()
    return ZoneListResponse(
        zones=[_zone_response(zone) for zone in service.resolver.zones],
        currency=CURRENCY,
        free_shipping_threshold=service.threshold,
        free_shipping_threshold_formatted=format_vnd(service.threshold),
    )


@shipping_router.post("/calculate", response_model=ShippingQuoteResponse)
async def calculate_shipping(body: CalculateShippingRequest) -> ShippingQuoteResponse:
    """Quote shipping for a destination, package and cart subtotal."""
    service = get_quote_service()
    try:
        address = Address(country=body.country, state=body.state, city=body.city, postcode=body.postcode)
        if body.items is not None:
            package = Package(
                items=[PackageItem(weight_grams=item.weight_grams, quantity=item.quantity) for item in body.items]
            )
        else:
            package = Package.of_weight(body.weight_grams or 0)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=exc.messages) from exc

    quote = service.quote(address, package, body.subtotal)

    return ShippingQuoteResponse(
        supported=quote.is_supported,
        zone=_zone_response(quote.zone) if quote.zone else None,
        weight_grams=package.weight_grams,
        base_cost=quote.base_cost,
        weight_surcharge=quote.weight_surcharge,
        shipping_cost=quote.total_cost,
        shipping_cost_formatted=format_vnd(quote.total_cost),
        free_shipping=quote.free_shipping_applied,
        free_shipping_threshold=service.threshold,
        amount_remaining_for_free_shipping=quote.amount_remaining_for_free_shipping,
        message=service.policy.progress_message(body.subtotal) if quote.is_supported else None,
    )
