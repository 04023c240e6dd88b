"""Pydantic API schemas for the Shipping domain.

These are the external API contracts — separate from domain value objects.
The API layer translates between these schemas and the quote service.
"""

from pydantic import BaseModel, Field, model_validator


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------
class PackageItemRequest(BaseModel):
    weight_grams: float = Field(ge=0)
    quantity: int = Field(default=1, ge=1)


class CalculateShippingRequest(BaseModel):
    country: str = "VN"
    state: str = ""
    city: str | None = None
    postcode: str | None = None
    items: list[PackageItemRequest] | None = None
    weight_grams: float | None = Field(default=None, ge=0)
    subtotal: float = Field(default=0, ge=0)

    @model_validator(mode="after")
    def items_or_weight(self):
        if self.items is not None and self.weight_grams is not None:
            raise ValueError("Provide either items or weight_grams, not both")
        return self


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------
class ZoneResponse(BaseModel):
    name: str
    country_code: str
    state_code: str
    type: str
    rate: int | None = None
    base_rate: int | None = None
    weight_rate: int | None = None
    weight_unit: int | None = None


class ZoneListResponse(BaseModel):
    zones: list[ZoneResponse]
    currency: str
    free_shipping_threshold: int
    free_shipping_threshold_formatted: str


class ShippingQuoteResponse(BaseModel):
    supported: bool
    zone: ZoneResponse | None = None
    weight_grams: float
    base_cost: int
    weight_surcharge: int
    shipping_cost: int
    shipping_cost_formatted: str
    free_shipping: bool
    free_shipping_threshold: int
    amount_remaining_for_free_shipping: float
    message: str | None = None
