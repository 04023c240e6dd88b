"""Package value objects — the weight the cart ships."""

from protean.fields import Float, Integer, List, ValueObject

from shipping.domain import shipping

GRAMS_PER_KILOGRAM = 1000


@shipping.value_object
class PackageItem:
    weight_grams = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)

    @classmethod
    def from_kilograms(cls, weight_kg, quantity: int = 1) -> "PackageItem":
        """Build an item from a catalogue weight in kilograms. Missing weight counts as 0."""
        weight = float(weight_kg) if weight_kg else 0.0
        return cls(weight_grams=weight * GRAMS_PER_KILOGRAM, quantity=quantity)

    @property
    def line_weight(self) -> float:
        return self.weight_grams * self.quantity


@shipping.value_object
class Package:
    """All cart lines shipped together. Effective weight is Σ(weight × quantity)."""

    items = List(content_type=ValueObject(PackageItem), default=list)

    @classmethod
    def of_weight(cls, weight_grams: float) -> "Package":
        return cls(items=[PackageItem(weight_grams=weight_grams, quantity=1)])

    @property
    def weight_grams(self) -> float:
        return sum((item.line_weight for item in self.items or []), 0.0)
