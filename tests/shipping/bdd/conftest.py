"""Shared BDD step definitions for the Shipping domain."""

from pytest_bdd import given, parsers, then
from shipping.quote import ShippingQuoteService
from shipping.rate.package import PackageItem
from shipping.zone.zone import Address


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("the storefront shipping zones for Vietnam", target_fixture="checkout")
def storefront_zones(monkeypatch):
    monkeypatch.delenv("FREE_SHIPPING_THRESHOLD", raising=False)
    return {"service": ShippingQuoteService.from_config(), "items": [], "subtotal": 0}


@given(parsers.parse("a free shipping threshold of {threshold:d} VND"))
def free_shipping_threshold(checkout, monkeypatch, threshold):
    monkeypatch.setenv("FREE_SHIPPING_THRESHOLD", str(threshold))
    checkout["service"] = ShippingQuoteService.from_config()


@given(parsers.parse('a cart shipping to "{country}" state "{state}"'))
def cart_destination(checkout, country, state):
    checkout["address"] = Address(country=country, state=state)


@given(parsers.parse("the cart holds {quantity:d} items weighing {weight:d} grams each"))
def cart_items(checkout, quantity, weight):
    checkout["items"].append(PackageItem(weight_grams=weight, quantity=quantity))


@given(parsers.parse("the cart subtotal is {subtotal:d} VND"))
def cart_subtotal(checkout, subtotal):
    checkout["subtotal"] = subtotal


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.parse('the shipping zone is "{name}"'))
def shipping_zone_is(checkout, name):
    assert checkout["quote"].zone.name == name


@then(parsers.parse("the shipping cost is {cost:d} VND"))
def shipping_cost_is(checkout, cost):
    assert checkout["quote"].total_cost == cost


@then(parsers.parse("{amount:d} VND remain for free shipping"))
def amount_remaining(checkout, amount):
    assert checkout["quote"].amount_remaining_for_free_shipping == amount


@then("free shipping is applied")
def free_shipping_applied(checkout):
    assert checkout["quote"].free_shipping_applied is True


@then("free shipping is not applied")
def free_shipping_not_applied(checkout):
    assert checkout["quote"].free_shipping_applied is False


@then("the destination is not supported")
def destination_not_supported(checkout):
    assert checkout["quote"].is_supported is False
    assert checkout["quote"].zone is None
