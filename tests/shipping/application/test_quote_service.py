"""Tests for ShippingQuoteService — resolver, calculator and policy wired together."""

import pytest
from hypothesis import given
from hypothesis import strategies as st
from shipping import config
from shipping.quote import ShippingQuoteService, get_quote_service, reset_quote_service
from shipping.rate.free_shipping import FreeShippingPolicy
from shipping.rate.package import Package, PackageItem
from shipping.zone.resolver import ShippingZoneResolver
from shipping.zone.zone import Address
from structlog.testing import capture_logs


@pytest.fixture
def service():
    return ShippingQuoteService(
        resolver=ShippingZoneResolver(config.default_zones()),
        policy=FreeShippingPolicy(500_000),
    )


class TestQuote:
    def test_ho_chi_minh_flat_rate(self, service):
        quote = service.quote(Address(country="VN", state="SG"), Package.of_weight(3_000), 200_000)
        assert quote.zone.name == "Hồ Chí Minh"
        assert quote.total_cost == 25_000
        assert quote.amount_remaining_for_free_shipping == 300_000

    def test_ha_noi_flat_rate(self, service):
        quote = service.quote(Address(country="VN", state="HN"), Package.of_weight(0), 0)
        assert quote.total_cost == 30_000

    def test_other_province_weight_tiered(self, service):
        package = Package(
            items=[
                PackageItem(weight_grams=400, quantity=2),
                PackageItem(weight_grams=300, quantity=1),
            ]
        )
        quote = service.quote(Address(country="VN", state="DN", city="Đà Nẵng"), package, 120_000)

        assert quote.zone.name == "Tỉnh Thành Khác"
        assert quote.base_cost == 35_000
        assert quote.weight_surcharge == 10_000
        assert quote.total_cost == 45_000

    def test_free_shipping_over_threshold(self, service):
        quote = service.quote(Address(country="VN", state="DN"), Package.of_weight(5_000), 500_000)
        assert quote.is_supported
        assert quote.free_shipping_applied is True
        assert quote.total_cost == 0
        assert quote.undiscounted_cost == 80_000

    def test_unsupported_destination_is_not_free_shipping(self, service):
        quote = service.quote(Address(country="US", state="CA"), Package.of_weight(500), 900_000)

        assert quote.is_supported is False
        assert quote.zone is None
        assert quote.free_shipping_applied is False
        assert quote.total_cost == 0

    def test_unsupported_destination_is_logged(self, service):
        with capture_logs() as logs:
            service.quote(Address(country="US", state="CA"), Package.of_weight(500), 0)

        assert [entry["country"] for entry in logs if entry["event"] == "Unsupported shipping destination"] == ["US"]

    @given(
        state=st.sampled_from(["SG", "HN", "DN", "CT", None]),
        weight=st.floats(min_value=0, max_value=100_000, allow_nan=False),
        subtotal=st.integers(min_value=0, max_value=2_000_000),
    )
    def test_quotes_are_repeatable(self, state, weight, subtotal):
        service = ShippingQuoteService.from_config()
        address = Address(country="VN", state=state)
        package = Package.of_weight(weight)
        assert service.quote(address, package, subtotal) == service.quote(address, package, subtotal)


class TestConfiguration:
    def test_from_config_uses_default_threshold(self, monkeypatch):
        monkeypatch.delenv("FREE_SHIPPING_THRESHOLD", raising=False)
        assert ShippingQuoteService.from_config().threshold == 500_000

    def test_threshold_from_environment(self, monkeypatch):
        monkeypatch.setenv("FREE_SHIPPING_THRESHOLD", "300000")
        service = ShippingQuoteService.from_config()

        quote = service.quote(Address(country="VN", state="SG"), Package.of_weight(100), 300_000)
        assert service.threshold == 300_000
        assert quote.free_shipping_applied is True

    @pytest.mark.parametrize("value", ["free", "12.5", "-1"])
    def test_invalid_threshold_in_environment(self, monkeypatch, value):
        monkeypatch.setenv("FREE_SHIPPING_THRESHOLD", value)
        with pytest.raises(ValueError, match="FREE_SHIPPING_THRESHOLD"):
            config.free_shipping_threshold()

    def test_service_singleton(self, monkeypatch):
        monkeypatch.delenv("FREE_SHIPPING_THRESHOLD", raising=False)
        reset_quote_service()
        assert get_quote_service() is get_quote_service()

        reset_quote_service()
        monkeypatch.setenv("FREE_SHIPPING_THRESHOLD", "100000")
        assert get_quote_service().threshold == 100_000
