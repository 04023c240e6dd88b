"""Integration tests for the assembled storefront rules application."""

import pytest
from fastapi.testclient import TestClient


@pytest.fixture()
def client(monkeypatch):
    monkeypatch.delenv("FREE_SHIPPING_THRESHOLD", raising=False)
    from app import app

    # Without the context manager so the lifespan does not reconfigure structlog mid-session
    return TestClient(app)


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {
        "status": "ok",
        "domains": {
            "ordering": {"name": "ordering"},
            "shipping": {"name": "shipping"},
        },
    }


def test_order_routes_are_mounted(client):
    response = client.post(
        "/orders/status-transitions/validate",
        json={"from_status": "shipped", "to_status": "completed"},
    )
    assert response.status_code == 200
    assert response.json()["valid"] is True


def test_shipping_routes_are_mounted(client):
    response = client.post(
        "/shipping/calculate",
        json={"country": "VN", "state": "HN", "weight_grams": 250, "subtotal": 100_000},
    )
    assert response.status_code == 200
    assert response.json()["shipping_cost"] == 30_000


def test_resolve_domain_by_prefix():
    from app import _resolve_domain
    from ordering.domain import ordering
    from shipping.domain import shipping

    assert _resolve_domain("/orders/statuses") is ordering
    assert _resolve_domain("/shipping/zones") is shipping
    assert _resolve_domain("/health") is None
