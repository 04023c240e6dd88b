"""Shared BDD fixtures and step definitions for the Ordering domain."""

import pytest
from ordering.order.status import OrderStatus
from ordering.order.workflow import OrderWorkflow
from pytest_bdd import given, parsers, then


@pytest.fixture()
def workflow():
    return OrderWorkflow()


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.parse('an order in status "{status}"'), target_fixture="order")
def order_in_status(status):
    return {"id": "ord-bdd-001", "status": OrderStatus.parse(status), "results": []}


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("every transition was accepted")
def every_transition_accepted(order):
    assert order["results"]
    assert all(result.valid for result in order["results"]), [r.reason for r in order["results"]]


@then(parsers.parse('the transition is rejected with reason "{reason}"'))
def transition_rejected(order, reason):
    last = order["results"][-1]
    assert last.valid is False
    assert last.reason == reason


@then(parsers.parse('the order is in status "{status}"'))
def order_is_in_status(order, status):
    assert order["status"] == OrderStatus.parse(status)


@then("the order is in a terminal status")
def order_is_terminal(order, workflow):
    assert workflow.validator.is_terminal(order["status"])
