"""Shared BDD fixtures and step definitions for the Ordering domain."""

import re
from decimal import Decimal

import pytest
from ordering.errors import (
    Forbidden,
    InsufficientStock,
    InvalidStatus,
    InvalidTransition,
    MedicineUnavailable,
    NotFound,
)
from ordering.order import service
from ordering.order.order import Order
from ordering.shared.actor import Actor
from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then, when

_ERRORS = {
    "ValidationError": ValidationError,
    "MedicineUnavailable": MedicineUnavailable,
    "InsufficientStock": InsufficientStock,
    "NotFound": NotFound,
    "Forbidden": Forbidden,
    "InvalidStatus": InvalidStatus,
    "InvalidTransition": InvalidTransition,
}

_CART_LINE = re.compile(r'(\d+) of "([^"]+)"')


@pytest.fixture()
def outcome():
    """What the last When step produced: the order, or the error it raised."""
    return {"order": None, "error": None}


def _attempt(outcome, fn):
    try:
        outcome["order"] = fn()
        outcome["error"] = None
    except Exception as exc:
        outcome["error"] = exc


def _actor(role, actor_id):
    return Actor(actor_id=actor_id, role=role.upper())


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('the catalog has "{medicine_id}" priced at "{price}" with {stock:d} in stock sold by "{seller}"'))
def _(catalog, medicine_id, price, stock, seller):
    catalog.add_medicine(medicine_id, Decimal(price), stock, seller)


@given(parsers.cfparse('"{medicine_id}" is withdrawn from sale'))
def _(catalog, medicine_id):
    catalog.update_medicine(medicine_id, is_active=False)


@given(parsers.re(r'customer "(?P<customer_id>[^"]+)" has placed an order for (?P<cart>.+)'), target_fixture="order")
def _(customer_id, cart):
    lines = [{"medicine_id": m, "quantity": int(q)} for q, m in _CART_LINE.findall(cart)]
    return service.create_order(customer_id, "1 Main St", lines)


@given(parsers.cfparse('{role} "{actor_id}" has moved the order to "{status}"'))
def _(order, role, actor_id, status):
    service.update_order_status(order.id, status, _actor(role, actor_id))


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.re(r'customer "(?P<customer_id>[^"]+)" orders (?P<cart>.+)'))
def _(outcome, customer_id, cart):
    lines = [{"medicine_id": m, "quantity": int(q)} for q, m in _CART_LINE.findall(cart)]
    _attempt(outcome, lambda: service.create_order(customer_id, "1 Main St", lines))


@when(parsers.cfparse('customer "{customer_id}" cancels the order'))
def _(outcome, order, customer_id):
    _attempt(outcome, lambda: service.cancel_order(order.id, Actor.customer(customer_id)))


@when(parsers.cfparse('{role} "{actor_id}" sets the order status to "{status}"'))
def _(outcome, order, role, actor_id, status):
    _attempt(outcome, lambda: service.update_order_status(order.id, status, _actor(role, actor_id)))


@when(parsers.cfparse('the catalog price of "{medicine_id}" changes to "{price}"'))
def _(catalog, medicine_id, price):
    catalog.update_medicine(medicine_id, price=Decimal(price))


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("the order is placed")
def _(outcome):
    assert outcome["error"] is None, outcome["error"]
    assert outcome["order"].status == "PLACED"


@then(parsers.cfparse('the order total is "{amount}"'))
def _(outcome, amount):
    assert outcome["order"].total_amount.amount == Decimal(amount)


@then(parsers.cfparse('the stored order total is "{amount}"'))
def _(order, amount):
    stored = current_domain.repository_for(Order).get(order.id)
    assert stored.total_amount.amount == Decimal(amount)


@then(parsers.cfparse('the order status is "{status}"'))
def _(outcome, status):
    assert outcome["error"] is None, outcome["error"]
    stored = current_domain.repository_for(Order).get(outcome["order"].id)
    assert stored.status == status


@then(parsers.cfparse('the stored order status is still "{status}"'))
def _(order, status):
    assert current_domain.repository_for(Order).get(order.id).status == status


@then(parsers.cfparse("the request fails with {error}"))
def _(outcome, error):
    assert isinstance(outcome["error"], _ERRORS[error]), outcome["error"]


@then("no order is recorded")
def _():
    assert current_domain.repository_for(Order)._dao.query.all().total == 0


@then(parsers.cfparse('"{medicine_id}" has {stock:d} in stock'))
def _(catalog, medicine_id, stock):
    assert catalog.stock_of(medicine_id) == stock
