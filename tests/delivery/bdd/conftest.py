"""Shared BDD fixtures and step definitions for the Delivery domain."""

import uuid

import pytest
from delivery.courier.courier import Courier
from delivery.kernel.location import Location
from delivery.order.order import Order
from pytest_bdd import given, parsers, then


@pytest.fixture()
def error():
    """Container for captured domain errors."""
    return {"exc": None}


@pytest.fixture()
def couriers():
    """Couriers by name, in the order they were introduced."""
    return {}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse("an order at {x:d},{y:d} with volume {volume:d}"), target_fixture="order")
def an_order(x, y, volume):
    order = Order.create(str(uuid.uuid4()), Location(x=x, y=y), volume)
    order._events.clear()
    return order


@given(parsers.cfparse('a courier "{name}" at {x:d},{y:d} with speed {speed:d}'))
def a_courier(couriers, name, x, y, speed):
    courier = Courier.create(name, speed, Location(x=x, y=y))
    courier._events.clear()
    couriers[name] = courier


@given("the order is already assigned")
def order_already_assigned(order):
    order.assign(str(uuid.uuid4()))


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order status is "{status}"'))
def order_status_is(order, status):
    assert order.status == status


@then(parsers.cfparse('the order is assigned to "{name}"'))
def order_assigned_to(order, couriers, name):
    courier = couriers[name]
    assert order.courier_id == courier.id
    assert courier.storage_place_for(order.id) is not None
