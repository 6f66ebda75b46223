"""Application tests for order intake, dispatch and completion via domain.process()."""

import uuid

import pytest
import structlog
from delivery.courier.courier import Courier
from delivery.courier.registration import RegisterCourier
from delivery.dispatch.assignment import DispatchOrder
from delivery.dispatch.locking import ConcurrentOrderDispatcher
from delivery.errors import NoCourierAvailableError, OrderAlreadyAssignedError, OrderNotAssignedError
from delivery.order.completion import CompleteDelivery
from delivery.order.creation import CreateOrder
from delivery.order.order import Order, OrderStatus
from protean import current_domain
from protean.exceptions import ValidationError


def _create_order(**overrides):
    defaults = {
        "order_id": str(uuid.uuid4()),
        "x": 5,
        "y": 5,
        "volume": 5,
    }
    defaults.update(overrides)
    return current_domain.process(CreateOrder(**defaults), asynchronous=False)


def _register_courier(**overrides):
    defaults = {"name": "Ivan", "speed": 1, "x": 1, "y": 1}
    defaults.update(overrides)
    return current_domain.process(RegisterCourier(**defaults), asynchronous=False)


def _dispatch(order_id):
    return current_domain.process(DispatchOrder(order_id=order_id), asynchronous=False)


class TestCreateOrder:
    def test_returns_the_supplied_id(self):
        order_id = str(uuid.uuid4())
        assert _create_order(order_id=order_id) == order_id

    def test_persists_order(self):
        order_id = _create_order(x=3, y=8, volume=7)
        order = current_domain.repository_for(Order).get(order_id)
        assert order.status == OrderStatus.CREATED.value
        assert (order.location.x, order.location.y) == (3, 8)
        assert order.volume == 7

    def test_rejects_location_off_the_grid(self):
        with pytest.raises(ValidationError):
            _create_order(x=11)


class TestDispatchOrder:
    def test_assigns_nearest_courier(self):
        near_id = _register_courier(name="Near", x=5, y=4)
        _register_courier(name="Far", x=10, y=10)
        order_id = _create_order()

        assert _dispatch(order_id) == near_id

        order = current_domain.repository_for(Order).get(order_id)
        assert order.status == OrderStatus.ASSIGNED.value
        assert str(order.courier_id) == near_id

        courier = current_domain.repository_for(Courier).get(near_id)
        assert courier.storage_place_for(order_id) is not None

    def test_no_courier_can_take_it(self):
        _register_courier()
        order_id = _create_order(volume=15)
        with pytest.raises(NoCourierAvailableError):
            _dispatch(order_id)

        order = current_domain.repository_for(Order).get(order_id)
        assert order.status == OrderStatus.CREATED.value

    def test_empty_fleet(self):
        order_id = _create_order()
        with pytest.raises(NoCourierAvailableError):
            _dispatch(order_id)

    def test_considers_the_whole_fleet(self):
        for i in range(120):
            _register_courier(name=f"Far-{i}", x=10, y=10)
        near_id = _register_courier(name="Near", x=5, y=5)
        order_id = _create_order(x=5, y=5)

        assert _dispatch(order_id) == near_id

    def test_a_free_courier_behind_a_busy_fleet(self):
        for i in range(101):
            _register_courier(name=f"Busy-{i}", x=1, y=1)
        for _ in range(101):
            _dispatch(_create_order(x=1, y=1))
        free_id = _register_courier(name="Free", x=10, y=10)

        assert _dispatch(_create_order(x=1, y=1)) == free_id

    def test_already_assigned(self):
        _register_courier()
        order_id = _create_order()
        _dispatch(order_id)
        with pytest.raises(OrderAlreadyAssignedError):
            _dispatch(order_id)


class TestCompleteDelivery:
    def test_completes_and_frees_storage(self):
        courier_id = _register_courier()
        order_id = _create_order()
        _dispatch(order_id)

        current_domain.process(CompleteDelivery(order_id=order_id), asynchronous=False)

        order = current_domain.repository_for(Order).get(order_id)
        assert order.status == OrderStatus.COMPLETED.value
        assert str(order.courier_id) == courier_id

        courier = current_domain.repository_for(Courier).get(courier_id)
        assert courier.is_busy is False

    def test_unassigned_order(self):
        order_id = _create_order()
        with pytest.raises(OrderNotAssignedError):
            current_domain.process(CompleteDelivery(order_id=order_id), asynchronous=False)

    def test_freed_courier_takes_the_next_order(self):
        courier_id = _register_courier()
        first = _create_order()
        second = _create_order()
        _dispatch(first)
        with pytest.raises(NoCourierAvailableError):
            _dispatch(second)

        current_domain.process(CompleteDelivery(order_id=first), asynchronous=False)

        assert _dispatch(second) == courier_id

    def test_completed_order_cannot_be_completed_again(self):
        _register_courier()
        order_id = _create_order()
        _dispatch(order_id)
        current_domain.process(CompleteDelivery(order_id=order_id), asynchronous=False)

        with pytest.raises(OrderNotAssignedError):
            current_domain.process(CompleteDelivery(order_id=order_id), asynchronous=False)


class TestLogContext:
    def test_dispatch_leaves_no_bound_context(self):
        _register_courier()
        _dispatch(_create_order())
        assert structlog.contextvars.get_contextvars() == {}

    def test_failed_dispatch_leaves_no_bound_context(self):
        order_id = _create_order()
        with pytest.raises(NoCourierAvailableError):
            _dispatch(order_id)
        assert structlog.contextvars.get_contextvars() == {}

    def test_completion_leaves_no_bound_context(self):
        _register_courier()
        order_id = _create_order()
        _dispatch(order_id)
        current_domain.process(CompleteDelivery(order_id=order_id), asynchronous=False)
        assert structlog.contextvars.get_contextvars() == {}

    def test_dispatch_binds_the_order_id(self, monkeypatch):
        seen = {}
        original = ConcurrentOrderDispatcher.dispatch

        def spy(self, order, couriers):
            seen.update(structlog.contextvars.get_contextvars())
            return original(self, order, couriers)

        monkeypatch.setattr(ConcurrentOrderDispatcher, "dispatch", spy)
        _register_courier()
        order_id = _create_order()
        _dispatch(order_id)

        assert seen == {"order_id": order_id}
