"""Order dispatcher: matches an order to the courier that arrives first.

Stateless: every decision is a function of the order and the courier pool
handed in. The dispatcher never loads or saves anything.
"""

import structlog
from protean.exceptions import InvalidOperationError, ValidationError

from delivery.courier.courier import Courier
from delivery.errors import NoCourierAvailableError, OrderAlreadyAssignedError
from delivery.order.order import Order, OrderStatus

logger = structlog.get_logger(__name__)


class OrderDispatcher:
    """Assigns an order to the feasible courier with the minimum ETA.

    Couriers are scanned in list order and only a strictly smaller ETA
    replaces the current best, so the earliest courier wins a tie.
    """

    def dispatch(self, order: Order, couriers: list[Courier]) -> Courier:
        if order is None:
            raise ValidationError({"order": ["is required"]})
        if not couriers:
            raise ValidationError({"couriers": ["At least one courier is required"]})
        if OrderStatus(order.status) != OrderStatus.CREATED:
            raise OrderAlreadyAssignedError({"status": [f"Order is already {order.status}"]})

        courier, eta = self.find_fastest_courier(order, couriers)

        courier.take_order(order)
        try:
            order.assign(courier.id)
        except (ValidationError, InvalidOperationError):
            # Give the reserved slot back so storage and order state agree
            courier.complete_order(order)
            logger.warning(
                "Assignment failed, storage reservation rolled back",
                order_id=str(order.id),
                courier_id=str(courier.id),
            )
            raise

        logger.info(
            "Order dispatched",
            order_id=str(order.id),
            courier_id=str(courier.id),
            eta=eta,
            candidates=len(couriers),
        )
        return courier

    @staticmethod
    def find_fastest_courier(order: Order, couriers: list[Courier]) -> tuple[Courier, float]:
        """Return the eligible courier with the smallest ETA, and that ETA."""
        best_courier = None
        best_eta = None
        for courier in couriers:
            if not courier.can_take_order(order):
                continue
            eta = courier.calculate_time_to_location(order.location)
            if best_eta is None or eta < best_eta:
                best_courier = courier
                best_eta = eta

        if best_courier is None:
            raise NoCourierAvailableError({"couriers": [f"No courier can take order {order.id}"]})
        return best_courier, best_eta
