"""Order completion: command and handler.

Delivery is confirmed by the orchestration layer once the courier reaches
the order. The order leaves the courier's storage and is completed in the
same unit of work.
"""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from delivery.courier.courier import Courier
from delivery.domain import delivery
from delivery.errors import OrderNotAssignedError
from delivery.order.order import Order, OrderStatus
from delivery.utils.logging import add_context, clear_context

logger = structlog.get_logger(__name__)


@delivery.command(part_of="Order")
class CompleteDelivery:
    """Confirm that the assigned courier delivered the order."""

    order_id = Identifier(required=True)


@delivery.command_handler(part_of=Order)
class CompleteDeliveryHandler:
    @handle(CompleteDelivery)
    def complete_delivery(self, command):
        add_context(order_id=str(command.order_id))
        try:
            order_repo = current_domain.repository_for(Order)
            courier_repo = current_domain.repository_for(Courier)

            order = order_repo.get(command.order_id)
            if OrderStatus(order.status) != OrderStatus.ASSIGNED or order.courier_id is None:
                raise OrderNotAssignedError(
                    {"status": [f"Only assigned orders can be completed, order is {order.status}"]}
                )

            courier = courier_repo.get(order.courier_id)
            courier.complete_order(order)
            order.complete()

            courier_repo.add(courier)
            order_repo.add(order)
            logger.info("Order delivered", courier_id=str(courier.id))
        finally:
            clear_context()
