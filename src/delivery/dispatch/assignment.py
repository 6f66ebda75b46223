"""Order assignment: command and handler.

Loads the order and the whole courier fleet, lets the dispatcher pick the
fastest courier, and stores both aggregates in one unit of work.
"""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from delivery.courier.courier import Courier
from delivery.dispatch.locking import ConcurrentOrderDispatcher
from delivery.domain import delivery
from delivery.errors import NoCourierAvailableError
from delivery.order.order import Order
from delivery.utils.logging import add_context, clear_context


@delivery.command(part_of="Order")
class DispatchOrder:
    """Assign a created order to the courier that can reach it first."""

    order_id = Identifier(required=True)


@delivery.command_handler(part_of=Order)
class DispatchOrderHandler:
    @handle(DispatchOrder)
    def dispatch_order(self, command):
        add_context(order_id=str(command.order_id))
        try:
            order_repo = current_domain.repository_for(Order)
            courier_repo = current_domain.repository_for(Courier)

            order = order_repo.get(command.order_id)
            # The default query page stops at 100 aggregates
            couriers = courier_repo._dao.query.limit(None).all().items
            if not couriers:
                raise NoCourierAvailableError({"couriers": ["The fleet is empty"]})

            courier = ConcurrentOrderDispatcher().dispatch(order, couriers)

            courier_repo.add(courier)
            order_repo.add(order)
            return str(courier.id)
        finally:
            clear_context()
