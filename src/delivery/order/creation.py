"""Order intake: command and handler."""

from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from delivery.domain import delivery
from delivery.kernel.location import Location
from delivery.order.order import Order


@delivery.command(part_of="Order")
class CreateOrder:
    """Accept a new order for delivery to grid cell (x, y)."""

    order_id = Identifier(required=True)
    x = Integer(required=True)
    y = Integer(required=True)
    volume = Integer(required=True)


@delivery.command_handler(part_of=Order)
class CreateOrderHandler:
    @handle(CreateOrder)
    def create_order(self, command):
        order = Order.create(
            order_id=command.order_id,
            location=Location(x=command.x, y=command.y),
            volume=command.volume,
        )
        current_domain.repository_for(Order).add(order)
        return str(order.id)
