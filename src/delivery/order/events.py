"""Order domain events: immutable facts about order lifecycle changes."""

from protean.fields import Identifier, Integer

from delivery.domain import delivery


@delivery.event(part_of="Order")
class OrderCreated:
    """An order was accepted for delivery."""

    __version__ = 1

    order_id = Identifier(required=True)
    x = Integer(required=True)
    y = Integer(required=True)
    volume = Integer(required=True)


@delivery.event(part_of="Order")
class OrderAssigned:
    """A courier was assigned to the order."""

    __version__ = 1

    order_id = Identifier(required=True)
    courier_id = Identifier(required=True)


@delivery.event(part_of="Order")
class OrderCompleted:
    """The assigned courier delivered the order."""

    __version__ = 1

    order_id = Identifier(required=True)
    courier_id = Identifier(required=True)
