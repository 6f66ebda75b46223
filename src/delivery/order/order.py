"""Order aggregate (CQRS): a parcel waiting for, or riding with, a courier.

State Machine:
    CREATED → ASSIGNED → COMPLETED

Transitions only move forward, one step at a time. The courier id is set
on assignment and kept after completion.
"""

from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import Identifier, Integer, String, ValueObject

from delivery.domain import delivery
from delivery.errors import (
    OrderAlreadyAssignedError,
    OrderNotAssignedError,
    require_identifier,
    require_positive,
)
from delivery.kernel.location import Location, is_unset
from delivery.order.events import OrderAssigned, OrderCompleted, OrderCreated


class OrderStatus(Enum):
    CREATED = "Created"
    ASSIGNED = "Assigned"
    COMPLETED = "Completed"


@delivery.aggregate
class Order:
    location: ValueObject(Location, required=True)
    volume: Integer(required=True, min_value=1)
    status: String(choices=OrderStatus, default=OrderStatus.CREATED.value)
    courier_id: Identifier()

    @classmethod
    def create(cls, order_id, location: Location, volume: int):
        """Accept an order under a caller-supplied identity."""
        require_identifier("order_id", order_id)
        if is_unset(location):
            raise ValidationError({"location": ["is required"]})
        require_positive("volume", volume)

        order = cls(
            id=str(order_id),
            location=location,
            volume=volume,
            status=OrderStatus.CREATED.value,
        )
        order.raise_(
            OrderCreated(
                order_id=str(order.id),
                x=location.x,
                y=location.y,
                volume=volume,
            )
        )
        return order

    def assign(self, courier_id) -> None:
        require_identifier("courier_id", courier_id)
        if OrderStatus(self.status) != OrderStatus.CREATED:
            raise OrderAlreadyAssignedError({"status": [f"Order is already {self.status}"]})

        self.courier_id = str(courier_id)
        self.status = OrderStatus.ASSIGNED.value
        self.raise_(
            OrderAssigned(
                order_id=str(self.id),
                courier_id=str(courier_id),
            )
        )

    def complete(self) -> None:
        if OrderStatus(self.status) != OrderStatus.ASSIGNED:
            raise OrderNotAssignedError({"status": [f"Only assigned orders can be completed, order is {self.status}"]})

        self.status = OrderStatus.COMPLETED.value
        self.raise_(
            OrderCompleted(
                order_id=str(self.id),
                courier_id=str(self.courier_id),
            )
        )
