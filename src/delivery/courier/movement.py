"""Courier movement: command and handler.

Each ``MoveCourier`` is one clock tick: the courier advances at most
``speed`` grid steps towards the target.
"""

from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from delivery.courier.courier import Courier
from delivery.domain import delivery
from delivery.kernel.location import Location


@delivery.command(part_of="Courier")
class MoveCourier:
    """Advance a courier one tick towards grid cell (x, y)."""

    courier_id = Identifier(required=True)
    x = Integer(required=True)
    y = Integer(required=True)


@delivery.command_handler(part_of=Courier)
class CourierMovementHandler:
    @handle(MoveCourier)
    def move_courier(self, command):
        repo = current_domain.repository_for(Courier)
        courier = repo.get(command.courier_id)
        courier.move(Location(x=command.x, y=command.y))
        repo.add(courier)
