"""Courier registration and storage management: commands and handler."""

from protean import handle
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from delivery.courier.courier import Courier
from delivery.domain import delivery
from delivery.kernel.location import Location


@delivery.command(part_of="Courier")
class RegisterCourier:
    """Add a courier to the fleet at grid cell (x, y)."""

    name = String(required=True, max_length=100)
    speed = Integer(required=True)
    x = Integer(required=True)
    y = Integer(required=True)


@delivery.command(part_of="Courier")
class AddStoragePlace:
    """Hand an extra storage place to a courier."""

    courier_id = Identifier(required=True)
    name = String(required=True, max_length=100)
    total_volume = Integer(required=True)


@delivery.command_handler(part_of=Courier)
class CourierRegistrationHandler:
    @handle(RegisterCourier)
    def register_courier(self, command):
        courier = Courier.create(
            name=command.name,
            speed=command.speed,
            location=Location(x=command.x, y=command.y),
        )
        current_domain.repository_for(Courier).add(courier)
        return str(courier.id)

    @handle(AddStoragePlace)
    def add_storage_place(self, command):
        repo = current_domain.repository_for(Courier)
        courier = repo.get(command.courier_id)
        place = courier.add_storage_place(command.name, command.total_volume)
        repo.add(courier)
        return str(place.id)
