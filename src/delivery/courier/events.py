"""Courier domain events: facts about couriers, their storage and movement."""

from protean.fields import Identifier, Integer, String

from delivery.domain import delivery


@delivery.event(part_of="Courier")
class CourierRegistered:
    """A courier joined the fleet with its default storage place."""

    __version__ = 1

    courier_id = Identifier(required=True)
    name = String(required=True, max_length=100)
    speed = Integer(required=True)
    x = Integer(required=True)
    y = Integer(required=True)


@delivery.event(part_of="Courier")
class StoragePlaceAdded:
    """An extra storage place was appended to the courier's kit."""

    __version__ = 1

    courier_id = Identifier(required=True)
    storage_place_id = Identifier(required=True)
    name = String(required=True, max_length=100)
    total_volume = Integer(required=True)


@delivery.event(part_of="Courier")
class OrderPlacedInStorage:
    """Space was reserved for an order in one of the courier's places."""

    __version__ = 1

    courier_id = Identifier(required=True)
    order_id = Identifier(required=True)
    storage_place_id = Identifier(required=True)


@delivery.event(part_of="Courier")
class OrderReleasedFromStorage:
    """An order left the courier's storage (delivered or rolled back)."""

    __version__ = 1

    courier_id = Identifier(required=True)
    order_id = Identifier(required=True)
    storage_place_id = Identifier(required=True)


@delivery.event(part_of="Courier")
class CourierMoved:
    """The courier advanced one tick towards a target."""

    __version__ = 1

    courier_id = Identifier(required=True)
    from_x = Integer(required=True)
    from_y = Integer(required=True)
    to_x = Integer(required=True)
    to_y = Integer(required=True)
