"""Courier aggregate (CQRS): a carrier of orders moving across the grid.

A courier owns an ordered list of storage places. The first one is the
default bag handed out at registration; more places can be appended but
never removed or reordered. Storage is allocated first-fit in list order.

Movement spends the speed budget on the X axis first and gives the Y axis
whatever remains, so a courier heading diagonally finishes its horizontal
leg before turning.
"""

import math

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import HasMany, Integer, String, ValueObject

from delivery.courier.events import (
    CourierMoved,
    CourierRegistered,
    OrderPlacedInStorage,
    OrderReleasedFromStorage,
    StoragePlaceAdded,
)
from delivery.courier.storage_place import (
    DEFAULT_STORAGE_NAME,
    DEFAULT_STORAGE_VOLUME,
    StoragePlace,
)
from delivery.domain import delivery
from delivery.errors import (
    NoSuitableStorageError,
    OrderNotFoundInStorageError,
    require_positive,
    require_value,
)
from delivery.kernel.location import Location, is_unset


@delivery.aggregate
class Courier:
    name: String(required=True, max_length=100)
    speed: Integer(required=True, min_value=1)
    location: ValueObject(Location, required=True)
    storage_places: HasMany(StoragePlace)

    @invariant.post
    def an_order_occupies_at_most_one_place(self):
        stored = [str(p.order_id) for p in (self.storage_places or []) if p.order_id is not None]
        if len(stored) != len(set(stored)):
            raise ValidationError({"storage_places": ["An order cannot occupy more than one storage place"]})

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, name: str, speed: int, location: Location):
        """Register a courier carrying the default bag."""
        if name is None or not str(name).strip():
            raise ValidationError({"name": ["is required"]})
        require_positive("speed", speed)
        if is_unset(location):
            raise ValidationError({"location": ["is required"]})

        courier = cls(name=name, speed=speed, location=location)
        courier.add_storage_places(
            StoragePlace.create(DEFAULT_STORAGE_NAME, DEFAULT_STORAGE_VOLUME, position=0)
        )
        courier.raise_(
            CourierRegistered(
                courier_id=str(courier.id),
                name=name,
                speed=speed,
                x=location.x,
                y=location.y,
            )
        )
        return courier

    # -------------------------------------------------------------------
    # Storage
    # -------------------------------------------------------------------
    @property
    def places(self) -> list[StoragePlace]:
        """Storage places in the order they were handed out."""
        return sorted(self.storage_places or [], key=lambda place: place.position)

    @property
    def is_busy(self) -> bool:
        return any(place.is_occupied for place in self.places)

    def storage_place_for(self, order_id) -> StoragePlace | None:
        return next((place for place in self.places if place.holds(order_id)), None)

    def add_storage_place(self, name: str, volume: int) -> StoragePlace:
        place = StoragePlace.create(name, volume, position=len(self.places))
        self.add_storage_places(place)
        self.raise_(
            StoragePlaceAdded(
                courier_id=str(self.id),
                storage_place_id=str(place.id),
                name=place.name,
                total_volume=place.total_volume,
            )
        )
        return place

    def _first_fit(self, volume) -> StoragePlace | None:
        for place in self.places:
            try:
                if place.can_store(volume):
                    return place
            except ValidationError:
                # An unusable volume makes the place ineligible, not the courier invalid
                continue
        return None

    def can_take_order(self, order) -> bool:
        if order is None:
            return False
        return self._first_fit(order.volume) is not None

    def take_order(self, order) -> StoragePlace:
        """Reserve the first storage place that fits the order."""
        require_value("order", order)

        place = self._first_fit(order.volume)
        if place is None:
            raise NoSuitableStorageError(
                {"storage_places": [f"No storage place can hold an order of volume {order.volume}"]}
            )

        place.store(order.id, order.volume)
        self.raise_(
            OrderPlacedInStorage(
                courier_id=str(self.id),
                order_id=str(order.id),
                storage_place_id=str(place.id),
            )
        )
        return place

    def complete_order(self, order) -> None:
        """Free the storage place holding the order."""
        require_value("order", order)

        place = self.storage_place_for(order.id)
        if place is None:
            raise OrderNotFoundInStorageError({"order_id": [f"Order {order.id} is not stored by this courier"]})

        place.clear(order.id)
        self.raise_(
            OrderReleasedFromStorage(
                courier_id=str(self.id),
                order_id=str(order.id),
                storage_place_id=str(place.id),
            )
        )

    # -------------------------------------------------------------------
    # Movement
    # -------------------------------------------------------------------
    def calculate_time_to_location(self, target: Location) -> float:
        """Estimated time of arrival at ``target``: distance over speed."""
        if is_unset(target):
            raise ValidationError({"location": ["is required"]})
        return target.distance_to(self.location) / self.speed

    def move(self, target: Location) -> None:
        """Advance one tick towards ``target``, spending at most ``speed`` steps."""
        if is_unset(target):
            raise ValidationError({"location": ["is required"]})

        origin = self.location
        budget = self.speed

        dx = target.x - origin.x
        if abs(dx) > budget:
            dx = int(math.copysign(budget, dx))
        budget -= abs(dx)

        dy = target.y - origin.y
        if abs(dy) > budget:
            dy = int(math.copysign(budget, dy))

        if dx == 0 and dy == 0:
            return

        self.location = Location(x=origin.x + dx, y=origin.y + dy)
        self.raise_(
            CourierMoved(
                courier_id=str(self.id),
                from_x=origin.x,
                from_y=origin.y,
                to_x=self.location.x,
                to_y=self.location.y,
            )
        )
