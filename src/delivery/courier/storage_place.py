"""StoragePlace entity: a named capacity slot inside a courier's kit."""

from protean.exceptions import ValidationError
from protean.fields import Identifier, Integer, String

from delivery.domain import delivery
from delivery.errors import (
    OrderNotStoredError,
    StorageCapacityError,
    require_identifier,
    require_positive,
)

DEFAULT_STORAGE_NAME = "Bag"
DEFAULT_STORAGE_VOLUME = 10


@delivery.entity(part_of="Courier")
class StoragePlace:
    """Holds at most one order whose volume fits ``total_volume``.

    Occupancy changes only through ``store`` and ``clear``. ``position`` is
    the slot's index in the owning courier's list.
    """

    name: String(required=True, max_length=100)
    total_volume: Integer(required=True, min_value=1)
    order_id: Identifier()
    position: Integer(default=0, min_value=0)

    @classmethod
    def create(cls, name: str, total_volume: int, position: int = 0) -> "StoragePlace":
        """Build a storage place, rejecting a blank name or non-positive volume."""
        if name is None or not str(name).strip():
            raise ValidationError({"name": ["is required"]})
        require_positive("total_volume", total_volume)
        return cls(name=name, total_volume=total_volume, position=position)

    @property
    def is_occupied(self) -> bool:
        return self.order_id is not None

    def holds(self, order_id) -> bool:
        return self.is_occupied and str(self.order_id) == str(order_id)

    def can_store(self, volume: int) -> bool:
        """Whether an order of ``volume`` could be placed here right now."""
        require_positive("volume", volume)
        if self.is_occupied:
            return False
        return volume <= self.total_volume

    def store(self, order_id, volume: int) -> None:
        require_identifier("order_id", order_id)
        require_positive("volume", volume)
        if not self.can_store(volume):
            raise StorageCapacityError(
                {"storage_place": [f"{self.name} cannot store an order of volume {volume}"]}
            )
        self.order_id = str(order_id)

    def clear(self, order_id) -> None:
        require_identifier("order_id", order_id)
        if not self.is_occupied:
            raise OrderNotStoredError({"storage_place": [f"{self.name} is empty"]})
        if not self.holds(order_id):
            raise OrderNotStoredError({"storage_place": [f"{self.name} holds a different order"]})
        self.order_id = None
