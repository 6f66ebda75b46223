"""Domain error taxonomy.

Input validation failures are raised as Protean's ``ValidationError``.
Operations attempted against an aggregate in the wrong state raise a
subclass of ``InvalidOperationError``; an exhausted search raises a
subclass of ``ObjectNotFoundError``. Every error carries a
``{field: [message]}`` dict so callers branch on the class, not the text.
"""

import uuid

from protean.exceptions import InvalidOperationError, ObjectNotFoundError, ValidationError

NIL_ID = str(uuid.UUID(int=0))


# ---------------------------------------------------------------------------
# Domain-rule violations
# ---------------------------------------------------------------------------
class OrderAlreadyAssignedError(InvalidOperationError):
    """The order has already left the Created state."""


class OrderNotAssignedError(InvalidOperationError):
    """The order is not in the Assigned state."""


class StorageCapacityError(InvalidOperationError):
    """The storage place is occupied or too small for the volume."""


class OrderNotStoredError(InvalidOperationError):
    """The storage place does not hold the given order."""


class OrderNotFoundInStorageError(InvalidOperationError):
    """None of the courier's storage places holds the given order."""


class NoSuitableStorageError(InvalidOperationError):
    """No storage place of the courier can hold the order."""


# ---------------------------------------------------------------------------
# Not found / infeasible
# ---------------------------------------------------------------------------
class NoCourierAvailableError(ObjectNotFoundError):
    """No courier in the pool can take the order."""


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------
def require_value(field: str, value) -> None:
    """Reject a missing argument."""
    if value is None:
        raise ValidationError({field: ["is required"]})


def require_identifier(field: str, value) -> None:
    """Reject a missing, blank or nil identifier."""
    if value is None or str(value).strip() == "" or str(value) == NIL_ID:
        raise ValidationError({field: ["is required"]})


def require_positive(field: str, value) -> None:
    """Reject anything that is not an integer greater than zero."""
    if value is None or isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValidationError({field: [f"must be a positive integer, got {value!r}"]})
