"""Delivery bounded context: Couriers, Orders and Dispatch.

Couriers carry orders in capacity-bounded storage places and move across a
fixed grid. Orders are matched to the courier with the shortest estimated
time of arrival. Uses CQRS; aggregates live in the in-memory provider.
"""

from protean.domain import Domain

from delivery.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

delivery = Domain(name="delivery")
