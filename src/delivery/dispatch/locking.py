"""Per-aggregate locks for dispatching against a shared courier pool.

Aggregates do no locking of their own. When several dispatches can run at
once, each one holds the locks of the order and of every candidate courier
while it reads storage and reserves a slot. Locks are always taken in sorted
id order, so two holders can never wait on each other.
"""

import threading
from collections import defaultdict
from contextlib import ExitStack, contextmanager

from delivery.courier.courier import Courier
from delivery.dispatch.dispatcher import OrderDispatcher
from delivery.order.order import Order


class AggregateLocks:
    """A registry of one mutex per aggregate id.

    An entry lives only while somebody holds or waits on it, so the registry
    does not grow with the number of aggregates ever dispatched.
    """

    def __init__(self):
        self._locks: dict[str, threading.Lock] = {}
        self._holders: dict[str, int] = defaultdict(int)
        self._registry_lock = threading.Lock()

    def __len__(self) -> int:
        with self._registry_lock:
            return len(self._locks)

    def _checkout(self, key: str) -> threading.Lock:
        with self._registry_lock:
            self._holders[key] += 1
            return self._locks.setdefault(key, threading.Lock())

    def _checkin(self, key: str) -> None:
        with self._registry_lock:
            self._holders[key] -= 1
            if self._holders[key] == 0:
                del self._holders[key]
                del self._locks[key]

    @contextmanager
    def hold(self, *ids):
        """Hold the locks of all given ids for the duration of the block."""
        keys = sorted({str(i) for i in ids if i is not None})
        locks = [self._checkout(key) for key in keys]
        try:
            with ExitStack() as stack:
                for lock in locks:
                    stack.enter_context(lock)
                yield
        finally:
            for key in keys:
                self._checkin(key)


aggregate_locks = AggregateLocks()


class ConcurrentOrderDispatcher(OrderDispatcher):
    """An ``OrderDispatcher`` that serializes work per order and courier."""

    def __init__(self, locks: AggregateLocks | None = None):
        self.locks = locks if locks is not None else aggregate_locks

    def dispatch(self, order: Order, couriers: list[Courier]) -> Courier:
        order_id = order.id if order is not None else None
        with self.locks.hold(order_id, *(courier.id for courier in couriers or [])):
            return super().dispatch(order, couriers)
