"""
Order Book - Queue of submitted orders and archive of processed ones.

The book owns the single state transition of the fulfillment loop:
take the oldest queued order and mark it processed. Submission and
take-next may come from different threads (e.g. a UI thread submitting
while the dispatcher runs), so both collections sit behind one lock.
"""

import sys
import threading
from collections import deque
from pathlib import Path

# Add src to path for imports
_src_path = Path(__file__).parent.parent.parent
if str(_src_path) not in sys.path:
    sys.path.insert(0, str(_src_path))

from domain.entities import Order, OrderLine


class DuplicateOrderError(ValueError):
    """Raised when an order is submitted to the book more than once."""


class OrderBook:
    """
    FIFO queue of pending orders plus the list of processed orders.

    Invariants:
    - an order is either queued or processed, never both, never twice
    - processed orders are never removed
    - orders leave the queue in arrival order
    """

    def __init__(self):
        self._queued: deque[Order] = deque()
        self._processed: list[Order] = []
        self._lock = threading.Lock()

    def submit(self, order: Order) -> None:
        """
        Append ``order`` to the pending queue and freeze it.

        Raises:
            DuplicateOrderError: If the order is already queued or processed
        """
        with self._lock:
            if order.is_submitted or self._contains(order):
                raise DuplicateOrderError(
                    f"{order.get_display_name()} was already submitted"
                )
            order.freeze()
            self._queued.append(order)

    def take_next_order(self) -> Order | None:
        """
        Move the oldest queued order to the processed list and return it.

        Returns:
            The order, or None when the queue is empty
        """
        with self._lock:
            if not self._queued:
                return None
            order = self._queued.popleft()
            self._processed.append(order)
            return order

    def take_next(self) -> list[OrderLine]:
        """
        Take the next order and return a copy of its lines.

        An empty queue is a normal condition: the result is then an
        empty list, no matter how often this is called.
        """
        order = self.take_next_order()
        if order is None:
            return []
        return list(order.lines)

    @property
    def pending_count(self) -> int:
        with self._lock:
            return len(self._queued)

    @property
    def processed_count(self) -> int:
        with self._lock:
            return len(self._processed)

    def queued_orders(self) -> tuple[Order, ...]:
        """Snapshot of the queue, oldest first."""
        with self._lock:
            return tuple(self._queued)

    def processed_orders(self) -> tuple[Order, ...]:
        """Snapshot of the processed archive, in processing order."""
        with self._lock:
            return tuple(self._processed)

    def _contains(self, order: Order) -> bool:
        # Identity check; caller holds the lock
        return any(o is order for o in self._queued) or any(o is order for o in self._processed)
