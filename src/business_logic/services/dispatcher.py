"""
Order Dispatcher - Drives the robot through one order at a time.

One pass takes the next order from the book and walks its lines in
order. Bulk lines are skipped; for every unit of a reachable line one
pick program is sent, followed by a pause of one robot cycle. The robot
never acknowledges a program, so this pause is the only thing keeping
commands from piling up faster than the arm can move.

The pause is an ``await`` so whatever drives the event loop (a UI, a
CLI) stays responsive while a pick sequence runs.
"""

import asyncio
import logging
import sys
import threading
from collections.abc import AsyncIterator, Awaitable, Callable
from pathlib import Path

# Add src to path for imports
_src_path = Path(__file__).parent.parent.parent
if str(_src_path) not in sys.path:
    sys.path.insert(0, str(_src_path))

from business_logic.services.actuator_channel import ActuatorChannel, TransportError
from business_logic.services.order_book import OrderBook
from domain.entities import DispatchEvent, DispatchReport, Order, OrderLine
from domain.enums import PickOutcome

logger = logging.getLogger(__name__)

# Seconds the arm needs to move one item into the shipment box
DEFAULT_CYCLE_TIME = 9.5

SleepFunc = Callable[[float], Awaitable[None]]


class CancellationToken:
    """
    Thread-safe stop flag checked between units.

    Units already sent are not rolled back; cancelling only prevents
    the next unit from being issued.
    """

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()


class OrderDispatcher:
    """
    Processes queued orders by sending one pick per unit to the robot.

    Failure policy: a transport error on one unit is reported as a
    FAILED event and dispatch carries on with the next unit. With
    ``stop_on_failure=True`` the pass ends at the first failure instead.
    Either way nothing already sent is undone.
    """

    def __init__(
        self,
        book: OrderBook,
        channel: ActuatorChannel,
        cycle_time: float = DEFAULT_CYCLE_TIME,
        sleep: SleepFunc | None = None,
        stop_on_failure: bool = False
    ):
        """
        Initialize the dispatcher.

        Args:
            book: Order book to take orders from
            channel: Command channel to the robot
            cycle_time: Seconds to wait after each issued pick
            sleep: Awaitable sleep (asyncio.sleep if None); inject a fake in tests
            stop_on_failure: End the pass at the first transport failure
        """
        if cycle_time < 0:
            raise ValueError(f"cycle_time must be >= 0, got {cycle_time}")
        self._book = book
        self._channel = channel
        self._cycle_time = cycle_time
        self._sleep = sleep or asyncio.sleep
        self._stop_on_failure = stop_on_failure

    @property
    def cycle_time(self) -> float:
        return self._cycle_time

    async def process_next_order(
        self,
        cancel: CancellationToken | None = None
    ) -> AsyncIterator[DispatchEvent]:
        """
        Process the next queued order, yielding one event per step.

        Yields:
            NO_WORK alone when there is nothing to pick (empty queue, or
            the next order has no lines); otherwise SKIPPED per bulk line,
            EXECUTED or FAILED per unit, and finally COMPLETED (or
            CANCELLED if ``cancel`` was set between units)
        """
        order = self._book.take_next_order()
        if order is None:
            yield DispatchEvent(PickOutcome.NO_WORK)
            return
        if not order.lines:
            # Taken and archived like any other order, but there is no work
            yield DispatchEvent(PickOutcome.NO_WORK, order_id=order.order_id)
            return

        logger.info("Dispatching %s (%d line(s))", order.get_display_name(), len(order.lines))

        for line in order.lines:
            if not line.item.is_reachable():
                yield DispatchEvent(
                    PickOutcome.SKIPPED,
                    order_id=order.order_id,
                    item_name=line.item.name,
                    quantity=line.quantity
                )
                continue

            stopped = False
            async for event in self._pick_line(order, line, cancel):
                yield event
                if event.outcome is PickOutcome.CANCELLED:
                    return
                if event.outcome.is_failure() and self._stop_on_failure:
                    stopped = True
            if stopped:
                logger.warning("Stopping %s after a failed pick", order.get_display_name())
                return

        yield DispatchEvent(PickOutcome.COMPLETED, order_id=order.order_id)

    async def run_next_order(
        self,
        cancel: CancellationToken | None = None,
        on_event: Callable[[DispatchEvent], None] | None = None
    ) -> DispatchReport:
        """
        Process the next order and collect every event into a report.

        Args:
            cancel: Optional stop flag checked between units
            on_event: Called with each event as soon as it happens

        Returns:
            DispatchReport; ``order`` is None when the queue was empty
        """
        events = []
        async for event in self.process_next_order(cancel):
            events.append(event)
            if on_event is not None:
                on_event(event)

        order = None
        if events and events[0].order_id is not None:
            order = self._find_processed(events[0].order_id)
        return DispatchReport(order=order, events=tuple(events))

    async def _pick_line(
        self,
        order: Order,
        line: OrderLine,
        cancel: CancellationToken | None
    ) -> AsyncIterator[DispatchEvent]:
        """Issue one pick per unit of ``line``, strictly in sequence."""
        item = line.item
        for unit_index in range(1, line.quantity + 1):
            if cancel is not None and cancel.is_cancelled:
                yield DispatchEvent(
                    PickOutcome.CANCELLED,
                    order_id=order.order_id,
                    item_name=item.name,
                    slot=item.slot,
                    unit_index=unit_index,
                    quantity=line.quantity
                )
                return

            try:
                # Socket I/O runs off the event loop thread
                await asyncio.to_thread(self._channel.pick_up, item.slot)
            except TransportError as e:
                logger.error("Pick %d/%d of '%s' failed: %s", unit_index, line.quantity, item.name, e)
                yield DispatchEvent(
                    PickOutcome.FAILED,
                    order_id=order.order_id,
                    item_name=item.name,
                    slot=item.slot,
                    unit_index=unit_index,
                    quantity=line.quantity,
                    error_message=str(e)
                )
                if self._stop_on_failure:
                    return
                continue

            yield DispatchEvent(
                PickOutcome.EXECUTED,
                order_id=order.order_id,
                item_name=item.name,
                slot=item.slot,
                unit_index=unit_index,
                quantity=line.quantity
            )
            await self._sleep(self._cycle_time)

    def _find_processed(self, order_id: int | None) -> Order | None:
        for order in reversed(self._book.processed_orders()):
            if order.order_id == order_id:
                return order
        return None
