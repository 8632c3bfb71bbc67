"""
Application Orchestrator - Main coordinator for the fulfillment application.

This is the top-level component that ties together all layers:
- Domain models
- Catalog repository
- Order book and dispatcher
- Robot command channel
- Presentation layer

A UI or CLI talks to the core only through this object: submit orders,
process the next order, and read the status lines it prints.
"""

import sys
from collections.abc import Callable
from pathlib import Path

# Add src to path
_src_path = Path(__file__).parent.parent
if str(_src_path) not in sys.path:
    sys.path.insert(0, str(_src_path))

from business_logic.services.actuator_channel import ActuatorChannel, ActuatorTransport, TcpTransport
from business_logic.services.dispatcher import CancellationToken, OrderDispatcher, SleepFunc
from business_logic.services.order_book import OrderBook
from data_access.repositories.catalog_repository import (
    HYDRAULIC_PUMP_OIL,
    PLC_MODULE,
    SERVO_MOTOR,
    CatalogRepository,
    create_default_catalog,
)
from domain.entities import Customer, DispatchReport, Order
from orchestration.config import ApplicationConfig
from presentation.formatters import DispatchFormatter, OrderFormatter, ProgressFormatter


class ApplicationOrchestrator:
    """
    Main application orchestrator.

    Coordinates all layers of the application to provide the complete
    order fulfillment workflow.
    """

    def __init__(
        self,
        config: ApplicationConfig,
        catalog: CatalogRepository,
        order_book: OrderBook,
        dispatcher: OrderDispatcher,
        order_formatter: OrderFormatter | None = None,
        dispatch_formatter: DispatchFormatter | None = None,
        progress_formatter: ProgressFormatter | None = None,
        output: Callable[[str], None] | None = None
    ):
        """
        Initialize the orchestrator.

        Args:
            config: Application configuration
            catalog: Items available for ordering
            order_book: Queue of submitted orders
            dispatcher: Drives the robot for queued orders
            order_formatter: Order formatter (creates default if None)
            dispatch_formatter: Status line formatter (creates default if None)
            progress_formatter: Progress formatter (creates default if None)
            output: Sink for status lines (print if None)
        """
        self._config = config
        self._catalog = catalog
        self._order_book = order_book
        self._dispatcher = dispatcher
        self._order_formatter = order_formatter or OrderFormatter()
        self._dispatch_formatter = dispatch_formatter or DispatchFormatter()
        self._progress_formatter = progress_formatter or ProgressFormatter()
        self._output = output or print

    @property
    def catalog(self) -> CatalogRepository:
        return self._catalog

    @property
    def order_book(self) -> OrderBook:
        return self._order_book

    def submit_order(self, customer: Customer, order: Order) -> Order:
        """
        Submit ``order`` on behalf of ``customer``.

        Returns:
            The submitted (now frozen) order
        """
        customer.create_order(self._order_book, order)
        self._output(f"[QUEUED] {order.get_display_name()} for {customer.name}")
        return order

    def show_queue(self) -> None:
        """Print the pending orders, oldest first."""
        self._output(self._order_formatter.format_order_list(self._order_book.queued_orders()))

    async def process_next_order(self, cancel: CancellationToken | None = None) -> DispatchReport:
        """
        Process the next queued order, printing one status line per event.

        Transport failures are reported as status lines, never raised.

        Returns:
            DispatchReport for the pass
        """
        self._output(self._dispatch_formatter.format_start())
        return await self._dispatcher.run_next_order(
            cancel,
            on_event=lambda event: self._output(self._dispatch_formatter.format_event(event))
        )

    async def process_all_orders(self, cancel: CancellationToken | None = None) -> list[DispatchReport]:
        """
        Process queued orders until the queue is empty or ``cancel`` is set.

        Draining also stops after an order whose every pick failed: the
        robot is unreachable, and the remaining orders stay queued for a
        later run instead of being archived with nothing picked.

        Returns:
            One report per processed order
        """
        reports = []
        while self._order_book.pending_count > 0:
            if cancel is not None and cancel.is_cancelled:
                break
            # Orders may be submitted while we drain
            current = len(reports) + 1
            total = len(reports) + self._order_book.pending_count
            self._output(self._progress_formatter.format_progress(current, total))

            report = await self.process_next_order(cancel)
            reports.append(report)
            self._output(self._dispatch_formatter.format_report(report))

            if report.all_picks_failed():
                self._output(
                    f"[ERROR] Robot at {self._config.robot_host} unreachable; "
                    f"{self._order_book.pending_count} order(s) left in queue"
                )
                break
        return reports

    def seed_demo_orders(self) -> list[Customer]:
        """
        Queue the two sample orders used to try the robot out.

        Sara orders one servo motor and two PLC modules; Carl orders
        15 L of hydraulic pump oil, which the robot cannot pick.

        Returns:
            The two customers, in submission order
        """
        sara = Customer("Sara")
        order = Order()
        order.add_line(self._catalog.get(SERVO_MOTOR), 1)
        order.add_line(self._catalog.get(PLC_MODULE), 2)
        self.submit_order(sara, order)

        carl = Customer("Carl")
        order = Order()
        order.add_line(self._catalog.get(HYDRAULIC_PUMP_OIL), 15)
        self.submit_order(carl, order)

        return [sara, carl]


def create_orchestrator(
    config: ApplicationConfig | None = None,
    transport: ActuatorTransport | None = None,
    sleep: SleepFunc | None = None,
    output: Callable[[str], None] | None = None
) -> ApplicationOrchestrator:
    """
    Factory function to create a fully configured orchestrator.

    Args:
        config: Application configuration (uses defaults if None)
        transport: Robot transport (TCP with config timeout if None)
        sleep: Awaitable sleep for pacing (asyncio.sleep if None)
        output: Sink for status lines (print if None)

    Returns:
        Configured ApplicationOrchestrator instance
    """
    if config is None:
        config = ApplicationConfig.from_defaults()

    if transport is None:
        transport = TcpTransport(connect_timeout=config.connect_timeout)

    catalog = create_default_catalog()
    order_book = OrderBook()
    channel = ActuatorChannel(
        host=config.robot_host,
        control_port=config.control_port,
        program_port=config.program_port,
        transport=transport
    )
    dispatcher = OrderDispatcher(
        order_book,
        channel,
        cycle_time=config.cycle_time,
        sleep=sleep,
        stop_on_failure=config.stop_on_failure
    )

    return ApplicationOrchestrator(
        config=config,
        catalog=catalog,
        order_book=order_book,
        dispatcher=dispatcher,
        output=output
    )
