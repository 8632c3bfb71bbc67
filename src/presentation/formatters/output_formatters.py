"""
Output Formatters - Presentation layer for displaying status.

This module turns orders and dispatch events into the status lines an
operator reads, keeping display logic separate from business logic.
"""

from pathlib import Path
import sys
from typing import Any

# Add src to path for imports
_src_path = Path(__file__).parent.parent.parent
if str(_src_path) not in sys.path:
    sys.path.insert(0, str(_src_path))

from domain.entities import DispatchEvent, DispatchReport, Order
from domain.enums import PickOutcome


class ConsoleFormatter:
    """
    Formats output for console display.

    Base class with the layout helpers shared by the specific formatters.
    """

    def __init__(self, width: int = 70):
        """
        Initialize formatter.

        Args:
            width: Width of output lines
        """
        self._width = width

    def header(self, text: str, char: str = "=") -> str:
        """
        Format a header line.

        Args:
            text: Header text
            char: Character to use for border

        Returns:
            Formatted header string
        """
        lines = [
            char * self._width,
            text,
            char * self._width
        ]
        return "\n".join(lines)

    def subheader(self, text: str) -> str:
        """Format a subheader line."""
        return f"\n{text}\n{'-' * self._width}"

    def key_value(self, key: str, value: Any, indent: int = 0) -> str:
        """
        Format a key-value pair.

        Args:
            key: Key name
            value: Value to display
            indent: Number of spaces to indent

        Returns:
            Formatted key-value string
        """
        spaces = " " * indent
        return f"{spaces}{key}: {value}"

    def success(self, message: str) -> str:
        """Format a success message."""
        return f"✓ {message}"

    def error(self, message: str) -> str:
        """Format an error message."""
        return f"✗ {message}"

    def warning(self, message: str) -> str:
        """Format a warning message."""
        return f"⚠  {message}"


class OrderFormatter(ConsoleFormatter):
    """Formatter specifically for order-related output."""

    def format_order_list(self, orders: list[Order] | tuple[Order, ...]) -> str:
        """
        Format the order queue for display.

        Args:
            orders: Orders to format, oldest first

        Returns:
            Formatted string
        """
        if not orders:
            return self.warning("No orders in queue.")

        lines = [self.header("QUEUED ORDERS")]

        for i, order in enumerate(orders, 1):
            lines.append(f"\n[{i}] {order.get_display_name()}")
            for line in order.lines:
                lines.append(f"    {line.quantity} {line.item.unit_label()} x {line.item.name}")
            lines.append(self.key_value("Units", order.total_units(), 4))
            lines.append(self.key_value("Value", f"{order.total_price():.2f}", 4))

        lines.append(f"\nTotal: {len(orders)} order(s)")
        lines.append("=" * self._width)

        return "\n".join(lines)


class DispatchFormatter(ConsoleFormatter):
    """
    Formatter for the status lines of a dispatch pass.

    Every outcome kind gets its own wording so "nothing to do",
    "intentionally skipped" and "robot unreachable" never look alike.
    """

    PROCESSING_MESSAGE = "Processing next order..."
    NO_WORK_MESSAGE = "No orders in queue."
    EMPTY_ORDER_MESSAGE = "Order #{order_id} has no lines. Nothing to pick."
    COMPLETED_MESSAGE = "Order completed. Shipment box ready."

    def format_start(self) -> str:
        return self.PROCESSING_MESSAGE

    def format_event(self, event: DispatchEvent) -> str:
        """
        Format one dispatch event as a status line.

        Args:
            event: Event from the dispatcher's outcome stream

        Returns:
            Human-readable status line
        """
        outcome = event.outcome

        if outcome is PickOutcome.NO_WORK:
            if event.order_id is not None:
                return self.EMPTY_ORDER_MESSAGE.format(order_id=event.order_id)
            return self.NO_WORK_MESSAGE
        if outcome is PickOutcome.SKIPPED:
            return f"Skipping '{event.item_name}' (no inventory location / bulk item)"
        if outcome is PickOutcome.EXECUTED:
            return f"Picking up {event.item_name} (Box {event.slot})"
        if outcome is PickOutcome.FAILED:
            return (
                f"Actuator unreachable: could not pick {event.item_name} "
                f"(Box {event.slot}, unit {event.unit_index}/{event.quantity}): "
                f"{event.error_message}"
            )
        if outcome is PickOutcome.CANCELLED:
            return (
                f"Order processing cancelled before unit {event.unit_index}/{event.quantity} "
                f"of {event.item_name}"
            )
        if outcome is PickOutcome.COMPLETED:
            return self.COMPLETED_MESSAGE

        raise ValueError(f"Unknown outcome: {outcome}")

    def format_report(self, report: DispatchReport) -> str:
        """
        Format a summary of one dispatch pass.

        Args:
            report: Collected result of the pass

        Returns:
            Formatted summary string
        """
        if report.order is None:
            return self.NO_WORK_MESSAGE
        if not report.had_work():
            return self.warning(self.EMPTY_ORDER_MESSAGE.format(order_id=report.order.order_id))

        lines = [self.subheader(f"Summary: {report.order.get_display_name()}")]
        lines.append(self.key_value("Picked", report.count(PickOutcome.EXECUTED), 2))
        lines.append(self.key_value("Skipped lines", report.count(PickOutcome.SKIPPED), 2))

        failed = report.count(PickOutcome.FAILED)
        if failed:
            lines.append(self.error(f"Failed picks: {failed}"))

        if report.is_complete():
            lines.append(self.success(self.COMPLETED_MESSAGE))
        else:
            lines.append(self.warning("Order not completed"))

        return "\n".join(lines)


class ProgressFormatter(ConsoleFormatter):
    """Formatter for progress indicators."""

    def format_progress(
        self,
        current: int,
        total: int,
        description: str = ""
    ) -> str:
        """
        Format a progress indicator.

        Args:
            current: Current item number
            total: Total items
            description: Optional description

        Returns:
            Formatted progress string
        """
        percentage = (current / total * 100) if total > 0 else 0

        if description:
            return f"[{current}/{total}] ({percentage:.0f}%) {description}"
        else:
            return f"[{current}/{total}] ({percentage:.0f}%)"
