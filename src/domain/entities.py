"""
Domain Entities - Core business objects of the fulfillment loop.

Items are immutable and shared by reference across every order line that
mentions them. Orders are built up line by line, then frozen when they are
submitted to the order book.
"""

import itertools
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from .enums import ItemKind, PickOutcome
from .value_objects import Slot

if TYPE_CHECKING:
    from business_logic.services.order_book import OrderBook


class OrderFrozenError(ValueError):
    """Raised when a submitted order is modified."""


@dataclass(frozen=True)
class Item:
    """
    A purchasable catalog item.

    Exactly one of two variants, selected by ``kind``:

    - UNIT: counted per piece, stored in a ``slot`` the robot can reach,
      with a ``weight`` per piece in kg.
    - BULK: measured in ``measurement_unit`` (e.g. "L"), never reachable.

    Use the ``Item.unit`` / ``Item.bulk`` constructors rather than
    filling the fields by hand.
    """
    name: str
    price_per_unit: Decimal
    kind: ItemKind
    slot: Slot | None = None
    weight: Decimal | None = None
    measurement_unit: str | None = None

    def __post_init__(self) -> None:
        """Enforce the variant invariants."""
        if not self.name:
            raise ValueError("Item name must not be empty")
        if Decimal(self.price_per_unit) < 0:
            raise ValueError(f"Price must be >= 0, got {self.price_per_unit}")

        if self.kind is ItemKind.UNIT:
            if self.slot is None:
                raise ValueError(f"Unit item '{self.name}' needs a storage slot")
            if self.weight is None or Decimal(self.weight) < 0:
                raise ValueError(f"Unit item '{self.name}' needs a weight >= 0")
            if self.measurement_unit is not None:
                raise ValueError(f"Unit item '{self.name}' cannot have a measurement unit")
        else:
            if not self.measurement_unit:
                raise ValueError(f"Bulk item '{self.name}' needs a measurement unit")
            if self.slot is not None or self.weight is not None:
                raise ValueError(f"Bulk item '{self.name}' cannot have a slot or weight")

    @classmethod
    def unit(
        cls,
        name: str,
        price_per_unit: Decimal | int | str,
        slot: Slot | int,
        weight: Decimal | int | str
    ) -> "Item":
        """Create a counted-unit item stored in ``slot``."""
        return cls(
            name=name,
            price_per_unit=Decimal(price_per_unit),
            kind=ItemKind.UNIT,
            slot=Slot.of(slot),
            weight=Decimal(weight)
        )

    @classmethod
    def bulk(
        cls,
        name: str,
        price_per_unit: Decimal | int | str,
        measurement_unit: str
    ) -> "Item":
        """Create a bulk item priced per ``measurement_unit``."""
        return cls(
            name=name,
            price_per_unit=Decimal(price_per_unit),
            kind=ItemKind.BULK,
            measurement_unit=measurement_unit
        )

    def is_reachable(self) -> bool:
        """
        Check if the robot can pick this item.

        This is the only gate the dispatcher uses before driving the robot:
        counted-unit items are reachable, bulk items never are.
        """
        return self.kind.has_storage_slot() and self.slot is not None

    def line_total(self, quantity: int) -> Decimal:
        """Price of ``quantity`` units of this item."""
        return self.price_per_unit * quantity

    def unit_label(self) -> str:
        """Label for one unit of quantity ("pcs" or the measurement unit)."""
        return self.measurement_unit if self.kind is ItemKind.BULK else "pcs"


@dataclass(frozen=True)
class OrderLine:
    """One item and how many of it were ordered."""
    item: Item
    quantity: int

    def __post_init__(self) -> None:
        if not isinstance(self.item, Item):
            raise ValueError(f"Order line needs an Item, got {self.item!r}")
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise ValueError(f"Quantity must be an integer, got {self.quantity!r}")
        if self.quantity <= 0:
            raise ValueError(f"Quantity must be > 0, got {self.quantity}")

    def total_price(self) -> Decimal:
        return self.item.line_total(self.quantity)


_order_ids = itertools.count(1)


@dataclass(eq=False)
class Order:
    """
    An ordered collection of order lines plus its creation time.

    Lines can be appended until the order is submitted to the order book;
    after that the order is frozen and ``add_line`` raises.
    Orders compare by identity.
    """
    created_at: datetime = field(default_factory=datetime.now)
    order_id: int = field(default_factory=lambda: next(_order_ids))
    _lines: list[OrderLine] = field(default_factory=list, repr=False)
    _submitted: bool = field(default=False, repr=False)

    @property
    def lines(self) -> tuple[OrderLine, ...]:
        """Snapshot of the order lines in insertion order."""
        return tuple(self._lines)

    @property
    def is_submitted(self) -> bool:
        return self._submitted

    def add_line(self, item: Item, quantity: int) -> OrderLine:
        """
        Append a line to the order.

        Raises:
            OrderFrozenError: If the order was already submitted
            ValueError: If the quantity is not a positive integer
        """
        if self._submitted:
            raise OrderFrozenError(f"Order #{self.order_id} is already submitted")
        line = OrderLine(item, quantity)
        self._lines.append(line)
        return line

    def freeze(self) -> None:
        """Mark the order as submitted; no more lines can be added."""
        self._submitted = True

    def total_units(self) -> int:
        return sum(line.quantity for line in self._lines)

    def total_price(self) -> Decimal:
        return sum((line.total_price() for line in self._lines), Decimal("0"))

    def get_display_name(self) -> str:
        """Get human-readable name for display."""
        return f"Order #{self.order_id} ({self.created_at:%Y-%m-%d %H:%M:%S})"


@dataclass
class Customer:
    """
    A customer and the history of orders they created.

    The history keeps a reference to each order for display; once an order
    is submitted, the order book decides what happens to it.
    """
    name: str
    orders: list[Order] = field(default_factory=list)

    def create_order(self, book: "OrderBook", order: Order) -> Order:
        """
        Record ``order`` in this customer's history and queue it in ``book``.

        Returns:
            The submitted order
        """
        book.submit(order)
        self.orders.append(order)
        return order


@dataclass(frozen=True)
class DispatchEvent:
    """
    One entry of the outcome stream produced while processing an order.

    ``unit_index`` counts from 1 within its line and is only set for
    EXECUTED / FAILED / CANCELLED entries.
    """
    outcome: PickOutcome
    order_id: int | None = None
    item_name: str | None = None
    slot: Slot | None = None
    unit_index: int | None = None
    quantity: int | None = None
    error_message: str | None = None


@dataclass(frozen=True)
class DispatchReport:
    """
    Result of one dispatch pass.

    Encapsulates the order that was processed (if any) and every event
    emitted while processing it.
    """
    order: Order | None
    events: tuple[DispatchEvent, ...]

    def had_work(self) -> bool:
        """Check if the pass took an order that had lines to work on."""
        return self.order is not None and self.count(PickOutcome.NO_WORK) == 0

    def is_complete(self) -> bool:
        """Check if the pass reached the end of the order."""
        return any(e.outcome is PickOutcome.COMPLETED for e in self.events)

    def count(self, outcome: PickOutcome) -> int:
        return sum(1 for e in self.events if e.outcome is outcome)

    def failures(self) -> list[DispatchEvent]:
        return [e for e in self.events if e.outcome.is_failure()]

    def all_picks_failed(self) -> bool:
        """Check if picks were attempted and none of them reached the robot."""
        return bool(self.failures()) and self.count(PickOutcome.EXECUTED) == 0
