"""
Catalog Repository - Lookup of the items the warehouse sells.

The catalog is built once at startup and never changes; every order
line refers to the same shared Item instance.
"""

import sys
from decimal import Decimal
from pathlib import Path

# Add src to path for imports
_src_path = Path(__file__).parent.parent.parent
if str(_src_path) not in sys.path:
    sys.path.insert(0, str(_src_path))

from domain.entities import Item
from domain.value_objects import Slot


class CatalogRepository:
    """
    In-memory, read-only catalog keyed by case-insensitive item name.
    """

    def __init__(self, items: list[Item]):
        """
        Build the catalog.

        Args:
            items: Catalog items; names must be unique (ignoring case),
                   and no two unit items may share a storage slot

        Raises:
            ValueError: On duplicate names or slots
        """
        self._items: dict[str, Item] = {}
        slots: dict[Slot, str] = {}

        for item in items:
            key = self._normalize(item.name)
            if key in self._items:
                raise ValueError(f"Duplicate catalog item: {item.name}")
            if item.slot is not None:
                if item.slot in slots:
                    raise ValueError(
                        f"Box {item.slot} is used by both '{slots[item.slot]}' and '{item.name}'"
                    )
                slots[item.slot] = item.name
            self._items[key] = item

    def get(self, name: str) -> Item:
        """
        Get an item by name.

        Raises:
            KeyError: If no item has that name
        """
        try:
            return self._items[self._normalize(name)]
        except KeyError:
            raise KeyError(f"Unknown catalog item: {name}") from None

    def get_all(self) -> list[Item]:
        """All items in catalog order."""
        return list(self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self._normalize(name) in self._items

    @staticmethod
    def _normalize(name: str) -> str:
        return name.strip().lower()


HYDRAULIC_PUMP_OIL = "hydraulic pump oil"
PLC_MODULE = "PLC module"
SERVO_MOTOR = "servo motor"


def create_default_catalog() -> CatalogRepository:
    """
    Factory function for the warehouse's standard catalog.

    Returns:
        Catalog with pump oil (bulk, per litre), PLC modules in box 1
        and servo motors in box 2
    """
    return CatalogRepository([
        Item.bulk(HYDRAULIC_PUMP_OIL, Decimal("59"), "L"),
        Item.unit(PLC_MODULE, Decimal("1250"), slot=1, weight=Decimal("1")),
        Item.unit(SERVO_MOTOR, Decimal("2100"), slot=2, weight=Decimal("2")),
    ])
