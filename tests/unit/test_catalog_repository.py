"""
Tests for the Catalog Repository.
"""

import sys
from decimal import Decimal
from pathlib import Path

import pytest

# Add src to path
_src_path = Path(__file__).parent.parent.parent / "src"
if str(_src_path) not in sys.path:
    sys.path.insert(0, str(_src_path))

from data_access.repositories.catalog_repository import (
    HYDRAULIC_PUMP_OIL,
    PLC_MODULE,
    SERVO_MOTOR,
    CatalogRepository,
    create_default_catalog,
)
from domain.entities import Item
from domain.enums import ItemKind
from domain.value_objects import Slot


@pytest.fixture
def catalog():
    return create_default_catalog()


class TestDefaultCatalog:
    """Tests for the standard warehouse catalog."""

    def test_has_three_items(self, catalog):
        assert len(catalog) == 3

    def test_pump_oil_is_bulk(self, catalog):
        oil = catalog.get(HYDRAULIC_PUMP_OIL)
        assert oil.kind is ItemKind.BULK
        assert oil.measurement_unit == "L"
        assert oil.price_per_unit == Decimal("59")
        assert oil.is_reachable() is False

    def test_plc_module_in_box_one(self, catalog):
        plc = catalog.get(PLC_MODULE)
        assert plc.slot == Slot(1)
        assert plc.weight == Decimal("1")
        assert plc.price_per_unit == Decimal("1250")

    def test_servo_motor_in_box_two(self, catalog):
        servo = catalog.get(SERVO_MOTOR)
        assert servo.slot == Slot(2)
        assert servo.weight == Decimal("2")
        assert servo.price_per_unit == Decimal("2100")

    def test_reachable_items(self, catalog):
        names = [item.name for item in catalog.get_all() if item.is_reachable()]
        assert names == [PLC_MODULE, SERVO_MOTOR]


class TestCatalogRepository:
    """Tests for CatalogRepository lookups and validation."""

    def test_lookup_ignores_case_and_whitespace(self, catalog):
        assert catalog.get("  plc MODULE ") is catalog.get(PLC_MODULE)

    def test_get_returns_shared_instance(self, catalog):
        assert catalog.get(SERVO_MOTOR) is catalog.get(SERVO_MOTOR)

    def test_unknown_item_raises(self, catalog):
        with pytest.raises(KeyError):
            catalog.get("flux capacitor")

    def test_contains(self, catalog):
        assert "servo motor" in catalog
        assert "flux capacitor" not in catalog
        assert 42 not in catalog

    def test_duplicate_name_rejected(self):
        with pytest.raises(ValueError):
            CatalogRepository([
                Item.bulk("oil", Decimal("1"), "L"),
                Item.bulk("OIL", Decimal("2"), "L"),
            ])

    def test_shared_slot_rejected(self):
        with pytest.raises(ValueError):
            CatalogRepository([
                Item.unit("a", Decimal("1"), slot=1, weight=1),
                Item.unit("b", Decimal("1"), slot=1, weight=1),
            ])
