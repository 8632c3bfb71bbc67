"""
Domain Enums - Type-safe constants for the fulfillment system.

These enums replace magic strings throughout the codebase and provide
type checking and IDE autocompletion.
"""

from enum import Enum


class ItemKind(Enum):
    """
    Variants of catalog items.

    UNIT items are stocked per piece in a storage slot the robot can reach.
    BULK items are measured (litres, kilos) and have no reachable slot.
    """
    UNIT = "unit"
    BULK = "bulk"

    def has_storage_slot(self) -> bool:
        """Only counted-unit items live in a robot-reachable box."""
        return self is ItemKind.UNIT


class PickOutcome(Enum):
    """
    Outcome of one step of a dispatch pass.

    Each value maps to a distinct status line so an operator can tell
    "nothing to do", "intentionally skipped" and "robot unreachable" apart.
    """
    NO_WORK = "no_work"
    SKIPPED = "skipped"
    EXECUTED = "executed"
    FAILED = "failed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"

    def is_failure(self) -> bool:
        return self is PickOutcome.FAILED
