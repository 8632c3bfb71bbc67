"""
Presentation Layer - Output formatting.

This layer turns core results into status text, keeping it separate
from business logic.
"""

from .formatters.output_formatters import (
    ConsoleFormatter,
    DispatchFormatter,
    OrderFormatter,
    ProgressFormatter,
)

__all__ = [
    "ConsoleFormatter",
    "DispatchFormatter",
    "OrderFormatter",
    "ProgressFormatter",
]
