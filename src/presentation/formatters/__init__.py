"""
Output Formatters - Presentation layer for displaying status.

This module provides classes for formatting output to the console,
keeping display logic separate from business logic.
"""

from .output_formatters import (
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
