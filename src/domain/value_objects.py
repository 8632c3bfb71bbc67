"""
Value Objects - Immutable domain data structures.

Value objects represent domain concepts that are identified by their
values rather than a unique identity. They are immutable and comparable.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Slot:
    """
    A physical storage box the robot can reach.

    Slots are numbered from 1; the number doubles as the X coordinate
    of the box in the robot's motion program.
    """
    number: int

    def __post_init__(self) -> None:
        """Validate that the slot number is a positive integer."""
        if isinstance(self.number, bool) or not isinstance(self.number, int):
            raise ValueError(f"Slot number must be an integer, got {self.number!r}")
        if self.number <= 0:
            raise ValueError(f"Slot number must be positive, got {self.number}")

    def __str__(self) -> str:
        return str(self.number)

    @classmethod
    def of(cls, value: "Slot | int") -> "Slot":
        """
        Coerce an int or an existing Slot into a Slot.

        Examples:
            >>> Slot.of(2)
            Slot(number=2)
        """
        if isinstance(value, Slot):
            return value
        return cls(value)
