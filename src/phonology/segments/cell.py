"""
Shared storage cells for segment feature values.
"""

from typing import Any


class ValueCell:
    """A mutable slot holding one feature value.

    Several segments may be bound to the same cell. A write through any of
    them is then seen by all of them, until one is delinked or rebound.
    """

    __slots__ = ("value",)

    def __init__(self, value: Any = None):
        self.value = value

    def alias(self) -> "ValueCell":
        """Share this cell."""
        return self

    def copy(self) -> "ValueCell":
        """Get an independent cell holding the same value."""
        return ValueCell(self.value)

    def __repr__(self) -> str:
        return f"ValueCell({self.value!r})"
