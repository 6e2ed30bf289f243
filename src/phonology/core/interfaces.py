"""
Collaborator interfaces for segment operations.

Segment operations never depend on a concrete segment class. Any object
implementing ``ISegment`` can be assimilated, copied, inserted and so on;
``phonology.segments`` ships one implementation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from phonology.features.graph import FeatureGraph
    from phonology.segments.cell import ValueCell


class Direction(str, Enum):
    """Direction in which a rule is scanning a word."""
    LEFTWARD = "leftward"
    RIGHTWARD = "rightward"


@dataclass(frozen=True)
class RuleContext:
    """Marker for an active rule application step."""
    direction: Direction = Direction.RIGHTWARD

    def __post_init__(self):
        # Raises ValueError for anything but leftward or rightward
        object.__setattr__(self, "direction", Direction(self.direction))


class IPrototype(ABC):
    """Canonical feature values for one symbol."""

    @abstractmethod
    def all_values(self) -> Mapping[str, Any]:
        """Map each bound feature name to its numeric value."""
        pass


class ISymbolSet(ABC):
    """Lookup from phoneme symbols to their prototypes."""

    @abstractmethod
    def prototype(self, symbol: str) -> IPrototype:
        """Get the prototype for a symbol.

        Raises:
            UndefinedSymbolError: If the symbol is unknown
        """
        pass


class ISegment(IPrototype):
    """Capabilities a segment must provide to segment operations."""

    @property
    @abstractmethod
    def featureset(self) -> FeatureGraph:
        """The feature graph this segment's values are typed by."""
        pass

    @property
    @abstractmethod
    def symbolset(self) -> ISymbolSet | None:
        """The symbol set used by ``change``, if any."""
        pass

    @property
    @abstractmethod
    def rule_context(self) -> RuleContext | None:
        """The active rule context, or None outside a rule."""
        pass

    @abstractmethod
    def value(self, feature: str) -> Any:
        """Read the numeric value of a feature; None when undefined."""
        pass

    @abstractmethod
    def set(self, feature: str, value: Any) -> None:
        """Write a value through the segment's current storage for a feature."""
        pass

    @abstractmethod
    def value_ref(self, feature: str) -> ValueCell | dict[str, Any] | None:
        """Get the aliasable storage for a feature.

        Terminal features give a cell; nodes give a mapping of child name
        to the child's storage.
        """
        pass

    @abstractmethod
    def link(self, feature: str, ref: ValueCell | Mapping[str, Any]) -> None:
        """Bind a feature to storage obtained from ``value_ref``."""
        pass

    @abstractmethod
    def delink(self, *features: str) -> list[Any]:
        """Remove bindings without writing to shared storage."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove every binding."""
        pass

    @abstractmethod
    def duplicate(self) -> ISegment:
        """Get an independent copy with the same values."""
        pass

    @abstractmethod
    def insert_left(self, segment: ISegment) -> None:
        """Request insertion of a segment immediately before this one."""
        pass

    @abstractmethod
    def insert_right(self, segment: ISegment) -> None:
        """Request insertion of a segment immediately after this one."""
        pass
