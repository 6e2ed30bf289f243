"""
Segment implementation: a bundle of feature values over a feature graph.

Every terminal feature a segment has a value for is bound to a
``ValueCell``. Writes go through the bound cell, so segments that share a
cell (after ``link``) see each other's writes. Node features hold no cell
of their own: a node's value is derived from its descendants.
"""

from collections.abc import Iterator, Mapping, MutableMapping
from typing import Any

from phonology.core.interfaces import ISegment, ISymbolSet, RuleContext
from phonology.features.coercion import is_undefined_text
from phonology.features.graph import FeatureGraph
from phonology.segments.cell import ValueCell
from phonology.utils.errors import TypeMismatchError

BOUNDARY_FEATURE = "BOUNDARY"


class Segment(ISegment):
    """A phonological segment.

    Values are read and written by feature name, either with ``value`` and
    ``set`` or through the ``features`` mapping::

        seg = Segment(features)
        seg.features["voice"] = 1
        seg.features["anterior"] = "-"
        seg.value("Coronal")          # {'anterior': 0}
        del seg.features["voice"]     # same as seg.delink("voice")

    Unknown feature names raise ``UndefinedFeatureError``.
    """

    def __init__(
        self,
        featureset: FeatureGraph,
        values: Mapping[str, Any] | None = None,
        symbolset: ISymbolSet | None = None,
        rule_context: RuleContext | None = None,
    ):
        """Initialize the segment.

        Args:
            featureset: Feature graph that types the segment's values
            values: Initial values by feature name; nodes take mappings
            symbolset: Optional symbol set, required by ``change``
            rule_context: Active rule context, set by the rule engine
        """
        if not isinstance(featureset, FeatureGraph):
            raise TypeError(f"Segment requires a FeatureGraph, got {type(featureset).__name__}")

        self._featureset = featureset
        self._symbolset = symbolset
        self._rule_context = rule_context
        self._values: dict[str, ValueCell] = {}
        self._insert_left: list[ISegment] = []
        self._insert_right: list[ISegment] = []

        for name, value in (values or {}).items():
            self.set(name, value)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.all_values()!r})"

    @property
    def featureset(self) -> FeatureGraph:
        return self._featureset

    @property
    def symbolset(self) -> ISymbolSet | None:
        return self._symbolset

    @symbolset.setter
    def symbolset(self, symbolset: ISymbolSet | None) -> None:
        self._symbolset = symbolset

    @property
    def rule_context(self) -> RuleContext | None:
        return self._rule_context

    @rule_context.setter
    def rule_context(self, context: RuleContext | None) -> None:
        self._rule_context = context

    @property
    def features(self) -> "FeatureView":
        """Mapping view of this segment's values, keyed by feature name."""
        return FeatureView(self)

    # Reading

    def value(self, feature: str) -> Any:
        """Get the numeric value of a feature.

        A node returns a mapping of child name to value for every child with
        a defined value, or None when no descendant is defined.
        """
        definition = self._featureset.feature(feature)
        if definition.is_node:
            return self._node_value(feature, frozenset())
        cell = self._values.get(feature)
        return cell.value if cell is not None else None

    def _node_value(self, node: str, path: frozenset) -> dict[str, Any] | None:
        path = path | {node}
        result = {}
        for child in self._walk_children(node, path):
            if self._featureset.feature(child).is_node:
                child_value = self._node_value(child, path)
            else:
                cell = self._values.get(child)
                child_value = cell.value if cell is not None else None
            if child_value is not None:
                result[child] = child_value
        return result or None

    def value_text(self, feature: str) -> Any:
        """Get a feature's value in text form; nodes give nested mappings."""
        value = self.value(feature)
        return self._to_text(feature, value)

    def _to_text(self, feature: str, value: Any) -> Any:
        if isinstance(value, Mapping):
            return {child: self._to_text(child, v) for child, v in value.items()}
        return self._featureset.text_form(feature, value)

    def value_ref(self, feature: str) -> ValueCell | dict[str, Any] | None:
        definition = self._featureset.feature(feature)
        if definition.is_node:
            return self._node_ref(feature, frozenset())
        return self._values.get(feature)

    def _node_ref(self, node: str, path: frozenset) -> dict[str, Any] | None:
        path = path | {node}
        refs = {}
        for child in self._walk_children(node, path):
            if self._featureset.feature(child).is_node:
                ref = self._node_ref(child, path)
            else:
                ref = self._values.get(child)
            if ref is not None:
                refs[child] = ref
        return refs or None

    def all_values(self) -> dict[str, Any]:
        """Get every bound terminal feature and its value.

        Features explicitly set to None appear with a None value; delinked
        features do not appear.
        """
        return {name: cell.value for name, cell in self._values.items()}

    # Writing

    def set(self, feature: str, value: Any) -> None:
        """Set a feature's value, writing through any shared cell.

        Values pass through the feature graph's ``number_form`` first.
        Assigning a mapping to a node sets only the children it names, so
        an empty mapping changes nothing; use ``delink`` to clear a node.

        Raises:
            UndefinedFeatureError: If the feature is not defined
            TypeMismatchError: If a node is given something other than a mapping
        """
        definition = self._featureset.feature(feature)
        if definition.is_node:
            if is_undefined_text(value):
                return
            if not isinstance(value, Mapping):
                raise TypeMismatchError(
                    f"Value assigned to node {feature} is not a mapping",
                    context={"feature": feature, "value": repr(value)},
                )
            for child in self._walk_children(feature, frozenset({feature})):
                if child in value:
                    self.set(child, value[child])
            return

        value = self._featureset.number_form(feature, value)
        cell = self._values.get(feature)
        if cell is None:
            self._values[feature] = ValueCell(value)
        else:
            cell.value = value

    def link(self, feature: str, ref: ValueCell | Mapping[str, Any]) -> None:
        """Bind a feature to another segment's storage.

        Terminal features take a ``ValueCell``; nodes take the mapping that
        ``value_ref`` returns for a node, and each named descendant is bound
        to its cell.
        """
        definition = self._featureset.feature(feature)
        if definition.is_node:
            if not isinstance(ref, Mapping):
                raise TypeMismatchError(
                    f"Storage linked to node {feature} is not a mapping",
                    context={"feature": feature},
                )
            for child in self._walk_children(feature, frozenset({feature})):
                if child in ref:
                    self.link(child, ref[child])
            return

        if not isinstance(ref, ValueCell):
            raise TypeMismatchError(
                f"Storage linked to {feature} is not a value cell",
                context={"feature": feature},
            )
        cell = ref.alias()
        cell.value = self._featureset.number_form(feature, cell.value)
        self._values[feature] = cell

    def delink(self, *features: str) -> list[Any]:
        """Remove bindings, leaving any shared cell untouched.

        Delinking a node delinks every descendant.

        Returns:
            Former values of the removed terminal bindings
        """
        removed: list[Any] = []
        for feature in features:
            self._featureset.feature(feature)
            self._delink(feature, frozenset(), removed)
        return removed

    def _delink(self, feature: str, path: frozenset, removed: list[Any]) -> None:
        if self._featureset.feature(feature).is_node:
            path = path | {feature}
            for child in self._walk_children(feature, path):
                self._delink(child, path, removed)
            return
        cell = self._values.pop(feature, None)
        if cell is not None:
            removed.append(cell.value)

    def clear(self) -> None:
        self._values = {}

    def duplicate(self) -> "Segment":
        """Get an independent copy sharing no cells with this segment."""
        twin = self.__class__(self._featureset, symbolset=self._symbolset)
        twin._values = {name: cell.copy() for name, cell in self._values.items()}
        return twin

    # Rule engine hooks

    def insert_left(self, segment: ISegment) -> None:
        self._insert_left.append(segment)

    def insert_right(self, segment: ISegment) -> None:
        self._insert_right.append(segment)

    def pending_insertions(self) -> tuple[list[ISegment], list[ISegment]]:
        """Segments requested to the left and to the right, in request order."""
        return list(self._insert_left), list(self._insert_right)

    def take_insertions(self) -> tuple[list[ISegment], list[ISegment]]:
        """Get and forget the pending insertions."""
        pending = self.pending_insertions()
        self._insert_left.clear()
        self._insert_right.clear()
        return pending

    def _walk_children(self, node: str, path: frozenset) -> Iterator[str]:
        # Dangling references and cycles back onto the current path are skipped
        for child in self._featureset.children(node):
            if child in path or child not in self._featureset:
                continue
            yield child


class BoundarySegment(Segment):
    """Word-edge sentinel: true for BOUNDARY, undefined for all else, never mutated."""

    def value(self, feature: str) -> Any:
        return 1 if feature == BOUNDARY_FEATURE else None

    def value_ref(self, feature: str) -> ValueCell | None:
        return ValueCell(1) if feature == BOUNDARY_FEATURE else None

    def all_values(self) -> dict[str, Any]:
        return {BOUNDARY_FEATURE: 1}

    def set(self, feature: str, value: Any) -> None:
        pass

    def link(self, feature: str, ref: ValueCell | Mapping[str, Any]) -> None:
        pass

    def delink(self, *features: str) -> list[Any]:
        return []

    def clear(self) -> None:
        pass

    def duplicate(self) -> "BoundarySegment":
        return BoundarySegment(self._featureset, symbolset=self._symbolset)


class FeatureView(MutableMapping):
    """Validated mapping from feature name to a segment's value.

    Reading, writing and deleting go through ``value``, ``set`` and
    ``delink``. Iteration covers the features the segment has bindings for.
    """

    def __init__(self, segment: Segment):
        self._segment = segment

    def __getitem__(self, feature: str) -> Any:
        return self._segment.value(feature)

    def __setitem__(self, feature: str, value: Any) -> None:
        self._segment.set(feature, value)

    def __delitem__(self, feature: str) -> None:
        self._segment.delink(feature)

    def __contains__(self, feature: object) -> bool:
        return feature in self._segment.all_values()

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._segment.all_values()))

    def __len__(self) -> int:
        return len(self._segment.all_values())
