"""
Feature graph for hierarchically arranged phonological features.

The graph holds one definition per feature name. Node features dominate
other features through their ordered children lists, and a feature may
have several parents, so the hierarchy is a DAG rather than a tree.
Acyclicity is not enforced; see ``phonology.features.analysis`` for
cycle detection.

The graph is shared, mutable state. Segments built on it read it on every
access, so callers must not add or drop features or edges while a rule
pass is processing those segments.
"""

import io
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import IO, Any

from phonology.features import coercion
from phonology.features.loader import parse_definitions, read_source
from phonology.models.feature import FeatureDefinition, FeatureType
from phonology.utils.errors import (
    PhonologyError,
    TypeMismatchError,
    UndefinedFeatureError,
    ValidationError,
)
from phonology.utils.logging import LoggerMixin, diagnostic


class FeatureGraph(LoggerMixin):
    """A set of typed feature definitions and the relations between them."""

    def __init__(self) -> None:
        self._features: dict[str, FeatureDefinition] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._features

    def __iter__(self) -> Iterator[str]:
        return iter(self._features)

    def __len__(self) -> int:
        return len(self._features)

    def __repr__(self) -> str:
        return f"FeatureGraph({len(self._features)} features)"

    # Definitions

    def add_feature(self, defs: Mapping[str, Mapping[str, Any]]) -> list[str]:
        """Add or redefine features.

        Each entry maps a feature name to a mapping with a required ``type``
        and optional ``children`` and ``parents`` lists. Entries are
        validated independently: a bad entry is reported and skipped while
        the rest of the batch is applied. Children and parents must already
        be defined.

        Args:
            defs: Mapping of feature name to definition

        Returns:
            Names of every feature currently defined
        """
        for name, entry in defs.items():
            try:
                self._define(name, entry)
            except PhonologyError as e:
                diagnostic(e)
                continue

            children = entry.get("children")
            if children is not None:
                if _is_name_list(children):
                    self.add_child(name, *children)
                else:
                    diagnostic(ValidationError(f"Bad value for children of {name}", context={"feature": name}))

            parents = entry.get("parents")
            if parents is not None:
                if _is_name_list(parents):
                    self.add_parent(name, *parents)
                else:
                    diagnostic(ValidationError(f"Bad value for parents of {name}", context={"feature": name}))

        return list(self._features)

    def _define(self, name: str, entry: Any) -> None:
        if not isinstance(entry, Mapping):
            raise ValidationError(f"Bad value for {name}", context={"feature": name})
        if not entry.get("type"):
            raise ValidationError(f"No type given for feature '{name}'", context={"feature": name})

        feature_type = _parse_type(entry["type"], name)
        existing = self._features.get(name)
        if existing is None:
            self._features[name] = FeatureDefinition(name=name, type=feature_type)
            self.logger.debug(f"Added feature {name} ({feature_type.value})")
        else:
            self._retype(existing, feature_type)

    def feature(self, name: str) -> FeatureDefinition:
        """Get the definition of a feature.

        Raises:
            UndefinedFeatureError: If the feature is not defined
        """
        try:
            return self._features[name]
        except KeyError:
            raise UndefinedFeatureError(name) from None

    def has_feature(self, name: str) -> bool:
        return name in self._features

    def all_features(self) -> dict[str, FeatureDefinition]:
        """Get a copy of every definition, keyed by name."""
        return {name: definition.model_copy(deep=True) for name, definition in self._features.items()}

    def drop_feature(self, *names: str) -> None:
        """Remove features.

        Children of a dropped node become undominated. Other nodes that list
        a dropped feature as a child keep the dangling reference.
        """
        for name in names:
            if self._features.pop(name, None) is not None:
                self.logger.debug(f"Dropped feature {name}")

    def change_feature(self, defs: Mapping[str, Mapping[str, Any]]) -> list[str]:
        """Like ``add_feature``, but every entry must name an existing feature."""
        for name, entry in defs.items():
            if name not in self._features:
                diagnostic(UndefinedFeatureError(name, suggestions=["Use add_feature to define new features"]))
                continue
            self.add_feature({name: entry})
        return list(self._features)

    # Relations

    def children(self, name: str) -> list[str]:
        """Get the children of a feature, in order; empty for non-nodes."""
        return list(self.feature(name).children)

    def parents(self, name: str) -> list[str]:
        """Get the nodes that list the feature as a child.

        Computed by scanning every definition on each call.
        """
        self.feature(name)
        return [
            parent for parent, definition in self._features.items()
            if name in definition.children
        ]

    def add_child(self, parent: str, *children: str) -> FeatureDefinition | None:
        """Attach children to a node feature.

        Unknown children and children already attached are reported and
        skipped. Returns the parent definition, or None if the parent is
        unknown or is not a node.
        """
        try:
            definition = self.feature(parent)
            if not definition.is_node:
                raise TypeMismatchError(
                    f"{parent} is not a node",
                    context={"feature": parent, "type": definition.type.value},
                )
        except PhonologyError as e:
            diagnostic(e)
            return None

        for child in children:
            if child not in self._features:
                diagnostic(UndefinedFeatureError(child))
                continue
            if child in definition.children:
                diagnostic(ValidationError(
                    f"{child} is already child of {parent}",
                    context={"feature": parent, "child": child},
                ))
                continue
            definition.children.append(child)

        return definition

    def drop_child(self, parent: str, *children: str) -> FeatureDefinition | None:
        """Detach children from a node feature."""
        try:
            definition = self.feature(parent)
        except PhonologyError as e:
            diagnostic(e)
            return None

        definition.children = [c for c in definition.children if c not in children]
        return definition

    def add_parent(self, child: str, *parents: str) -> FeatureDefinition | None:
        """Attach a feature to each of the given nodes."""
        for parent in parents:
            self.add_child(parent, child)
        return self._features.get(child)

    def drop_parent(self, child: str, *parents: str) -> FeatureDefinition | None:
        """Detach a feature from each of the given nodes."""
        for parent in parents:
            self.drop_child(parent, child)
        return self._features.get(child)

    # Types

    def type(self, name: str, new_type: str | FeatureType | None = None) -> FeatureType:
        """Get the type of a feature, or set it when ``new_type`` is given.

        Raises:
            UndefinedFeatureError: If the feature is not defined
            ValidationError: If ``new_type`` is not a feature type
            TypeMismatchError: If a node with children would become a non-node
        """
        definition = self.feature(name)
        if new_type is not None:
            self._retype(definition, _parse_type(new_type, name))
        return definition.type

    def _retype(self, definition: FeatureDefinition, feature_type: FeatureType) -> None:
        if feature_type is definition.type:
            return
        if definition.children and feature_type is not FeatureType.NODE:
            raise TypeMismatchError(
                f"Cannot make {definition.name} a {feature_type.value} feature while it has children",
                suggestions=[f"Drop the children of {definition.name} first"],
                context={"feature": definition.name, "children": list(definition.children)},
            )
        self.logger.debug(f"Changed type of {definition.name} from {definition.type.value} to {feature_type.value}")
        definition.type = feature_type

    # Values

    def number_form(self, name: str, value: Any) -> Any:
        """Convert a value to the numeric form for the named feature."""
        return coercion.number_form(self.feature(name).type, value)

    def text_form(self, name: str, value: Any) -> Any:
        """Convert a numeric value to the text form for the named feature."""
        return coercion.text_form(self.feature(name).type, value)

    # Loading

    def loadfile(self, source: str | Path | IO[str] | None = None) -> list[str]:
        """Load definitions from a file path, an open text stream, or the default set.

        Every name and type is registered before any children are wired, so
        lines may reference features defined further down.

        Returns:
            Names defined by the source, in source order
        """
        definitions = list(parse_definitions(read_source(source)))

        for line in definitions:
            self.add_feature({line.name: {"type": line.type}})

        for line in definitions:
            if line.children:
                self.add_child(line.name, *line.children)

        self.logger.info(f"Loaded {len(definitions)} feature definitions")
        return [line.name for line in definitions]

    def loads(self, text: str) -> list[str]:
        """Load definitions from a string."""
        return self.loadfile(io.StringIO(text))


def _parse_type(value: Any, name: str) -> FeatureType:
    try:
        return FeatureType.parse(value)
    except ValueError:
        raise ValidationError(
            f"Unrecognized type '{value}' for feature {name}",
            suggestions=[f"Use one of: {', '.join(t.value for t in FeatureType)}"],
            context={"feature": name, "type": str(value)},
        ) from None


def _is_name_list(value: Any) -> bool:
    return isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value)
