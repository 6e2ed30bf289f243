"""
Feature models for the phonology toolkit.

This module defines the feature types and the definition record held by
the feature graph for every feature name.
"""

from enum import Enum

from pydantic import BaseModel, Field, field_validator


class FeatureType(str, Enum):
    """Supported feature types."""
    PRIVATIVE = "privative"
    BINARY = "binary"
    SCALAR = "scalar"
    NODE = "node"

    @classmethod
    def parse(cls, value: "str | FeatureType") -> "FeatureType":
        """Match a type name case-insensitively.

        Raises:
            ValueError: If the name is not a known feature type
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise ValueError(f"Unrecognized type {value!r}")
        return cls(value.strip().lower())


class FeatureDefinition(BaseModel):
    """Definition of a single feature.

    Parents are not stored here; the graph derives them from the children
    lists of every node.
    """

    name: str
    type: FeatureType
    children: list[str] = Field(default_factory=list)

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, v):
        return FeatureType.parse(v)

    @property
    def is_node(self) -> bool:
        return self.type is FeatureType.NODE
