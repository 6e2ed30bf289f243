"""Feature definitions, hierarchy queries and value coercion."""

from phonology.features.graph import FeatureGraph

__all__ = ["FeatureGraph"]
