"""Segment storage: value cells and the segment implementation."""

from phonology.segments.cell import ValueCell
from phonology.segments.segment import BOUNDARY_FEATURE, BoundarySegment, FeatureView, Segment

__all__ = ["BOUNDARY_FEATURE", "BoundarySegment", "FeatureView", "Segment", "ValueCell"]
