"""
Phonology - hierarchical distinctive features and segment operations.

This package provides:
- A feature graph of typed, hierarchically arranged features
- Text and numeric value coercion per feature type
- Segments with shared feature storage for deep assimilation
- Segment operations for writing phonological rules
"""

__version__ = "0.1.0"
