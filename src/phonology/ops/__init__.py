"""Segment operations for phonological rules."""

from phonology.ops.functions import (
    adjoin,
    assimilate,
    change,
    copy,
    delete_seg,
    dissimilate,
    insert_after,
    insert_before,
    metathesize,
    metathesize_feature,
)

__all__ = [
    "adjoin",
    "assimilate",
    "change",
    "copy",
    "delete_seg",
    "dissimilate",
    "insert_after",
    "insert_before",
    "metathesize",
    "metathesize_feature",
]
