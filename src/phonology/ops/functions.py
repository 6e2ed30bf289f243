"""
Segment operations for writing phonological rules.

Where an operation takes a feature name, the feature comes first. Where it
takes two segments, the first acts on the second: its value is
assimilated, copied or dissimilated onto the second.

Every operation checks its arguments before touching anything. An
argument that is not a segment, a boundary segment, an unknown feature or
a missing collaborator makes the operation return a failed ``OpResult``
and log a diagnostic, with no segment modified.
"""

import functools
from collections.abc import Callable, Mapping

from phonology.core.interfaces import Direction, ISegment, RuleContext
from phonology.features.coercion import is_undefined_text
from phonology.models.result import OpResult
from phonology.segments.segment import BOUNDARY_FEATURE
from phonology.utils.errors import (
    GuardRejection,
    PhonologyError,
    TypeMismatchError,
    UnsupportedOperationError,
)
from phonology.utils.logging import diagnostic

__all__ = [
    "assimilate",
    "adjoin",
    "copy",
    "dissimilate",
    "change",
    "metathesize",
    "metathesize_feature",
    "delete_seg",
    "insert_after",
    "insert_before",
]


def _operation(func: Callable[..., OpResult]) -> Callable[..., OpResult]:
    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> OpResult:
        try:
            return func(*args, **kwargs)
        except PhonologyError as e:
            diagnostic(e, operation=func.__name__)
            return OpResult.failure(e)
    return wrapper


def _guard(*segments: object) -> None:
    for segment in segments:
        if not isinstance(segment, ISegment):
            raise GuardRejection(
                "Argument not a segment",
                context={"argument_type": type(segment).__name__},
            )

    featureset = segments[0].featureset
    if not featureset.has_feature(BOUNDARY_FEATURE):
        return
    for segment in segments:
        if segment.value(BOUNDARY_FEATURE):
            raise GuardRejection("Attempted modification of boundary")


def _active_context(segment: ISegment, context: RuleContext | None) -> RuleContext | None:
    return context if context is not None else segment.rule_context


@_operation
def assimilate(feature: str, src: ISegment, dst: ISegment) -> OpResult:
    """Make ``dst`` share ``src``'s storage for ``feature``.

    After this, writing the feature on either segment changes it on both.
    For a node, every descendant ``src`` has a binding for is shared.
    Use ``copy`` to take the value without the link.
    """
    _guard(src, dst)
    src.featureset.feature(feature)

    ref = src.value_ref(feature)
    dst.delink(feature)
    if ref is not None:
        dst.link(feature, ref)
    return OpResult.success(src, dst)


def adjoin(feature: str, src: ISegment, dst: ISegment) -> OpResult:
    """Same as ``assimilate``."""
    return assimilate(feature, src, dst)


@_operation
def copy(feature: str, src: ISegment, dst: ISegment) -> OpResult:
    """Give ``dst`` the current value of ``feature`` from ``src``, unlinked."""
    _guard(src, dst)
    src.featureset.feature(feature)

    value = src.value(feature)
    dst.delink(feature)
    dst.set(feature, value)
    return OpResult.success(src, dst)


@_operation
def dissimilate(feature: str, src: ISegment, dst: ISegment) -> OpResult:
    """Give ``dst`` the opposite truth value of ``feature`` from ``src``.

    For a node, a true value on ``src`` delinks the node on ``dst``, voiding
    its descendants. A false node value does nothing, as there is no way to
    know which child should become defined.

    Terminal features are delinked on ``dst`` first, so a cell shared with
    ``src`` is left alone.
    """
    _guard(src, dst)
    definition = src.featureset.feature(feature)

    if definition.is_node:
        if src.value(feature):
            dst.delink(feature)
        return OpResult.success(src, dst)

    source_value = src.value(feature)
    dst.delink(feature)
    dst.set(feature, 0 if source_value else 1)
    return OpResult.success(src, dst)


@_operation
def change(segment: ISegment, symbol: str) -> OpResult:
    """Replace every value of ``segment`` with those of ``symbol``.

    The segment must have a symbol set.
    """
    _guard(segment)
    if segment.symbolset is None:
        raise UnsupportedOperationError(
            "Cannot change segment without a symbol set",
            suggestions=["Give the segment a symbol set"],
            context={"symbol": symbol},
        )

    values = dict(segment.symbolset.prototype(symbol).all_values())
    featureset = segment.featureset
    for name, value in values.items():
        if featureset.feature(name).is_node and not (is_undefined_text(value) or isinstance(value, Mapping)):
            raise TypeMismatchError(
                f"Prototype for '{symbol}' gives node {name} a non-mapping value",
                context={"symbol": symbol, "feature": name},
            )

    segment.clear()
    for name, value in values.items():
        segment.set(name, value)
    return OpResult.success(segment)


@_operation
def metathesize(seg1: ISegment, seg2: ISegment, *, context: RuleContext | None = None) -> OpResult:
    """Swap the order of two adjacent segments.

    ``seg1`` must be the earlier of the two, or a rule applying this
    repeatedly may swap the same pair forever.

    Outside a rule the segments are returned swapped in ``result.segments``
    and nothing else happens. Inside a rule (``context``, or the rule
    context of ``seg1``) the move is requested from the rule engine: a
    rightward rule inserts a copy of ``seg2`` before ``seg1`` and voids
    ``seg2``; a leftward rule inserts a copy of ``seg1`` after ``seg2`` and
    voids ``seg1``. The word changes once the rule step completes.
    """
    _guard(seg1, seg2)

    active = _active_context(seg1, context)
    if active is None:
        return OpResult.success(seg2, seg1)

    if active.direction == Direction.RIGHTWARD:
        seg1.insert_left(seg2.duplicate())
        seg2.clear()
    elif active.direction == Direction.LEFTWARD:
        seg2.insert_right(seg1.duplicate())
        seg1.clear()
    else:
        raise UnsupportedOperationError(
            f"Unknown rule direction {active.direction!r}",
            context={"direction": repr(active.direction)},
        )
    return OpResult.success(seg1, seg2)


@_operation
def metathesize_feature(feature: str, seg1: ISegment, seg2: ISegment) -> OpResult:
    """Swap the values of ``feature`` between two segments.

    Values are written through the existing storage, so no links are made
    or broken.
    """
    _guard(seg1, seg2)
    seg1.featureset.feature(feature)

    first = seg1.value(feature)
    second = seg2.value(feature)
    seg1.set(feature, second)
    seg2.set(feature, first)
    return OpResult.success(seg1, seg2)


@_operation
def delete_seg(segment: ISegment) -> OpResult:
    """Void every value of ``segment``. It stays in its word."""
    _guard(segment)
    segment.clear()
    return OpResult.success(segment)


def _require_context(segment: ISegment, context: RuleContext | None, operation: str) -> None:
    if _active_context(segment, context) is None:
        raise UnsupportedOperationError(
            f"{operation} requires an active rule context",
            suggestions=["Call it from a rule, or pass the rule context explicitly"],
        )


@_operation
def insert_after(seg1: ISegment, seg2: ISegment, *, context: RuleContext | None = None) -> OpResult:
    """Request insertion of ``seg2`` right after ``seg1`` in the current word."""
    _guard(seg1, seg2)
    _require_context(seg1, context, "insert_after")
    seg1.insert_right(seg2)
    return OpResult.success(seg1, seg2)


@_operation
def insert_before(seg1: ISegment, seg2: ISegment, *, context: RuleContext | None = None) -> OpResult:
    """Request insertion of ``seg2`` right before ``seg1`` in the current word."""
    _guard(seg1, seg2)
    _require_context(seg1, context, "insert_before")
    seg1.insert_left(seg2)
    return OpResult.success(seg1, seg2)
