"""
Value coercion between text and numeric forms, per feature type.

Numeric form is what segments store. Text form is what people write:
'+' and '-' for binary features, '' for a present privative, and '*' for
an undefined value of any type. Undefined is represented by None.
"""

from collections.abc import Callable, Mapping
from typing import Any

from phonology.models.feature import FeatureType

UNDEFINED_TEXT = "*"


def _privative_number(value: Any) -> int | None:
    return 1 if value else None


def _binary_number(value: Any) -> int:
    if value == "-":
        return 0
    if value == "+":
        return 1
    return 1 if value else 0


def _scalar_number(value: Any) -> Any:
    return value


def _node_number(value: Any) -> Mapping | None:
    return value if isinstance(value, Mapping) else None


def _privative_text(value: Any) -> str:
    # Reached only for defined values
    return ""


def _binary_text(value: Any) -> str:
    return "+" if value else "-"


def _scalar_text(value: Any) -> Any:
    return value


_NUMBER_FORMS: dict[FeatureType, Callable[[Any], Any]] = {
    FeatureType.PRIVATIVE: _privative_number,
    FeatureType.BINARY: _binary_number,
    FeatureType.SCALAR: _scalar_number,
    FeatureType.NODE: _node_number,
}

_TEXT_FORMS: dict[FeatureType, Callable[[Any], Any]] = {
    FeatureType.PRIVATIVE: _privative_text,
    FeatureType.BINARY: _binary_text,
    FeatureType.SCALAR: _scalar_text,
    FeatureType.NODE: _privative_text,
}


def is_undefined_text(value: Any) -> bool:
    """True for None and for the literal '*'."""
    return value is None or (isinstance(value, str) and value == UNDEFINED_TEXT)


def number_form(feature_type: FeatureType, value: Any) -> Any:
    """Convert a value to the numeric form stored for a feature of this type.

    Args:
        feature_type: Type of the feature the value belongs to
        value: Text or numeric input; '*' and None mean undefined

    Returns:
        The numeric form, or None for undefined
    """
    if is_undefined_text(value):
        return None
    return _NUMBER_FORMS[feature_type](value)


def text_form(feature_type: FeatureType, value: Any) -> Any:
    """Convert a stored value to its text form; None becomes '*'."""
    if value is None:
        return UNDEFINED_TEXT
    return _TEXT_FORMS[feature_type](value)
