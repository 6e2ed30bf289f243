"""
Custom exception classes for the phonology toolkit.
"""

from typing import Any


class PhonologyError(Exception):
    """Base exception for all phonology errors."""

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        suggestions: list[str] | None = None,
        context: dict[str, Any] | None = None
    ):
        """Initialize phonology error with enhanced information.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
            suggestions: List of suggested remediation steps
            context: Additional context information for debugging
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__.upper()
        self.suggestions = suggestions or []
        self.context = context or {}

    def __str__(self) -> str:
        return self.message


class ValidationError(PhonologyError):
    """Raised when a feature definition entry is malformed."""
    pass


class UndefinedFeatureError(PhonologyError, KeyError):
    """Raised when a feature name is not defined in the feature graph."""

    def __init__(self, feature: str, **kwargs: Any):
        kwargs.setdefault("context", {"feature": feature})
        super().__init__(f"No such feature '{feature}'", **kwargs)
        self.feature = feature


class TypeMismatchError(PhonologyError):
    """Raised when a node-only operation is applied to a non-node, or vice versa."""
    pass


class UnsupportedOperationError(PhonologyError):
    """Raised when an operation lacks a required collaborator or rule context."""
    pass


class GuardRejection(PhonologyError):
    """Raised when a segment argument is invalid or is a boundary segment."""
    pass


class UndefinedSymbolError(PhonologyError):
    """Raised when a symbol set has no prototype for a symbol."""

    def __init__(self, symbol: str, **kwargs: Any):
        kwargs.setdefault("context", {"symbol": symbol})
        super().__init__(f"No such symbol '{symbol}'", **kwargs)
        self.symbol = symbol
