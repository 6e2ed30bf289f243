"""
Result type returned by segment operations.
"""

from dataclasses import dataclass, field
from typing import Any

from phonology.utils.errors import PhonologyError


@dataclass
class OpResult:
    """Outcome of a segment operation.

    Truthy on success. A failed result carries the error that stopped the
    operation; no segment was modified.
    """

    ok: bool
    error: PhonologyError | None = None
    segments: tuple[Any, ...] = field(default_factory=tuple)

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def success(cls, *segments: Any) -> "OpResult":
        return cls(ok=True, segments=segments)

    @classmethod
    def failure(cls, error: PhonologyError) -> "OpResult":
        return cls(ok=False, error=error)
