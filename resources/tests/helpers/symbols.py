"""
Minimal symbol set for exercising ``change``.

Usage:
    from resources.tests.helpers.symbols import make_symbols
    symbols = make_symbols(graph, b={"voice": 1, "labial": 1})
    segment = Segment(graph, symbolset=symbols)
"""

from __future__ import annotations

from typing import Any

from phonology.core.interfaces import ISymbolSet
from phonology.features.graph import FeatureGraph
from phonology.segments.segment import Segment
from phonology.utils.errors import UndefinedSymbolError


class DictSymbolSet(ISymbolSet):
    def __init__(self, prototypes: dict[str, Segment] | None = None):
        self._prototypes = prototypes or {}

    def add(self, symbol: str, prototype: Segment) -> None:
        self._prototypes[symbol] = prototype

    def prototype(self, symbol: str) -> Segment:
        try:
            return self._prototypes[symbol]
        except KeyError:
            raise UndefinedSymbolError(symbol) from None


def make_symbols(graph: FeatureGraph, **symbols: dict[str, Any]) -> DictSymbolSet:
    """Create a symbol set with one prototype segment per keyword."""
    return DictSymbolSet({name: Segment(graph, values) for name, values in symbols.items()})
