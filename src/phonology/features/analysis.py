"""
Structural analysis of a feature hierarchy.

The feature graph does not reject cycles or clean up dangling child
references. These helpers find both, using a networkx view of the
parent/child relation.
"""

import networkx as nx

from phonology.features.graph import FeatureGraph
from phonology.utils.config import ValidationResult


def to_digraph(graph: FeatureGraph) -> nx.DiGraph:
    """Build a directed graph with an edge from every node to each child.

    Dangling children appear as vertices flagged ``defined=False``.
    """
    digraph = nx.DiGraph()
    for name, definition in graph.all_features().items():
        digraph.add_node(name, type=definition.type.value, defined=True)

    for name, definition in graph.all_features().items():
        for order, child in enumerate(definition.children):
            if child not in digraph:
                digraph.add_node(child, type=None, defined=False)
            digraph.add_edge(name, child, order=order)
    return digraph


def find_cycles(graph: FeatureGraph) -> list[list[str]]:
    """List every simple cycle in the hierarchy."""
    return [cycle for cycle in nx.simple_cycles(to_digraph(graph))]


def roots(graph: FeatureGraph) -> list[str]:
    """Features that have no parents, in definition order."""
    digraph = to_digraph(graph)
    return [name for name in graph if digraph.in_degree(name) == 0]


def descendants(graph: FeatureGraph, name: str) -> set[str]:
    """Every defined feature dominated, directly or not, by ``name``."""
    graph.feature(name)
    digraph = to_digraph(graph)
    return {d for d in nx.descendants(digraph, name) if digraph.nodes[d]["defined"]}


def dangling_children(graph: FeatureGraph) -> dict[str, list[str]]:
    """Map each node to the children it lists that are no longer defined."""
    dangling = {}
    for name, definition in graph.all_features().items():
        missing = [child for child in definition.children if child not in graph]
        if missing:
            dangling[name] = missing
    return dangling


def validate_hierarchy(graph: FeatureGraph) -> ValidationResult:
    """Check a hierarchy for dangling references (errors) and cycles (warnings)."""
    result = ValidationResult()

    for name, missing in dangling_children(graph).items():
        result.errors.append(f"{name} lists undefined children: {', '.join(missing)}")
        result.valid = False

    for cycle in find_cycles(graph):
        result.warnings.append(f"Cycle in feature hierarchy: {' -> '.join(cycle + cycle[:1])}")

    return result
