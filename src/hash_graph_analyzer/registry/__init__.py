"""Component registries used to attribute nodes to components."""

from hash_graph_analyzer.registry.disjoint_set import DisjointSet
from hash_graph_analyzer.registry.labels import LabelRegistry

__all__ = ["DisjointSet", "LabelRegistry"]
