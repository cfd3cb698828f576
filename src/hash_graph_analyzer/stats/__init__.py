"""Aggregation of per-component tail and cycle lengths."""

from hash_graph_analyzer.stats.aggregate import ComponentStatistics, summarize
from hash_graph_analyzer.stats.baseline import RandomMappingBaseline, random_mapping_baseline

__all__ = [
    "ComponentStatistics",
    "RandomMappingBaseline",
    "random_mapping_baseline",
    "summarize",
]
