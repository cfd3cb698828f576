"""Hash Graph Analyzer - Rho statistics of truncated hash functional graphs."""

from hash_graph_analyzer.config import AnalyzerConfig, Strategy
from hash_graph_analyzer.errors import AnalyzerError, DomainOverflow, InvalidConfiguration
from hash_graph_analyzer.solver.analyze import AnalysisReport, analyze, main_analyze

__all__ = [
    "AnalysisReport",
    "AnalyzerConfig",
    "AnalyzerError",
    "DomainOverflow",
    "InvalidConfiguration",
    "Strategy",
    "analyze",
    "main_analyze",
]
