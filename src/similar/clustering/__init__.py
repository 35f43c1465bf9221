"""Similarity graph clustering.

Builds a directed graph from per-document relevance queries and reports
its non-trivial strongly-connected components as clusters of similar
files.
"""

from .components import strongly_connected_components
from .graph_builder import SimilarityGraph, build_similarity_graph
from .reporter import Cluster, ClusterReport, render_json, render_text, report

__all__ = [
    "Cluster",
    "ClusterReport",
    "SimilarityGraph",
    "build_similarity_graph",
    "render_json",
    "render_text",
    "report",
    "strongly_connected_components",
]
