"""MetricGraph analysis package.

Pure analytical functions only — no I/O, no side effects.
All functions operate on typed models from metricgraph.models.
"""

from metricgraph.analysis.comparative import ComparativeGraph
from metricgraph.analysis.layout import circular_layout
from metricgraph.analysis.merger import merge_metrics, pair_metrics, scores_from_metrics
from metricgraph.analysis.normalizer import normalize_scores
from metricgraph.analysis.path_stats import (
    average_shortest_path,
    bfs_distances,
    compute_graph_stats,
)
from metricgraph.analysis.similarity_graph import (
    build_adjacency_graph,
    build_similarity_edges,
    edge_weight,
    is_edge,
    to_networkx,
)

__all__ = [
    "ComparativeGraph",
    "circular_layout",
    "merge_metrics",
    "pair_metrics",
    "scores_from_metrics",
    "normalize_scores",
    "average_shortest_path",
    "bfs_distances",
    "compute_graph_stats",
    "build_adjacency_graph",
    "build_similarity_edges",
    "edge_weight",
    "is_edge",
    "to_networkx",
]
