"""Similarity graph construction for MetricGraph.

Two graphs are built from country scores:

- The visualization graph: edges between every pair of countries whose scores
  differ by at most the threshold, weighted by how close they are. Edges are
  found by comparing every pair, O(n²) in the number of countries, which is
  fine for tens to a few hundred countries but does not scale further.
- The analysis graph: a plain adjacency list over the raw primary values,
  used only for shortest-path statistics.

Pure functions — no I/O or external calls.
"""

from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

import networkx as nx

from config.defaults import LINEAR_MIN_INTENSITY, STEP_CEILING, STEP_MAX_WEIGHT
from metricgraph.models.graph import AdjacencyGraph, ComparisonGraph, GraphEdge
from metricgraph.models.metrics import MetricRecord

logger = logging.getLogger(__name__)


def is_edge(score_a: float, score_b: float, threshold: float) -> bool:
    """Return True if two scores are within ``threshold`` (inclusive)."""
    return abs(score_a - score_b) <= threshold


def stepped_weight(diff: float) -> int:
    """Integer weight in [2, 6] for raw (unnormalized) score differences.

    The difference is truncated toward zero, so every pair less than one
    unit apart gets the maximum weight.
    """
    return 1 + min(STEP_CEILING, max(1, STEP_CEILING - int(abs(diff))))


def linear_weight(diff: float) -> float:
    """Weight ``1 - |diff|`` for normalized scores in [0, 1]."""
    return 1.0 - abs(diff)


def edge_weight(diff: float, weighting: str) -> Tuple[float, float]:
    """Return (weight, intensity) for a score difference.

    ``intensity`` is the renderer-facing opacity/thickness factor in (0, 1]
    and grows as the two scores get closer.

    Raises:
        ValueError: On an unknown weighting name.
    """
    if weighting == "stepped":
        weight = stepped_weight(diff)
        return float(weight), weight / STEP_MAX_WEIGHT
    if weighting == "linear":
        weight = linear_weight(diff)
        return weight, min(1.0, max(LINEAR_MIN_INTENSITY, weight))
    raise ValueError(f"Unknown weighting {weighting!r}")


def build_similarity_edges(
    scored: Sequence[Tuple[str, float]],
    threshold: float,
    weighting: str = "linear",
) -> List[GraphEdge]:
    """Compare every pair of scored countries and return the connecting edges.

    Args:
        scored: (country, score) pairs in node order.
        threshold: Maximum score difference for an edge (inclusive).
        weighting: ``linear`` or ``stepped``.

    Returns:
        GraphEdge list ordered by (source, target) with source < target.
    """
    edges: List[GraphEdge] = []
    for i, (country_a, score_a) in enumerate(scored):
        for j in range(i + 1, len(scored)):
            country_b, score_b = scored[j]
            if not is_edge(score_a, score_b, threshold):
                continue
            weight, intensity = edge_weight(score_a - score_b, weighting)
            edges.append(
                GraphEdge(
                    node_a=country_a,
                    node_b=country_b,
                    source=i,
                    target=j,
                    weight=weight,
                    intensity=intensity,
                )
            )
    return edges


def build_adjacency_graph(records: Sequence[MetricRecord], threshold: float) -> AdjacencyGraph:
    """Build the analysis graph over raw metric values.

    Every country becomes a node, including ones with no neighbor. Each pair
    (i < j) whose values differ by at most ``threshold`` becomes an edge; a
    country listed twice in ``records`` gets its edges inserted twice.
    """
    graph = AdjacencyGraph()
    for record in records:
        graph.add_node(record.country)

    for i, a in enumerate(records):
        for b in records[i + 1:]:
            if is_edge(a.value, b.value, threshold):
                graph.add_edge(a.country, b.country)

    logger.debug(
        "Adjacency graph: %d nodes, %d edges (threshold=%s)",
        len(graph),
        graph.edge_count,
        threshold,
    )
    return graph


def to_networkx(graph: AdjacencyGraph | ComparisonGraph) -> nx.Graph:
    """Convert an adjacency or comparison graph into a NetworkX Graph.

    Duplicate adjacency entries collapse into a single NetworkX edge.
    Comparison graph nodes carry their score, size and position as
    attributes; edges carry weight and intensity.
    """
    G = nx.Graph()
    if isinstance(graph, ComparisonGraph):
        for node in graph.nodes:
            G.add_node(
                node.country,
                score=node.score,
                visual_size=node.visual_size,
                x=node.position[0],
                y=node.position[1],
            )
        for edge in graph.edges:
            G.add_edge(edge.node_a, edge.node_b, weight=edge.weight, intensity=edge.intensity)
        return G

    for node in graph.nodes:
        G.add_node(node)
        for neighbor in graph.neighbors(node):
            G.add_edge(node, neighbor)
    return G
