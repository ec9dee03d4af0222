"""Whole-graph statistics for MetricGraph adjacency graphs.

The average shortest path runs one unweighted breadth-first search per node,
O(V·(V+E)) overall. Pairs with no path between them are left out of the
average rather than counted as infinite, so disconnected graphs are fine.

By default (node, node) pairs at distance 0 are left out as well. Passing
``include_self_pairs=True`` counts them, which pulls the average toward 0.

Pure functions — no I/O or external calls.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Dict, Tuple

import networkx as nx

from config.defaults import INCLUDE_SELF_PAIRS
from metricgraph.analysis.similarity_graph import to_networkx
from metricgraph.models.graph import AdjacencyGraph, GraphStats

logger = logging.getLogger(__name__)


def bfs_distances(graph: AdjacencyGraph, start: str) -> Dict[str, int]:
    """Return hop distances from ``start`` to every reachable node.

    The start node is included at distance 0. Keys are in BFS visit order.
    """
    distances: Dict[str, int] = {start: 0}
    queue = deque([start])

    while queue:
        current = queue.popleft()
        for neighbor in graph.neighbors(current):
            if neighbor not in distances:
                distances[neighbor] = distances[current] + 1
                queue.append(neighbor)

    return distances


def _path_totals(graph: AdjacencyGraph, include_self_pairs: bool) -> Tuple[int, int]:
    total_distance = 0
    pair_count = 0
    for start in graph.nodes:
        for node, distance in bfs_distances(graph, start).items():
            if node == start and not include_self_pairs:
                continue
            total_distance += distance
            pair_count += 1
    return total_distance, pair_count


def average_shortest_path(
    graph: AdjacencyGraph,
    include_self_pairs: bool = INCLUDE_SELF_PAIRS,
) -> float:
    """Average hop distance over all ordered, reachable node pairs.

    Args:
        graph: Adjacency graph.
        include_self_pairs: Count each node's distance 0 to itself.

    Returns:
        Mean distance, or 0.0 for an empty graph or an empty pair set.
    """
    total_distance, pair_count = _path_totals(graph, include_self_pairs)
    if pair_count == 0:
        return 0.0
    return total_distance / pair_count


def compute_graph_stats(
    graph: AdjacencyGraph,
    include_self_pairs: bool = INCLUDE_SELF_PAIRS,
) -> GraphStats:
    """Compute average shortest path plus NetworkX density and component counts.

    Args:
        graph: Adjacency graph.
        include_self_pairs: Passed through to the average shortest path.

    Returns:
        GraphStats for the graph; all zeros for an empty graph.
    """
    if len(graph) == 0:
        logger.info("Graph stats: empty graph — returning zeros")
        return GraphStats(include_self_pairs=include_self_pairs)

    total_distance, pair_count = _path_totals(graph, include_self_pairs)
    average = total_distance / pair_count if pair_count else 0.0

    G = to_networkx(graph)
    stats = GraphStats(
        node_count=len(graph),
        edge_count=graph.edge_count,
        average_shortest_path=average,
        include_self_pairs=include_self_pairs,
        reachable_pairs=pair_count,
        density=nx.density(G),
        component_count=nx.number_connected_components(G),
        isolated_count=nx.number_of_isolates(G),
    )
    logger.debug(
        "Graph stats: %d nodes, %d edges, avg path %.4f over %d pairs",
        stats.node_count,
        stats.edge_count,
        stats.average_shortest_path,
        stats.reachable_pairs,
    )
    return stats
