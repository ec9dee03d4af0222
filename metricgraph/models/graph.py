"""Graph data models for MetricGraph.

Defines the render payload produced by ComparativeGraph (nodes, edges, caption,
canvas) and the plain adjacency-list graph used for shortest-path statistics.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass
class GraphNode:
    """A country placed on the layout circle."""

    country: str
    index: int                      # Position in the merged (insertion-ordered) node list
    position: Tuple[int, int]       # Integer canvas coordinates
    score: float = 0.0              # Derived or normalized score drawn for this node
    visual_size: int = 0            # Clamped marker radius in canvas units
    label: str = ""


@dataclass
class GraphEdge:
    """An undirected similarity edge between two nodes (source < target)."""

    node_a: str
    node_b: str
    source: int
    target: int
    weight: float = 1.0     # Raw weight of the task's weighting scheme
    intensity: float = 1.0  # Renderer opacity/thickness factor in (0, 1]


@dataclass
class GraphStats:
    """Whole-graph statistics computed on an adjacency graph."""

    node_count: int = 0
    edge_count: int = 0
    average_shortest_path: float = 0.0
    include_self_pairs: bool = False
    reachable_pairs: int = 0
    density: float = 0.0
    component_count: int = 0
    isolated_count: int = 0


@dataclass
class ComparisonGraph:
    """Complete render payload for one comparison task."""

    name: str
    caption: str
    nodes: List[GraphNode] = field(default_factory=list)
    edges: List[GraphEdge] = field(default_factory=list)
    canvas_half_extent: int = 0
    image_size: Tuple[int, int] = (0, 0)
    node_color: str = "blue"
    label_font_size: int = 12
    legend: str = ""
    threshold: float = 0.0
    stats: Optional[GraphStats] = None

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    def has_edge(self, country_a: str, country_b: str) -> bool:
        """Return True if an edge joins the two countries, in either direction."""
        wanted = {country_a, country_b}
        return any({e.node_a, e.node_b} == wanted for e in self.edges)

    def edge_pairs(self) -> List[Tuple[str, str]]:
        """Return (node_a, node_b) for every edge in draw order."""
        return [(e.node_a, e.node_b) for e in self.edges]

    def to_payload(self) -> Dict[str, Any]:
        """Return the renderer-facing dict (nodes, edges, caption, canvas)."""
        return dataclasses.asdict(self)


@dataclass
class AdjacencyGraph:
    """Undirected adjacency-list graph keyed by country.

    Every edge insertion appends each endpoint to the other's neighbor list, so
    inserting the same edge twice produces duplicate adjacency entries.
    """

    adjacency: Dict[str, List[str]] = field(default_factory=dict)

    def add_node(self, node: str) -> None:
        """Add a node with no neighbors; a no-op if it already exists."""
        self.adjacency.setdefault(node, [])

    def add_edge(self, node_a: str, node_b: str) -> None:
        """Add an undirected edge, creating either endpoint if needed."""
        self.adjacency.setdefault(node_a, []).append(node_b)
        self.adjacency.setdefault(node_b, []).append(node_a)

    def neighbors(self, node: str) -> List[str]:
        return self.adjacency.get(node, [])

    @property
    def nodes(self) -> List[str]:
        return list(self.adjacency)

    @property
    def edge_count(self) -> int:
        """Number of inserted edges, duplicates included."""
        return sum(len(v) for v in self.adjacency.values()) // 2

    def __len__(self) -> int:
        return len(self.adjacency)

    def __contains__(self, node: object) -> bool:
        return node in self.adjacency
