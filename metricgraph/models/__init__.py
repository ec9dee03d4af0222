"""MetricGraph data models package.

All record, graph and run-state schemas are defined here as typed dataclasses.
"""

from metricgraph.models.graph import (
    AdjacencyGraph,
    ComparisonGraph,
    GraphEdge,
    GraphNode,
    GraphStats,
)
from metricgraph.models.metrics import (
    MergedRecord,
    MetricRecord,
    NormalizedRecord,
    ScatterPoint,
)
from metricgraph.models.pipeline import RunContext, TaskRecord, TaskStatus

__all__ = [
    # metrics
    "MetricRecord",
    "MergedRecord",
    "NormalizedRecord",
    "ScatterPoint",
    # graph
    "GraphNode",
    "GraphEdge",
    "GraphStats",
    "ComparisonGraph",
    "AdjacencyGraph",
    # pipeline
    "RunContext",
    "TaskRecord",
    "TaskStatus",
]
