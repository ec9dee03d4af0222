"""ComparativeGraph — one generic merge → normalize → layout → edges component.

A ComparisonSpec decides every per-task difference (score function, merge
policy, normalization, threshold, edge weighting, node sizing, canvas), so all
comparison graphs share this single implementation.

Pure computation — datasets are passed in already read; no rendering here.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from config.defaults import INCLUDE_SELF_PAIRS
from config.settings import ComparisonSpec, RenderStyle
from metricgraph.analysis.layout import circular_layout
from metricgraph.analysis.merger import merge_metrics, scores_from_metrics
from metricgraph.analysis.normalizer import normalize_scores
from metricgraph.analysis.path_stats import compute_graph_stats
from metricgraph.analysis.similarity_graph import build_adjacency_graph, build_similarity_edges
from metricgraph.errors import EmptyDatasetError
from metricgraph.models.graph import ComparisonGraph, GraphNode
from metricgraph.models.metrics import MetricRecord

logger = logging.getLogger(__name__)


def node_size(score: float, style: RenderStyle) -> int:
    """Marker size for a score: ``int(score × size_scale)`` clamped to the style range."""
    return min(style.size_max, max(style.size_min, int(score * style.size_scale)))


def node_label(country: str, score: float, style: RenderStyle) -> str:
    if style.label_scores:
        return f"{country} ({score:.2f})"
    return country


class ComparativeGraph:
    """Builds the render payload for one comparison task.

    Args:
        spec: Task configuration record.
        include_self_pairs: Self-pair semantic for the path statistics.
    """

    def __init__(self, spec: ComparisonSpec, include_self_pairs: bool = INCLUDE_SELF_PAIRS) -> None:
        self.spec = spec
        self.include_self_pairs = include_self_pairs

    def score(
        self,
        primary: Sequence[MetricRecord],
        secondary: Optional[Sequence[MetricRecord]] = None,
    ) -> List[Tuple[str, float]]:
        """Merge (and optionally normalize) the datasets into (country, score) pairs.

        Raises:
            ValueError: If the task names a secondary dataset and none is given.
            DegenerateDatasetError: If normalization fails under the ``raise`` policy.
        """
        spec = self.spec
        if spec.secondary is None:
            merged = scores_from_metrics(primary)
        else:
            if secondary is None:
                raise ValueError(f"Task {spec.name!r} requires a secondary dataset")
            merged = merge_metrics(primary, secondary, spec.score_fn, spec.merge_policy)

        if spec.normalize:
            return [
                (r.country, r.scaled_score)
                for r in normalize_scores(merged, spec.degenerate_policy)
            ]
        return [(r.country, r.derived_score) for r in merged]

    def build(
        self,
        primary: Sequence[MetricRecord],
        secondary: Optional[Sequence[MetricRecord]] = None,
    ) -> ComparisonGraph:
        """Build nodes, edges and (optionally) path statistics for the task.

        Args:
            primary: Primary dataset records in file order.
            secondary: Secondary dataset records, when the task has one.

        Returns:
            ComparisonGraph ready for export or rendering.

        Raises:
            EmptyDatasetError: If no country survives the merge.
        """
        spec = self.spec
        style = spec.style
        scored = self.score(primary, secondary)

        if not scored:
            raise EmptyDatasetError(f"Task {spec.name!r}: no country present in both datasets")

        positions = circular_layout(len(scored), style.radius)
        nodes = [
            GraphNode(
                country=country,
                index=i,
                position=positions[i],
                score=score,
                visual_size=node_size(score, style),
                label=node_label(country, score, style),
            )
            for i, (country, score) in enumerate(scored)
        ]
        edges = build_similarity_edges(scored, spec.threshold, spec.weighting)

        stats = None
        if spec.analysis_threshold is not None:
            adjacency = build_adjacency_graph(primary, spec.analysis_threshold)
            stats = compute_graph_stats(adjacency, self.include_self_pairs)

        logger.info(
            "ComparativeGraph %s: %d nodes, %d edges (threshold=%s, weighting=%s)",
            spec.name,
            len(nodes),
            len(edges),
            spec.threshold,
            spec.weighting,
        )
        return ComparisonGraph(
            name=spec.name,
            caption=spec.caption,
            nodes=nodes,
            edges=edges,
            canvas_half_extent=style.canvas_half_extent,
            image_size=style.image_size,
            node_color=style.node_color,
            label_font_size=style.label_font_size,
            legend=style.legend,
            threshold=spec.threshold,
            stats=stats,
        )
