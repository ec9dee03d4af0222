"""Comparison graph visualization for MetricGraph.

Draws a ComparisonGraph on its fixed square canvas: nodes at their circular
layout positions sized by score, similarity edges whose opacity and width
follow edge intensity, node labels, caption and optional legend text.
Rendering only — no data transformation.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import matplotlib.pyplot as plt
import networkx as nx
from matplotlib.colors import to_rgba

from config.defaults import RENDER_DPI
from metricgraph.models.graph import ComparisonGraph
from metricgraph.visualization.theme import (
    THEME_BACKGROUND,
    THEME_EDGE,
    THEME_TEXT,
    get_dark_rcparams,
    node_color,
)

logger = logging.getLogger(__name__)


def marker_area(visual_size: int, dpi: int = RENDER_DPI) -> float:
    """Convert a marker radius in pixels to a matplotlib marker area in points²."""
    diameter_points = 2.0 * visual_size * 72.0 / dpi
    return diameter_points ** 2


def render_comparison_graph(
    graph: ComparisonGraph,
    output_path: Optional[str | Path] = None,
    dpi: int = RENDER_DPI,
) -> Optional[Path]:
    """Render a comparison graph to an image file.

    Node size follows ``visual_size``; edge color alpha and width follow
    ``intensity`` so more similar pairs draw darker and thicker.

    Args:
        graph: ComparisonGraph produced by ComparativeGraph.build().
        output_path: If provided, save the chart to this path.
        dpi: Pixels per inch; the figure size is ``image_size / dpi``.

    Returns:
        Output path if saved, None otherwise.
    """
    if not graph.nodes:
        logger.warning("Comparison graph %s: no nodes — skipping", graph.name)
        return None

    plt.rcParams.update(get_dark_rcparams())

    # Nodes are keyed by index so repeated country names stay distinct
    G = nx.Graph()
    pos = {}
    for node in graph.nodes:
        G.add_node(node.index)
        pos[node.index] = node.position
    for edge in graph.edges:
        G.add_edge(edge.source, edge.target, intensity=edge.intensity)

    width, height = graph.image_size
    fig, ax = plt.subplots(figsize=(width / dpi, height / dpi))
    try:
        ax.set_facecolor(THEME_BACKGROUND)
        fig.patch.set_facecolor(THEME_BACKGROUND)

        edge_list = [(e.source, e.target) for e in graph.edges]
        if edge_list:
            nx.draw_networkx_edges(
                G, pos, ax=ax,
                edgelist=edge_list,
                width=[0.5 + 2.0 * e.intensity for e in graph.edges],
                edge_color=[to_rgba(THEME_EDGE, alpha=e.intensity) for e in graph.edges],
            )
        nx.draw_networkx_nodes(
            G, pos, ax=ax,
            nodelist=[n.index for n in graph.nodes],
            node_size=[marker_area(n.visual_size, dpi) for n in graph.nodes],
            node_color=node_color(graph.node_color),
        )
        nx.draw_networkx_labels(
            G, pos, ax=ax,
            labels={n.index: n.label for n in graph.nodes},
            font_size=graph.label_font_size * 72.0 / dpi,
            font_color=THEME_TEXT,
        )

        extent = graph.canvas_half_extent
        ax.set_xlim(-extent, extent)
        ax.set_ylim(-extent, extent)
        ax.set_aspect("equal", adjustable="box")

        if graph.legend:
            ax.text(
                -0.8 * extent, 0.88 * extent, graph.legend,
                fontsize=graph.label_font_size * 72.0 / dpi,
                color=THEME_TEXT,
                verticalalignment="top",
            )

        ax.set_title(graph.caption, color=THEME_TEXT, pad=12, fontsize=30 * 72.0 / dpi)
        ax.axis("off")

        if output_path:
            output_path = Path(output_path)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            fig.savefig(str(output_path), dpi=dpi)
            logger.info("Saved comparison graph chart: %s", output_path)
            return output_path
        return None

    except (OSError, ValueError) as exc:
        logger.error("Comparison graph %s rendering failed: %s", graph.name, exc)
        return None
    finally:
        plt.close(fig)
