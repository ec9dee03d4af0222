"""Two-metric scatter plot for MetricGraph.

Rendering only — no data transformation.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Sequence, Tuple

import matplotlib.pyplot as plt

from config.defaults import RENDER_DPI, SCATTER_IMAGE_SIZE, SCATTER_POINT_SIZE
from metricgraph.models.metrics import ScatterPoint
from metricgraph.visualization.graph_chart import marker_area
from metricgraph.visualization.theme import (
    THEME_ACCENT,
    THEME_TEXT,
    apply_dark_theme,
    get_dark_rcparams,
)

logger = logging.getLogger(__name__)


def render_metric_scatter(
    points: Sequence[ScatterPoint],
    x_range: Tuple[float, float],
    y_range: Tuple[float, float],
    title: str = "",
    x_label: str = "",
    y_label: str = "",
    output_path: Optional[str | Path] = None,
    point_size: int = SCATTER_POINT_SIZE,
    image_size: Tuple[int, int] = SCATTER_IMAGE_SIZE,
    dpi: int = RENDER_DPI,
) -> Optional[Path]:
    """Render one marker per country at (first metric, second metric).

    Points outside the axis ranges are still passed to matplotlib and simply
    fall off the visible area.

    Args:
        points: ScatterPoint list from pair_metrics().
        x_range: (low, high) x-axis limits.
        y_range: (low, high) y-axis limits.
        title: Chart title string.
        x_label: X-axis label.
        y_label: Y-axis label.
        output_path: If provided, save the chart to this path.
        point_size: Marker radius in pixels.
        image_size: (width, height) in pixels.
        dpi: Pixels per inch.

    Returns:
        Output path if saved, None otherwise.
    """
    if not points:
        logger.warning("Scatter chart: no points — skipping")
        return None

    plt.rcParams.update(get_dark_rcparams())

    width, height = image_size
    fig, ax = plt.subplots(figsize=(width / dpi, height / dpi))
    try:
        apply_dark_theme(ax)
        ax.scatter(
            [p.x for p in points],
            [p.y for p in points],
            s=marker_area(point_size, dpi),
            color=THEME_ACCENT,
        )
        ax.set_xlim(*x_range)
        ax.set_ylim(*y_range)
        ax.set_xlabel(x_label)
        ax.set_ylabel(y_label)
        ax.set_title(title, color=THEME_TEXT, pad=12, fontsize=30 * 72.0 / dpi)

        visible = sum(
            1 for p in points
            if x_range[0] <= p.x <= x_range[1] and y_range[0] <= p.y <= y_range[1]
        )
        if visible < len(points):
            logger.info("Scatter chart: %d of %d points outside the axes", len(points) - visible, len(points))

        plt.tight_layout()

        if output_path:
            output_path = Path(output_path)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            fig.savefig(str(output_path), dpi=dpi)
            logger.info("Saved scatter chart: %s", output_path)
            return output_path
        return None

    except (OSError, ValueError) as exc:
        logger.error("Scatter chart rendering failed: %s", exc)
        return None
    finally:
        plt.close(fig)
