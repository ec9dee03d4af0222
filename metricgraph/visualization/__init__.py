"""MetricGraph visualization package.

Rendering functions only — no data transformation or business logic.
All dark-theme constants are shared from visualization/theme.py.
"""

from metricgraph.visualization.graph_chart import render_comparison_graph
from metricgraph.visualization.scatter_chart import render_metric_scatter
from metricgraph.visualization.theme import (
    THEME_ACCENT,
    THEME_BACKGROUND,
    THEME_PANEL,
    THEME_TEXT,
    apply_dark_theme,
    node_color,
)

__all__ = [
    "render_comparison_graph",
    "render_metric_scatter",
    "THEME_BACKGROUND",
    "THEME_PANEL",
    "THEME_TEXT",
    "THEME_ACCENT",
    "apply_dark_theme",
    "node_color",
]
