"""Unit tests for metricgraph.visualization — chart rendering smoke tests."""

from __future__ import annotations

import matplotlib.pyplot as plt
import pytest

from metricgraph.models.graph import ComparisonGraph, GraphEdge, GraphNode
from metricgraph.models.metrics import ScatterPoint
from metricgraph.visualization.graph_chart import marker_area, render_comparison_graph
from metricgraph.visualization.scatter_chart import render_metric_scatter
from metricgraph.visualization.theme import NODE_COLORS, node_color


@pytest.fixture
def small_graph() -> ComparisonGraph:
    return ComparisonGraph(
        name="small",
        caption="Small Graph",
        nodes=[
            GraphNode("A", 0, (90, 0), 1.0, 20, "A (1.00)"),
            GraphNode("B", 1, (-45, 78), 0.5, 10, "B (0.50)"),
            GraphNode("B", 2, (-45, -78), 0.4, 8, "B (0.40)"),
        ],
        edges=[GraphEdge("B", "B", 1, 2, weight=0.9, intensity=0.9)],
        canvas_half_extent=100,
        image_size=(800, 600),
        node_color="red",
        legend="Node size: score\nEdge thickness: Similarity",
    )


class TestTheme:
    def test_named_colors_resolve(self):
        """Named task colors must resolve to theme hex values."""
        assert node_color("Red") == NODE_COLORS["red"]

    def test_unknown_colors_pass_through(self):
        """Unknown color strings must be passed to matplotlib unchanged."""
        assert node_color("#123456") == "#123456"

    def test_marker_area_scales_with_radius(self):
        """Marker area must grow with the square of the radius."""
        assert marker_area(10, 100) == pytest.approx(4 * marker_area(5, 100))


class TestRenderComparisonGraph:
    def test_writes_png(self, tmp_path, small_graph):
        """A non-empty graph must be saved as a PNG at the requested path."""
        target = tmp_path / "charts" / "small.png"

        result = render_comparison_graph(small_graph, target)

        assert result == target
        assert target.read_bytes()[:4] == b"\x89PNG"

    def test_empty_graph_skipped(self, tmp_path):
        """A graph without nodes must not render."""
        empty = ComparisonGraph(name="empty", caption="Empty", image_size=(800, 600))
        assert render_comparison_graph(empty, tmp_path / "empty.png") is None
        assert not (tmp_path / "empty.png").exists()

    def test_figures_closed(self, tmp_path, small_graph):
        """Rendering must not leak open matplotlib figures."""
        before = len(plt.get_fignums())
        render_comparison_graph(small_graph, tmp_path / "a.png")
        assert len(plt.get_fignums()) == before


class TestRenderMetricScatter:
    def test_writes_png(self, tmp_path):
        """Scatter points must be saved as a PNG, including out-of-range points."""
        points = [ScatterPoint("A", 80.0, 3.0), ScatterPoint("B", 500.0, 70.0)]
        target = tmp_path / "scatter.png"

        result = render_metric_scatter(points, (0, 120), (0, 50), "Title", "x", "y", target)

        assert result == target
        assert target.exists()

    def test_no_points_skipped(self, tmp_path):
        """An empty point list must not render."""
        assert render_metric_scatter([], (0, 1), (0, 1), output_path=tmp_path / "s.png") is None
