"""Dark chart theme shared by the comparison graph and scatter renderers.

Rendering only — no data transformation.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import matplotlib.pyplot as plt

# ── Palette ───────────────────────────────────────────────────────────────────
THEME_BACKGROUND: str = "#0B1020"    # Figure background
THEME_PANEL: str = "#131A2E"         # Axes background for the scatter plot
THEME_TEXT: str = "#E2E8F0"          # Titles, labels, legend text
THEME_ACCENT: str = "#38BDF8"        # Scatter markers
THEME_EDGE: str = "#CBD5E1"          # Similarity edges; alpha carries the intensity
THEME_GRID: str = "#1E293B"
THEME_BORDER: str = "#334155"

# Task configs name node colors; anything else is handed to matplotlib as-is
NODE_COLORS: Dict[str, str] = {
    "blue": "#3B82F6",
    "red": "#EF4444",
    "green": "#22C55E",
    "amber": "#F59E0B",
    "violet": "#A855F7",
}


def node_color(name: str) -> str:
    """Map a configured node color name onto the theme palette."""
    return NODE_COLORS.get(name.lower(), name)


def apply_dark_theme(ax: Optional[Any] = None) -> None:
    """Style a scatter-plot axes (panel, ticks, spines, grid) for the dark theme.

    Args:
        ax: Axes to style; the current axes when None.
    """
    ax = ax if ax is not None else plt.gca()
    ax.figure.patch.set_facecolor(THEME_BACKGROUND)
    ax.set_facecolor(THEME_PANEL)
    ax.tick_params(colors=THEME_TEXT)
    for axis in (ax.xaxis, ax.yaxis):
        axis.label.set_color(THEME_TEXT)
    for spine in ax.spines.values():
        spine.set_color(THEME_BORDER)
    ax.grid(True, color=THEME_GRID, linewidth=0.5)


def get_dark_rcparams() -> Dict[str, Any]:
    """rcParams for the dark theme; apply with ``plt.rcParams.update(...)``."""
    params: Dict[str, Any] = {
        "axes.edgecolor": THEME_BORDER,
        "axes.grid": False,
        "grid.color": THEME_GRID,
    }
    for key in ("figure.facecolor", "savefig.facecolor", "savefig.edgecolor"):
        params[key] = THEME_BACKGROUND
    for key in ("text.color", "axes.labelcolor", "axes.titlecolor", "xtick.color", "ytick.color"):
        params[key] = THEME_TEXT
    params["axes.facecolor"] = THEME_PANEL
    return params
