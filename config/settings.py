"""MetricGraph — RunConfig, comparison task records, and environment-based loading.

All runtime configuration flows through RunConfig. A comparison task is fully
described by a ComparisonSpec (what to merge, how to score, how to draw it);
the built-in task catalogue below mirrors the four comparison graphs and the
scatter plot the project ships with. Paths and log level may come from
environment variables or a .env file.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

import yaml
from dotenv import load_dotenv

from config.defaults import (
    COMPACT_CANVAS_HALF_EXTENT,
    COMPACT_IMAGE_SIZE,
    COMPACT_RADIUS,
    DATA_DIR,
    DATASET_DELIMITER,
    DEFAULT_LOG_LEVEL,
    DEGENERATE_POLICIES,
    DEGENERATE_POLICY,
    GDP_FIELDS,
    GDP_FILE,
    GDP_VALUE_COLUMN,
    INCLUDE_SELF_PAIRS,
    MERGE_POLICIES,
    MERGE_POLICY,
    NORMALIZED_SIZE_RANGE,
    NORMALIZED_SIZE_SCALE,
    NORMALIZED_THRESHOLD,
    OUTPUT_ROOT,
    PURCHASING_POWER_FIELDS,
    PURCHASING_POWER_FILE,
    PURCHASING_POWER_VALUE_COLUMN,
    RATIO_SIZE_RANGE,
    RATIO_SIZE_SCALE,
    SCATTER_IMAGE_SIZE,
    SCATTER_POINT_SIZE,
    SCATTER_X_RANGE,
    SCATTER_Y_RANGE,
    SCORE_FUNCTIONS,
    TOURISM_FIELDS,
    TOURISM_FILE,
    TOURISM_GDP_THRESHOLD,
    TOURISM_SIZE_RANGE,
    TOURISM_SIZE_SCALE,
    TOURISM_THRESHOLD,
    TOURISM_VALUE_COLUMN,
    UNEMPLOYMENT_FIELDS,
    UNEMPLOYMENT_FILE,
    UNEMPLOYMENT_VALUE_COLUMN,
    WEIGHTINGS,
    WIDE_CANVAS_HALF_EXTENT,
    WIDE_IMAGE_SIZE,
    WIDE_RADIUS,
)

# Load .env file if present; silently skip if missing
load_dotenv()


@dataclass
class DatasetSpec:
    """Location and shape of one country-keyed metric file."""

    path: str
    value_column: int = 1
    expected_fields: Optional[int] = None   # None accepts any row width
    delimiter: str = DATASET_DELIMITER

    def __post_init__(self) -> None:
        if self.value_column < 1:
            raise ValueError(
                f"value_column must be >= 1 (column 0 holds the country), got {self.value_column}"
            )
        if self.expected_fields is not None and self.expected_fields <= self.value_column:
            raise ValueError(
                f"expected_fields={self.expected_fields} leaves no room for "
                f"value_column={self.value_column}"
            )

    def resolve(self, data_dir: str | Path) -> Path:
        """Return the dataset path, resolving relative paths against data_dir."""
        path = Path(self.path)
        if path.is_absolute():
            return path
        return Path(data_dir) / path


@dataclass
class RenderStyle:
    """Presentation parameters for one comparison graph."""

    node_color: str = "blue"
    radius: int = WIDE_RADIUS
    canvas_half_extent: int = WIDE_CANVAS_HALF_EXTENT
    image_size: Tuple[int, int] = WIDE_IMAGE_SIZE
    size_scale: float = NORMALIZED_SIZE_SCALE
    size_min: int = NORMALIZED_SIZE_RANGE[0]
    size_max: int = NORMALIZED_SIZE_RANGE[1]
    label_scores: bool = True
    label_font_size: int = 12
    legend: str = ""

    def __post_init__(self) -> None:
        self.image_size = tuple(self.image_size)
        if self.size_min > self.size_max:
            raise ValueError(
                f"size_min ({self.size_min}) must not exceed size_max ({self.size_max})"
            )
        if self.radius <= 0 or self.canvas_half_extent <= 0:
            raise ValueError("radius and canvas_half_extent must be positive")
        if self.radius > self.canvas_half_extent:
            raise ValueError(
                f"radius {self.radius} places nodes outside the "
                f"±{self.canvas_half_extent} canvas"
            )


@dataclass
class ComparisonSpec:
    """Single configuration record driving one ComparativeGraph task.

    A spec without a secondary dataset builds a single-metric graph over the
    primary values. ``analysis_threshold`` additionally builds the adjacency
    graph over raw primary values and computes path statistics on it.
    """

    name: str
    caption: str
    primary: DatasetSpec
    secondary: Optional[DatasetSpec] = None
    score_fn: str = "ratio"
    merge_policy: str = MERGE_POLICY
    normalize: bool = False
    degenerate_policy: str = DEGENERATE_POLICY
    threshold: float = NORMALIZED_THRESHOLD
    weighting: str = "linear"
    style: RenderStyle = field(default_factory=RenderStyle)
    analysis_threshold: Optional[float] = None
    enabled: bool = True

    def __post_init__(self) -> None:
        if self.score_fn not in SCORE_FUNCTIONS:
            raise ValueError(f"Unknown score_fn {self.score_fn!r}; expected one of {SCORE_FUNCTIONS}")
        if self.merge_policy not in MERGE_POLICIES:
            raise ValueError(
                f"Unknown merge_policy {self.merge_policy!r}; expected one of {MERGE_POLICIES}"
            )
        if self.degenerate_policy not in DEGENERATE_POLICIES:
            raise ValueError(
                f"Unknown degenerate_policy {self.degenerate_policy!r}; "
                f"expected one of {DEGENERATE_POLICIES}"
            )
        if self.weighting not in WEIGHTINGS:
            raise ValueError(f"Unknown weighting {self.weighting!r}; expected one of {WEIGHTINGS}")
        if self.threshold < 0:
            raise ValueError(f"threshold must be non-negative, got {self.threshold}")
        if self.analysis_threshold is not None and self.analysis_threshold < 0:
            raise ValueError(
                f"analysis_threshold must be non-negative, got {self.analysis_threshold}"
            )


@dataclass
class ScatterSpec:
    """Scatter plot of two metrics joined by country."""

    name: str
    caption: str
    x: DatasetSpec
    y: DatasetSpec
    x_label: str = ""
    y_label: str = ""
    x_range: Tuple[float, float] = SCATTER_X_RANGE
    y_range: Tuple[float, float] = SCATTER_Y_RANGE
    point_size: int = SCATTER_POINT_SIZE
    image_size: Tuple[int, int] = SCATTER_IMAGE_SIZE
    enabled: bool = True

    def __post_init__(self) -> None:
        self.x_range = tuple(self.x_range)
        self.y_range = tuple(self.y_range)
        self.image_size = tuple(self.image_size)
        if self.x_range[0] >= self.x_range[1] or self.y_range[0] >= self.y_range[1]:
            raise ValueError("scatter axis ranges must be (low, high) with low < high")


# ── Built-in task catalogue ─────────────────────────────────────────────────────

def _tourism_dataset() -> DatasetSpec:
    return DatasetSpec(TOURISM_FILE, TOURISM_VALUE_COLUMN, TOURISM_FIELDS)


def default_comparisons() -> List[ComparisonSpec]:
    """Return the four built-in comparison graph tasks."""
    return [
        ComparisonSpec(
            name="tourism",
            caption="Tourism Graph Visualization",
            primary=_tourism_dataset(),
            score_fn="primary",
            threshold=TOURISM_THRESHOLD,
            weighting="stepped",
            style=RenderStyle(
                node_color="blue",
                radius=COMPACT_RADIUS,
                canvas_half_extent=COMPACT_CANVAS_HALF_EXTENT,
                image_size=COMPACT_IMAGE_SIZE,
                size_scale=TOURISM_SIZE_SCALE,
                size_min=TOURISM_SIZE_RANGE[0],
                size_max=TOURISM_SIZE_RANGE[1],
                label_scores=False,
                label_font_size=15,
            ),
            analysis_threshold=TOURISM_THRESHOLD,
        ),
        ComparisonSpec(
            name="tourism_gdp",
            caption="Tourism-to-GDP-per-capita Graph Visualization",
            primary=_tourism_dataset(),
            secondary=DatasetSpec(GDP_FILE, GDP_VALUE_COLUMN, GDP_FIELDS),
            threshold=TOURISM_GDP_THRESHOLD,
            weighting="stepped",
            style=RenderStyle(
                node_color="red",
                radius=COMPACT_RADIUS,
                canvas_half_extent=COMPACT_CANVAS_HALF_EXTENT,
                image_size=COMPACT_IMAGE_SIZE,
                size_scale=RATIO_SIZE_SCALE,
                size_min=RATIO_SIZE_RANGE[0],
                size_max=RATIO_SIZE_RANGE[1],
                label_font_size=15,
            ),
        ),
        ComparisonSpec(
            name="tourism_unemployment",
            caption="Tourism-to-Unemployment Graph",
            primary=_tourism_dataset(),
            secondary=DatasetSpec(
                UNEMPLOYMENT_FILE, UNEMPLOYMENT_VALUE_COLUMN, UNEMPLOYMENT_FIELDS
            ),
            normalize=True,
            threshold=NORMALIZED_THRESHOLD,
            weighting="linear",
            style=RenderStyle(
                legend="Node size: Tourism-to-Unemployment ratio\nEdge thickness: Similarity",
            ),
        ),
        ComparisonSpec(
            name="tourism_purchasing_power",
            caption="Tourism-to-Purchasing Power Index Graph",
            primary=_tourism_dataset(),
            secondary=DatasetSpec(
                PURCHASING_POWER_FILE, PURCHASING_POWER_VALUE_COLUMN, PURCHASING_POWER_FIELDS
            ),
            normalize=True,
            threshold=NORMALIZED_THRESHOLD,
            weighting="linear",
            style=RenderStyle(
                legend="Node size: Tourism-to-Purchasing Power ratio\nEdge thickness: Similarity",
            ),
        ),
    ]


def default_scatters() -> List[ScatterSpec]:
    """Return the built-in scatter plot tasks."""
    return [
        ScatterSpec(
            name="tourism_vs_unemployment",
            caption="Tourism Revenue vs Unemployment Rate",
            x=_tourism_dataset(),
            y=DatasetSpec(UNEMPLOYMENT_FILE, UNEMPLOYMENT_VALUE_COLUMN, UNEMPLOYMENT_FIELDS),
            x_label="Tourism revenue",
            y_label="Unemployment rate (%)",
        ),
    ]


@dataclass
class RunConfig:
    """Single configuration object threaded through the whole run.

    Holds file locations, the task catalogue, and run-wide switches.
    """

    data_dir: str = field(default_factory=lambda: os.getenv("METRICGRAPH_DATA_DIR", DATA_DIR))
    output_root: str = field(default_factory=lambda: os.getenv("OUTPUT_ROOT", OUTPUT_ROOT))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL))

    comparisons: List[ComparisonSpec] = field(default_factory=default_comparisons)
    scatters: List[ScatterSpec] = field(default_factory=default_scatters)

    # Restrict the run to these task names; empty runs every enabled task
    only: List[str] = field(default_factory=list)

    include_self_pairs: bool = INCLUDE_SELF_PAIRS
    render_charts: bool = True

    def __post_init__(self) -> None:
        names = [c.name for c in self.comparisons] + [s.name for s in self.scatters]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Duplicate task names: {', '.join(duplicates)}")
        unknown = sorted(set(self.only) - set(names))
        if unknown:
            raise ValueError(f"Unknown task names in 'only': {', '.join(unknown)}")

    def is_selected(self, name: str) -> bool:
        """Return True if the named task should run under the ``only`` filter."""
        return not self.only or name in self.only


# ── YAML task files ─────────────────────────────────────────────────────────────

def _dataset_from_dict(raw: Any) -> DatasetSpec:
    if isinstance(raw, str):
        return DatasetSpec(path=raw)
    return DatasetSpec(**raw)


def comparison_from_dict(raw: Dict[str, Any], defaults: Optional[Dict[str, Any]] = None) -> ComparisonSpec:
    """Build a ComparisonSpec from a YAML mapping, applying shared defaults first.

    Args:
        raw: Task mapping; ``primary``/``secondary`` may be a path string or a
            DatasetSpec mapping and ``style`` a RenderStyle mapping.
        defaults: Mapping merged under every task (``style`` is merged key-wise).

    Returns:
        Validated ComparisonSpec.
    """
    defaults = dict(defaults or {})
    style = dict(defaults.pop("style", None) or {})
    style.update(raw.get("style") or {})

    merged = {**defaults, **raw}
    merged["style"] = RenderStyle(**style)
    merged["primary"] = _dataset_from_dict(merged["primary"])
    if merged.get("secondary") is not None:
        merged["secondary"] = _dataset_from_dict(merged["secondary"])
    return ComparisonSpec(**merged)


def scatter_from_dict(raw: Dict[str, Any]) -> ScatterSpec:
    """Build a ScatterSpec from a YAML mapping."""
    merged = dict(raw)
    merged["x"] = _dataset_from_dict(merged["x"])
    merged["y"] = _dataset_from_dict(merged["y"])
    return ScatterSpec(**merged)


def load_task_specs(path: str | Path) -> Tuple[List[ComparisonSpec], List[ScatterSpec]]:
    """Load comparison and scatter tasks from a YAML task file.

    File format::

        defaults:
          threshold: 0.2
          style: {radius: 200}
        comparisons:
          - name: tourism_unemployment
            caption: Tourism-to-Unemployment Graph
            primary: {path: tourism.csv, value_column: 1, expected_fields: 5}
            secondary: unemployment.csv
            normalize: true
        scatters:
          - name: tourism_vs_unemployment
            caption: Tourism Revenue vs Unemployment Rate
            x: {path: tourism.csv, expected_fields: 5}
            y: unemployment.csv

    Args:
        path: YAML file path.

    Returns:
        (comparisons, scatters) tuple.

    Raises:
        ValueError: If the file is not a mapping or a task is invalid.
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            cfg = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Task file {path} is not valid YAML: {exc}") from exc

    if not isinstance(cfg, dict):
        raise ValueError(f"Task file {path} must contain a mapping at the top level")

    defaults = cfg.get("defaults") or {}
    comparisons = [
        _build_task(path, raw, lambda r: comparison_from_dict(r, defaults))
        for raw in cfg.get("comparisons") or []
    ]
    scatters = [_build_task(path, raw, scatter_from_dict) for raw in cfg.get("scatters") or []]
    return comparisons, scatters


def _build_task(path: str | Path, raw: Any, build: Callable[[Dict[str, Any]], Any]) -> Any:
    if not isinstance(raw, dict):
        raise ValueError(f"Task file {path}: task entries must be mappings, got {raw!r}")
    name = raw.get("name", "<unnamed>")
    try:
        return build(raw)
    except KeyError as exc:
        raise ValueError(f"Task file {path}, task {name}: missing key {exc}") from exc
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Task file {path}, task {name}: {exc}") from exc
