"""MetricGraph configuration package."""

from config.defaults import (
    DATA_DIR,
    DEFAULT_LOG_LEVEL,
    DEGENERATE_POLICY,
    INCLUDE_SELF_PAIRS,
    MERGE_POLICY,
    NORMALIZED_THRESHOLD,
    OUTPUT_ROOT,
    TOURISM_THRESHOLD,
)
from config.settings import (
    ComparisonSpec,
    DatasetSpec,
    RenderStyle,
    RunConfig,
    ScatterSpec,
    load_task_specs,
)

__all__ = [
    "RunConfig",
    "ComparisonSpec",
    "DatasetSpec",
    "RenderStyle",
    "ScatterSpec",
    "load_task_specs",
    "DATA_DIR",
    "DEFAULT_LOG_LEVEL",
    "DEGENERATE_POLICY",
    "INCLUDE_SELF_PAIRS",
    "MERGE_POLICY",
    "NORMALIZED_THRESHOLD",
    "OUTPUT_ROOT",
    "TOURISM_THRESHOLD",
]
