"""MetricGraph utilities package."""

from metricgraph.utils.logging_utils import (
    RunContextAdapter,
    configure_logging,
    get_logger,
    get_run_logger,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "get_run_logger",
    "RunContextAdapter",
]
