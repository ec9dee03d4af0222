"""MetricGraph — country metric comparison graphs.

Public API surface:
    - RunConfig: Runtime configuration
    - ComparisonSpec: One comparison task
    - ComparativeGraph: Builds a comparison graph from two datasets
    - run: Run every configured task
"""

__version__ = "1.0.0"
__author__ = "MetricGraph Contributors"

from config.settings import ComparisonSpec, RunConfig
from metricgraph.analysis.comparative import ComparativeGraph
from metricgraph.pipeline import run

__all__ = [
    "__version__",
    "RunConfig",
    "ComparisonSpec",
    "ComparativeGraph",
    "run",
]
