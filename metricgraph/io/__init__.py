"""MetricGraph I/O package.

File read/write operations only — no business logic in this layer.
"""

from metricgraph.io.exporters import build_run_manifest, export_gexf_graph, export_graph
from metricgraph.io.persistence import ensure_output_dir, load_json, save_json
from metricgraph.io.readers import read_dataset

__all__ = [
    "read_dataset",
    "save_json",
    "load_json",
    "ensure_output_dir",
    "export_graph",
    "export_gexf_graph",
    "build_run_manifest",
]
