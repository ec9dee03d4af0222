"""Graph payload, GEXF and manifest exporters for MetricGraph runs.

File formats only — graphs arrive fully built.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List

import networkx as nx

from metricgraph.io.persistence import RUN_SUBDIRS, file_checksum, save_json
from metricgraph.models.graph import ComparisonGraph

logger = logging.getLogger(__name__)

# Artifact suffix -> manifest format name; other files in a run dir are ignored
ARTIFACT_FORMATS = {".json": "json", ".png": "png", ".gexf": "gexf"}


def export_graph(graph: ComparisonGraph, output_path: str | Path) -> Path:
    """Write the render payload of a comparison graph.

    Keys are sorted and node/edge lists keep their build order, so building
    the same graph twice always writes the same bytes.

    Returns:
        The written path.
    """
    output_path = Path(output_path)
    save_json(graph.to_payload(), output_path, sort_keys=True)
    logger.info("Graph %s: payload written to %s", graph.name, output_path)
    return output_path


def export_gexf_graph(graph: nx.Graph, output_path: str | Path) -> bool:
    """Write a NetworkX graph as GEXF for Gephi and similar tools.

    A failed export is logged and reported as False; the JSON payload is the
    primary artifact, so callers carry on.
    """
    output_path = Path(output_path)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        nx.write_gexf(graph, output_path)
    except (OSError, TypeError, ValueError) as exc:
        logger.error("GEXF export to %s failed: %s", output_path, exc)
        return False
    logger.debug("GEXF written to %s (%d nodes)", output_path, graph.number_of_nodes())
    return True


def _artifact_entries(run_dir: Path) -> List[Dict[str, Any]]:
    entries: List[Dict[str, Any]] = []
    for subdir in RUN_SUBDIRS:
        folder = run_dir / subdir
        if not folder.is_dir():
            continue
        for path in sorted(p for p in folder.iterdir() if p.is_file()):
            fmt = ARTIFACT_FORMATS.get(path.suffix.lower())
            if fmt is None:
                continue
            entries.append(
                {
                    "filename": f"{subdir}/{path.name}",
                    "format": fmt,
                    "size_bytes": path.stat().st_size,
                    "checksum": file_checksum(path),
                }
            )
    return entries


def build_run_manifest(run_id: str, output_dir: str | Path, version: str) -> Dict[str, Any]:
    """Describe every chart and graph artifact of a run.

    Args:
        run_id: Run identifier.
        output_dir: Run directory holding ``charts/`` and ``graphs/``.
        version: MetricGraph version string.

    Returns:
        Manifest dict with one entry per artifact, in sorted path order, each
        carrying its size and SHA-256 checksum.
    """
    output_dir = Path(output_dir)
    artifacts = _artifact_entries(output_dir)
    return {
        "run_id": run_id,
        "version": version,
        "output_dir": output_dir.as_posix(),
        "created_at": datetime.utcnow().isoformat(timespec="seconds") + "Z",
        "artifacts": artifacts,
        "total_size_bytes": sum(a["size_bytes"] for a in artifacts),
    }
