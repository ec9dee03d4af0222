"""Run artifact persistence for MetricGraph.

Every JSON artifact (graph payloads, run summary, manifest) goes through
save_json, which replaces the destination in one rename so a crashed or
interrupted task never leaves a half-written payload behind.
"""

from __future__ import annotations

import dataclasses
import hashlib
import json
import logging
import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable, Optional

logger = logging.getLogger(__name__)

RUN_SUBDIRS = ("charts", "graphs")


class _ArtifactEncoder(json.JSONEncoder):
    """Serialize graph and run-record dataclasses, timestamps and paths."""

    def default(self, obj: Any) -> Any:
        if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
            return dataclasses.asdict(obj)
        if isinstance(obj, datetime):
            return obj.isoformat()
        if isinstance(obj, Path):
            return obj.as_posix()
        return super().default(obj)


def save_json(data: Any, path: str | Path, indent: int = 2, sort_keys: bool = False) -> None:
    """Serialize ``data`` and atomically replace ``path`` with it.

    NaN and infinite floats raise ValueError before anything touches the disk.

    Args:
        data: Mapping, list, dataclass, or any mix of them.
        path: Destination file; missing parent directories are created.
        indent: JSON indentation.
        sort_keys: Sort mapping keys so equal content gives equal bytes.

    Raises:
        ValueError: If ``data`` holds a non-finite float.
        TypeError: If ``data`` holds an unsupported type.
        OSError: If the file cannot be written or renamed.
    """
    path = Path(path)
    text = json.dumps(
        data,
        cls=_ArtifactEncoder,
        indent=indent,
        sort_keys=sort_keys,
        ensure_ascii=False,
        allow_nan=False,
    )
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.stem}-", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as tmp:
            tmp.write(text)
            tmp.write("\n")
        os.replace(tmp_name, path)
    except OSError as exc:
        logger.error("Could not write %s: %s", path, exc)
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise

    logger.debug("Wrote %s (%d chars)", path, len(text))


def load_json(path: str | Path) -> Optional[Any]:
    """Parse a JSON artifact, or return None if it is missing or unreadable."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except OSError as exc:
        logger.warning("Could not read %s: %s", path, exc)
        return None

    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        logger.warning("Invalid JSON in %s: %s", path, exc)
        return None


def file_checksum(path: str | Path) -> str:
    """SHA-256 hex digest of a file's bytes; empty string if it cannot be read."""
    try:
        return hashlib.sha256(Path(path).read_bytes()).hexdigest()
    except OSError:
        return ""


def ensure_output_dir(
    base_dir: str | Path,
    run_id: str,
    subdirs: Iterable[str] = RUN_SUBDIRS,
) -> Path:
    """Create ``<base_dir>/<run_id>`` with its artifact subdirectories.

    Args:
        base_dir: Output root, e.g. ``outputs/runs``.
        run_id: Run identifier (``YYYYMMDD_HHMMSS_<slug>``).
        subdirs: Subdirectories to create inside the run directory.

    Returns:
        The run directory.
    """
    run_dir = Path(base_dir) / run_id
    for name in subdirs:
        (run_dir / name).mkdir(parents=True, exist_ok=True)
    run_dir.mkdir(parents=True, exist_ok=True)
    return run_dir
