"""Unit tests for metricgraph.io.persistence."""

from __future__ import annotations

import dataclasses
import json
import math
import os
from datetime import datetime
from pathlib import Path

import pytest

from metricgraph.io.persistence import ensure_output_dir, file_checksum, load_json, save_json


# ── save_json ─────────────────────────────────────────────────────────────────────

class TestSaveJson:
    def test_save_creates_parent_dirs(self, tmp_path):
        """Missing parent directories must be created."""
        target = tmp_path / "deep" / "graphs" / "tourism.json"
        save_json({"nodes": []}, target)
        assert json.loads(target.read_text()) == {"nodes": []}

    def test_dataclass_serializable(self, tmp_path):
        """Dataclass instances must be serialized as mappings."""

        @dataclasses.dataclass
        class Node:
            country: str
            score: float

        target = tmp_path / "node.json"
        save_json(Node(country="Spain", score=0.5), target)

        assert json.loads(target.read_text()) == {"country": "Spain", "score": 0.5}

    def test_datetime_and_path_serialized(self, tmp_path):
        """datetime and Path values must be written as strings."""
        target = tmp_path / "meta.json"
        save_json({"at": datetime(2024, 1, 15, 12, 0), "dir": tmp_path / "runs"}, target)

        loaded = json.loads(target.read_text())
        assert loaded["at"] == "2024-01-15T12:00:00"
        assert loaded["dir"] == (tmp_path / "runs").as_posix()

    def test_sort_keys_is_byte_stable(self, tmp_path):
        """With sort_keys, mappings with the same content must write the same bytes."""
        first = tmp_path / "a.json"
        second = tmp_path / "b.json"
        save_json({"b": 1, "a": 2}, first, sort_keys=True)
        save_json({"a": 2, "b": 1}, second, sort_keys=True)
        assert first.read_bytes() == second.read_bytes()

    def test_nan_rejected(self, tmp_path):
        """NaN must never be written to disk."""
        target = tmp_path / "nan.json"
        with pytest.raises(ValueError):
            save_json({"score": math.nan}, target)
        assert not target.exists()

    def test_atomic_no_partial_write(self, tmp_path, monkeypatch):
        """On rename failure, the temp file must be cleaned up."""
        target = tmp_path / "output.json"

        def failing_replace(src, dst):
            raise OSError("Disk full")

        monkeypatch.setattr(os, "replace", failing_replace)

        with pytest.raises(OSError):
            save_json({"key": "value"}, target)

        assert not target.exists()
        assert list(tmp_path.glob("*.tmp")) == []


# ── load_json ─────────────────────────────────────────────────────────────────────

class TestLoadJson:
    def test_roundtrip_with_save(self, tmp_path):
        """Data saved with save_json must load back unchanged."""
        target = tmp_path / "summary.json"
        original = {"run_id": "20240115_120000_metricgraph", "errors": []}
        save_json(original, target)
        assert load_json(target) == original

    def test_missing_file_returns_none(self, tmp_path):
        """A missing file must return None without raising."""
        assert load_json(tmp_path / "missing.json") is None

    def test_invalid_json_returns_none(self, tmp_path):
        """Invalid JSON must return None without raising."""
        target = tmp_path / "bad.json"
        target.write_text("{not json", encoding="utf-8")
        assert load_json(target) is None


# ── file_checksum ─────────────────────────────────────────────────────────────────

class TestFileChecksum:
    def test_sha256_hex_digest(self, tmp_path):
        """Checksum must be a 64-character SHA-256 hex digest."""
        target = tmp_path / "file.txt"
        target.write_text("tourism")
        digest = file_checksum(target)
        assert len(digest) == 64
        assert digest == file_checksum(str(target))

    def test_missing_file_empty_string(self, tmp_path):
        """A missing file must return an empty string."""
        assert file_checksum(tmp_path / "nope") == ""


# ── ensure_output_dir ─────────────────────────────────────────────────────────────

class TestEnsureOutputDir:
    def test_creates_run_and_artifact_dirs(self, tmp_path):
        """The run directory and its charts/ and graphs/ subdirectories must exist."""
        run_dir = ensure_output_dir(tmp_path / "outputs", "20240115_120000_metricgraph")

        assert isinstance(run_dir, Path)
        assert run_dir.name == "20240115_120000_metricgraph"
        assert (run_dir / "charts").is_dir()
        assert (run_dir / "graphs").is_dir()

    def test_idempotent(self, tmp_path):
        """Calling twice with the same run_id must not raise."""
        ensure_output_dir(tmp_path, "run")
        assert ensure_output_dir(tmp_path, "run").exists()
