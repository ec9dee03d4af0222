"""Integration tests for the MetricGraph run orchestrator.

These tests run real tasks end-to-end against small dataset files written to
pytest's tmp_path: reading, merging, normalizing, layout, edge building,
JSON/GEXF export and chart rendering. They verify that:

- Every built-in task produces its artifacts
- One task's failing dataset never stops the remaining tasks
- Repeated runs produce byte-identical graph payloads
- The run summary and manifest describe what was written
"""

from __future__ import annotations

import dataclasses
import json
from pathlib import Path

import pytest

from config.settings import RunConfig
from metricgraph.io.persistence import load_json
from metricgraph.models.pipeline import TaskStatus
from metricgraph.pipeline import run

_ALL_TASKS = [
    "tourism",
    "tourism_gdp",
    "tourism_unemployment",
    "tourism_purchasing_power",
    "tourism_vs_unemployment",
]


def _statuses(context):
    return {r.task_name: r.status for r in context.task_log}


class TestFullRun:
    def test_all_tasks_succeed(self, run_config, tmp_path):
        """Every built-in task must complete and write its artifacts."""
        context = run(run_config, output_dir=tmp_path / "run")

        assert _statuses(context) == {name: TaskStatus.OK for name in _ALL_TASKS}
        assert context.errors == []
        for name in _ALL_TASKS[:4]:
            assert (context.output_dir / "graphs" / f"{name}.json").exists()
            assert (context.output_dir / "graphs" / f"{name}.gexf").exists()
            assert (context.output_dir / "charts" / f"{name}.png").exists()
        assert (context.output_dir / "charts" / "tourism_vs_unemployment.png").exists()

    def test_tourism_task_reports_path_stats(self, run_config, tmp_path):
        """The single-metric tourism task must carry average shortest path stats."""
        context = run(run_config, output_dir=tmp_path / "run")

        payload = load_json(context.output_dir / "graphs" / "tourism.json")
        record = context.record_for("tourism")

        # Revenues 72.9, 59.4, 44.3, 20.0, 8.6 at threshold 50
        assert payload["stats"]["node_count"] == 5
        assert payload["stats"]["component_count"] == 1
        assert record.average_shortest_path == pytest.approx(
            payload["stats"]["average_shortest_path"]
        )
        assert record.average_shortest_path > 0.0

    def test_normalized_payload(self, run_config, tmp_path):
        """Normalized task payloads must keep scores in [0, 1] and edges within 0.2."""
        context = run(run_config, output_dir=tmp_path / "run")

        payload = load_json(context.output_dir / "graphs" / "tourism_unemployment.json")
        scores = {n["country"]: n["score"] for n in payload["nodes"]}

        assert min(scores.values()) == 0.0
        assert max(scores.values()) == 1.0
        for edge in payload["edges"]:
            assert abs(scores[edge["node_a"]] - scores[edge["node_b"]]) <= 0.2
            assert edge["source"] < edge["target"]

    def test_summary_and_manifest(self, run_config, tmp_path):
        """run_summary.json and manifest.json must describe the run."""
        context = run(run_config, output_dir=tmp_path / "run")

        summary = load_json(context.output_dir / "run_summary.json")
        manifest = load_json(context.output_dir / "manifest.json")

        assert summary["run_id"] == context.run_id
        assert [t["task_name"] for t in summary["tasks"]] == _ALL_TASKS
        filenames = {a["filename"] for a in manifest["artifacts"]}
        assert "graphs/tourism_gdp.json" in filenames
        assert "charts/tourism_vs_unemployment.png" in filenames

    def test_default_output_location(self, run_config):
        """Without output_dir, outputs must land under output_root/<run_id>."""
        context = run(dataclasses.replace(run_config, only=["tourism_gdp"], render_charts=False))

        assert context.output_dir.parent == Path(run_config.output_root)
        assert context.output_dir.name == context.run_id


class TestDeterminism:
    def test_graph_payloads_byte_identical(self, run_config, tmp_path):
        """Two runs over the same inputs must write byte-identical graph payloads."""
        config = dataclasses.replace(run_config, render_charts=False)

        first = run(config, output_dir=tmp_path / "first")
        second = run(config, output_dir=tmp_path / "second")

        for name in _ALL_TASKS[:4]:
            a = (first.output_dir / "graphs" / f"{name}.json").read_bytes()
            b = (second.output_dir / "graphs" / f"{name}.json").read_bytes()
            assert a == b


class TestTaskIsolation:
    def test_missing_dataset_fails_only_its_tasks(self, run_config, data_dir, tmp_path):
        """A missing unemployment file must fail only the tasks that read it."""
        (data_dir / "unemployment.csv").unlink()

        context = run(run_config, output_dir=tmp_path / "run")
        statuses = _statuses(context)

        assert statuses["tourism_unemployment"] == TaskStatus.FAILED
        assert statuses["tourism_vs_unemployment"] == TaskStatus.FAILED
        assert statuses["tourism"] == TaskStatus.OK
        assert statuses["tourism_gdp"] == TaskStatus.OK
        assert statuses["tourism_purchasing_power"] == TaskStatus.OK
        assert sorted(context.failed_tasks) == ["tourism_unemployment", "tourism_vs_unemployment"]
        assert any("unemployment.csv" in err for err in context.errors)

    def test_malformed_dataset_reports_line(self, run_config, data_dir, tmp_path):
        """A malformed row must fail its task with the file and line in the error."""
        (data_dir / "gdp_per_capita.csv").write_text(
            "Country,GDP\nSpain,29.7\nFrance,lots\n", encoding="utf-8"
        )

        context = run(run_config, output_dir=tmp_path / "run")
        record = context.record_for("tourism_gdp")

        assert record.status == TaskStatus.FAILED
        assert "gdp_per_capita.csv:3" in record.error
        assert _statuses(context)["tourism_purchasing_power"] == TaskStatus.OK

    def test_non_utf8_dataset_reports_file(self, run_config, data_dir, tmp_path):
        """A dataset with invalid UTF-8 must fail its task with the file named."""
        (data_dir / "gdp_per_capita.csv").write_bytes(b"Country,GDP\nSpain,29.7\nCura\xe7ao,3\n")

        context = run(run_config, output_dir=tmp_path / "run")
        record = context.record_for("tourism_gdp")

        assert record.status == TaskStatus.FAILED
        assert "gdp_per_capita.csv" in record.error
        assert "invalid UTF-8" in record.error
        assert _statuses(context)["tourism_unemployment"] == TaskStatus.OK

    def test_unexpected_error_names_sources(self, run_config, tmp_path, monkeypatch):
        """An unexpected exception must still record the task's source files."""

        def broken_export(graph, path):
            raise RuntimeError("disk gone")

        monkeypatch.setattr("metricgraph.pipeline.export_graph", broken_export)
        config = dataclasses.replace(run_config, only=["tourism_gdp"], render_charts=False)

        context = run(config, output_dir=tmp_path / "run")

        assert context.record_for("tourism_gdp").status == TaskStatus.FAILED
        assert len(context.errors) == 1
        assert "disk gone" in context.errors[0]
        assert "tourism.csv" in context.errors[0]
        assert "gdp_per_capita.csv" in context.errors[0]

    def test_no_overlap_is_empty_not_failed(self, run_config, data_dir, tmp_path):
        """Datasets with no country in common must record EMPTY, not FAILED."""
        (data_dir / "gdp_per_capita.csv").write_text(
            "Country,GDP\nAtlantis,10\n", encoding="utf-8"
        )

        context = run(run_config, output_dir=tmp_path / "run")

        assert context.record_for("tourism_gdp").status == TaskStatus.EMPTY
        assert "tourism_gdp" not in context.failed_tasks
        assert not (context.output_dir / "graphs" / "tourism_gdp.json").exists()
        assert any("tourism_gdp" in w for w in context.warnings)


class TestTaskSelection:
    def test_only_runs_selected(self, run_config, tmp_path):
        """The only filter must restrict the run to the named tasks."""
        config = dataclasses.replace(run_config, only=["tourism_gdp"])

        context = run(config, output_dir=tmp_path / "run")

        assert [r.task_name for r in context.task_log] == ["tourism_gdp"]

    def test_disabled_task_skipped(self, run_config, tmp_path):
        """A disabled task must be recorded as SKIPPED and write nothing."""
        run_config.comparisons[1].enabled = False

        context = run(run_config, output_dir=tmp_path / "run")

        assert context.record_for("tourism_gdp").status == TaskStatus.SKIPPED
        assert not (context.output_dir / "graphs" / "tourism_gdp.json").exists()

    def test_yaml_task_file(self, data_dir, tmp_path):
        """Tasks loaded from a YAML file must run like built-in ones."""
        from config.settings import load_task_specs

        tasks = tmp_path / "tasks.yaml"
        tasks.write_text(
            "comparisons:\n"
            "  - name: revenue_per_gdp\n"
            "    caption: Revenue per GDP\n"
            "    primary: {path: tourism.csv, expected_fields: 5}\n"
            "    secondary: gdp_per_capita.csv\n"
            "    normalize: true\n"
            "    threshold: 1.0\n",
            encoding="utf-8",
        )
        comparisons, scatters = load_task_specs(tasks)
        config = RunConfig(
            data_dir=str(data_dir),
            output_root=str(tmp_path / "outputs"),
            comparisons=comparisons,
            scatters=scatters,
            render_charts=False,
        )

        context = run(config, output_dir=tmp_path / "run")
        payload = json.loads(
            (context.output_dir / "graphs" / "revenue_per_gdp.json").read_text(encoding="utf-8")
        )

        # Threshold 1.0 on normalized scores joins every pair
        assert len(payload["edges"]) == 10
