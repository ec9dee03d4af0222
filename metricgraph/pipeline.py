"""MetricGraph run orchestrator.

Runs every configured task strictly in sequence: the comparison graphs first,
then the scatter plots. Each task reads its own datasets, so a missing or
malformed file only fails the tasks that use it; the run records the failure
and moves on to the next task.

Per task the run writes:
  graphs/<task>.json  — render payload (nodes, edges, caption, canvas, stats)
  graphs/<task>.gexf  — similarity graph for Gephi or other graph tools
  charts/<task>.png   — rendered chart

and once per run ``run_summary.json`` and ``manifest.json``.

Usage:
    from config.settings import RunConfig
    from metricgraph.pipeline import run

    context = run(RunConfig(data_dir="data"))
"""

from __future__ import annotations

import logging
import re
import signal
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from config.settings import ComparisonSpec, DatasetSpec, RunConfig, ScatterSpec
from metricgraph.analysis.comparative import ComparativeGraph
from metricgraph.analysis.merger import pair_metrics
from metricgraph.analysis.similarity_graph import to_networkx
from metricgraph.errors import EmptyDatasetError, MetricGraphError
from metricgraph.io.exporters import build_run_manifest, export_gexf_graph, export_graph
from metricgraph.io.persistence import ensure_output_dir, save_json
from metricgraph.io.readers import read_dataset
from metricgraph.models.metrics import MetricRecord
from metricgraph.models.pipeline import RunContext, TaskRecord, TaskStatus
from metricgraph.utils.logging_utils import get_run_logger
from metricgraph.visualization.graph_chart import render_comparison_graph
from metricgraph.visualization.scatter_chart import render_metric_scatter

logger = logging.getLogger(__name__)

# Set by the SIGTERM handler and checked between tasks
_RUN_INTERRUPTED: bool = False


def _sigterm_handler(signum: int, frame: object) -> None:  # pragma: no cover
    """Handle SIGTERM by requesting a graceful stop after the current task."""
    global _RUN_INTERRUPTED
    logger.warning(
        "MetricGraph: SIGTERM received (signal %d) — run will stop after current task",
        signum,
    )
    _RUN_INTERRUPTED = True


def _make_run_id(label: str = "metricgraph") -> str:
    """Generate a sortable run ID from UTC timestamp and a label slug.

    Returns:
        Run ID string in the form ``YYYYMMDD_HHMMSS_<slug>``.
    """
    timestamp = datetime.utcnow().strftime("%Y%m%d_%H%M%S")
    slug = re.sub(r"[^a-z0-9]+", "_", label.lower())[:40].strip("_") or "run"
    return f"{timestamp}_{slug}"


def _read(spec: DatasetSpec, data_dir: str, record: TaskRecord) -> List[MetricRecord]:
    path = spec.resolve(data_dir)
    record.sources.append(str(path))
    return read_dataset(path, spec.value_column, spec.expected_fields, spec.delimiter)


def _run_task(
    context: RunContext,
    task_name: str,
    body: Callable[[TaskRecord], str],
) -> bool:
    """Execute a single task body and record its timing and status.

    Any exception fails only this task. An EmptyDatasetError is a no-op
    success recorded as EMPTY.

    Args:
        context: Shared run context.
        task_name: Task label for logs and task_log.
        body: Callable doing the work; returns the final TaskStatus.

    Returns:
        True if the task did not fail.
    """
    record = context.log_task_start(task_name)
    logger.info("Run: starting task %s", task_name)

    try:
        status = body(record)
    except EmptyDatasetError as exc:
        context.log_task_end(record, status=TaskStatus.EMPTY)
        logger.warning("Run: task %s produced no nodes: %s", task_name, exc)
        context.add_warning(f"[{task_name}] {exc}")
        return True
    except MetricGraphError as exc:
        context.log_task_end(record, status=TaskStatus.FAILED)
        record.error = str(exc)
        sources = ", ".join(record.sources) or "no source"
        logger.error("Run: task %s failed (sources: %s): %s", task_name, sources, exc)
        context.add_error(f"{task_name} failed (sources: {sources}): {exc}")
        return False
    except Exception as exc:
        context.log_task_end(record, status=TaskStatus.FAILED)
        record.error = str(exc)
        sources = ", ".join(record.sources) or "no source"
        logger.exception(
            "Run: task %s raised unhandled exception (sources: %s): %s", task_name, sources, exc
        )
        context.add_error(f"{task_name} failed with exception (sources: {sources}): {exc}")
        return False

    context.log_task_end(record, status=status)
    if status == TaskStatus.PARTIAL:
        context.add_warning(f"[{task_name}] chart not rendered")
    logger.info(
        "Run: task %s complete (%.2fs, status=%s)", task_name, record.elapsed_seconds, status
    )
    return True


def run_comparison_task(context: RunContext, spec: ComparisonSpec) -> bool:
    """Read, build, export and render one comparison graph task."""
    cfg = context.config

    def _body(record: TaskRecord) -> str:
        primary = _read(spec.primary, cfg.data_dir, record)
        secondary = _read(spec.secondary, cfg.data_dir, record) if spec.secondary else None

        graph = ComparativeGraph(spec, cfg.include_self_pairs).build(primary, secondary)
        record.node_count = graph.node_count
        record.edge_count = graph.edge_count
        if graph.stats is not None:
            record.average_shortest_path = graph.stats.average_shortest_path
            logger.info(
                "Task %s: average shortest path %.4f over %d pairs",
                spec.name,
                graph.stats.average_shortest_path,
                graph.stats.reachable_pairs,
            )

        graphs_dir = context.output_dir / "graphs"
        record.artifacts["graph"] = str(export_graph(graph, graphs_dir / f"{spec.name}.json"))
        gexf_path = graphs_dir / f"{spec.name}.gexf"
        if export_gexf_graph(to_networkx(graph), gexf_path):
            record.artifacts["gexf"] = str(gexf_path)

        if not cfg.render_charts:
            return TaskStatus.OK
        chart = render_comparison_graph(graph, context.output_dir / "charts" / f"{spec.name}.png")
        if chart is None:
            return TaskStatus.PARTIAL
        record.artifacts["chart"] = str(chart)
        return TaskStatus.OK

    return _run_task(context, spec.name, _body)


def run_scatter_task(context: RunContext, spec: ScatterSpec) -> bool:
    """Read, join and render one scatter plot task."""
    cfg = context.config

    def _body(record: TaskRecord) -> str:
        x_records = _read(spec.x, cfg.data_dir, record)
        y_records = _read(spec.y, cfg.data_dir, record)
        points = pair_metrics(x_records, y_records)
        if not points:
            raise EmptyDatasetError(f"Task {spec.name!r}: no country present in both datasets")
        record.node_count = len(points)

        if not cfg.render_charts:
            return TaskStatus.OK
        chart = render_metric_scatter(
            points,
            spec.x_range,
            spec.y_range,
            title=spec.caption,
            x_label=spec.x_label,
            y_label=spec.y_label,
            output_path=context.output_dir / "charts" / f"{spec.name}.png",
            point_size=spec.point_size,
            image_size=spec.image_size,
        )
        if chart is None:
            return TaskStatus.PARTIAL
        record.artifacts["chart"] = str(chart)
        return TaskStatus.OK

    return _run_task(context, spec.name, _body)


def run(config: RunConfig, output_dir: Optional[Path] = None) -> RunContext:
    """Execute every enabled and selected task.

    Args:
        config: Fully-populated RunConfig.
        output_dir: Write into this directory instead of a new
            ``<output_root>/<run_id>`` directory.

    Returns:
        RunContext with the task log, warnings and errors.
    """
    global _RUN_INTERRUPTED
    _RUN_INTERRUPTED = False

    # Register SIGTERM handler so batch runs exit cleanly
    signal.signal(signal.SIGTERM, _sigterm_handler)

    run_id = _make_run_id()
    if output_dir is None:
        output_dir = ensure_output_dir(config.output_root, run_id)
    else:
        output_dir = ensure_output_dir(Path(output_dir).parent, Path(output_dir).name)

    context = RunContext(config=config, run_id=run_id, output_dir=output_dir)
    context.start_time = datetime.utcnow()
    get_run_logger("pipeline", run_id).info("Run: starting → %s", output_dir)

    tasks: List[Tuple[str, Callable[[], bool]]] = []
    skipped: List[str] = []
    for spec in config.comparisons:
        if not config.is_selected(spec.name):
            continue
        if spec.enabled:
            tasks.append((spec.name, lambda spec=spec: run_comparison_task(context, spec)))
        else:
            skipped.append(spec.name)
    for spec in config.scatters:
        if not config.is_selected(spec.name):
            continue
        if spec.enabled:
            tasks.append((spec.name, lambda spec=spec: run_scatter_task(context, spec)))
        else:
            skipped.append(spec.name)

    if not tasks:
        logger.warning("Run: no tasks selected")

    for position, (_, task) in enumerate(tasks):
        if _RUN_INTERRUPTED:
            logger.warning("Run: interrupted — skipping remaining tasks")
            skipped.extend(n for n, _ in tasks[position:])
            break
        task()

    for name in skipped:
        context.log_task_end(context.log_task_start(name), status=TaskStatus.SKIPPED)
        logger.info("Run: task %s skipped", name)

    _finalise(context)
    return context


def _finalise(context: RunContext) -> None:
    """Record end time, write the run summary and manifest, and log a summary line."""
    from metricgraph import __version__

    context.end_time = datetime.utcnow()
    elapsed = (context.end_time - context.start_time).total_seconds() if context.start_time else 0.0

    save_json(
        {
            "run_id": context.run_id,
            "elapsed_seconds": elapsed,
            "tasks": context.task_log,
            "warnings": context.warnings,
            "errors": context.errors,
        },
        context.output_dir / "run_summary.json",
    )
    save_json(
        build_run_manifest(context.run_id, context.output_dir, __version__),
        context.output_dir / "manifest.json",
    )

    completed = [r.task_name for r in context.task_log if r.status != TaskStatus.FAILED]
    get_run_logger("pipeline", context.run_id).info(
        "Run: complete in %.1fs | tasks=%d/%d | warnings=%d | errors=%d",
        elapsed,
        len(completed),
        len(context.task_log),
        len(context.warnings),
        len(context.errors),
    )
    for err in context.errors:
        logger.error("Run error: %s", err)
