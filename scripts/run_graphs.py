#!/usr/bin/env python3
"""MetricGraph CLI — build every configured comparison graph and scatter plot.

Usage:
    python scripts/run_graphs.py --data-dir data
    python scripts/run_graphs.py --data-dir data --only tourism tourism_gdp
    python scripts/run_graphs.py --tasks config/tasks.yaml --log-level DEBUG
    python scripts/run_graphs.py --list-tasks
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Ensure project root is on sys.path for consistent import resolution
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from config.defaults import INCLUDE_SELF_PAIRS  # noqa: E402
from config.settings import RunConfig, load_task_specs  # noqa: E402
from metricgraph.utils.logging_utils import configure_logging  # noqa: E402


def build_arg_parser() -> argparse.ArgumentParser:
    """Build the argparse argument parser for a MetricGraph run."""
    parser = argparse.ArgumentParser(
        prog="run_graphs",
        description="MetricGraph — country metric comparison graphs",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    # ── Inputs ──────────────────────────────────────────────────────────────────
    parser.add_argument(
        "--data-dir",
        type=str,
        default=None,
        help="Directory holding the dataset files; METRICGRAPH_DATA_DIR or data when unset",
    )
    parser.add_argument(
        "--tasks",
        type=str,
        default=None,
        help="YAML task file replacing the built-in task catalogue",
    )
    parser.add_argument(
        "--only",
        type=str,
        nargs="*",
        default=[],
        metavar="TASK",
        help="Run only these task names",
    )
    parser.add_argument(
        "--list-tasks",
        action="store_true",
        default=False,
        help="Print the task names and exit",
    )

    # ── Analysis ────────────────────────────────────────────────────────────────
    parser.add_argument(
        "--include-self-pairs",
        action="store_true",
        default=INCLUDE_SELF_PAIRS,
        help="Count distance-0 self pairs in the average shortest path",
    )

    # ── Output and logging ──────────────────────────────────────────────────────
    parser.add_argument(
        "--output-root",
        type=str,
        default=None,
        help="Root directory for run outputs; OUTPUT_ROOT or outputs/runs when unset",
    )
    parser.add_argument(
        "--no-charts",
        action="store_true",
        default=False,
        help="Export graph payloads only, without rendering charts",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity level; LOG_LEVEL or INFO when unset",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Override the log file path from config/logging.yaml",
    )

    return parser


def args_to_config(args: argparse.Namespace) -> RunConfig:
    """Convert parsed CLI arguments to a RunConfig instance.

    Raises:
        ValueError: If the task file or the ``--only`` selection is invalid.
    """
    # Options left unset fall through to the RunConfig environment defaults
    kwargs = {
        key: value
        for key, value in (
            ("data_dir", args.data_dir),
            ("output_root", args.output_root),
            ("log_level", args.log_level),
        )
        if value is not None
    }
    if args.tasks:
        comparisons, scatters = load_task_specs(args.tasks)
        kwargs.update(comparisons=comparisons, scatters=scatters)

    return RunConfig(
        only=list(args.only or []),
        include_self_pairs=args.include_self_pairs,
        render_charts=not args.no_charts,
        **kwargs,
    )


def main() -> None:
    """CLI entrypoint — parse arguments, build config, run every task."""
    parser = build_arg_parser()
    args = parser.parse_args()

    logger = logging.getLogger("metricgraph.run_graphs")

    try:
        config = args_to_config(args)
    except (OSError, ValueError) as exc:
        configure_logging(log_level=args.log_level, log_file=args.log_file)
        logger.error("Invalid configuration: %s", exc)
        sys.exit(2)

    configure_logging(log_level=config.log_level, log_file=args.log_file)

    if args.list_tasks:
        for spec in config.comparisons:
            print(f"{spec.name}\tgraph\t{spec.caption}")
        for spec in config.scatters:
            print(f"{spec.name}\tscatter\t{spec.caption}")
        return

    logger.info(
        "MetricGraph starting — data dir: %s | tasks: %s",
        config.data_dir,
        ", ".join(config.only) or "all",
    )

    from metricgraph.pipeline import run

    try:
        context = run(config)
    except KeyboardInterrupt:
        logger.info("Run interrupted by user")
        sys.exit(0)

    logger.info("Outputs written to %s", context.output_dir)
    if context.failed_tasks:
        logger.error("Failed tasks: %s", ", ".join(context.failed_tasks))
        sys.exit(1)


if __name__ == "__main__":
    main()
