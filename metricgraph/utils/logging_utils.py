"""Logging setup for MetricGraph.

The CLI calls configure_logging() once; library modules only ever do
``logging.getLogger(__name__)`` so they inherit whatever config/logging.yaml
sets up for the ``metricgraph`` namespace.
"""

from __future__ import annotations

import logging
import logging.config
from pathlib import Path
from typing import Any, Dict, MutableMapping, Optional, Tuple

import yaml

DEFAULT_LOGGING_CONFIG = Path(__file__).resolve().parents[2] / "config" / "logging.yaml"
FALLBACK_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
NAMESPACE = "metricgraph"


def _apply_overrides(
    cfg: Dict[str, Any],
    log_level: Optional[str],
    log_file: Optional[str],
) -> Dict[str, Any]:
    if log_file:
        for handler in cfg.get("handlers", {}).values():
            if handler.get("class") == "logging.FileHandler":
                handler["filename"] = log_file
    if log_level:
        level = log_level.upper()
        for logger_cfg in cfg.get("loggers", {}).values():
            logger_cfg["level"] = level
        if "root" in cfg:
            cfg["root"]["level"] = level
    return cfg


def configure_logging(
    config_path: Optional[str | Path] = None,
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
) -> None:
    """Apply the YAML logging config, with optional level and file overrides.

    Without a config file, falls back to a plain console basicConfig.

    Args:
        config_path: dictConfig YAML file; defaults to config/logging.yaml.
        log_level: Level applied to every configured logger and the root.
        log_file: Replaces the filename of every FileHandler.
    """
    path = Path(config_path) if config_path else DEFAULT_LOGGING_CONFIG

    if not path.is_file():
        logging.basicConfig(
            level=getattr(logging, (log_level or "INFO").upper(), logging.INFO),
            format=FALLBACK_FORMAT,
        )
        return

    with open(path, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f) or {}
    logging.config.dictConfig(_apply_overrides(cfg, log_level, log_file))


def get_logger(name: str) -> logging.Logger:
    """Return ``metricgraph.<name>``, leaving names already in the namespace alone."""
    if name == NAMESPACE or name.startswith(NAMESPACE + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{NAMESPACE}.{name}")


class RunContextAdapter(logging.LoggerAdapter):
    """Prefix every message with the run ID.

    Usage:
        log = get_run_logger("pipeline", run_id="20240115_120000_metricgraph")
        log.info("Run: starting")
        # [INFO] metricgraph.pipeline: [20240115_120000_metricgraph] Run: starting
    """

    def process(
        self, msg: str, kwargs: MutableMapping[str, Any]
    ) -> Tuple[str, MutableMapping[str, Any]]:
        return f"[{self.extra.get('run_id', '-')}] {msg}", kwargs


def get_run_logger(name: str, run_id: str) -> RunContextAdapter:
    return RunContextAdapter(get_logger(name), {"run_id": run_id})
