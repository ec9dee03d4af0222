"""Run orchestration data models for MetricGraph.

Defines RunContext (shared state for one invocation) and TaskRecord (per-task
timing, status and produced artifacts).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

from config.settings import RunConfig


class TaskStatus:
    """Status codes used in TaskRecord.status."""

    OK = "OK"
    PARTIAL = "PARTIAL"   # Graph built, chart not rendered
    EMPTY = "EMPTY"       # No country survived the merge; nothing to draw
    FAILED = "FAILED"
    SKIPPED = "SKIPPED"


@dataclass
class TaskRecord:
    """Timing, status and artifacts for a single task."""

    task_name: str
    start_time: datetime
    end_time: Optional[datetime] = None
    status: str = TaskStatus.OK
    sources: List[str] = field(default_factory=list)
    artifacts: Dict[str, str] = field(default_factory=dict)
    node_count: int = 0
    edge_count: int = 0
    average_shortest_path: Optional[float] = None
    error: str = ""

    @property
    def elapsed_seconds(self) -> float:
        """Compute elapsed time in seconds."""
        if self.end_time is None:
            return 0.0
        return (self.end_time - self.start_time).total_seconds()


@dataclass
class RunContext:
    """Shared state object for one run over every configured task.

    Tasks never share data through this object; it only collects their
    records, warnings and errors for the final summary.
    """

    config: RunConfig
    run_id: str
    output_dir: Path

    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    task_log: List[TaskRecord] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    def log_task_start(self, task_name: str) -> TaskRecord:
        """Record the start of a task."""
        record = TaskRecord(task_name=task_name, start_time=datetime.utcnow())
        self.task_log.append(record)
        return record

    def log_task_end(self, record: TaskRecord, status: str = TaskStatus.OK) -> None:
        """Record the end of a task."""
        record.end_time = datetime.utcnow()
        record.status = status

    def add_warning(self, warning: str) -> None:
        self.warnings.append(warning)

    def add_error(self, error: str) -> None:
        self.errors.append(error)

    def record_for(self, task_name: str) -> Optional[TaskRecord]:
        """Return the latest record for a task, or None if it never ran."""
        for record in reversed(self.task_log):
            if record.task_name == task_name:
                return record
        return None

    @property
    def failed_tasks(self) -> List[str]:
        return [r.task_name for r in self.task_log if r.status == TaskStatus.FAILED]
