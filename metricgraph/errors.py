"""Exception types raised by MetricGraph readers and analysis functions.

The pipeline orchestrator catches these per task, records the failure with the
task name and source file, and moves on to the next task.
"""

from __future__ import annotations


class MetricGraphError(Exception):
    """Base class for all MetricGraph errors."""


class DatasetNotFoundError(MetricGraphError, FileNotFoundError):
    """Raised when a dataset file does not exist."""

    def __init__(self, path: str) -> None:
        self.path = str(path)
        super().__init__(f"Dataset file not found: {self.path}")


class DatasetParseError(MetricGraphError):
    """Raised when a dataset row has the wrong shape or an unparseable value.

    ``line`` is 1-based and counts the header row.
    """

    def __init__(self, path: str, line: int, reason: str) -> None:
        self.path = str(path)
        self.line = line
        self.reason = reason
        super().__init__(f"{self.path}:{line}: {reason}")


class DegenerateDatasetError(MetricGraphError):
    """Raised when every derived score is equal and normalization is undefined."""

    def __init__(self, value: float, count: int) -> None:
        self.value = value
        self.count = count
        super().__init__(
            f"Cannot normalize {count} score(s): all equal to {value!r} (max == min)"
        )


class EmptyDatasetError(MetricGraphError):
    """Raised when no country survives the merge; callers treat it as a no-op."""
