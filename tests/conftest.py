"""Shared pytest fixtures for MetricGraph tests.

Conventions:
- Small in-memory MetricRecord lists for pure analysis tests
- Dataset files are written into pytest's tmp_path, never into data/
- Charts are rendered with the non-interactive Agg backend
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable, List, Sequence

import matplotlib

matplotlib.use("Agg")

import pytest  # noqa: E402

from metricgraph.models.metrics import MetricRecord  # noqa: E402


# ── In-memory datasets ───────────────────────────────────────────────────────────

@pytest.fixture
def abc_primary() -> List[MetricRecord]:
    """Primary dataset of the A/B/C scenario: A=100, B=50, C=10."""
    return [
        MetricRecord("A", 100.0),
        MetricRecord("B", 50.0),
        MetricRecord("C", 10.0),
    ]


@pytest.fixture
def abc_secondary() -> List[MetricRecord]:
    """Secondary dataset of the A/B/C scenario: every value 10.

    Merged ratios are A=10, B=5, C=1; normalized A=1.0, B=4/9, C=0.0.
    """
    return [
        MetricRecord("A", 10.0),
        MetricRecord("B", 10.0),
        MetricRecord("C", 10.0),
    ]


# ── Dataset files ────────────────────────────────────────────────────────────────

@pytest.fixture
def write_dataset(tmp_path) -> Callable[..., Path]:
    """Factory writing a delimited dataset file under tmp_path.

    Usage:
        path = write_dataset("gdp.csv", "Country,GDP", [("A", 10), ("B", 5)])
    """

    def _write(name: str, header: str, rows: Iterable[Sequence[object]]) -> Path:
        path = tmp_path / name
        lines = [header] + [",".join(str(cell) for cell in row) for row in rows]
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def data_dir(tmp_path) -> Path:
    """A data directory holding all four datasets the built-in tasks read."""
    root = tmp_path / "data"
    root.mkdir()
    (root / "tourism.csv").write_text(
        "Country,Revenue,Arrivals,Share,Year\n"
        "Spain,72.9,71.7,5.2,2022\n"
        "France,59.4,79.4,2.1,2022\n"
        "Italy,44.3,49.8,2.2,2022\n"
        "Greece,20.0,27.8,9.1,2022\n"
        "Japan,8.6,3.8,0.2,2022\n",
        encoding="utf-8",
    )
    (root / "gdp_per_capita.csv").write_text(
        "Country,GDP\nSpain,29.7\nFrance,40.9\nItaly,34.1\nGreece,20.7\nJapan,34.0\n",
        encoding="utf-8",
    )
    (root / "unemployment.csv").write_text(
        "Country,Rate\nSpain,12.9\nFrance,7.3\nItaly,8.1\nGreece,12.4\nJapan,2.6\n",
        encoding="utf-8",
    )
    (root / "cost_of_living.csv").write_text(
        "Country,Cost,Rent,Purchasing Power\n"
        "Spain,47.7,20.1,86.6\n"
        "France,67.9,22.8,92.5\n"
        "Italy,60.9,20.9,66.5\n"
        "Greece,52.6,10.9,48.6\n"
        "Japan,50.4,18.0,91.1\n",
        encoding="utf-8",
    )
    return root


@pytest.fixture
def run_config(data_dir, tmp_path):
    """RunConfig with the built-in tasks pointed at the tmp data directory."""
    from config.settings import RunConfig

    return RunConfig(data_dir=str(data_dir), output_root=str(tmp_path / "outputs"))
