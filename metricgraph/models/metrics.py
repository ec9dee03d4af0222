"""Metric record data models for MetricGraph.

Defines the per-country records that flow from the dataset reader through the
merger and normalizer. Country names are the natural key throughout.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MetricRecord:
    """One (country, value) row read from a dataset file."""

    country: str
    value: float


@dataclass(frozen=True)
class MergedRecord:
    """A country present in both datasets with its derived (finite) score."""

    country: str
    derived_score: float


@dataclass(frozen=True)
class NormalizedRecord:
    """A merged record rescaled into [0, 1] across the full merged set."""

    country: str
    scaled_score: float


@dataclass(frozen=True)
class ScatterPoint:
    """A country plotted at (x, y) = (first metric, second metric)."""

    country: str
    x: float
    y: float
