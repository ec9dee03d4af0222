"""Country-keyed dataset merging for MetricGraph.

Inner-joins a primary and a secondary dataset by country and derives one score
per surviving country. Output order always follows the primary dataset; the
secondary dataset only serves as a lookup.

Pure functions — no I/O or external calls.
"""

from __future__ import annotations

import logging
import math
from typing import Callable, Dict, List, Sequence

from config.defaults import MERGE_POLICY
from metricgraph.models.metrics import MergedRecord, MetricRecord, ScatterPoint

logger = logging.getLogger(__name__)

ScoreFn = Callable[[float, float], float]

SCORE_FUNCTIONS: Dict[str, ScoreFn] = {
    "ratio": lambda primary, secondary: primary / secondary,
    "primary": lambda primary, secondary: primary,
    "secondary": lambda primary, secondary: secondary,
}


def _index_by_country(records: Sequence[MetricRecord]) -> Dict[str, float]:
    # Later duplicates overwrite earlier ones
    return {r.country: r.value for r in records}


def merge_metrics(
    primary: Sequence[MetricRecord],
    secondary: Sequence[MetricRecord],
    score_fn: str | ScoreFn = "ratio",
    policy: str = MERGE_POLICY,
) -> List[MergedRecord]:
    """Join two datasets by country and compute a derived score for each match.

    Policies:
    - ``positive``: keep a country only when both values are strictly positive.
    - ``unconditional``: keep every matched country, except that a score that
      is not finite (e.g. division by zero) is dropped with a warning.

    Args:
        primary: Dataset whose order the output follows.
        secondary: Dataset looked up by country.
        score_fn: Name from SCORE_FUNCTIONS or a callable (primary, secondary) -> score.
        policy: ``positive`` or ``unconditional``.

    Returns:
        MergedRecord list in primary order; unmatched countries are dropped.

    Raises:
        ValueError: On an unknown score function or policy name.
    """
    fn = _resolve_score_fn(score_fn)
    if policy not in ("positive", "unconditional"):
        raise ValueError(f"Unknown merge policy {policy!r}")

    lookup = _index_by_country(secondary)
    merged: List[MergedRecord] = []
    unmatched = 0
    filtered = 0

    for record in primary:
        if record.country not in lookup:
            unmatched += 1
            continue
        secondary_value = lookup[record.country]

        if policy == "positive" and (record.value <= 0.0 or secondary_value <= 0.0):
            filtered += 1
            continue

        try:
            score = fn(record.value, secondary_value)
        except ZeroDivisionError:
            score = math.inf
        if not math.isfinite(score):
            logger.warning(
                "Merge: dropping %r — score is not finite (%r, %r)",
                record.country,
                record.value,
                secondary_value,
            )
            filtered += 1
            continue

        merged.append(MergedRecord(country=record.country, derived_score=score))

    logger.debug(
        "Merge: %d merged, %d unmatched, %d filtered (policy=%s)",
        len(merged),
        unmatched,
        filtered,
        policy,
    )
    return merged


def scores_from_metrics(records: Sequence[MetricRecord]) -> List[MergedRecord]:
    """Use a single dataset's raw values as derived scores, in file order."""
    return [MergedRecord(country=r.country, derived_score=r.value) for r in records]


def pair_metrics(
    primary: Sequence[MetricRecord],
    secondary: Sequence[MetricRecord],
) -> List[ScatterPoint]:
    """Join two datasets into (x, y) points for a scatter plot.

    Args:
        primary: Dataset providing x values and the output order.
        secondary: Dataset providing y values.

    Returns:
        ScatterPoint list for countries present in both datasets.
    """
    lookup = _index_by_country(secondary)
    return [
        ScatterPoint(country=r.country, x=r.value, y=lookup[r.country])
        for r in primary
        if r.country in lookup
    ]


def _resolve_score_fn(score_fn: str | ScoreFn) -> ScoreFn:
    if callable(score_fn):
        return score_fn
    try:
        return SCORE_FUNCTIONS[score_fn]
    except KeyError:
        raise ValueError(
            f"Unknown score function {score_fn!r}; expected one of {sorted(SCORE_FUNCTIONS)}"
        ) from None
