"""Min-max score normalization for MetricGraph.

Pure functions — no I/O or external calls.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from config.defaults import DEGENERATE_MIDPOINT, DEGENERATE_POLICY
from metricgraph.errors import DegenerateDatasetError
from metricgraph.models.metrics import MergedRecord, NormalizedRecord

logger = logging.getLogger(__name__)


def normalize_scores(
    merged: Sequence[MergedRecord],
    degenerate: str = DEGENERATE_POLICY,
) -> List[NormalizedRecord]:
    """Rescale derived scores to [0, 1] using the observed min and max.

    An empty input yields an empty output. When every score is equal the
    scale is undefined: the ``midpoint`` policy maps all entries to 0.5 and
    the ``raise`` policy raises DegenerateDatasetError.

    Args:
        merged: Merged records in presentation order.
        degenerate: ``midpoint`` or ``raise``.

    Returns:
        NormalizedRecord list in the same order as ``merged``.

    Raises:
        DegenerateDatasetError: If all scores are equal and policy is ``raise``.
        ValueError: On an unknown policy name.
    """
    if degenerate not in ("midpoint", "raise"):
        raise ValueError(f"Unknown degenerate policy {degenerate!r}")
    if not merged:
        return []

    scores = [r.derived_score for r in merged]
    low = min(scores)
    high = max(scores)
    span = high - low

    if span == 0.0:
        if degenerate == "raise":
            raise DegenerateDatasetError(low, len(scores))
        logger.warning(
            "Normalize: all %d scores equal %r — mapping to %.2f",
            len(scores),
            low,
            DEGENERATE_MIDPOINT,
        )
        return [NormalizedRecord(r.country, DEGENERATE_MIDPOINT) for r in merged]

    return [
        NormalizedRecord(r.country, min(1.0, max(0.0, (r.derived_score - low) / span)))
        for r in merged
    ]
