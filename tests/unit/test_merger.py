"""Unit tests for metricgraph.analysis.merger."""

from __future__ import annotations

import pytest

from metricgraph.analysis.merger import merge_metrics, pair_metrics, scores_from_metrics
from metricgraph.models.metrics import MergedRecord, MetricRecord, ScatterPoint


def _records(*pairs):
    return [MetricRecord(country, float(value)) for country, value in pairs]


class TestMergeMetrics:
    def test_ratio_of_matching_countries(self, abc_primary, abc_secondary):
        """Default score must be primary / secondary for every matched country."""
        merged = merge_metrics(abc_primary, abc_secondary)

        assert merged == [
            MergedRecord("A", 10.0),
            MergedRecord("B", 5.0),
            MergedRecord("C", 1.0),
        ]

    def test_output_follows_primary_order(self):
        """Output order must follow the primary dataset, not the secondary."""
        primary = _records(("X", 4), ("Y", 6), ("Z", 8))
        secondary = _records(("Z", 2), ("X", 2), ("Y", 2))

        merged = merge_metrics(primary, secondary)

        assert [r.country for r in merged] == ["X", "Y", "Z"]

    def test_unmatched_countries_dropped(self):
        """Countries missing from either dataset must not appear in the output."""
        primary = _records(("A", 1), ("B", 2), ("C", 3))
        secondary = _records(("B", 1), ("D", 1))

        merged = merge_metrics(primary, secondary)

        assert [r.country for r in merged] == ["B"]
        assert len(merged) <= min(len(primary), len(secondary))

    def test_later_secondary_duplicate_wins(self):
        """When the secondary lists a country twice, the later value must be used."""
        primary = _records(("A", 10))
        secondary = _records(("A", 1), ("A", 5))

        assert merge_metrics(primary, secondary) == [MergedRecord("A", 2.0)]

    def test_positive_policy_filters_non_positive(self):
        """The positive policy must drop any pair with a value <= 0."""
        primary = _records(("A", 10), ("B", 0), ("C", -3), ("D", 8))
        secondary = _records(("A", 2), ("B", 2), ("C", 2), ("D", 0))

        merged = merge_metrics(primary, secondary, policy="positive")

        assert merged == [MergedRecord("A", 5.0)]

    def test_unconditional_keeps_negatives_drops_division_by_zero(self):
        """The unconditional policy must keep negatives but drop non-finite scores."""
        primary = _records(("A", -4), ("B", 3))
        secondary = _records(("A", 2), ("B", 0))

        merged = merge_metrics(primary, secondary, policy="unconditional")

        assert merged == [MergedRecord("A", -2.0)]

    def test_named_score_functions(self, abc_primary, abc_secondary):
        """'primary' and 'secondary' score functions must pass values through."""
        assert [r.derived_score for r in merge_metrics(abc_primary, abc_secondary, "primary")] == [
            100.0,
            50.0,
            10.0,
        ]
        assert [
            r.derived_score for r in merge_metrics(abc_primary, abc_secondary, "secondary")
        ] == [10.0, 10.0, 10.0]

    def test_callable_score_function(self, abc_primary, abc_secondary):
        """A callable score_fn must be applied to (primary, secondary)."""
        merged = merge_metrics(abc_primary, abc_secondary, lambda p, s: p - s)
        assert [r.derived_score for r in merged] == [90.0, 40.0, 0.0]

    def test_unknown_score_function_raises(self, abc_primary, abc_secondary):
        """An unknown score function name must raise ValueError."""
        with pytest.raises(ValueError, match="score function"):
            merge_metrics(abc_primary, abc_secondary, "product")

    def test_unknown_policy_raises(self, abc_primary, abc_secondary):
        """An unknown merge policy must raise ValueError."""
        with pytest.raises(ValueError, match="merge policy"):
            merge_metrics(abc_primary, abc_secondary, policy="lenient")

    def test_empty_inputs(self):
        """Empty datasets must merge to an empty list."""
        assert merge_metrics([], _records(("A", 1))) == []
        assert merge_metrics(_records(("A", 1)), []) == []


class TestScoresFromMetrics:
    def test_raw_values_become_scores(self, abc_primary):
        """Single-dataset scores must equal the raw values in file order."""
        assert scores_from_metrics(abc_primary) == [
            MergedRecord("A", 100.0),
            MergedRecord("B", 50.0),
            MergedRecord("C", 10.0),
        ]


class TestPairMetrics:
    def test_joined_points(self):
        """Scatter points must exist only for countries present in both datasets."""
        x = _records(("A", 80), ("B", 20), ("C", 5))
        y = _records(("C", 9), ("A", 3))

        assert pair_metrics(x, y) == [ScatterPoint("A", 80.0, 3.0), ScatterPoint("C", 5.0, 9.0)]
