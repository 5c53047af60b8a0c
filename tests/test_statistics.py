"""
Unit tests for the statistical primitives (weighted sum, softmax, Wilson score).
"""

import math

import pytest

from fusion.components.statistics import softmax, weighted_sum, ws_confidence
from fusion.core.errors import VoteValidationError


class TestWeightedSum:
    """Test the prediction-times-weight sum."""

    def test_weighted_sum(self):
        records = [{"prediction": 2.0, "weight": 0.5}, {"prediction": 4.0, "weight": 0.25}]
        assert weighted_sum(records, "weight") == pytest.approx(2.0)

    def test_none_weight_counts_as_zero(self):
        records = [{"prediction": 2.0, "weight": None}, {"prediction": 4.0, "weight": 1.0}]
        assert weighted_sum(records, "weight") == pytest.approx(4.0)


class TestSoftmax:
    """Test per-category softmax normalization."""

    def test_probabilities_sum_to_one(self):
        result = softmax({"a": {"probability": 1.0, "order": 0}, "b": {"probability": 2.0, "order": 1}})
        total = sum(info["probability"] for info in result.values())
        assert total == pytest.approx(1.0)
        assert result["b"]["probability"] > result["a"]["probability"]

    def test_order_is_kept(self):
        result = softmax({"a": {"probability": 0.0, "order": 3}})
        assert result["a"] == {"probability": pytest.approx(1.0), "order": 3}

    def test_zero_total_returns_nan(self):
        result = softmax({"a": {"probability": float("-inf"), "order": 0}})
        assert isinstance(result, float)
        assert math.isnan(result)

    def test_large_scores_do_not_overflow(self):
        result = softmax({"a": {"probability": 800.0, "order": 0}, "b": {"probability": 900.0, "order": 1}})
        assert result["b"]["probability"] == pytest.approx(1.0)
        assert result["a"]["probability"] == pytest.approx(0.0, abs=1e-12)

    def test_very_negative_scores_still_normalize(self):
        result = softmax({"a": {"probability": -800.0, "order": 0}, "b": {"probability": -801.0, "order": 1}})
        expected = 1.0 / (1.0 + math.exp(-1.0))
        assert result["a"]["probability"] == pytest.approx(expected)

    def test_infinite_scores_share_the_mass(self):
        result = softmax(
            {
                "a": {"probability": float("inf"), "order": 0},
                "b": {"probability": float("inf"), "order": 1},
                "c": {"probability": 5.0, "order": 2},
            }
        )
        assert [result[c]["probability"] for c in "abc"] == [0.5, 0.5, 0.0]

    def test_nan_score_returns_nan(self):
        result = softmax({"a": {"probability": float("nan"), "order": 0}, "b": {"probability": 1.0, "order": 1}})
        assert math.isnan(result)


class TestWilsonScore:
    """Test the Wilson score confidence."""

    def test_value_strictly_between_zero_and_one(self):
        confidence = ws_confidence("A", {"A": 10, "B": 0})
        assert 0 < confidence < 1
        assert confidence == pytest.approx(0.72246, abs=1e-5)

    def test_pairs_and_mapping_agree(self):
        assert ws_confidence("A", [["A", 7], ["B", 3]]) == ws_confidence("A", {"A": 7, "B": 3})

    def test_explicit_instances(self):
        # normalized weights with an explicit number of instances
        wide = ws_confidence("A", {"A": 0.7, "B": 0.3}, ws_n=10)
        narrow = ws_confidence("A", {"A": 0.7, "B": 0.3}, ws_n=1000)
        assert wide < narrow < 0.7

    def test_negative_weight_raises(self):
        with pytest.raises(VoteValidationError):
            ws_confidence("A", {"A": -1, "B": 5})

    def test_any_negative_weight_raises(self):
        with pytest.raises(VoteValidationError):
            ws_confidence("A", {"A": 10, "B": -2})

    def test_too_few_instances_raises(self):
        with pytest.raises(VoteValidationError):
            ws_confidence("A", {"A": 0.5, "B": 0.3})
