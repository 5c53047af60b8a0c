"""
Unit tests for the categorical combiners.
"""

import pytest

from fusion.components.combiners.categorical import (
    combine_categorical,
    combine_distribution,
    probability_weight,
    single_out_category,
    weighted_confidence,
)
from fusion.components.statistics import ws_confidence
from fusion.core.errors import VoteValidationError


class TestCombineCategorical:
    """Test vote counting and tie-breaks."""

    def test_plurality(self, iris_records):
        assert combine_categorical(iris_records) == "setosa"

    def test_earlier_order_wins_ties(self):
        records = [
            {"prediction": "A", "order": 0, "weight": 1},
            {"prediction": "B", "order": 1, "weight": 1},
        ]
        assert combine_categorical(records) == "A"
        assert combine_categorical(records, "weight") == "A"

    def test_order_beats_list_position(self):
        records = [{"prediction": "B", "order": 4}, {"prediction": "A", "order": 2}]
        assert combine_categorical(records) == "A"

    def test_label_breaks_remaining_ties(self):
        records = [{"prediction": "B", "order": 0}, {"prediction": "A", "order": 0}]
        assert combine_categorical(records) == "A"

    def test_confidence_weighted(self):
        records = [
            {"prediction": "A", "confidence": 0.2, "order": 0},
            {"prediction": "A", "confidence": 0.2, "order": 1},
            {"prediction": "B", "confidence": 0.9, "order": 2},
        ]
        assert combine_categorical(records) == "A"
        assert combine_categorical(records, "confidence") == "B"

    def test_wrong_weight_field_raises(self, iris_records):
        with pytest.raises(VoteValidationError):
            combine_categorical(iris_records, "median")

    def test_missing_weight_raises(self):
        records = [{"prediction": "A", "confidence": 0.3}, {"prediction": "B"}]
        with pytest.raises(VoteValidationError):
            combine_categorical(records, "confidence")

    def test_full_with_confidence(self, tree_records):
        result = combine_categorical(tree_records, full=True)
        assert result["prediction"] == "versicolor"
        assert result["confidence"] == pytest.approx(0.55)
        assert result["count"] == 30
        assert result["distribution"] == [["setosa", 7], ["versicolor", 11]]
        assert result["distribution_unit"] == "counts"
        assert "probability" not in result

    def test_full_confidence_weighted(self, iris_records):
        result = combine_categorical(iris_records, "confidence", full=True)
        assert result["prediction"] == "setosa"
        assert result["confidence"] == pytest.approx(round((0.81 + 0.64) / 1.7, 5))

    def test_full_probabilities_without_count_raises(self):
        records = [{"prediction": "a", "probability": 0.7}, {"prediction": "b", "probability": 0.6}]
        with pytest.raises(VoteValidationError, match="Lacks 'count'"):
            combine_categorical(records, full=True)

    def test_full_without_confidence_or_probability(self):
        result = combine_categorical([{"prediction": "A"}, {"prediction": "A"}], full=True)
        assert result == {"prediction": "A", "count": 0}


class TestWeightedConfidence:
    """Test the combined confidence of the winning category."""

    def test_mean_of_winner_confidences(self, iris_records):
        assert weighted_confidence(iris_records, "setosa") == pytest.approx(0.85)

    def test_missing_confidence_raises(self):
        records = [{"prediction": "A", "confidence": 0.5}, {"prediction": "A"}]
        with pytest.raises(VoteValidationError):
            weighted_confidence(records, "A")

    def test_zero_total_weight_returns_infinity(self):
        records = [{"prediction": "A", "confidence": 0.5, "probability": 0.0}]
        assert weighted_confidence(records, "A", "probability") == float("inf")


class TestProbabilityWeight:
    """Test the expansion of records by their distributions."""

    def test_expansion(self, tree_records):
        vote_records = [dict(r, order=i) for i, r in enumerate(tree_records)]
        expanded = probability_weight(vote_records)
        assert len(expanded) == 6
        assert expanded[0] == {"prediction": "setosa", "probability": 0.7, "count": 7, "order": 0}
        assert expanded[3] == {"prediction": "setosa", "probability": 0.4, "count": 4, "order": 1}
        assert [r["order"] for r in expanded] == [0, 0, 1, 1, 2, 2]

    def test_probabilities_are_rounded(self):
        expanded = probability_weight([{"prediction": "a", "distribution": [["a", 1], ["b", 2]], "count": 3}])
        assert expanded[0]["probability"] == 0.33333

    @pytest.mark.parametrize("count", [0, -2, 2.5, True, "3"])
    def test_invalid_count_raises(self, count):
        with pytest.raises(VoteValidationError):
            probability_weight([{"prediction": "a", "distribution": [["a", 1]], "count": count}])

    def test_missing_distribution_raises(self):
        with pytest.raises(VoteValidationError):
            probability_weight([{"prediction": "a", "count": 3}])


class TestCombineDistribution:
    """Test summing probabilities per category."""

    def test_distribution_and_total(self):
        records = [
            {"prediction": "a", "probability": 0.5, "count": 5},
            {"prediction": "b", "probability": 0.25, "count": 3},
            {"prediction": "a", "probability": 0.25, "count": 2},
        ]
        distribution, total = combine_distribution(records)
        assert distribution == [["a", 0.75], ["b", 0.25]]
        assert total == 10

    def test_missing_weight_raises(self):
        with pytest.raises(VoteValidationError):
            combine_distribution([{"prediction": "a", "count": 1}])

    def test_zero_total_gives_empty_distribution(self):
        assert combine_distribution([{"prediction": "a", "probability": 1.0}]) == ([], 0)


class TestProbabilityWeightedVote:
    """Test combining expanded records by probability."""

    def test_probability_weighted_full(self, tree_records):
        expanded = probability_weight([dict(r, order=i) for i, r in enumerate(tree_records)])
        result = combine_categorical(expanded, "probability", full=True)
        assert result["prediction"] == "versicolor"
        assert result["probability"] == 0.5
        assert result["count"] == 30
        distribution, total = combine_distribution(expanded)
        assert [category for category, _ in distribution] == ["setosa", "versicolor", "virginica"]
        assert total == 30
        assert result["confidence"] == ws_confidence("versicolor", distribution, ws_n=total)
        assert 0 < result["confidence"] < 1.4 / 3.0


class TestSingleOutCategory:
    """Test the threshold reduction on record lists."""

    def test_reached(self):
        records = [{"prediction": "a"}, {"prediction": "b"}, {"prediction": "b"}]
        assert single_out_category(records, {"threshold": 1, "category": "a"}) == [{"prediction": "a"}]

    def test_not_reached(self):
        records = [{"prediction": "a"}, {"prediction": "b"}, {"prediction": "b"}]
        assert single_out_category(records, {"threshold": 2, "category": "a"}) == records[1:]

    def test_threshold_too_large(self):
        with pytest.raises(VoteValidationError):
            single_out_category([{"prediction": "a"}], {"threshold": 2, "category": "a"})

    def test_no_options(self):
        with pytest.raises(VoteValidationError):
            single_out_category([{"prediction": "a"}], None)
