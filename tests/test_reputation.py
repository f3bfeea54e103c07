"""Tests for reputation scoring."""

import pytest
from decimal import Decimal

from dealdesk.domain.entities import Rating, RatingCategories
from dealdesk.domain.reputation import (
    CATEGORY_WEIGHTS,
    calculate_reputation,
    get_reputation_breakdown,
    weighted_rating_score,
)


def is_multiple_of_step(value: float) -> bool:
    return abs(value * 20 - round(value * 20)) < 1e-9


class TestCalculateReputation:
    """Tests for calculate_reputation."""

    def test_empty_history(self):
        """Test that an unrated user scores 0."""
        assert calculate_reputation([]) == 0

    def test_overall_scores_only(self):
        """Test that ratings without categories average their overall scores."""
        ratings = [Rating(score=5), Rating(score=3)]
        assert calculate_reputation(ratings) == 4.0

    def test_weights_sum_to_one(self):
        """Test the weight table invariant."""
        assert sum(CATEGORY_WEIGHTS.values()) == 1

    def test_category_weighting(self):
        """Test that deal quality carries the heaviest weight."""
        rating = Rating(
            score=3,
            categories=RatingCategories(
                communication=5, deal_quality=1, professionalism=5, timeliness=5
            ),
        )
        # 5*0.25 + 1*0.35 + 5*0.25 + 5*0.15 = 3.6
        assert weighted_rating_score(rating) == Decimal("3.6")
        assert calculate_reputation([rating]) == 3.6

    def test_missing_categories_fall_back_to_overall(self):
        """Test that absent sub-scores use the rating's overall score."""
        rating = Rating(score=4, categories=RatingCategories(deal_quality=2))
        # 4*0.25 + 2*0.35 + 4*0.25 + 4*0.15 = 3.3
        assert calculate_reputation([rating]) == 3.3

    def test_quantized_to_twentieths(self):
        """Test that the mean is rounded to the nearest 0.05."""
        ratings = [
            Rating(score=5),
            Rating(score=4, categories=RatingCategories(timeliness=1)),
            Rating(score=4),
        ]
        # per-rating: 5.0, 3.55, 4.0 -> mean 4.1833.. -> 4.2
        assert calculate_reputation(ratings) == 4.2

    def test_half_step_rounds_up(self):
        """Test that a mean exactly between two steps rounds up."""
        # 4*0.25 + 4*0.35 + 4*0.25 + 5*0.15 = 4.15 exactly; mean of it with 4.0 is 4.075
        ratings = [Rating(score=4, categories=RatingCategories(timeliness=5)), Rating(score=4)]
        assert calculate_reputation(ratings) == 4.1

    @pytest.mark.parametrize(
        "scores",
        [[1], [5, 5, 5], [1, 2, 3, 4, 5], [3, 4], [2, 5, 5, 1, 4, 4, 3]],
    )
    def test_output_range_and_step(self, scores):
        """Test that results stay within 0-5 on the 0.05 grid."""
        result = calculate_reputation([Rating(score=s) for s in scores])
        assert 0 <= result <= 5
        assert is_multiple_of_step(result)

    def test_out_of_range_scores_not_validated(self):
        """Test that range checks are left to the caller."""
        assert calculate_reputation([Rating(score=9)]) == 9.0

    def test_non_sequence_propagates(self):
        """Test that structurally invalid input is a programmer error."""
        with pytest.raises(TypeError):
            calculate_reputation(None)


class TestReputationBreakdown:
    """Tests for get_reputation_breakdown."""

    def test_empty_history(self):
        """Test the breakdown of an unrated user."""
        breakdown = get_reputation_breakdown([])
        assert breakdown.overall == 0
        assert breakdown.categories == {}
        assert breakdown.total_reviews == 0

    def test_unweighted_category_means(self):
        """Test that categories are simple averages rounded to one decimal."""
        ratings = [
            Rating(score=5, categories=RatingCategories(communication=4, timeliness=2)),
            Rating(score=4, categories=RatingCategories(communication=5)),
            Rating(score=4),
        ]
        breakdown = get_reputation_breakdown(ratings)

        assert breakdown.total_reviews == 3
        assert breakdown.categories == {
            "communication": 4.3,
            "deal_quality": 4.3,
            "professionalism": 4.3,
            "timeliness": 3.3,
        }
        assert breakdown.overall == calculate_reputation(ratings)
