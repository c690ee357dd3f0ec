"""Unit tests for difficulty accounting."""

import pytest

from sudoku_rater.core.types import Strategy
from sudoku_rater.rating import Rating


class TestRating:
    """Tests for the Rating class."""

    def test_empty(self):
        rating = Rating()
        assert not rating
        assert rating.effort() == 0.0
        assert rating.total() == 0
        assert rating.to_dict() == {}

    def test_effort_is_weighted_average(self):
        """Test effort averages strategy weights over eliminations and placements."""
        rating = Rating()
        rating.record(Strategy.LAST_DIGIT, 5, placed=True)
        rating.record(Strategy.X_WING, 1)
        assert rating.snapshot() == {Strategy.LAST_DIGIT: 6, Strategy.X_WING: 1}
        assert rating.effort() == pytest.approx((6 * 4 + 140) / 7)
        assert rating.total() == 7

    def test_placement_counts_once(self):
        """Test that a placement with no eliminations still counts."""
        rating = Rating()
        rating.record(Strategy.LAST_DIGIT, 0, placed=True)
        assert rating.snapshot() == {Strategy.LAST_DIGIT: 1}
        assert rating.effort() == pytest.approx(Strategy.LAST_DIGIT.weight)

    def test_effort_bounds(self):
        rating = Rating()
        rating.record(Strategy.HIDDEN_SINGLE, 3)
        assert rating.effort() == pytest.approx(14)
        rating.record(Strategy.SKYSCRAPER, 3)
        assert Strategy.HIDDEN_SINGLE.weight <= rating.effort() <= Strategy.SKYSCRAPER.weight

    def test_none_is_ignored(self):
        rating = Rating()
        rating.record(Strategy.NONE, 4)
        assert not rating

    def test_revert(self):
        rating = Rating()
        rating.record(Strategy.HIDDEN_PAIR, 2)
        rating.record(Strategy.OBVIOUS_SINGLE, 4, placed=True)
        rating.revert(Strategy.OBVIOUS_SINGLE, 4, placed=True)
        assert rating.snapshot() == {Strategy.HIDDEN_PAIR: 2}
        assert rating.total() == 2

    def test_breakdown_sorted_by_weight(self):
        rating = Rating()
        rating.record(Strategy.X_WING, 2)
        rating.record(Strategy.LAST_DIGIT, 1)
        rating.record(Strategy.POINTING_PAIR, 3)
        assert [s for s, _ in rating.breakdown()] == [
            Strategy.LAST_DIGIT, Strategy.POINTING_PAIR, Strategy.X_WING
        ]
        assert rating.to_dict() == {"Last Digit": 1, "Pointing Pair": 3, "X-Wing": 2}

    def test_copy_and_clear(self):
        rating = Rating()
        rating.record(Strategy.OBVIOUS_PAIR, 2)
        copy = rating.copy()
        rating.clear()
        assert not rating
        assert copy.snapshot() == {Strategy.OBVIOUS_PAIR: 2}


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
