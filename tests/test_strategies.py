"""Unit tests for the individual deduction rules."""

import pytest

from sudoku_rater import engine
from sudoku_rater.core import bitmask
from sudoku_rater.core.errors import InconsistentStateError
from sudoku_rater.core.grid import Grid
from sudoku_rater.core.types import Candidate, Cell, Strategy, Unit
from sudoku_rater.strategies import (
    DEFAULT_RULES,
    HiddenSingle,
    HiddenTriplet,
    LastDigit,
    ObviousPair,
    ObviousSingle,
    ObviousTriplet,
    Skyscraper,
    XWing,
)

CLAIMING_ROWS = "318005406000603810006080503864952137123476958795318264030500780000007305000039641"
CLAIMING_COLS = "762008001980000006150000087478003169526009873319800425835001692297685314641932758"
HIDDEN_PAIRS = "690180300003006410100000600069018500318000264705060891000691700071800906906742180"
POINTING = "984000000002500040001904002006097230003602000209035610195768423427351896638009751"
LAST_DIGIT = "006004700090000154408000000100090000070006001000040000000072635350461879007830412"


def prepared(board: str) -> Grid:
    grid = Grid.from_string(board)
    grid.calc_candidates()
    return grid


def with_candidates(cells) -> Grid:
    """An empty grid whose candidates are exactly `cells`."""
    grid = Grid()
    for (row, col), digits in cells.items():
        grid.candidates[row, col] = bitmask.from_digits(digits)
    return grid


def cands(*triples):
    return {Candidate(r, c, d) for r, c, d in triples}


class TestRegistry:
    """Tests for the default rule order."""

    def test_priority_order(self):
        """Test rules are ordered by ascending weight."""
        strategies = [rule.strategy for rule in DEFAULT_RULES]
        assert strategies == [
            Strategy.LAST_DIGIT,
            Strategy.OBVIOUS_SINGLE,
            Strategy.HIDDEN_SINGLE,
            Strategy.POINTING_PAIR,
            Strategy.CLAIMING_PAIR,
            Strategy.OBVIOUS_PAIR,
            Strategy.HIDDEN_PAIR,
            Strategy.OBVIOUS_TRIPLET,
            Strategy.HIDDEN_TRIPLET,
            Strategy.SKYSCRAPER,
            Strategy.X_WING,
        ]
        weights = [s.weight for s in strategies]
        assert weights == sorted(weights)

    def test_weights(self):
        assert Strategy.LAST_DIGIT.weight == 4
        assert Strategy.OBVIOUS_SINGLE.weight == 5
        assert Strategy.HIDDEN_SINGLE.weight == 14
        assert Strategy.POINTING_PAIR.weight == Strategy.CLAIMING_PAIR.weight == 50
        assert Strategy.OBVIOUS_PAIR.weight == 60
        assert Strategy.HIDDEN_PAIR.weight == 70
        assert Strategy.X_WING.weight == 140


class TestSingles:
    """Tests for last digit, obvious single and hidden single."""

    def test_last_digit_in_rows(self):
        grid = prepared(LAST_DIGIT)
        result = engine.find_last_digit_in_rows(grid)
        removals = result.removals
        assert result.strategy == Strategy.LAST_DIGIT
        assert removals.unit == Unit.ROW
        assert removals.unit_index == [7]
        assert removals.sets_cell == Cell(7, 2, 2)
        assert removals.candidates_about_to_be_removed == cands(
            (1, 2, 2), (3, 2, 2), (4, 2, 2), (5, 2, 2), (7, 2, 2)
        )

    def test_last_digit_on_nearly_solved_grid(self):
        """Test a single hole is filled with the missing digit."""
        board = "".join(str((3 * (r % 3) + r // 3 + c) % 9 + 1) for r in range(9) for c in range(9))
        expected = int(board[40])
        grid = prepared(board[:40] + "0" + board[41:])
        result = engine.find_last_digit(grid)
        assert result.removals.sets_cell == Cell(4, 4, expected)
        assert result.removals.unit == Unit.ROW
        assert result.removals.unit_index == [4]
        assert result.removals.candidates_about_to_be_removed == cands((4, 4, expected))

    def test_last_digit_with_two_missing_digits_is_fatal(self):
        rows = [[0] * 9 for _ in range(9)]
        rows[0] = [1, 2, 3, 4, 5, 6, 7, 0, 1]
        grid = Grid.from_rows(rows)
        with pytest.raises(InconsistentStateError):
            LastDigit().scan_rows(grid)

    def test_obvious_single(self):
        grid = with_candidates({(2, 3): [7], (2, 5): [7, 8], (6, 3): [7]})
        result = engine.find_obvious_single(grid)
        assert result.strategy == Strategy.OBVIOUS_SINGLE
        assert result.removals.sets_cell == Cell(2, 3, 7)
        assert result.removals.candidates_about_to_be_removed == cands((2, 3, 7), (2, 5, 7), (6, 3, 7))
        assert result.removals.candidates_affected == [Candidate(2, 3, 7)]

    def test_obvious_single_on_filled_cell_is_fatal(self):
        grid = with_candidates({(0, 0): [4]})
        grid.set_digit(0, 0, 4)
        with pytest.raises(InconsistentStateError):
            ObviousSingle().scan(grid)

    def test_hidden_single_in_box(self):
        """Test a digit with one spot in a box is placed even among other candidates."""
        grid = with_candidates({(0, 0): [1, 2], (1, 1): [2, 3], (2, 2): [2, 3]})
        result = engine.find_hidden_single(grid)
        assert result.strategy == Strategy.HIDDEN_SINGLE
        assert result.removals.unit == Unit.BOX
        assert result.removals.unit_index == [0]
        assert result.removals.sets_cell == Cell(0, 0, 1)
        assert result.removals.candidates_about_to_be_removed == cands((0, 0, 1), (0, 0, 2))

    def test_hidden_single_boxes_before_rows(self):
        """Test boxes are searched before rows."""
        grid = with_candidates({(0, 7): [3], (0, 8): [3, 9], (2, 1): [5], (2, 2): [4, 5]})
        result = HiddenSingle().find(grid)
        assert result.removals.unit == Unit.BOX
        assert result.removals.sets_cell == Cell(2, 2, 4)
        assert engine.find_hidden_single_in_rows(grid).removals.sets_cell == Cell(0, 8, 9)

    def test_hidden_single_on_filled_cell_is_fatal(self):
        grid = with_candidates({(0, 0): [3], (0, 1): [4, 5], (1, 1): [4, 5]})
        grid.set_digit(0, 0, 5)
        with pytest.raises(InconsistentStateError):
            HiddenSingle().scan(grid)


class TestIntersections:
    """Tests for pointing and claiming pairs."""

    def test_claiming_pair_in_rows(self):
        grid = prepared(CLAIMING_ROWS)
        result = engine.find_claiming_pair(grid)
        removals = result.removals
        assert result.strategy == Strategy.CLAIMING_PAIR
        assert removals.candidates_about_to_be_removed == cands((2, 1, 7))
        assert removals.unit == Unit.ROW
        assert removals.unit_index == [1]
        assert removals.candidates_affected == [Candidate(1, 1, 7), Candidate(1, 2, 7)]
        assert removals.sets_cell is None

    def test_claiming_pair_in_cols(self):
        grid = prepared(CLAIMING_COLS)
        assert engine.find_claiming_pair_in_rows(grid).is_none()
        result = engine.find_claiming_pair(grid)
        removals = result.removals
        assert removals.unit == Unit.COLUMN
        assert removals.unit_index == [5]
        assert removals.candidates_about_to_be_removed == cands(
            (0, 3, 4), (1, 3, 4), (2, 3, 4), (0, 4, 4), (1, 4, 4), (2, 4, 4)
        )
        assert removals.candidates_affected == [Candidate(1, 5, 4), Candidate(2, 5, 4)]

    def test_pointing_pair_in_rows(self):
        grid = prepared(POINTING)
        result = engine.find_pointing_pair(grid)
        removals = result.removals
        assert result.strategy == Strategy.POINTING_PAIR
        assert removals.unit == Unit.ROW
        assert removals.unit_index == [2]
        assert removals.candidates_affected == [Candidate(2, 0, 5), Candidate(2, 1, 5)]
        assert removals.candidates_about_to_be_removed == cands((2, 6, 5))

    def test_pointing_pair_in_boxes(self):
        grid = prepared(POINTING)
        result = engine.find_pointing_pair_in_boxes(grid)
        assert result.removals.unit == Unit.BOX
        assert result.removals.unit_index == [0]
        assert result.removals.candidates_about_to_be_removed == cands((2, 6, 5))

    def test_pointing_pair_in_cols_synthetic(self):
        grid = with_candidates({(0, 4): [8, 9], (2, 4): [8], (6, 4): [8, 1], (1, 3): [9]})
        result = engine.find_pointing_pair_in_cols(grid)
        assert result.removals.unit == Unit.COLUMN
        assert result.removals.unit_index == [4]
        assert result.removals.candidates_about_to_be_removed == cands((6, 4, 8))

    def test_pointing_pair_needs_exactly_two_cells(self):
        """Test three aligned cells in a box do not form a pair."""
        grid = with_candidates({(0, 0): [8], (0, 1): [8], (0, 2): [8], (0, 7): [8, 1]})
        assert engine.find_pointing_pair(grid).is_none()


class TestSubsets:
    """Tests for naked and hidden pairs and triplets."""

    def test_hidden_pair_in_rows(self):
        grid = prepared(HIDDEN_PAIRS)
        result = engine.find_hidden_pair_in_rows(grid)
        removals = result.removals
        assert result.strategy == Strategy.HIDDEN_PAIR
        assert removals.candidates_about_to_be_removed == cands((3, 3, 3))
        assert removals.unit == Unit.ROW
        assert removals.unit_index == [3]
        assert removals.candidates_affected == [
            Candidate(3, 0, 2), Candidate(3, 0, 4), Candidate(3, 3, 2), Candidate(3, 3, 4)
        ]

    def test_hidden_pair_in_cols(self):
        grid = prepared(HIDDEN_PAIRS)
        removals = engine.find_hidden_pair_in_cols(grid).removals
        assert removals.unit == Unit.COLUMN
        assert removals.unit_index == [8]
        assert removals.candidates_about_to_be_removed == cands(
            (1, 8, 2), (1, 8, 5), (1, 8, 7), (2, 8, 2), (2, 8, 5), (2, 8, 7)
        )
        assert removals.candidates_affected == [
            Candidate(1, 8, 8), Candidate(1, 8, 9), Candidate(2, 8, 8), Candidate(2, 8, 9)
        ]

    def test_hidden_pair_in_boxes(self):
        grid = prepared(HIDDEN_PAIRS)
        removals = engine.find_hidden_pair_in_boxes(grid).removals
        assert removals.unit == Unit.BOX
        assert removals.unit_index == [2]
        assert len(removals) == 6

    def test_hidden_pair_prefers_rows(self):
        grid = prepared(HIDDEN_PAIRS)
        assert engine.find_hidden_pair(grid).removals.unit == Unit.ROW

    def test_obvious_pair(self):
        grid = with_candidates({(0, 0): [1, 2], (0, 1): [1, 2], (0, 5): [1, 3, 4]})
        result = engine.find_obvious_pair(grid)
        assert result.strategy == Strategy.OBVIOUS_PAIR
        assert result.removals.unit == Unit.ROW
        assert result.removals.unit_index == [0]
        assert result.removals.candidates_about_to_be_removed == cands((0, 5, 1))
        assert result.removals.candidates_affected == [
            Candidate(0, 0, 1), Candidate(0, 0, 2), Candidate(0, 1, 1), Candidate(0, 1, 2)
        ]

    def test_obvious_pair_without_effect(self):
        grid = with_candidates({(0, 0): [1, 2], (0, 1): [1, 2], (0, 5): [3, 4]})
        assert ObviousPair().scan(grid) is None

    def test_obvious_pair_in_box(self):
        grid = with_candidates({(3, 3): [6, 7], (5, 5): [6, 7], (4, 4): [6, 9]})
        removals = engine.find_obvious_pair_in_boxes(grid).removals
        assert removals.unit == Unit.BOX
        assert removals.unit_index == [4]
        assert removals.candidates_about_to_be_removed == cands((4, 4, 6))

    def test_obvious_triplet_in_cols(self):
        grid = with_candidates({(0, 2): [4, 5], (3, 2): [5, 6], (7, 2): [4, 6], (8, 2): [4, 6, 9]})
        result = ObviousTriplet().find(grid)
        assert result.strategy == Strategy.OBVIOUS_TRIPLET
        assert result.removals.unit == Unit.COLUMN
        assert result.removals.unit_index == [2]
        assert result.removals.candidates_about_to_be_removed == cands((8, 2, 4), (8, 2, 6))
        assert result.removals.candidates_affected == [
            Candidate(0, 2, 4), Candidate(0, 2, 5),
            Candidate(3, 2, 5), Candidate(3, 2, 6),
            Candidate(7, 2, 4), Candidate(7, 2, 6),
        ]

    def test_hidden_triplet_in_rows(self):
        grid = with_candidates({
            (4, 0): [1, 2, 7], (4, 1): [2, 3, 8], (4, 2): [1, 3, 9],
            (4, 5): [7, 8], (4, 6): [8, 9],
        })
        result = HiddenTriplet().find(grid)
        assert result.strategy == Strategy.HIDDEN_TRIPLET
        assert result.removals.unit == Unit.ROW
        assert result.removals.unit_index == [4]
        assert result.removals.candidates_about_to_be_removed == cands((4, 0, 7), (4, 1, 8), (4, 2, 9))
        assert engine.find_hidden_pair(grid).is_none()

    def test_hidden_triplet_in_cols(self):
        grid = with_candidates({
            (0, 4): [1, 2, 7], (1, 4): [2, 3, 8], (2, 4): [1, 3, 9],
            (5, 4): [7, 8], (6, 4): [8, 9],
        })
        assert engine.find_hidden_triplet_in_rows(grid).is_none()
        result = HiddenTriplet().find(grid)
        assert result.strategy == Strategy.HIDDEN_TRIPLET
        assert result.removals.unit == Unit.COLUMN
        assert result.removals.unit_index == [4]
        assert result.removals.candidates_about_to_be_removed == cands((0, 4, 7), (1, 4, 8), (2, 4, 9))

    def test_hidden_triplet_in_boxes(self):
        """Test a triplet spread over three rows and three columns of one box."""
        grid = with_candidates({
            (6, 6): [1, 2, 7], (7, 7): [2, 3, 8], (8, 8): [1, 3, 9],
            (6, 7): [7, 8], (7, 8): [8, 9],
        })
        assert engine.find_hidden_triplet_in_rows(grid).is_none()
        assert engine.find_hidden_triplet_in_cols(grid).is_none()
        result = HiddenTriplet().find(grid)
        assert result.removals.unit == Unit.BOX
        assert result.removals.unit_index == [8]
        assert result.removals.candidates_about_to_be_removed == cands((6, 6, 7), (7, 7, 8), (8, 8, 9))


class TestFish:
    """Tests for X-Wing and Skyscraper."""

    def test_xwing_in_rows(self):
        grid = with_candidates({
            (1, 2): [5], (1, 6): [5],
            (5, 2): [5], (5, 6): [5],
            (3, 2): [5, 7], (8, 6): [5, 1],
        })
        result = XWing().find(grid)
        assert result.strategy == Strategy.X_WING
        assert result.removals.unit == Unit.ROW
        assert result.removals.unit_index == [1, 5]
        assert result.removals.candidates_about_to_be_removed == cands((3, 2, 5), (8, 6, 5))
        assert result.removals.candidates_affected == [
            Candidate(1, 2, 5), Candidate(1, 6, 5), Candidate(5, 2, 5), Candidate(5, 6, 5)
        ]

    def test_xwing_in_cols(self):
        grid = with_candidates({
            (2, 0): [4], (7, 0): [4],
            (2, 3): [4], (7, 3): [4],
            (2, 5): [4], (7, 8): [4],
        })
        assert engine.find_xwing_in_rows(grid).is_none()
        removals = engine.find_xwing(grid).removals
        assert removals.unit == Unit.COLUMN
        assert removals.unit_index == [0, 3]
        assert removals.candidates_about_to_be_removed == cands((2, 5, 4), (7, 8, 4))

    def test_skyscraper_in_rows(self):
        grid = with_candidates({
            (0, 1): [3], (0, 6): [3],
            (4, 1): [3], (4, 8): [3],
            (2, 8): [3],
        })
        result = Skyscraper().find(grid)
        assert result.strategy == Strategy.SKYSCRAPER
        assert result.removals.unit == Unit.ROW
        assert result.removals.unit_index == [0, 4]
        assert result.removals.candidates_about_to_be_removed == cands((2, 8, 3))
        assert result.removals.candidates_affected == [
            Candidate(0, 1, 3), Candidate(0, 6, 3), Candidate(4, 1, 3), Candidate(4, 8, 3)
        ]

    def test_skyscraper_in_cols(self):
        """Test columns 0 and 4 sharing a base in row 1."""
        grid = with_candidates({
            (1, 0): [3], (6, 0): [3],
            (1, 4): [3], (8, 4): [3],
            (8, 2): [3],
        })
        result = engine.find_skyscraper_in_cols(grid)
        assert result.strategy == Strategy.SKYSCRAPER
        assert result.removals.unit == Unit.COLUMN
        assert result.removals.unit_index == [0, 4]
        assert result.removals.candidates_about_to_be_removed == cands((8, 2, 3))
        assert result.removals.candidates_affected == [
            Candidate(1, 0, 3), Candidate(6, 0, 3), Candidate(1, 4, 3), Candidate(8, 4, 3)
        ]

    def test_skyscraper_ignores_xwing_shape(self):
        grid = with_candidates({
            (0, 1): [3], (0, 6): [3],
            (4, 1): [3], (4, 6): [3],
            (2, 6): [3],
        })
        assert engine.find_skyscraper_in_rows(grid).is_none()


class TestSearchIsReadOnly:
    """Tests that searching never changes the grid."""

    @pytest.mark.parametrize("board", [CLAIMING_ROWS, CLAIMING_COLS, HIDDEN_PAIRS, POINTING, LAST_DIGIT])
    def test_rules_do_not_mutate(self, board):
        grid = prepared(board)
        masks = grid.candidate_masks()
        for rule in DEFAULT_RULES:
            rule.find(grid)
        assert grid.candidate_masks() == masks
        assert grid.to_board_string() == board

    @pytest.mark.parametrize("board", [CLAIMING_ROWS, CLAIMING_COLS, HIDDEN_PAIRS, POINTING, LAST_DIGIT])
    def test_removals_are_present(self, board):
        """Test every reported removal is an actual candidate."""
        grid = prepared(board)
        for rule in DEFAULT_RULES:
            result = rule.find(grid)
            for cand in result.removals.candidates_about_to_be_removed:
                assert grid.has_candidate(cand.row, cand.col, cand.digit)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
