"""Step-by-step human-like solving."""

from __future__ import annotations
import logging
from typing import Callable, Iterator, Optional, Sequence

from .core.grid import Grid
from .core.types import RemovalResult, StrategyResult
from .strategies import (
    DEFAULT_RULES,
    ClaimingPair,
    DeductionRule,
    HiddenPair,
    HiddenSingle,
    HiddenTriplet,
    LastDigit,
    ObviousPair,
    ObviousSingle,
    ObviousTriplet,
    PointingPair,
    Skyscraper,
    XWing,
)

logger = logging.getLogger(__name__)


class StrategyEngine:
    """
    Applies deduction rules to a grid one step at a time.

    Rules are tried strictly in the order given; the first one that finds
    a step with an effect wins. Searching never modifies the grid, only
    `Grid.apply` does.
    """

    def __init__(self, rules: Optional[Sequence[DeductionRule]] = None):
        """
        Initialize the engine.

        Args:
            rules: Deduction rules in priority order. Defaults to all
                built-in rules, easiest first.
        """
        self.rules = tuple(DEFAULT_RULES if rules is None else rules)

    def next_step(self, grid: Grid) -> StrategyResult:
        """
        Find the next deduction without applying it.

        Returns:
            The first result with an effect, or the `Strategy.NONE`
            sentinel when the grid is solved or every rule is stuck.
        """
        if not grid.unsolved():
            return StrategyResult.empty()
        for rule in self.rules:
            result = rule.find(grid)
            if not result.is_none():
                return result
        logger.debug("No rule applies, grid is stuck")
        return StrategyResult.empty()

    def steps(self, grid: Grid, recompute: bool = True) -> Iterator[StrategyResult]:
        """
        Solve the grid lazily, yielding each step after it was applied.

        Args:
            grid: Grid to solve in place.
            recompute: Rebuild the candidates and clear the rating first.
        """
        if recompute:
            grid.calc_candidates()
            grid.rating.clear()
        while True:
            result = self.next_step(grid)
            if result.is_none():
                return
            grid.apply(result)
            yield result

    def solve_human_like(self, grid: Grid) -> bool:
        """
        Solve the grid using deduction rules only.

        Returns:
            True if the grid ended up solved, False if the rules got stuck.
        """
        count = 0
        for _ in self.steps(grid):
            count += 1
        solved = grid.is_solved()
        logger.debug("Human-like solve finished after %d steps (solved=%s)", count, solved)
        return solved


_ENGINE = StrategyEngine()


def next_step(grid: Grid) -> StrategyResult:
    """`StrategyEngine.next_step` with the default rules."""
    return _ENGINE.next_step(grid)


def solve_human_like(grid: Grid) -> bool:
    """`StrategyEngine.solve_human_like` with the default rules."""
    return _ENGINE.solve_human_like(grid)


def _finder(rule: DeductionRule, scope: Optional[str] = None) -> Callable[[Grid], StrategyResult]:
    def find(grid: Grid) -> StrategyResult:
        if scope is None:
            return rule.find(grid)
        removals: Optional[RemovalResult] = getattr(rule, scope)(grid)
        if removals is None or not removals.will_remove_candidates():
            return StrategyResult.empty(rule.strategy)
        return StrategyResult(rule.strategy, removals)

    find.__doc__ = f"Find the first {rule.name} step{' (' + scope + ')' if scope else ''}."
    return find


_LAST_DIGIT = LastDigit()
_HIDDEN_SINGLE = HiddenSingle()
_POINTING_PAIR = PointingPair()
_CLAIMING_PAIR = ClaimingPair()
_OBVIOUS_PAIR = ObviousPair()
_HIDDEN_PAIR = HiddenPair()
_OBVIOUS_TRIPLET = ObviousTriplet()
_HIDDEN_TRIPLET = HiddenTriplet()
_SKYSCRAPER = Skyscraper()
_XWING = XWing()

find_last_digit = _finder(_LAST_DIGIT)
find_last_digit_in_rows = _finder(_LAST_DIGIT, "scan_rows")
find_last_digit_in_cols = _finder(_LAST_DIGIT, "scan_cols")
find_last_digit_in_boxes = _finder(_LAST_DIGIT, "scan_boxes")
find_obvious_single = _finder(ObviousSingle())
find_hidden_single = _finder(_HIDDEN_SINGLE)
find_hidden_single_in_rows = _finder(_HIDDEN_SINGLE, "scan_rows")
find_hidden_single_in_cols = _finder(_HIDDEN_SINGLE, "scan_cols")
find_hidden_single_in_boxes = _finder(_HIDDEN_SINGLE, "scan_boxes")
find_pointing_pair = _finder(_POINTING_PAIR)
find_pointing_pair_in_rows = _finder(_POINTING_PAIR, "scan_rows")
find_pointing_pair_in_cols = _finder(_POINTING_PAIR, "scan_cols")
find_pointing_pair_in_boxes = _finder(_POINTING_PAIR, "scan_boxes")
find_claiming_pair = _finder(_CLAIMING_PAIR)
find_claiming_pair_in_rows = _finder(_CLAIMING_PAIR, "scan_rows")
find_claiming_pair_in_cols = _finder(_CLAIMING_PAIR, "scan_cols")
find_obvious_pair = _finder(_OBVIOUS_PAIR)
find_obvious_pair_in_rows = _finder(_OBVIOUS_PAIR, "scan_rows")
find_obvious_pair_in_cols = _finder(_OBVIOUS_PAIR, "scan_cols")
find_obvious_pair_in_boxes = _finder(_OBVIOUS_PAIR, "scan_boxes")
find_hidden_pair = _finder(_HIDDEN_PAIR)
find_hidden_pair_in_rows = _finder(_HIDDEN_PAIR, "scan_rows")
find_hidden_pair_in_cols = _finder(_HIDDEN_PAIR, "scan_cols")
find_hidden_pair_in_boxes = _finder(_HIDDEN_PAIR, "scan_boxes")
find_obvious_triplet = _finder(_OBVIOUS_TRIPLET)
find_obvious_triplet_in_rows = _finder(_OBVIOUS_TRIPLET, "scan_rows")
find_obvious_triplet_in_cols = _finder(_OBVIOUS_TRIPLET, "scan_cols")
find_obvious_triplet_in_boxes = _finder(_OBVIOUS_TRIPLET, "scan_boxes")
find_hidden_triplet = _finder(_HIDDEN_TRIPLET)
find_hidden_triplet_in_rows = _finder(_HIDDEN_TRIPLET, "scan_rows")
find_hidden_triplet_in_cols = _finder(_HIDDEN_TRIPLET, "scan_cols")
find_hidden_triplet_in_boxes = _finder(_HIDDEN_TRIPLET, "scan_boxes")
find_skyscraper = _finder(_SKYSCRAPER)
find_skyscraper_in_rows = _finder(_SKYSCRAPER, "scan_rows")
find_skyscraper_in_cols = _finder(_SKYSCRAPER, "scan_cols")
find_xwing = _finder(_XWING)
find_xwing_in_rows = _finder(_XWING, "scan_rows")
find_xwing_in_cols = _finder(_XWING, "scan_cols")
