"""Rules that place a single digit: last digit, obvious single, hidden single."""

from __future__ import annotations
from typing import List, Optional

from ..core import bitmask
from ..core.errors import InconsistentStateError
from ..core.grid import Grid
from ..core.types import RemovalResult, Strategy, Unit
from .base import DeductionRule, Masks, Position, UnitRule, collect_set_digit


class LastDigit(UnitRule):
    """A unit with exactly one empty cell takes the one digit it is missing."""

    strategy = Strategy.LAST_DIGIT

    def scan_unit(self, grid: Grid, masks: Masks, cells: List[Position]) -> Optional[RemovalResult]:
        empty = [(r, c) for r, c in cells if grid.is_empty(r, c)]
        if len(empty) != 1:
            return None
        present = bitmask.from_digits(grid.get_digit(r, c) for r, c in cells)
        missing = bitmask.ALL_DIGITS_MASK & ~present
        if bitmask.count(missing) != 1:
            raise InconsistentStateError(
                f"Unit with one empty cell is missing digits {bitmask.digits(missing)}"
            )
        row, col = empty[0]
        return collect_set_digit(masks, row, col, bitmask.single_digit(missing))


class ObviousSingle(DeductionRule):
    """A cell with only one candidate left takes that digit."""

    strategy = Strategy.OBVIOUS_SINGLE

    def scan(self, grid: Grid) -> Optional[RemovalResult]:
        masks = grid.candidate_masks()
        for row in range(9):
            for col in range(9):
                mask = masks[row][col]
                if bitmask.count(mask) != 1:
                    continue
                if not grid.is_empty(row, col):
                    raise InconsistentStateError(f"Filled cell ({row}, {col}) still has candidates")
                return collect_set_digit(masks, row, col, bitmask.single_digit(mask))
        return None


class HiddenSingle(UnitRule):
    """
    A digit that fits in only one cell of a unit goes there.

    Boxes are searched first, then rows, then columns. Within a unit, cells
    are visited in scan order and each cell's candidates ascending.
    """

    strategy = Strategy.HIDDEN_SINGLE
    unit_order = (Unit.BOX, Unit.ROW, Unit.COLUMN)

    def scan_unit(self, grid: Grid, masks: Masks, cells: List[Position]) -> Optional[RemovalResult]:
        seen = [0] * 10
        for r, c in cells:
            for d in bitmask.digits(masks[r][c]):
                seen[d] += 1
        for r, c in cells:
            for d in bitmask.digits(masks[r][c]):
                if seen[d] != 1:
                    continue
                if not grid.is_empty(r, c):
                    raise InconsistentStateError(
                        f"Hidden single {d} located at filled cell ({r}, {c})"
                    )
                return collect_set_digit(masks, r, c, d)
        return None
