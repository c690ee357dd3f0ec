"""Box/line intersection rules: pointing pairs and claiming pairs."""

from __future__ import annotations
from typing import List, Optional

from ..core.grid import Grid, box_index
from ..core.types import Candidate, RemovalResult, Strategy, Unit
from .base import BOX_CELLS, COL_CELLS, ROW_CELLS, DeductionRule, Masks, Position, cells_with_digit


def _eliminate(masks: Masks, cells: List[Position], digit: int, evidence: List[Position]) -> RemovalResult:
    result = RemovalResult()
    for r, c in cells_with_digit(masks, cells, digit):
        result.candidates_about_to_be_removed.add(Candidate(r, c, digit))
    result.candidates_affected = [Candidate(r, c, digit) for r, c in evidence]
    return result


class PointingPair(DeductionRule):
    """
    A digit confined to two cells of one row (or column) inside a box.

    The digit must then sit in that part of the line, so it is removed from
    the rest of the line outside the box.
    """

    strategy = Strategy.POINTING_PAIR

    def _scan_box(self, masks: Masks, box: int, digit: int, unit: Unit) -> Optional[RemovalResult]:
        cells = cells_with_digit(masks, BOX_CELLS[box], digit)
        if len(cells) != 2:
            return None
        (r1, c1), (r2, c2) = cells
        if unit is Unit.ROW and r1 == r2:
            outside = [(r, c) for r, c in ROW_CELLS[r1] if box_index(r, c) != box]
            index = r1
        elif unit is Unit.COLUMN and c1 == c2:
            outside = [(r, c) for r, c in COL_CELLS[c1] if box_index(r, c) != box]
            index = c1
        else:
            return None
        result = _eliminate(masks, outside, digit, cells)
        if not result.will_remove_candidates():
            return None
        return result.scoped(unit, index)

    def _scan_lines(self, grid: Grid, unit: Unit) -> Optional[RemovalResult]:
        masks = grid.candidate_masks()
        for box in range(9):
            for digit in range(1, 10):
                result = self._scan_box(masks, box, digit, unit)
                if result is not None:
                    return result
        return None

    def scan_rows(self, grid: Grid) -> Optional[RemovalResult]:
        return self._scan_lines(grid, Unit.ROW)

    def scan_cols(self, grid: Grid) -> Optional[RemovalResult]:
        return self._scan_lines(grid, Unit.COLUMN)

    def scan_boxes(self, grid: Grid) -> Optional[RemovalResult]:
        """Both directions box by box, reported against the box."""
        masks = grid.candidate_masks()
        for box in range(9):
            for digit in range(1, 10):
                for unit in (Unit.ROW, Unit.COLUMN):
                    result = self._scan_box(masks, box, digit, unit)
                    if result is not None:
                        return result.scoped(Unit.BOX, box)
        return None

    def scan(self, grid: Grid) -> Optional[RemovalResult]:
        return self.scan_rows(grid) or self.scan_cols(grid)


class ClaimingPair(DeductionRule):
    """
    A digit confined to two cells of a row (or column) that share a box.

    The line claims the digit for that box, so it is removed from the rest
    of the box.
    """

    strategy = Strategy.CLAIMING_PAIR

    def _scan_lines(self, grid: Grid, unit: Unit) -> Optional[RemovalResult]:
        masks = grid.candidate_masks()
        lines = ROW_CELLS if unit is Unit.ROW else COL_CELLS
        for index, line in enumerate(lines):
            for digit in range(1, 10):
                cells = cells_with_digit(masks, line, digit)
                if len(cells) != 2:
                    continue
                box = box_index(*cells[0])
                if box_index(*cells[1]) != box:
                    continue
                if unit is Unit.ROW:
                    rest = [(r, c) for r, c in BOX_CELLS[box] if r != index]
                else:
                    rest = [(r, c) for r, c in BOX_CELLS[box] if c != index]
                result = _eliminate(masks, rest, digit, cells)
                if result.will_remove_candidates():
                    return result.scoped(unit, index)
        return None

    def scan_rows(self, grid: Grid) -> Optional[RemovalResult]:
        return self._scan_lines(grid, Unit.ROW)

    def scan_cols(self, grid: Grid) -> Optional[RemovalResult]:
        return self._scan_lines(grid, Unit.COLUMN)

    def scan(self, grid: Grid) -> Optional[RemovalResult]:
        return self.scan_rows(grid) or self.scan_cols(grid)
