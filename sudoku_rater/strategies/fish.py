"""Two-line patterns on a single digit: X-Wing and Skyscraper."""

from __future__ import annotations
from abc import abstractmethod
from typing import List, Optional, Tuple

from ..core.grid import Grid
from ..core.types import Candidate, RemovalResult, Strategy, Unit
from .base import COL_CELLS, PEERS, ROW_CELLS, DeductionRule, Masks, Position, cells_with_digit


def _strong_lines(masks: Masks, lines: List[List[Position]], digit: int) -> List[Tuple[int, List[Position]]]:
    """Lines holding `digit` in exactly two cells, with those cells."""
    found = []
    for index, line in enumerate(lines):
        cells = cells_with_digit(masks, line, digit)
        if len(cells) == 2:
            found.append((index, cells))
    return found


def _cross(unit: Unit, pos: Position) -> int:
    """Coordinate of `pos` across the line direction."""
    return pos[1] if unit is Unit.ROW else pos[0]


class LineRule(DeductionRule):
    """A rule run over pairs of rows, then pairs of columns."""

    @abstractmethod
    def scan_lines(self, masks: Masks, unit: Unit) -> Optional[RemovalResult]:
        """Search pairs of rows (unit ROW) or pairs of columns (unit COLUMN)."""

    def scan_rows(self, grid: Grid) -> Optional[RemovalResult]:
        return self.scan_lines(grid.candidate_masks(), Unit.ROW)

    def scan_cols(self, grid: Grid) -> Optional[RemovalResult]:
        return self.scan_lines(grid.candidate_masks(), Unit.COLUMN)

    def scan(self, grid: Grid) -> Optional[RemovalResult]:
        masks = grid.candidate_masks()
        return self.scan_lines(masks, Unit.ROW) or self.scan_lines(masks, Unit.COLUMN)


class XWing(LineRule):
    """
    A digit that appears in exactly the same two positions of two lines.

    Each of the two crossing lines must take the digit in one of these
    lines, so it is removed from the rest of both crossing lines.
    """

    strategy = Strategy.X_WING

    def scan_lines(self, masks: Masks, unit: Unit) -> Optional[RemovalResult]:
        lines, crossing = (ROW_CELLS, COL_CELLS) if unit is Unit.ROW else (COL_CELLS, ROW_CELLS)
        for digit in range(1, 10):
            strong = _strong_lines(masks, lines, digit)
            for i, (line1, cells1) in enumerate(strong):
                across = [_cross(unit, pos) for pos in cells1]
                for line2, cells2 in strong[i + 1:]:
                    if [_cross(unit, pos) for pos in cells2] != across:
                        continue
                    result = RemovalResult()
                    pattern = set(cells1) | set(cells2)
                    for k in across:
                        for pos in cells_with_digit(masks, crossing[k], digit):
                            if pos not in pattern:
                                result.candidates_about_to_be_removed.add(Candidate(pos[0], pos[1], digit))
                    if result.will_remove_candidates():
                        result.candidates_affected = [Candidate(r, c, digit) for r, c in cells1 + cells2]
                        return result.scoped(unit, line1, line2)
        return None


class Skyscraper(LineRule):
    """
    Two lines holding a digit in exactly two cells, aligned at one end only.

    The aligned ends (the bases) cannot both hold the digit, so at least
    one of the other two ends (the towers) does. Any cell seeing both
    towers loses the digit.
    """

    strategy = Strategy.SKYSCRAPER

    def scan_lines(self, masks: Masks, unit: Unit) -> Optional[RemovalResult]:
        for digit in range(1, 10):
            strong = _strong_lines(masks, ROW_CELLS if unit is Unit.ROW else COL_CELLS, digit)
            for i, (line1, cells1) in enumerate(strong):
                for line2, cells2 in strong[i + 1:]:
                    shared = {_cross(unit, p) for p in cells1} & {_cross(unit, p) for p in cells2}
                    if len(shared) != 1:
                        continue
                    k = shared.pop()
                    base1, tower1 = sorted(cells1, key=lambda p: _cross(unit, p) != k)
                    base2, tower2 = sorted(cells2, key=lambda p: _cross(unit, p) != k)
                    pattern = {base1, tower1, base2, tower2}
                    seen_by_both = set(PEERS[tower1[0]][tower1[1]]) & set(PEERS[tower2[0]][tower2[1]])
                    result = RemovalResult()
                    for pos in cells_with_digit(masks, sorted(seen_by_both - pattern), digit):
                        result.candidates_about_to_be_removed.add(Candidate(pos[0], pos[1], digit))
                    if result.will_remove_candidates():
                        result.candidates_affected = [
                            Candidate(r, c, digit) for r, c in (base1, tower1, base2, tower2)
                        ]
                        return result.scoped(unit, line1, line2)
        return None
