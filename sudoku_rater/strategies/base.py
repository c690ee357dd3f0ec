"""Deduction rule interface and shared scan helpers."""

from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Tuple

from ..core import bitmask
from ..core.grid import Grid
from ..core.types import Candidate, Cell, RemovalResult, Strategy, StrategyResult, Unit

logger = logging.getLogger(__name__)

Masks = List[List[int]]
Position = Tuple[int, int]

SIZE = 9

# Cells of every unit, in scan order: rows left to right, columns top to
# bottom, boxes row-major inside each box.
ROW_CELLS: List[List[Position]] = [[(r, c) for c in range(SIZE)] for r in range(SIZE)]
COL_CELLS: List[List[Position]] = [[(r, c) for r in range(SIZE)] for c in range(SIZE)]
BOX_CELLS: List[List[Position]] = [
    [(3 * (b // 3) + i, 3 * (b % 3) + j) for i in range(3) for j in range(3)]
    for b in range(SIZE)
]
UNIT_CELLS = {Unit.ROW: ROW_CELLS, Unit.COLUMN: COL_CELLS, Unit.BOX: BOX_CELLS}


def peers_of(row: int, col: int) -> List[Position]:
    """Cells sharing a row, column or box with (row, col), in row-major order."""
    box_row, box_col = 3 * (row // 3), 3 * (col // 3)
    return [
        (r, c)
        for r in range(SIZE)
        for c in range(SIZE)
        if (r, c) != (row, col)
        and (r == row or c == col or (box_row <= r < box_row + 3 and box_col <= c < box_col + 3))
    ]


PEERS: List[List[List[Position]]] = [[peers_of(r, c) for c in range(SIZE)] for r in range(SIZE)]


def collect_set_digit(masks: Masks, row: int, col: int, digit: int) -> RemovalResult:
    """
    Build the removal result for placing `digit` at (row, col).

    Removes the digit from every peer that still holds it, and clears every
    candidate of the target cell including the digit itself.
    """
    result = RemovalResult(sets_cell=Cell(row, col, digit))
    result.candidates_affected.append(Candidate(row, col, digit))
    removals = result.candidates_about_to_be_removed
    for r, c in PEERS[row][col]:
        if bitmask.has(masks[r][c], digit):
            removals.add(Candidate(r, c, digit))
    for d in bitmask.digits(masks[row][col]):
        removals.add(Candidate(row, col, d))
    return result


def cells_with_digit(masks: Masks, cells: Sequence[Position], digit: int) -> List[Position]:
    """Cells (in the given order) whose candidates include `digit`."""
    bit = bitmask.bit(digit)
    return [(r, c) for r, c in cells if masks[r][c] & bit]


class DeductionRule(ABC):
    """
    A single human solving technique.

    Subclasses set `strategy` and implement `scan`, a read-only search over
    the grid that returns the first deduction with an effect, or None.
    """

    strategy: Strategy = Strategy.NONE

    @abstractmethod
    def scan(self, grid: Grid) -> Optional[RemovalResult]:
        """Search the grid. Must not modify it."""

    def find(self, grid: Grid) -> StrategyResult:
        """Run `scan` and tag the outcome with this rule's strategy."""
        removals = self.scan(grid)
        if removals is None or not removals.will_remove_candidates():
            return StrategyResult.empty(self.strategy)
        logger.debug("%s found %d removal(s)", self.strategy, len(removals))
        return StrategyResult(self.strategy, removals)

    @property
    def name(self) -> str:
        return self.strategy.label

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class UnitRule(DeductionRule):
    """
    A rule that looks at one unit (row, column or box) at a time.

    Subclasses implement `scan_unit`; `scan` visits the units in
    `unit_order`, each kind in index order.
    """

    unit_order: Tuple[Unit, ...] = (Unit.ROW, Unit.COLUMN, Unit.BOX)

    @abstractmethod
    def scan_unit(self, grid: Grid, masks: Masks, cells: List[Position]) -> Optional[RemovalResult]:
        """Search a single unit given its cells in scan order."""

    def scan_units(self, grid: Grid, unit: Unit) -> Optional[RemovalResult]:
        masks = grid.candidate_masks()
        for index, cells in enumerate(UNIT_CELLS[unit]):
            result = self.scan_unit(grid, masks, cells)
            if result is not None and result.will_remove_candidates():
                return result.scoped(unit, index)
        return None

    def scan_rows(self, grid: Grid) -> Optional[RemovalResult]:
        return self.scan_units(grid, Unit.ROW)

    def scan_cols(self, grid: Grid) -> Optional[RemovalResult]:
        return self.scan_units(grid, Unit.COLUMN)

    def scan_boxes(self, grid: Grid) -> Optional[RemovalResult]:
        return self.scan_units(grid, Unit.BOX)

    def scan(self, grid: Grid) -> Optional[RemovalResult]:
        for unit in self.unit_order:
            result = self.scan_units(grid, unit)
            if result is not None:
                return result
        return None
