"""Puzzle generator producing grids with a unique solution."""

from __future__ import annotations
import logging
import random
from enum import Enum
from typing import Iterator, List, Optional, Tuple

from ..core.grid import Grid
from ..core.validator import can_place, has_unique_solution, solve_by_backtracking

logger = logging.getLogger(__name__)

SIZE = 9
MIN_FILLED_CELLS = 17
MAX_FILLED_CELLS = SIZE * SIZE


class FillAlgorithm(Enum):
    """How a puzzle is built."""
    DIAGONAL = "diagonal"
    DIAGONAL_THIN_OUT = "diagonal-thin-out"
    INCREMENTAL = "incremental"
    MASK = "mask"


class ThinningAlgorithm(Enum):
    """How cells are removed when thinning out a solved grid."""
    SINGLE = "single"
    MIRRORED = "mirrored"


def check_filled_cells(filled_cells: int) -> None:
    if not MIN_FILLED_CELLS <= filled_cells <= MAX_FILLED_CELLS:
        raise ValueError(
            f"filled_cells must be between {MIN_FILLED_CELLS} and {MAX_FILLED_CELLS}, got {filled_cells}"
        )


class PuzzleGenerator:
    """
    Generator for Sudoku puzzles with a unique solution.

    Every algorithm may fail on a given attempt; `attempt` then returns
    None and iterating the generator simply tries again.

    Algorithms:
    - DIAGONAL: fill the diagonal boxes, solve, then remove random cells
      down to the target, giving up on the first removal that makes the
      solution ambiguous.
    - DIAGONAL_THIN_OUT: fill and solve as above, then visit every cell in
      random order and keep each removal only if the solution stays unique.
    - INCREMENTAL: place random digits on random empty cells up to the
      target, then check uniqueness.
    - MASK: fill and solve, then blank the cells marked '0' in the mask.
    """

    def __init__(
        self,
        fill_algorithm: FillAlgorithm = FillAlgorithm.DIAGONAL_THIN_OUT,
        thinning: ThinningAlgorithm = ThinningAlgorithm.MIRRORED,
        max_filled_cells: int = 24,
        mask: Optional[str] = None,
        seed: Optional[int] = None,
    ):
        """
        Initialize the generator.

        Args:
            fill_algorithm: Construction algorithm.
            thinning: Cell removal pattern for DIAGONAL_THIN_OUT.
            max_filled_cells: Target number of givens (17-81).
            mask: 81 characters of '0' (blank) and '1' (keep), required for MASK.
            seed: Random seed for reproducibility.
        """
        check_filled_cells(max_filled_cells)
        if fill_algorithm is FillAlgorithm.MASK:
            if mask is None:
                raise ValueError("The mask algorithm needs a mask")
            mask = mask.strip()
            if len(mask) != SIZE * SIZE or set(mask) - {"0", "1"}:
                raise ValueError("Mask must be 81 characters of '0' and '1'")
        self.fill_algorithm = fill_algorithm
        self.thinning = thinning
        self.max_filled_cells = max_filled_cells
        self.mask = mask
        self.rng = random.Random(seed)
        self.attempts = 0

    def attempt(self) -> Optional[Grid]:
        """Run one generation attempt. Returns None on failure."""
        self.attempts += 1
        if self.fill_algorithm is FillAlgorithm.DIAGONAL:
            return self._diagonal(self.max_filled_cells)
        if self.fill_algorithm is FillAlgorithm.DIAGONAL_THIN_OUT:
            return self._diagonal_thin_out()
        if self.fill_algorithm is FillAlgorithm.INCREMENTAL:
            return self._incremental()
        return self._masked()

    def generate(self, max_attempts: Optional[int] = None) -> Optional[Grid]:
        """
        Try until a puzzle is produced.

        Args:
            max_attempts: Give up after this many attempts (None = no limit).
        """
        tries = 0
        while max_attempts is None or tries < max_attempts:
            tries += 1
            puzzle = self.attempt()
            if puzzle is not None:
                logger.debug("Generated puzzle after %d attempt(s)", tries)
                return puzzle
        return None

    def generate_batch(self, count: int) -> List[Grid]:
        """
        Generate multiple puzzles.

        Args:
            count: Number of puzzles to generate.

        Returns:
            List of puzzles.
        """
        return [self.generate() for _ in range(count)]

    def __iter__(self) -> Iterator[Grid]:
        while True:
            puzzle = self.attempt()
            if puzzle is not None:
                yield puzzle

    # ------------------------------------------------------------------
    # Algorithms
    # ------------------------------------------------------------------

    def _solved_grid(self) -> Grid:
        """A complete grid grown from three random diagonal boxes."""
        grid = Grid()
        for box in range(3):
            self._fill_box(grid, 3 * box, 3 * box)
        solve_by_backtracking(grid)
        return grid

    def _fill_box(self, grid: Grid, start_row: int, start_col: int) -> None:
        """Fill a single box with random values."""
        values = list(range(1, SIZE + 1))
        self.rng.shuffle(values)
        idx = 0
        for i in range(3):
            for j in range(3):
                grid.set_digit(start_row + i, start_col + j, values[idx])
                idx += 1

    def _shuffled_cells(self) -> List[Tuple[int, int]]:
        cells = [(r, c) for r in range(SIZE) for c in range(SIZE)]
        self.rng.shuffle(cells)
        return cells

    def _diagonal(self, filled_cells: int) -> Optional[Grid]:
        grid = self._solved_grid()
        for row, col in self._shuffled_cells()[:MAX_FILLED_CELLS - filled_cells]:
            grid.clear_cell(row, col)
            if not has_unique_solution(grid):
                return None
        grid.mark_original()
        return grid

    def _diagonal_thin_out(self) -> Optional[Grid]:
        grid = self._solved_grid()
        for row, col in self._shuffled_cells():
            if grid.is_empty(row, col):
                continue
            cleared = [(row, col)]
            mirror = (SIZE - 1 - row, SIZE - 1 - col)
            if self.thinning is ThinningAlgorithm.MIRRORED and mirror != (row, col):
                if not grid.is_empty(*mirror):
                    cleared.append(mirror)
            saved = [grid.get_digit(r, c) for r, c in cleared]
            for r, c in cleared:
                grid.clear_cell(r, c)
            if not has_unique_solution(grid):
                for (r, c), digit in zip(cleared, saved):
                    grid.set_digit(r, c, digit)
                continue
            if grid.count_filled() <= self.max_filled_cells:
                grid.mark_original()
                return grid
        return None

    def _incremental(self) -> Optional[Grid]:
        grid = Grid()
        board = [0] * (SIZE * SIZE)
        filled = 0
        for row, col in self._shuffled_cells():
            if filled >= self.max_filled_cells:
                break
            digits = list(range(1, SIZE + 1))
            self.rng.shuffle(digits)
            for digit in digits:
                if can_place(board, row, col, digit):
                    board[row * SIZE + col] = digit
                    grid.set_digit(row, col, digit)
                    filled += 1
                    break
        if filled < self.max_filled_cells or not has_unique_solution(grid):
            return None
        grid.mark_original()
        return grid

    def _masked(self) -> Optional[Grid]:
        grid = self._solved_grid()
        for idx, ch in enumerate(self.mask):
            if ch == "0":
                grid.clear_cell(idx // SIZE, idx % SIZE)
        if not has_unique_solution(grid):
            return None
        grid.mark_original()
        return grid


def generate(filled_cells: int, seed: Optional[int] = None) -> Optional[Grid]:
    """
    Make one attempt at a puzzle with exactly `filled_cells` givens.

    Uses the diagonal algorithm: any removal that breaks uniqueness ends
    the attempt, so callers are expected to retry on None.

    Raises:
        ValueError: if filled_cells is outside 17-81.
    """
    check_filled_cells(filled_cells)
    return PuzzleGenerator(FillAlgorithm.DIAGONAL, max_filled_cells=filled_cells, seed=seed).attempt()
