"""Sudoku grid with per-cell candidate tracking."""

from __future__ import annotations
import json
import logging
from dataclasses import dataclass
from typing import List, Optional, Set, Tuple

import numpy as np

from . import bitmask
from .errors import BoardFormatError, InconsistentStateError
from .types import StrategyResult
from ..rating import Rating

logger = logging.getLogger(__name__)

SIZE = 9
BOX_SIZE = 3
EMPTY = 0


@dataclass
class AppliedStep:
    """Undo log entry: a step that `Grid.apply` has carried out."""
    result: StrategyResult
    removed: int
    placed: bool


class Grid:
    """
    A 9x9 Sudoku board plus a parallel matrix of candidate masks.

    Digits live in `board` (0 means empty). Candidates live in `candidates`
    as 9-bit masks. The candidate matrix is advisory: strategies only ever
    remove candidates, so between steps it may overstate what is possible
    but never understate it. Call `calc_candidates` to rebuild it.

    `apply` is the only operation that mutates the grid during a solve;
    every applied step is logged so `prev_step` can revert it exactly.
    """

    def __init__(self, grid: Optional[np.ndarray] = None):
        """
        Initialize a grid.

        Args:
            grid: Optional 9x9 array of digits. If None, creates an empty grid.
        """
        if grid is not None:
            grid = np.asarray(grid)
            if grid.shape != (SIZE, SIZE):
                raise BoardFormatError(f"Grid shape must be ({SIZE}, {SIZE}), got {grid.shape}")
            if grid.min() < 0 or grid.max() > SIZE:
                raise BoardFormatError(f"Digits must be in 0-{SIZE}")
            self.board = grid.astype(np.int8)
        else:
            self.board = np.zeros((SIZE, SIZE), dtype=np.int8)
        self.candidates = np.zeros((SIZE, SIZE), dtype=np.uint16)
        self.original = self.board.copy()
        self.rating = Rating()
        self.undo_log: List[AppliedStep] = []

    # ------------------------------------------------------------------
    # Construction and serialization
    # ------------------------------------------------------------------

    @classmethod
    def from_string(cls, s: str) -> Grid:
        """
        Create a grid from an 81-character board string.

        Digits '1'-'9' are givens and '0' marks an empty cell. As a
        convenience for pasted puzzles, '.' is also read as empty and
        surrounding whitespace is stripped; `to_board_string` always
        writes the strict 81-digit form.

        Raises:
            BoardFormatError: if the string is not exactly 81 such characters.
        """
        return cls(_parse_board_string(s))

    @classmethod
    def from_rows(cls, rows: List[List[int]]) -> Grid:
        """Create a grid from a 9x9 nested list of digits."""
        try:
            arr = np.array(rows, dtype=np.int16)
        except (TypeError, ValueError) as e:
            raise BoardFormatError(f"Invalid board rows: {e}") from e
        return cls(arr)

    @classmethod
    def from_json(cls, text: str) -> Grid:
        """
        Create a grid from a JSON document.

        The document holds a `board` (9x9 digits) and optionally
        `candidates` (9x9 lists of digits) which replace the computed ones.
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise BoardFormatError(f"Invalid JSON: {e}") from e
        if not isinstance(data, dict) or "board" not in data:
            raise BoardFormatError("JSON document must contain a 'board' entry")
        grid = cls.from_rows(data["board"])
        cands = data.get("candidates")
        if cands is not None:
            if len(cands) != SIZE or any(len(row) != SIZE for row in cands):
                raise BoardFormatError("'candidates' must be a 9x9 matrix of digit lists")
            for r in range(SIZE):
                for c in range(SIZE):
                    digits = cands[r][c]
                    if not isinstance(digits, list) or any(
                        isinstance(d, bool) or not isinstance(d, int) or not 1 <= d <= SIZE
                        for d in digits
                    ):
                        raise BoardFormatError(f"Candidates of ({r}, {c}) must be digits 1-9: {digits}")
                    if digits and grid.board[r, c] != EMPTY:
                        raise BoardFormatError(f"Filled cell ({r}, {c}) cannot hold candidates")
                    grid.candidates[r, c] = bitmask.from_digits(digits)
        return grid

    def to_json(self) -> str:
        """Serialize digits and candidates to JSON."""
        return json.dumps({
            "board": self.board.tolist(),
            "candidates": [
                [bitmask.digits(self.candidates[r, c]) for c in range(SIZE)]
                for r in range(SIZE)
            ],
        })

    def to_board_string(self) -> str:
        """81-character row-major string, '0' for empty cells."""
        return "".join(str(int(v)) for v in self.board.flatten())

    def original_board(self) -> str:
        """Board string of the snapshot `restore` returns to."""
        return "".join(str(int(v)) for v in self.original.flatten())

    def set_board_string(self, s: str) -> None:
        """Replace the whole grid, discarding candidates, rating and history."""
        board = _parse_board_string(s)
        self.board = board.astype(np.int8)
        self.original = self.board.copy()
        self.candidates[:, :] = 0
        self.rating.clear()
        self.undo_log.clear()

    def mark_original(self) -> None:
        """Take the current digits as the snapshot used by `restore`."""
        self.original = self.board.copy()

    def restore(self) -> None:
        """Reset the board to its original snapshot."""
        self.set_board_string(self.original_board())

    def copy(self) -> Grid:
        """Deep copy, including candidates, rating and undo log."""
        other = Grid.__new__(Grid)
        other.board = self.board.copy()
        other.candidates = self.candidates.copy()
        other.original = self.original.copy()
        other.rating = self.rating.copy()
        other.undo_log = list(self.undo_log)
        return other

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_digit(self, row: int, col: int) -> int:
        """Digit at (row, col), 0 when empty."""
        return int(self.board[row, col])

    def get_candidates(self, row: int, col: int) -> Set[int]:
        return set(bitmask.digits(self.candidates[row, col]))

    def candidate_mask(self, row: int, col: int) -> int:
        return int(self.candidates[row, col])

    def candidate_masks(self) -> List[List[int]]:
        """Snapshot of all candidate masks as nested Python lists."""
        return self.candidates.tolist()

    def digits(self) -> List[List[int]]:
        """Snapshot of all digits as nested Python lists."""
        return self.board.tolist()

    def has_candidate(self, row: int, col: int, digit: int) -> bool:
        return bitmask.has(int(self.candidates[row, col]), digit)

    def is_empty(self, row: int, col: int) -> bool:
        return self.board[row, col] == EMPTY

    def get_row(self, row: int) -> np.ndarray:
        return self.board[row, :]

    def get_col(self, col: int) -> np.ndarray:
        return self.board[:, col]

    def get_box(self, row: int, col: int) -> np.ndarray:
        """All digits in the box containing (row, col)."""
        box_row, box_col = box_start(row, col)
        return self.board[box_row:box_row + BOX_SIZE, box_col:box_col + BOX_SIZE].flatten()

    def peers(self, row: int, col: int) -> Set[Tuple[int, int]]:
        """Cells sharing a row, column or box with (row, col), excluding itself."""
        peers = set()
        for i in range(SIZE):
            peers.add((row, i))
            peers.add((i, col))
        box_row, box_col = box_start(row, col)
        for i in range(BOX_SIZE):
            for j in range(BOX_SIZE):
                peers.add((box_row + i, box_col + j))
        peers.remove((row, col))
        return peers

    def can_place(self, row: int, col: int, digit: int) -> bool:
        """
        True if (row, col) is empty and `digit` is absent from its units.

        Looks at the digits only, never at the candidate masks.
        """
        if self.board[row, col] != EMPTY:
            return False
        if digit in self.board[row, :] or digit in self.board[:, col]:
            return False
        return digit not in self.get_box(row, col)

    def count_empty(self) -> int:
        return int(np.sum(self.board == EMPTY))

    def count_filled(self) -> int:
        return int(np.sum(self.board != EMPTY))

    def unsolved(self) -> bool:
        return bool((self.board == EMPTY).any())

    def is_solved(self) -> bool:
        return not self.unsolved()

    def is_valid(self) -> bool:
        """True if no digit repeats within any row, column or box."""
        for i in range(SIZE):
            for values in (self.board[i, :], self.board[:, i], self._box_by_index(i)):
                filled = values[values != EMPTY]
                if len(filled) != len(set(filled.tolist())):
                    return False
        return True

    def effort(self) -> float:
        return self.rating.effort()

    # ------------------------------------------------------------------
    # Candidates
    # ------------------------------------------------------------------

    def calc_candidates(self) -> None:
        """
        Recompute every candidate mask from the digits.

        An empty cell gets {1..9} minus the digits present in its row,
        column and box; a filled cell gets no candidates. The undo log is
        discarded since earlier steps no longer refer to these masks.
        """
        row_used = [bitmask.from_digits(self.board[i, :].tolist()) for i in range(SIZE)]
        col_used = [bitmask.from_digits(self.board[:, i].tolist()) for i in range(SIZE)]
        box_used = [bitmask.from_digits(self._box_by_index(i).tolist()) for i in range(SIZE)]
        for row in range(SIZE):
            for col in range(SIZE):
                if self.board[row, col] != EMPTY:
                    self.candidates[row, col] = 0
                    continue
                used = row_used[row] | col_used[col] | box_used[box_index(row, col)]
                self.candidates[row, col] = bitmask.ALL_DIGITS_MASK & ~used
        self.undo_log.clear()

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def apply(self, result: StrategyResult) -> int:
        """
        Carry out a step found by the strategy engine.

        Removes every candidate in the step's removal set and, if the step
        places a digit, writes it to the board. The step is recorded in the
        rating and in the undo log.

        Returns:
            Number of candidates removed.

        Raises:
            InconsistentStateError: if a candidate to remove is not present
                or the cell to set is already filled.
        """
        removals = result.removals
        for cand in removals.candidates_about_to_be_removed:
            if not bitmask.has(int(self.candidates[cand.row, cand.col]), cand.digit):
                raise InconsistentStateError(
                    f"{result.strategy} tried to remove absent candidate {cand}"
                )
        cell = removals.sets_cell
        if cell is not None and self.board[cell.row, cell.col] != EMPTY:
            raise InconsistentStateError(
                f"{result.strategy} tried to set already filled cell ({cell.row}, {cell.col})"
            )

        logger.debug("Applying %s", result.describe())
        for cand in removals.candidates_about_to_be_removed:
            self.candidates[cand.row, cand.col] &= ~bitmask.bit(cand.digit) & bitmask.ALL_DIGITS_MASK
        if cell is not None:
            self.board[cell.row, cell.col] = cell.digit

        removed = len(removals.candidates_about_to_be_removed)
        placed = cell is not None
        self.rating.record(result.strategy, removed, placed)
        self.undo_log.append(AppliedStep(result, removed, placed))
        return removed

    def prev_step(self) -> Optional[StrategyResult]:
        """
        Revert the most recently applied step.

        Re-inserts the removed candidates, clears the placed digit and rolls
        back the rating. Returns the reverted step, or None if there is
        nothing to undo.
        """
        if not self.undo_log:
            return None
        step = self.undo_log.pop()
        removals = step.result.removals
        for cand in removals.candidates_about_to_be_removed:
            self.candidates[cand.row, cand.col] |= bitmask.bit(cand.digit)
        if removals.sets_cell is not None:
            self.board[removals.sets_cell.row, removals.sets_cell.col] = EMPTY
        self.rating.revert(step.result.strategy, step.removed, step.placed)
        logger.debug("Reverted %s", step.result.describe())
        return step.result

    def set_digit(self, row: int, col: int, digit: int) -> None:
        """Write a digit directly, bypassing the step log."""
        if digit < 0 or digit > SIZE:
            raise ValueError(f"Digit must be 0-{SIZE}, got {digit}")
        self.board[row, col] = digit

    def clear_cell(self, row: int, col: int) -> None:
        self.board[row, col] = EMPTY

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def candidates_dump(self) -> str:
        """Render every cell's candidates as a 3x3 block of pencil marks."""
        lines = ["     0     1     2     3     4     5     6     7     8"]
        lines.append("  +" + "+".join(["-----"] * SIZE) + "+")
        for row in range(SIZE):
            for band in range(BOX_SIZE):
                prefix = f"{row} |" if band == 1 else "  |"
                cells = []
                for col in range(SIZE):
                    mask = int(self.candidates[row, col])
                    marks = "".join(
                        str(d) if bitmask.has(mask, d) else "."
                        for d in range(BOX_SIZE * band + 1, BOX_SIZE * band + 4)
                    )
                    cells.append(f" {marks} ")
                lines.append(prefix + "|".join(cells) + "|")
            sep = "=" if (row + 1) % BOX_SIZE == 0 else "-"
            lines.append("  +" + "+".join([sep * 5] * SIZE) + "+")
        return "\n".join(lines)

    def __str__(self) -> str:
        """Pretty-print the board."""
        lines = []
        horizontal_sep = "+" + (("-" * (BOX_SIZE * 2 + 1)) + "+") * BOX_SIZE
        for i in range(SIZE):
            if i % BOX_SIZE == 0:
                lines.append(horizontal_sep)
            row_str = "|"
            for j in range(SIZE):
                val = int(self.board[i, j])
                row_str += " ." if val == EMPTY else f" {val}"
                if (j + 1) % BOX_SIZE == 0:
                    row_str += " |"
            lines.append(row_str)
        lines.append(horizontal_sep)
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"Grid(filled={self.count_filled()}, effort={self.effort():.2f})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return False
        return np.array_equal(self.board, other.board)

    def __hash__(self) -> int:
        return hash(self.to_board_string())

    def _box_by_index(self, index: int) -> np.ndarray:
        box_row, box_col = BOX_SIZE * (index // BOX_SIZE), BOX_SIZE * (index % BOX_SIZE)
        return self.board[box_row:box_row + BOX_SIZE, box_col:box_col + BOX_SIZE].flatten()


def box_index(row: int, col: int) -> int:
    """Index 0-8 of the box containing (row, col)."""
    return BOX_SIZE * (row // BOX_SIZE) + col // BOX_SIZE


def box_start(row: int, col: int) -> Tuple[int, int]:
    """Top-left cell of the box containing (row, col)."""
    return BOX_SIZE * (row // BOX_SIZE), BOX_SIZE * (col // BOX_SIZE)


def _parse_board_string(s: str) -> np.ndarray:
    s = s.strip()
    if len(s) != SIZE * SIZE:
        raise BoardFormatError(f"Board string must have {SIZE * SIZE} characters, got {len(s)}")
    grid = np.zeros((SIZE, SIZE), dtype=np.int8)
    for idx, ch in enumerate(s):
        if ch == ".":
            continue
        if not ("0" <= ch <= "9"):
            raise BoardFormatError(f"Invalid character {ch!r} at position {idx}")
        grid[idx // SIZE, idx % SIZE] = int(ch)
    return grid
