"""Backtracking solver and uniqueness checks for Sudoku grids."""

from __future__ import annotations
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from .grid import Grid

SIZE = 9
BOX_SIZE = 3
_BOX_OF = [BOX_SIZE * (pos // 27) + (pos % SIZE) // BOX_SIZE for pos in range(SIZE * SIZE)]


def can_place(board: List[int], row: int, col: int, value: int) -> bool:
    """
    Check if `value` may go at (row, col) of a flat 81-cell board.

    Args:
        board: Row-major list of 81 digits, 0 for empty.
        row: Row index.
        col: Column index.
        value: Digit 1-9.

    Returns:
        True if the cell is empty and the value is absent from its row,
        column and box.
    """
    if board[row * SIZE + col] != 0:
        return False
    for i in range(SIZE):
        if board[row * SIZE + i] == value or board[i * SIZE + col] == value:
            return False
    box_row, box_col = BOX_SIZE * (row // BOX_SIZE), BOX_SIZE * (col // BOX_SIZE)
    for r in range(box_row, box_row + BOX_SIZE):
        for c in range(box_col, box_col + BOX_SIZE):
            if board[r * SIZE + c] == value:
                return False
    return True


def _has_conflicts(board: List[int]) -> bool:
    for i in range(SIZE):
        row = [board[i * SIZE + j] for j in range(SIZE)]
        col = [board[j * SIZE + i] for j in range(SIZE)]
        box_row, box_col = BOX_SIZE * (i // BOX_SIZE), BOX_SIZE * (i % BOX_SIZE)
        box = [
            board[r * SIZE + c]
            for r in range(box_row, box_row + BOX_SIZE)
            for c in range(box_col, box_col + BOX_SIZE)
        ]
        for values in (row, col, box):
            filled = [v for v in values if v]
            if len(filled) != len(set(filled)):
                return True
    return False


def _search(board: List[int], limit: int) -> int:
    """
    Depth-first search over `board` in place.

    Visits empty cells in row-major order and tries digits 1-9 ascending.
    Row, column and box usage is tracked as bitmasks so each placement
    check is constant time. Stops once `limit` solutions were seen; in that
    case the board is left holding the last solution found.
    """
    rows = [0] * SIZE
    cols = [0] * SIZE
    boxes = [0] * SIZE
    empties = []
    for pos, value in enumerate(board):
        row, col = divmod(pos, SIZE)
        if value:
            bit = 1 << (value - 1)
            rows[row] |= bit
            cols[col] |= bit
            boxes[_BOX_OF[pos]] |= bit
        else:
            empties.append(pos)
    found = 0

    def backtrack(k: int) -> bool:
        """Returns True if limit reached."""
        nonlocal found
        if k == len(empties):
            found += 1
            return found >= limit
        pos = empties[k]
        row, col = divmod(pos, SIZE)
        box = _BOX_OF[pos]
        used = rows[row] | cols[col] | boxes[box]
        for value in range(1, SIZE + 1):
            bit = 1 << (value - 1)
            if used & bit:
                continue
            board[pos] = value
            rows[row] |= bit
            cols[col] |= bit
            boxes[box] |= bit
            if backtrack(k + 1):
                return True
            rows[row] &= ~bit
            cols[col] &= ~bit
            boxes[box] &= ~bit
        board[pos] = 0
        return False

    backtrack(0)
    return found


def count_solutions(grid: Grid, limit: int = 2) -> int:
    """
    Count the number of solutions for a puzzle (up to limit).

    Args:
        grid: The puzzle. Its digits are not modified.
        limit: Maximum solutions to count before stopping.

    Returns:
        Number of solutions found (up to limit). A grid that already breaks
        a unit constraint has no solutions.
    """
    if limit < 1:
        raise ValueError(f"limit must be positive, got {limit}")
    board = [int(v) for v in grid.board.flatten()]
    if _has_conflicts(board):
        return 0
    return _search(board, limit)


def find_solution(grid: Grid) -> Optional[List[int]]:
    """Return the first solution as a flat list of 81 digits, or None."""
    board = [int(v) for v in grid.board.flatten()]
    if _has_conflicts(board):
        return None
    if _search(board, 1) == 0:
        return None
    return board


def solve_by_backtracking(grid: Grid) -> bool:
    """
    Solve the grid in place.

    The digits are written back only on success; an unsolvable grid is
    left untouched.

    Returns:
        True if a solution was found.
    """
    solution = find_solution(grid)
    if solution is None:
        return False
    for pos, value in enumerate(solution):
        grid.board[pos // SIZE, pos % SIZE] = value
    return True


def has_unique_solution(grid: Grid) -> bool:
    """True if the puzzle has exactly one solution."""
    return count_solutions(grid, limit=2) == 1


def validate_solution(puzzle: Grid, solution: Grid) -> bool:
    """
    Validate that a solution correctly solves the puzzle.

    Args:
        puzzle: The original puzzle.
        solution: The proposed solution.

    Returns:
        True if solution is complete, valid and matches the puzzle clues.
    """
    for i in range(SIZE):
        for j in range(SIZE):
            if not puzzle.is_empty(i, j) and puzzle.get_digit(i, j) != solution.get_digit(i, j):
                return False
    return solution.is_solved() and solution.is_valid()
