"""Core module for grid representation, candidates and backtracking."""

from .errors import SudokuError, BoardFormatError, InconsistentStateError
from .types import Unit, Strategy, Candidate, Cell, RemovalResult, StrategyResult
from .grid import Grid
from .validator import count_solutions, has_unique_solution, solve_by_backtracking, validate_solution

__all__ = [
    "SudokuError",
    "BoardFormatError",
    "InconsistentStateError",
    "Unit",
    "Strategy",
    "Candidate",
    "Cell",
    "RemovalResult",
    "StrategyResult",
    "Grid",
    "count_solutions",
    "has_unique_solution",
    "solve_by_backtracking",
    "validate_solution",
]
