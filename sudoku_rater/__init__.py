"""Human-like Sudoku solver, difficulty rater and puzzle generator."""

from .core import Grid, Strategy, StrategyResult, Unit
from .engine import StrategyEngine
from .generator import PuzzleGenerator, generate

__version__ = "1.0.0"

__all__ = ["Grid", "Strategy", "StrategyResult", "Unit", "StrategyEngine", "PuzzleGenerator", "generate"]
