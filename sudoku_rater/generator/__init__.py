"""Generator module for creating Sudoku puzzles."""

from .generator import PuzzleGenerator, FillAlgorithm, ThinningAlgorithm, generate
from .workers import GeneratorPool, GeneratedPuzzle

__all__ = [
    "PuzzleGenerator",
    "FillAlgorithm",
    "ThinningAlgorithm",
    "generate",
    "GeneratorPool",
    "GeneratedPuzzle",
]
