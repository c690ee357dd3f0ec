"""Analysis module for rating batches of puzzles."""

from .report import RatingReport, RatingResult
from .visualizer import Visualizer

__all__ = ["RatingReport", "RatingResult", "Visualizer"]
