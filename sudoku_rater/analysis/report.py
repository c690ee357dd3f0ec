"""Batch difficulty rating of puzzles."""

from __future__ import annotations
import json
import logging
import os
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Union

from tqdm import tqdm

from ..core.grid import Grid
from ..core.validator import has_unique_solution
from ..engine import StrategyEngine

logger = logging.getLogger(__name__)


@dataclass
class RatingResult:
    """Rating of a single puzzle."""
    puzzle_id: int
    board: str
    solved: bool
    effort: float
    steps: int
    unique: bool
    time_seconds: float
    eliminations: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "puzzle_id": self.puzzle_id,
            "board": self.board,
            "solved": self.solved,
            "effort": self.effort,
            "steps": self.steps,
            "unique": self.unique,
            "time_seconds": self.time_seconds,
            "eliminations": dict(self.eliminations),
        }


class RatingReport:
    """
    Rates a batch of puzzles with the human-like solver.

    Each puzzle is solved step by step; the report keeps its effort, the
    number of steps and the eliminations per strategy.
    """

    def __init__(self, puzzles: Iterable[Union[str, Grid]], engine: Optional[StrategyEngine] = None):
        """
        Initialize the report.

        Args:
            puzzles: Board strings or grids to rate. Grids are copied.
            engine: Engine to solve with (default: all built-in rules).
        """
        self.puzzles: List[Grid] = [
            p.copy() if isinstance(p, Grid) else Grid.from_string(p) for p in puzzles
        ]
        self.engine = engine or StrategyEngine()
        self.results: List[RatingResult] = []

    def run(self, show_progress: bool = True) -> List[RatingResult]:
        """
        Rate every puzzle.

        Returns:
            List of RatingResult objects, in input order.
        """
        self.results = []
        for puzzle_id, puzzle in enumerate(tqdm(self.puzzles, desc="Rating", disable=not show_progress)):
            self.results.append(self._rate_single(puzzle_id, puzzle))
        return self.results

    def _rate_single(self, puzzle_id: int, puzzle: Grid) -> RatingResult:
        board = puzzle.to_board_string()
        grid = puzzle.copy()
        start_time = time.perf_counter()
        steps = sum(1 for _ in self.engine.steps(grid))
        elapsed = time.perf_counter() - start_time
        return RatingResult(
            puzzle_id=puzzle_id,
            board=board,
            solved=grid.is_solved(),
            effort=grid.effort(),
            steps=steps,
            unique=has_unique_solution(puzzle),
            time_seconds=elapsed,
            eliminations=grid.rating.to_dict(),
        )

    def summary(self) -> Dict[str, Any]:
        """Get summary statistics from the results."""
        solved = [r for r in self.results if r.solved]
        efforts = [r.effort for r in solved]
        usage: Dict[str, int] = {}
        for r in self.results:
            for label, count in r.eliminations.items():
                usage[label] = usage.get(label, 0) + count
        return {
            "total_puzzles": len(self.results),
            "total_solved": len(solved),
            "solve_rate": len(solved) / len(self.results) * 100 if self.results else 0.0,
            "avg_effort": sum(efforts) / len(efforts) if efforts else 0.0,
            "max_effort": max(efforts) if efforts else 0.0,
            "min_effort": min(efforts) if efforts else 0.0,
            "avg_steps": sum(r.steps for r in self.results) / len(self.results) if self.results else 0.0,
            "strategy_usage": usage,
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "summary": self.summary(),
            "results": [r.to_dict() for r in self.results],
        }

    def save_results(self, output_dir: str = "results") -> str:
        """
        Save the report as JSON.

        Returns:
            Path of the written file.
        """
        os.makedirs(output_dir, exist_ok=True)
        path = os.path.join(output_dir, "rating_report.json")
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info("Rating report written to %s", path)
        return path
