"""Parallel puzzle generation with a pool of worker threads."""

from __future__ import annotations
import logging
import queue
import threading
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from ..config import GeneratorSettings
from ..core.errors import InconsistentStateError
from ..core.grid import Grid
from ..core.validator import solve_by_backtracking
from ..engine import StrategyEngine
from .generator import PuzzleGenerator

logger = logging.getLogger(__name__)


@dataclass
class GeneratedPuzzle:
    """A generated puzzle and how hard it was to solve by human-like rules."""
    board: str
    effort: Optional[float] = None
    breakdown: Dict[str, int] = field(default_factory=dict)

    @property
    def solved(self) -> bool:
        return self.effort is not None

    def __str__(self) -> str:
        if self.effort is None:
            return f"     ? {self.board}"
        return f"{self.effort:6.2f} {self.board}"


class GeneratorPool:
    """
    Runs independent generator workers in background threads.

    Each worker owns its generator, engine and grids; the only thing the
    workers share is an unbounded results queue. Results arrive in
    completion order. Call `stop` (or leave the `with` block) to shut the
    workers down; they finish the attempt in progress and exit.

    Example:
        with GeneratorPool(GeneratorSettings(num_threads=4)) as pool:
            for puzzle in pool.take(10):
                print(puzzle)
    """

    POLL_INTERVAL = 0.1

    def __init__(self, settings: Optional[GeneratorSettings] = None):
        self.settings = settings or GeneratorSettings()
        self.queue: queue.Queue = queue.Queue()
        self._stop = threading.Event()
        self._threads: List[threading.Thread] = []

    def start(self) -> GeneratorPool:
        """Start the workers. Does nothing if they are already running."""
        if self._threads:
            return self
        self._stop.clear()
        for worker_id in range(self.settings.num_threads):
            thread = threading.Thread(
                target=self._work, args=(worker_id,), name=f"generator-{worker_id}", daemon=True
            )
            self._threads.append(thread)
            thread.start()
        logger.info("Started %d generator worker(s)", len(self._threads))
        return self

    def stop(self, timeout: Optional[float] = None) -> None:
        """Signal every worker to exit and wait for them."""
        self._stop.set()
        for thread in self._threads:
            thread.join(timeout)
        self._threads = []
        logger.info("Generator workers stopped")

    @property
    def running(self) -> bool:
        return any(thread.is_alive() for thread in self._threads)

    def results(self) -> Iterator[GeneratedPuzzle]:
        """
        Yield results as they arrive.

        Ends once the pool was stopped (or all workers died) and the queue
        is drained.
        """
        while True:
            try:
                yield self.queue.get(timeout=self.POLL_INTERVAL)
            except queue.Empty:
                if self._stop.is_set() or not self.running:
                    return

    def take(self, count: int) -> List[GeneratedPuzzle]:
        """Start the pool if needed, collect `count` results and stop."""
        self.start()
        collected: List[GeneratedPuzzle] = []
        try:
            for puzzle in self.results():
                collected.append(puzzle)
                if len(collected) >= count:
                    break
        finally:
            self.stop()
        return collected

    def __enter__(self) -> GeneratorPool:
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    # ------------------------------------------------------------------
    # Worker side
    # ------------------------------------------------------------------

    def make_generator(self, worker_id: int) -> PuzzleGenerator:
        seed = self.settings.seed
        return PuzzleGenerator(
            fill_algorithm=self.settings.fill_algorithm,
            thinning=self.settings.thinning,
            max_filled_cells=self.settings.max_filled_cells,
            mask=self.settings.mask,
            seed=None if seed is None else seed + worker_id,
        )

    def _work(self, worker_id: int) -> None:
        logger.info("Worker %d started", worker_id)
        generator = self.make_generator(worker_id)
        engine = StrategyEngine()
        try:
            while not self._stop.is_set():
                puzzle = generator.attempt()
                if puzzle is None:
                    continue
                result = self.rate(puzzle, engine)
                if result is not None and not self._stop.is_set():
                    self.queue.put(result)
        except InconsistentStateError:
            logger.exception("Worker %d hit an inconsistent state and stopped", worker_id)
            return
        logger.info("Worker %d finished after %d attempt(s)", worker_id, generator.attempts)

    def rate(self, puzzle: Grid, engine: StrategyEngine) -> Optional[GeneratedPuzzle]:
        """
        Solve a fresh puzzle both ways and decide whether to report it.

        Returns None if the puzzle is filtered out by `min_effort`.

        Raises:
            InconsistentStateError: if the human-like solution differs from
                the backtracking one.
        """
        board = puzzle.to_board_string()
        min_effort = self.settings.min_effort
        human = puzzle.copy()
        if not engine.solve_human_like(human):
            if min_effort is not None:
                return None
            return GeneratedPuzzle(board)
        effort = human.effort()
        if min_effort is not None and effort < min_effort:
            return None
        solution = puzzle.copy()
        solve_by_backtracking(solution)
        if human != solution:
            raise InconsistentStateError(
                f"Human-like and backtracking solutions differ for {board}: "
                f"{human.to_board_string()} vs {solution.to_board_string()}"
            )
        return GeneratedPuzzle(board, effort, human.rating.to_dict())
