"""Command-line interface for the Sudoku rater."""

import argparse
import json
import logging
import sys
from typing import List, Optional

from .analysis import RatingReport, Visualizer
from .config import GeneratorSettings, load_settings
from .core.errors import BoardFormatError
from .core.grid import Grid
from .core.validator import count_solutions, solve_by_backtracking
from .engine import StrategyEngine
from .generator import FillAlgorithm, GeneratorPool, ThinningAlgorithm

logger = logging.getLogger(__name__)


def main(argv: Optional[List[str]] = None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Human-like Sudoku Solver, Difficulty Rater & Generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Solve a puzzle step by step
  sudoku-rater solve --puzzle "3180054060006038..." --steps

  # Rate every puzzle in a file (one board per line) and draw charts
  sudoku-rater rate --file puzzles.txt --charts --output results/

  # Generate 10 puzzles with effort of at least 60 on 4 threads
  sudoku-rater generate --count 10 --threads 4 --min-effort 60
        """
    )
    parser.add_argument(
        "--log-level", default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Solve command
    solve_parser = subparsers.add_parser("solve", help="Solve a puzzle with human-like rules")
    solve_parser.add_argument(
        "--puzzle", "-p", type=str, required=True,
        help="Puzzle as 81-character string (0 or . for empty)"
    )
    solve_parser.add_argument(
        "--steps", action="store_true",
        help="Print every deduction step"
    )
    solve_parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Print the candidates when the rules get stuck"
    )

    # Rate command
    rate_parser = subparsers.add_parser("rate", help="Rate the difficulty of puzzles")
    rate_parser.add_argument(
        "--puzzle", "-p", type=str, action="append", default=[],
        help="Puzzle string (can be given several times)"
    )
    rate_parser.add_argument(
        "--file", "-f", type=str, default=None,
        help="File with one puzzle per line"
    )
    rate_parser.add_argument(
        "--output", "-o", type=str, default="results",
        help="Output directory for the report and charts (default: results)"
    )
    rate_parser.add_argument(
        "--charts", action="store_true",
        help="Draw effort and strategy charts"
    )

    # Generate command
    gen_parser = subparsers.add_parser("generate", help="Generate puzzles in parallel")
    gen_parser.add_argument(
        "--count", "-n", type=int, default=5,
        help="Number of puzzles to generate (default: 5)"
    )
    gen_parser.add_argument(
        "--config", "-c", type=str, default=None,
        help="JSON settings file; command-line options override it"
    )
    gen_parser.add_argument(
        "--threads", "-t", type=int, default=None,
        help="Number of worker threads (default: CPU count)"
    )
    gen_parser.add_argument(
        "--min-effort", type=float, default=None,
        help="Only report puzzles solvable by human-like rules with at least this effort"
    )
    gen_parser.add_argument(
        "--algorithm", "-a", choices=[a.value for a in FillAlgorithm], default=None,
        help="Fill algorithm (default: diagonal-thin-out)"
    )
    gen_parser.add_argument(
        "--thinning", choices=[t.value for t in ThinningAlgorithm], default=None,
        help="Thinning pattern (default: mirrored)"
    )
    gen_parser.add_argument(
        "--filled", type=int, default=None,
        help="Maximum number of givens, 17-81 (default: 24)"
    )
    gen_parser.add_argument(
        "--mask", type=str, default=None,
        help="81 characters of 0/1 for the mask algorithm"
    )
    gen_parser.add_argument(
        "--seed", "-s", type=int, default=None,
        help="Random seed for reproducibility"
    )
    gen_parser.add_argument(
        "--output", "-o", type=str, default=None,
        help="Output file for puzzles (JSON format)"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.command == "solve":
        cmd_solve(args)
    elif args.command == "rate":
        cmd_rate(args)
    elif args.command == "generate":
        cmd_generate(args)


def _parse_puzzle(text: str) -> Grid:
    try:
        return Grid.from_string(text)
    except BoardFormatError as e:
        print(f"Error parsing puzzle: {e}")
        sys.exit(1)


def cmd_solve(args):
    """Handle the solve command."""
    puzzle = _parse_puzzle(args.puzzle)

    print("Input puzzle:")
    print(puzzle)
    print()

    solutions = count_solutions(puzzle)
    if solutions == 0:
        print("✗ Puzzle has no solution")
        sys.exit(1)
    if solutions > 1:
        print("! Puzzle has more than one solution")

    grid = puzzle.copy()
    engine = StrategyEngine()
    steps = 0
    for step in engine.steps(grid):
        steps += 1
        if args.steps:
            print(f"{steps:3d}. {step.describe()}")

    if grid.is_solved():
        print(f"✓ Solved with human-like rules in {steps} steps, effort {grid.effort():.2f}")
        for strategy, count in grid.rating.breakdown():
            print(f"  {strategy.label:<16} {count:4d} (weight {strategy.weight})")
        print(grid)
        return

    print(f"✗ Human-like rules got stuck after {steps} steps ({grid.count_empty()} cells left)")
    if args.verbose:
        print(grid.candidates_dump())
    fallback = puzzle.copy()
    if solve_by_backtracking(fallback):
        print("Backtracking solution:")
        print(fallback)


def _read_puzzles(args) -> List[str]:
    puzzles = list(args.puzzle)
    if args.file:
        try:
            with open(args.file, "r", encoding="utf-8") as f:
                puzzles.extend(line.split()[-1] for line in f if line.strip())
        except IOError as e:
            print(f"Error reading {args.file}: {e}")
            sys.exit(1)
    return puzzles


def cmd_rate(args):
    """Handle the rate command."""
    puzzles = _read_puzzles(args)
    if not puzzles:
        print("No puzzles given (use --puzzle or --file)")
        sys.exit(1)
    try:
        report = RatingReport(puzzles)
    except BoardFormatError as e:
        print(f"Error parsing puzzle: {e}")
        sys.exit(1)

    results = report.run(show_progress=len(puzzles) > 1)
    for r in results:
        effort = f"{r.effort:6.2f}" if r.solved else "     ?"
        print(f"{effort} {r.board}")
        if len(results) == 1:
            for label, count in r.eliminations.items():
                print(f"  {label:<16} {count:4d}")

    if len(results) > 1:
        summary = report.summary()
        print()
        print(f"Solved: {summary['total_solved']}/{summary['total_puzzles']} ({summary['solve_rate']:.1f}%)")
        print(f"Avg effort: {summary['avg_effort']:.2f} (min {summary['min_effort']:.2f}, max {summary['max_effort']:.2f})")
        path = report.save_results(args.output)
        print(f"Report saved to {path}")

    if args.charts:
        print("\nGenerating charts...")
        charts = Visualizer(results, args.output).generate_all()
        print(f"Charts saved to {args.output}/")
        for chart in charts:
            print(f"  - {chart.split('/')[-1]}")


def _settings_from_args(args) -> GeneratorSettings:
    settings = load_settings(args.config) if args.config else GeneratorSettings()
    data = settings.to_dict()
    overrides = {
        "num_threads": args.threads,
        "min_effort": args.min_effort,
        "fill_algorithm": args.algorithm,
        "thinning": args.thinning,
        "max_filled_cells": args.filled,
        "mask": args.mask,
        "seed": args.seed,
    }
    data.update({k: v for k, v in overrides.items() if v is not None})
    return GeneratorSettings.from_dict(data)


def cmd_generate(args):
    """Handle the generate command."""
    try:
        settings = _settings_from_args(args)
        pool = GeneratorPool(settings)
        # Fail on a bad mask before starting any thread
        pool.make_generator(0)
    except ValueError as e:
        print(f"Invalid settings: {e}")
        sys.exit(1)

    print(f"Generating {args.count} puzzles with {settings.num_threads} thread(s) "
          f"({settings.fill_algorithm.value}, {settings.thinning.value}, "
          f"max {settings.max_filled_cells} givens)")

    puzzles = []
    try:
        with pool:
            for puzzle in pool.results():
                print(puzzle)
                puzzles.append(puzzle)
                if len(puzzles) >= args.count:
                    break
    except KeyboardInterrupt:
        print("\nInterrupted")

    if args.output:
        with open(args.output, "w") as f:
            json.dump([{"puzzle": p.board, "effort": p.effort, "eliminations": p.breakdown} for p in puzzles],
                      f, indent=2)
        print(f"\nAll puzzles saved to {args.output}")

    print(f"\nTotal puzzles generated: {len(puzzles)}")


if __name__ == "__main__":
    main()
