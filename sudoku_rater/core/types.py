"""Value types shared by the grid, the deduction rules and the engine."""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Set


class Unit(Enum):
    """The three kinds of peer groups a deduction can be scoped to."""
    ROW = "Row"
    COLUMN = "Column"
    BOX = "Box"

    def __str__(self) -> str:
        return self.value


class Strategy(Enum):
    """
    Deduction strategies, ordered by ascending structural difficulty.

    Each member carries a display label and the fixed weight used for the
    effort score.
    """
    NONE = ("None", 0)
    LAST_DIGIT = ("Last Digit", 4)
    OBVIOUS_SINGLE = ("Obvious Single", 5)
    HIDDEN_SINGLE = ("Hidden Single", 14)
    POINTING_PAIR = ("Pointing Pair", 50)
    CLAIMING_PAIR = ("Claiming Pair", 50)
    OBVIOUS_PAIR = ("Obvious Pair", 60)
    HIDDEN_PAIR = ("Hidden Pair", 70)
    OBVIOUS_TRIPLET = ("Obvious Triplet", 80)
    HIDDEN_TRIPLET = ("Hidden Triplet", 90)
    SKYSCRAPER = ("Skyscraper", 130)
    X_WING = ("X-Wing", 140)

    def __init__(self, label: str, weight: int):
        self.label = label
        self.weight = weight

    def __str__(self) -> str:
        return self.label


@dataclass(frozen=True, order=True)
class Candidate:
    """A single pencil mark: `digit` is still possible at (row, col)."""
    row: int
    col: int
    digit: int


@dataclass(frozen=True, order=True)
class Cell:
    """A digit placed at (row, col)."""
    row: int
    col: int
    digit: int


@dataclass
class RemovalResult:
    """
    The outcome of one deduction.

    Attributes:
        sets_cell: Digit newly placed by this step, if any.
        candidates_affected: Candidates used as evidence for the step.
        candidates_about_to_be_removed: Candidates the step eliminates.
        unit: Kind of unit the deduction is scoped to.
        unit_index: Index (or indices) of the unit(s) involved.
    """
    sets_cell: Optional[Cell] = None
    candidates_affected: List[Candidate] = field(default_factory=list)
    candidates_about_to_be_removed: Set[Candidate] = field(default_factory=set)
    unit: Optional[Unit] = None
    unit_index: List[int] = field(default_factory=list)

    def will_remove_candidates(self) -> bool:
        """A step has an effect iff it removes at least one candidate."""
        return bool(self.candidates_about_to_be_removed)

    def scoped(self, unit: Unit, *index: int) -> RemovalResult:
        self.unit = unit
        self.unit_index = list(index)
        return self

    def __len__(self) -> int:
        return len(self.candidates_about_to_be_removed)


@dataclass
class StrategyResult:
    """A removal result tagged with the strategy that produced it."""
    strategy: Strategy
    removals: RemovalResult = field(default_factory=RemovalResult)

    @classmethod
    def empty(cls, strategy: Strategy = Strategy.NONE) -> StrategyResult:
        return cls(strategy)

    def is_none(self) -> bool:
        """True for the "no move found" sentinel."""
        return self.strategy is Strategy.NONE or not self.removals.will_remove_candidates()

    def describe(self) -> str:
        """Short human-readable explanation of the step."""
        removals = self.removals
        parts = [str(self.strategy)]
        if removals.unit is not None:
            where = ", ".join(str(i) for i in removals.unit_index)
            parts.append(f"in {removals.unit} {where}")
        if removals.sets_cell is not None:
            cell = removals.sets_cell
            parts.append(f"sets {cell.digit} at ({cell.row}, {cell.col})")
        parts.append(f"removes {len(removals)} candidate(s)")
        return " ".join(parts)
