"""Per-solve difficulty accounting."""

from __future__ import annotations
from collections import Counter
from typing import Dict, List, Tuple

from .core.types import Strategy


class Rating:
    """
    Counts, per strategy, how often it was used during a solve.

    Every candidate a step eliminates counts once, and a step that places
    a digit counts once more. A rating lives exactly as long as one solve
    session on one grid: it is cleared when a human-like solve starts and
    filled in by `Grid.apply`.
    """

    def __init__(self):
        self.counts: Counter = Counter()

    def record(self, strategy: Strategy, removed: int, placed: bool = False) -> None:
        """Attribute one applied step to `strategy`."""
        if strategy is Strategy.NONE:
            return
        self.counts[strategy] += removed + int(placed)

    def revert(self, strategy: Strategy, removed: int, placed: bool = False) -> None:
        """Undo a previous `record` call."""
        if strategy is Strategy.NONE:
            return
        self.counts[strategy] -= removed + int(placed)
        if self.counts[strategy] <= 0:
            del self.counts[strategy]

    def clear(self) -> None:
        self.counts.clear()

    def total(self) -> int:
        return sum(self.counts.values())

    def effort(self) -> float:
        """
        Weighted average strategy weight over all counted uses.

        Returns 0.0 for an empty rating (nothing was deduced).
        """
        total = self.total()
        if total == 0:
            return 0.0
        weighted = sum(s.weight * n for s, n in self.counts.items())
        return weighted / total

    def breakdown(self) -> List[Tuple[Strategy, int]]:
        """(strategy, count) pairs sorted by strategy weight."""
        return sorted(self.counts.items(), key=lambda item: (item[0].weight, item[0].label))

    def snapshot(self) -> Dict[Strategy, int]:
        """Read-only copy of the counts."""
        return dict(self.counts)

    def copy(self) -> Rating:
        other = Rating()
        other.counts = self.counts.copy()
        return other

    def to_dict(self) -> Dict[str, int]:
        return {s.label: n for s, n in self.breakdown()}

    def __bool__(self) -> bool:
        return bool(self.counts)

    def __repr__(self) -> str:
        return f"Rating(effort={self.effort():.2f}, uses={self.total()})"
