"""Naked and hidden subsets (pairs and triplets) within a single unit."""

from __future__ import annotations
from itertools import combinations
from typing import Dict, List, Optional

from ..core import bitmask
from ..core.grid import Grid
from ..core.types import Candidate, RemovalResult, Strategy
from .base import Masks, Position, UnitRule


def _digit_locations(masks: Masks, cells: List[Position]) -> Dict[int, List[Position]]:
    """Map each digit to the cells of the unit (in scan order) holding it."""
    locations: Dict[int, List[Position]] = {}
    for r, c in cells:
        for d in bitmask.digits(masks[r][c]):
            locations.setdefault(d, []).append((r, c))
    return locations


def _naked_subset(masks: Masks, cells: List[Position], subset: List[Position]) -> RemovalResult:
    """Remove the subset's digits from every other cell of the unit."""
    union = 0
    for r, c in subset:
        union |= masks[r][c]
    result = RemovalResult()
    for r, c in cells:
        if (r, c) in subset:
            continue
        for d in bitmask.digits(masks[r][c] & union):
            result.candidates_about_to_be_removed.add(Candidate(r, c, d))
    for r, c in subset:
        result.candidates_affected.extend(Candidate(r, c, d) for d in bitmask.digits(masks[r][c]))
    return result


def _hidden_subset(masks: Masks, subset: List[Position], digits: List[int]) -> RemovalResult:
    """Strip every digit outside `digits` from the subset's cells."""
    keep = bitmask.from_digits(digits)
    result = RemovalResult()
    for r, c in subset:
        for d in bitmask.digits(masks[r][c] & ~keep):
            result.candidates_about_to_be_removed.add(Candidate(r, c, d))
        result.candidates_affected.extend(
            Candidate(r, c, d) for d in digits if bitmask.has(masks[r][c], d)
        )
    return result


class ObviousPair(UnitRule):
    """Two cells of a unit holding the same two candidates and nothing else."""

    strategy = Strategy.OBVIOUS_PAIR

    def scan_unit(self, grid: Grid, masks: Masks, cells: List[Position]) -> Optional[RemovalResult]:
        for i, (r1, c1) in enumerate(cells):
            pair = masks[r1][c1]
            if bitmask.count(pair) != 2:
                continue
            for r2, c2 in cells[i + 1:]:
                if masks[r2][c2] != pair:
                    continue
                result = _naked_subset(masks, cells, [(r1, c1), (r2, c2)])
                if result.will_remove_candidates():
                    return result
        return None


class HiddenPair(UnitRule):
    """
    Two digits that, within a unit, only fit in the same two cells.

    Those cells must hold exactly these two digits, so all their other
    candidates go. Digit pairs are tried in ascending order.
    """

    strategy = Strategy.HIDDEN_PAIR

    def scan_unit(self, grid: Grid, masks: Masks, cells: List[Position]) -> Optional[RemovalResult]:
        locations = _digit_locations(masks, cells)
        twice = [d for d in sorted(locations) if len(locations[d]) == 2]
        for d1, d2 in combinations(twice, 2):
            if locations[d1] != locations[d2]:
                continue
            result = _hidden_subset(masks, locations[d1], [d1, d2])
            if result.will_remove_candidates():
                return result
        return None


class ObviousTriplet(UnitRule):
    """Three cells of a unit whose candidates together span only three digits."""

    strategy = Strategy.OBVIOUS_TRIPLET

    def scan_unit(self, grid: Grid, masks: Masks, cells: List[Position]) -> Optional[RemovalResult]:
        small = [(r, c) for r, c in cells if 2 <= bitmask.count(masks[r][c]) <= 3]
        for triple in combinations(small, 3):
            union = 0
            for r, c in triple:
                union |= masks[r][c]
            if bitmask.count(union) != 3:
                continue
            result = _naked_subset(masks, cells, list(triple))
            if result.will_remove_candidates():
                return result
        return None


class HiddenTriplet(UnitRule):
    """Three digits that, within a unit, only fit in the same three cells."""

    strategy = Strategy.HIDDEN_TRIPLET

    def scan_unit(self, grid: Grid, masks: Masks, cells: List[Position]) -> Optional[RemovalResult]:
        locations = _digit_locations(masks, cells)
        few = [d for d in sorted(locations) if 2 <= len(locations[d]) <= 3]
        for triple in combinations(few, 3):
            spots = set()
            for d in triple:
                spots.update(locations[d])
            if len(spots) != 3:
                continue
            subset = [pos for pos in cells if pos in spots]
            result = _hidden_subset(masks, subset, list(triple))
            if result.will_remove_candidates():
                return result
        return None
