"""Deduction rules, in the priority order the engine tries them."""

from .base import DeductionRule, UnitRule, collect_set_digit
from .singles import LastDigit, ObviousSingle, HiddenSingle
from .intersections import PointingPair, ClaimingPair
from .subsets import ObviousPair, HiddenPair, ObviousTriplet, HiddenTriplet
from .fish import Skyscraper, XWing

DEFAULT_RULES = (
    LastDigit(),
    ObviousSingle(),
    HiddenSingle(),
    PointingPair(),
    ClaimingPair(),
    ObviousPair(),
    HiddenPair(),
    ObviousTriplet(),
    HiddenTriplet(),
    Skyscraper(),
    XWing(),
)

__all__ = [
    "DeductionRule",
    "UnitRule",
    "collect_set_digit",
    "LastDigit",
    "ObviousSingle",
    "HiddenSingle",
    "PointingPair",
    "ClaimingPair",
    "ObviousPair",
    "HiddenPair",
    "ObviousTriplet",
    "HiddenTriplet",
    "Skyscraper",
    "XWing",
    "DEFAULT_RULES",
]
