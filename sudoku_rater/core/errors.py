"""Exception types raised by the Sudoku core."""


class SudokuError(Exception):
    """Base class for all errors raised by this package."""


class BoardFormatError(SudokuError, ValueError):
    """A board string or JSON document could not be parsed."""


class InconsistentStateError(SudokuError, RuntimeError):
    """
    An internal invariant was violated.

    Raised when a deduction rule reports a candidate that is not present,
    or when the human-like and backtracking solutions disagree. The current
    solve cannot continue once this happens.
    """
