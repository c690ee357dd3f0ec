"""Helpers for 9-bit candidate masks (bit d-1 set means digit d)."""

from typing import Iterable, List

ALL_DIGITS_MASK = 0x1FF
DIGITS = range(1, 10)


def bit(digit: int) -> int:
    """Mask with only `digit` set."""
    return 1 << (digit - 1)


def has(mask: int, digit: int) -> bool:
    return bool(mask & (1 << (digit - 1)))


def count(mask: int) -> int:
    """Number of digits in the mask."""
    return bin(int(mask)).count("1")


def digits(mask: int) -> List[int]:
    """Digits contained in the mask, ascending."""
    mask = int(mask)
    return [d for d in DIGITS if mask & (1 << (d - 1))]


def from_digits(values: Iterable[int]) -> int:
    mask = 0
    for d in values:
        if d:
            mask |= 1 << (d - 1)
    return mask


def single_digit(mask: int) -> int:
    """Return the digit of a one-element mask."""
    mask = int(mask)
    if mask == 0 or mask & (mask - 1):
        raise ValueError(f"Mask {mask:#011b} does not hold exactly one digit")
    return mask.bit_length()
