"""
Character Class Pools
======================

Maps characters to the class they are drawn from and sizes the
brute-force alphabet of a password. Anything that is not an ASCII
letter, digit, ASCII punctuation or whitespace (accented letters, CJK,
emoji, control characters) falls into the ``OTHER`` pool so that no input
is ever rejected.
"""

from __future__ import annotations

import math
import string

from gauge.core.models import CharClass


POOL_SIZES: dict[CharClass, int] = {
    CharClass.LOWER: 26,
    CharClass.UPPER: 26,
    CharClass.DIGIT: 10,
    CharClass.SYMBOL: len(string.punctuation),  # 32
    CharClass.WHITESPACE: 1,
    CharClass.OTHER: 100,
}

_LOWER = frozenset(string.ascii_lowercase)
_UPPER = frozenset(string.ascii_uppercase)
_DIGITS = frozenset(string.digits)
_SYMBOLS = frozenset(string.punctuation)


def char_class(ch: str) -> CharClass:
    """Return the class of a single character."""
    if ch in _LOWER:
        return CharClass.LOWER
    if ch in _UPPER:
        return CharClass.UPPER
    if ch in _DIGITS:
        return CharClass.DIGIT
    if ch in _SYMBOLS:
        return CharClass.SYMBOL
    if ch.isspace():
        return CharClass.WHITESPACE
    return CharClass.OTHER


def classes_present(password: str) -> list[CharClass]:
    """Classes occurring in *password*, in :class:`CharClass` order."""
    seen = {char_class(ch) for ch in set(password)}
    return [cls for cls in CharClass if cls in seen]


def pool_size(classes: list[CharClass]) -> int:
    """Alphabet size N: the sum of the pools of *classes*."""
    return sum(POOL_SIZES[cls] for cls in classes)


def per_char_bits(classes: list[CharClass]) -> float:
    """Brute-force cost of one character, in bits.

    ``log2(N)`` for the symbol plus ``log2(k)`` for which of the ``k``
    present classes occupies the position. Zero for an empty class list.
    """
    if not classes:
        return 0.0
    return math.log2(pool_size(classes)) + math.log2(len(classes))
