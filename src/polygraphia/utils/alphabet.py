# -*- coding: utf-8 -*-
"""
RU: Соответствие 26 латинских букв и индексов 0..25.

EN: Letter <-> index mapping. Only ASCII letters count; everything else,
including accented and Cyrillic letters, is a symbol.
"""

from __future__ import annotations

from typing import Final, Optional

ALPHABET_SIZE: Final[int] = 26
UPPERCASE: Final[str] = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
LOWERCASE: Final[str] = "abcdefghijklmnopqrstuvwxyz"

_ORD_UPPER_A: Final[int] = ord("A")
_ORD_LOWER_A: Final[int] = ord("a")


def is_letter(char: str) -> bool:
    """True for ASCII letters only; other Unicode letters pass through as symbols."""
    return len(char) == 1 and ("A" <= char <= "Z" or "a" <= char <= "z")


def to_index(char: str) -> Optional[int]:
    """
    Map a letter to its alphabet index, ignoring case.

    Args:
        char: single character.

    Returns:
        Index in 0..25, or None for anything that is not an ASCII letter.

    Examples:
        >>> to_index("a"), to_index("Z"), to_index("!")
        (0, 25, None)
    """
    if not is_letter(char):
        return None
    return ord(char) - (_ORD_UPPER_A if char <= "Z" else _ORD_LOWER_A)


def from_index(index: int, upper: bool = False) -> str:
    """
    Map an index back to a letter; the index is reduced mod 26.

    Examples:
        >>> from_index(7), from_index(7, upper=True), from_index(-1)
        ('h', 'H', 'z')
    """
    index %= ALPHABET_SIZE
    return UPPERCASE[index] if upper else LOWERCASE[index]


__all__ = [
    "ALPHABET_SIZE",
    "UPPERCASE",
    "LOWERCASE",
    "is_letter",
    "to_index",
    "from_index",
]
