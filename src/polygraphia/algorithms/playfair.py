# -*- coding: utf-8 -*-
"""
RU: Шифр Плейфера: биграммы на квадрате 5x5, построенном по ключевому слову.

EN: Playfair digraph cipher on a 5x5 keyword grid (I and J share a cell).

Playfair works on letter pairs, so it always ignores non-letters and emits
uppercase letters only, whatever text mode the instance was built with.

Preparation (encrypt):
    letters only, uppercase, J -> I; pairs are formed left to right. A pair of
    identical letters gets a filler inserted between them ('X', or 'Q' when
    the letter is 'X') and the rest shifts by one. An unpaired last letter
    gets the filler appended.

Rules per pair, in priority order:
    1. same row     -> letter to the right (wrapping); decrypt: left
    2. same column  -> letter below (wrapping); decrypt: above
    3. rectangle    -> own row, partner's column (self-inverse)

Example:
    >>> Playfair("secret").encrypt("instruments")
    'HOESTQITUSCV'
    >>> Playfair("secret").decrypt("HOESTQITUSCV")
    'INSTRUMENTSX'
"""

from __future__ import annotations

from typing import Dict, Final, List, Tuple

from src import get_logger
from src.polygraphia.core.exceptions import InvalidInputError, InvalidKeyError
from src.polygraphia.core.metadata import CipherCategory, create_cipher_metadata
from src.polygraphia.utils.alphabet import ALPHABET_SIZE, UPPERCASE, is_letter
from src.polygraphia.utils.text import TextMode, coerce_mode, ensure_text

logger = get_logger(__name__)

ALGORITHM_NAME: Final[str] = "playfair"
GRID_SIDE: Final[int] = 5
GRID_ALPHABET: Final[str] = "ABCDEFGHIKLMNOPQRSTUVWXYZ"  # no J
FILLER: Final[str] = "X"
ALTERNATE_FILLER: Final[str] = "Q"


def _letters(text: str) -> str:
    """Uppercase ASCII letters of ``text`` with J merged into I."""
    return "".join(
        "I" if c == "J" else c for c in (ch.upper() for ch in text if is_letter(ch))
    )


def _filler_for(letter: str) -> str:
    return ALTERNATE_FILLER if letter == FILLER else FILLER


def prepare_plaintext(text: str) -> List[Tuple[str, str]]:
    """
    Split plaintext into digraphs, inserting fillers.

    Examples:
        >>> prepare_plaintext("balloon")
        [('B', 'A'), ('L', 'X'), ('L', 'O'), ('O', 'N')]
        >>> prepare_plaintext("xx")
        [('X', 'Q'), ('X', 'Q')]
    """
    letters = _letters(text)
    pairs: List[Tuple[str, str]] = []
    i = 0
    while i < len(letters):
        first = letters[i]
        if i + 1 >= len(letters):
            pairs.append((first, _filler_for(first)))
            break
        second = letters[i + 1]
        if first == second:
            pairs.append((first, _filler_for(first)))
            i += 1
        else:
            pairs.append((first, second))
            i += 2
    return pairs


def build_grid(keyword: str) -> str:
    """
    Keyword letters (deduplicated, first occurrence wins) then the rest of
    the 25-letter alphabet, row-major.

    Examples:
        >>> build_grid("secret")[:10]
        'SECRTABDFG'
    """
    seen: List[str] = []
    for letter in _letters(keyword) + GRID_ALPHABET:
        if letter not in seen:
            seen.append(letter)
    return "".join(seen)


class Playfair:
    """
    Playfair cipher for a keyword.

    Args:
        keyword: any string; non-letters are ignored, an empty keyword gives
            the plain alphabet grid.
        mode: recorded for interface uniformity; Playfair output is always
            alphabetic-only uppercase.

    Raises:
        InvalidKeyError: if ``keyword`` is not a str or the grid is malformed.
    """

    __slots__ = ("_keyword", "_grid", "_positions", "_mode")

    def __init__(self, keyword: str, mode: TextMode = TextMode.PRESERVE_ALL) -> None:
        if not isinstance(keyword, str):
            raise InvalidKeyError(
                f"Keyword must be str, got {type(keyword).__name__}",
                algorithm=ALGORITHM_NAME,
            )
        grid = build_grid(keyword)
        if len(grid) != GRID_SIDE * GRID_SIDE or len(set(grid)) != len(grid):
            raise InvalidKeyError(
                "Grid must contain 25 distinct letters",
                algorithm=ALGORITHM_NAME,
                reason="malformed grid",
                context={"cells": len(grid)},
            )

        positions: Dict[str, Tuple[int, int]] = {
            letter: divmod(i, GRID_SIDE) for i, letter in enumerate(grid)
        }
        self._keyword = _letters(keyword)
        self._grid = grid
        self._positions = positions
        self._mode = coerce_mode(mode, ALGORITHM_NAME)
        if self._mode is not TextMode.ALPHABETIC_ONLY:
            logger.debug("Playfair ignores text mode %s; output is letters only", self._mode.value)
        logger.debug("Playfair cipher initialized")

    @classmethod
    def from_key_material(
        cls, material: bytes, mode: TextMode = TextMode.PRESERVE_ALL
    ) -> "Playfair":
        """
        Build a Playfair cipher whose keyword is the letters ``material[k] mod 26``.

        Raises:
            InvalidKeyError: if ``material`` is empty.
        """
        if len(material) < 1:
            raise InvalidKeyError(
                "Key material must contain at least 1 byte",
                algorithm=ALGORITHM_NAME,
                context={"required": 1, "actual": 0},
            )
        keyword = "".join(UPPERCASE[b % ALPHABET_SIZE] for b in material)
        return cls(keyword, mode)

    @property
    def name(self) -> str:
        return ALGORITHM_NAME

    @property
    def keyword(self) -> str:
        return self._keyword

    @property
    def grid(self) -> Tuple[str, ...]:
        """The 5 grid rows as strings."""
        return tuple(
            self._grid[r * GRID_SIDE:(r + 1) * GRID_SIDE] for r in range(GRID_SIDE)
        )

    @property
    def mode(self) -> TextMode:
        return self._mode

    def position(self, letter: str) -> Tuple[int, int]:
        """
        (row, column) of a letter; J resolves to I's cell.

        Raises:
            InvalidInputError: if ``letter`` is not a single ASCII letter.
        """
        if not isinstance(letter, str) or not is_letter(letter):
            raise InvalidInputError(
                f"Expected a single ASCII letter, got {letter!r}",
                algorithm=ALGORITHM_NAME,
            )
        return self._positions[_letters(letter)]

    def _at(self, row: int, col: int) -> str:
        return self._grid[(row % GRID_SIDE) * GRID_SIDE + col % GRID_SIDE]

    def _transform_pair(self, first: str, second: str, step: int) -> str:
        r1, c1 = self._positions[first]
        r2, c2 = self._positions[second]
        if r1 == r2:
            return self._at(r1, c1 + step) + self._at(r2, c2 + step)
        if c1 == c2:
            return self._at(r1 + step, c1) + self._at(r2 + step, c2)
        return self._at(r1, c2) + self._at(r2, c1)

    def encrypt(self, plaintext: str) -> str:
        ensure_text(plaintext, ALGORITHM_NAME)
        return "".join(
            self._transform_pair(a, b, 1) for a, b in prepare_plaintext(plaintext)
        )

    def decrypt(self, ciphertext: str) -> str:
        """
        Decrypt letter pairs; fillers inserted on encryption stay in the output.

        An odd letter count is completed with the filler so the call is total.
        """
        ensure_text(ciphertext, ALGORITHM_NAME)
        letters = _letters(ciphertext)
        if len(letters) % 2:
            letters += _filler_for(letters[-1])
        return "".join(
            self._transform_pair(letters[i], letters[i + 1], -1)
            for i in range(0, len(letters), 2)
        )

    def __repr__(self) -> str:
        return f"Playfair(grid={self._grid!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Playfair):
            return NotImplemented
        return self._grid == other._grid

    def __hash__(self) -> int:
        return hash((ALGORITHM_NAME, self._grid))


METADATA_PLAYFAIR = create_cipher_metadata(
    name=ALGORITHM_NAME,
    category=CipherCategory.POLYGRAPHIC,
    implementation_class="src.polygraphia.algorithms.playfair.Playfair",
    block_size=2,
    honors_text_mode=False,
    key_description="keyword; I/J merged 5x5 grid",
    description="Digraph substitution on a 5x5 keyword square.",
    test_vectors_source="Wikipedia: Playfair cipher (playfair example)",
    extra={"filler": FILLER, "alternate_filler": ALTERNATE_FILLER},
)


__all__ = [
    "Playfair",
    "METADATA_PLAYFAIR",
    "build_grid",
    "prepare_plaintext",
    "ALGORITHM_NAME",
]
