# -*- coding: utf-8 -*-
"""
RU: Нормализация текста перед шифрованием и восстановление результата с учётом режима текста.

EN: Text normalizer shared by the letter-oriented ciphers. ``normalize`` splits
input into the alphabet indices fed to a cipher core plus per-position slots
that remember verbatim characters and letter case; ``reconstruct`` writes
transformed indices back into those slots.

Round-trip guarantee for PRESERVE_ALL::

    reconstruct(normalize(text, TextMode.PRESERVE_ALL)) == text
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, NamedTuple, Optional, Sequence, Tuple

from src.polygraphia.core.exceptions import InvalidInputError, InvalidKeyError
from src.polygraphia.utils.alphabet import from_index, to_index


class TextMode(str, Enum):
    """Policy for non-alphabetic characters."""

    # Keep non-letters verbatim at their original positions (default)
    PRESERVE_ALL = "preserve_all"

    # Drop non-letters from the output
    ALPHABETIC_ONLY = "alphabetic_only"

    @classmethod
    def from_str(cls, value: str) -> "TextMode":
        """
        Parse a mode name, case-insensitive.

        Examples:
            >>> TextMode.from_str("alphabetic_only")
            <TextMode.ALPHABETIC_ONLY: 'alphabetic_only'>
        """
        try:
            return cls[value.upper()]
        except KeyError:
            raise ValueError(
                f"Unknown text mode: {value}. Allowed: {[m.value for m in cls]}"
            ) from None


class TextSlot(NamedTuple):
    """One output position: a verbatim character, or a letter slot (literal is None)."""

    literal: Optional[str]
    upper: bool


@dataclass(frozen=True)
class NormalizedText:
    """
    Result of normalization.

    Attributes:
        indices: alphabet indices of the letters, in order.
        slots: output layout; one entry per kept character.
        mode: text mode used to build the layout.
    """

    indices: Tuple[int, ...]
    slots: Tuple[TextSlot, ...]
    mode: TextMode

    @property
    def letter_count(self) -> int:
        return len(self.indices)


def normalize(text: str, mode: TextMode = TextMode.PRESERVE_ALL) -> NormalizedText:
    """
    Split text into alphabet indices and a reconstruction layout.

    Args:
        text: raw input.
        mode: PRESERVE_ALL records non-letters as verbatim slots,
            ALPHABETIC_ONLY omits them.

    Returns:
        NormalizedText.

    Examples:
        >>> n = normalize("Hi, you", TextMode.PRESERVE_ALL)
        >>> n.indices
        (7, 8, 24, 14, 20)
    """
    mode = TextMode(mode)
    indices: List[int] = []
    slots: List[TextSlot] = []
    for char in text:
        index = to_index(char)
        if index is None:
            if mode is TextMode.PRESERVE_ALL:
                slots.append(TextSlot(char, False))
            continue
        indices.append(index)
        slots.append(TextSlot(None, char.isupper()))
    return NormalizedText(indices=tuple(indices), slots=tuple(slots), mode=mode)


def reconstruct(
    normalized: NormalizedText, indices: Optional[Sequence[int]] = None
) -> str:
    """
    Rebuild output text from (possibly transformed) indices.

    Letter slots receive ``indices`` in order with their original case;
    verbatim slots are copied. Indices beyond the number of letter slots
    (block padding) are appended at the end in the case of the last letter.

    Args:
        normalized: layout from ``normalize``.
        indices: indices to write; defaults to ``normalized.indices``.

    Returns:
        Reconstructed text.

    Raises:
        ValueError: if fewer indices than letter slots are supplied.
    """
    if indices is None:
        indices = normalized.indices
    if len(indices) < normalized.letter_count:
        raise ValueError(
            f"Expected at least {normalized.letter_count} indices, got {len(indices)}"
        )

    out: List[str] = []
    position = 0
    last_upper = False
    for slot in normalized.slots:
        if slot.literal is not None:
            out.append(slot.literal)
            continue
        out.append(from_index(indices[position], upper=slot.upper))
        last_upper = slot.upper
        position += 1

    for index in indices[position:]:
        out.append(from_index(index, upper=last_upper))
    return "".join(out)


def ensure_text(value: object, algorithm: str) -> str:
    """
    Reject non-str input to encrypt/decrypt.

    Raises:
        InvalidInputError: if ``value`` is not a str.
    """
    if not isinstance(value, str):
        raise InvalidInputError(
            f"Text must be str, got {type(value).__name__}", algorithm=algorithm
        )
    return value


def coerce_mode(mode: object, algorithm: str) -> TextMode:
    """
    Accept a TextMode or its string value as a cipher constructor argument.

    Raises:
        InvalidKeyError: if ``mode`` names no known text mode.
    """
    try:
        return TextMode(mode)
    except ValueError as exc:
        raise InvalidKeyError(
            f"Unknown text mode: {mode!r}. Allowed: {[m.value for m in TextMode]}",
            algorithm=algorithm,
            reason="unknown text mode",
        ) from exc


def transform(
    text: str,
    mode: TextMode,
    fn: Callable[[Tuple[int, ...]], Sequence[int]],
) -> str:
    """Normalize ``text``, map its indices through ``fn`` and reconstruct."""
    normalized = normalize(text, mode)
    if not normalized.indices:
        return reconstruct(normalized, ())
    return reconstruct(normalized, fn(normalized.indices))


__all__ = [
    "TextMode",
    "TextSlot",
    "NormalizedText",
    "normalize",
    "reconstruct",
    "ensure_text",
    "coerce_mode",
    "transform",
]
