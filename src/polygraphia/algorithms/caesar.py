# -*- coding: utf-8 -*-
"""
RU: Шифр Цезаря, сдвиг каждой буквы на фиксированное число позиций.

EN: Caesar shift cipher.

Each letter index ``i`` becomes ``(i + shift) mod 26`` on encryption and
``(i - shift) mod 26`` on decryption. Any integer shift is a valid key; it is
reduced mod 26 once at construction, so 0 (and 26, -26, ...) is the identity.

Example:
    >>> cipher = Caesar(3)
    >>> cipher.encrypt("Hello, World!")
    'Khoor, Zruog!'
    >>> Caesar(3, TextMode.ALPHABETIC_ONLY).encrypt("Hello, World!")
    'KhoorZruog'
"""

from __future__ import annotations

from typing import Final, Tuple

from src import get_logger
from src.polygraphia.core.exceptions import InvalidKeyError
from src.polygraphia.core.metadata import CipherCategory, create_cipher_metadata
from src.polygraphia.utils.alphabet import ALPHABET_SIZE
from src.polygraphia.utils.text import TextMode, coerce_mode, ensure_text, transform

logger = get_logger(__name__)

ALGORITHM_NAME: Final[str] = "caesar"


class Caesar:
    """
    Caesar cipher with an immutable shift.

    Args:
        shift: any int; negative values shift left.
        mode: text mode for non-letters (PRESERVE_ALL by default).

    Raises:
        InvalidKeyError: if ``shift`` is not an int.
    """

    __slots__ = ("_shift", "_mode")

    def __init__(self, shift: int, mode: TextMode = TextMode.PRESERVE_ALL) -> None:
        if isinstance(shift, bool) or not isinstance(shift, int):
            raise InvalidKeyError(
                f"Shift must be int, got {type(shift).__name__}",
                algorithm=ALGORITHM_NAME,
            )
        self._shift = shift % ALPHABET_SIZE
        self._mode = coerce_mode(mode, ALGORITHM_NAME)
        logger.debug("Caesar cipher initialized (mode=%s)", self._mode.value)

    @classmethod
    def from_key_material(
        cls, material: bytes, mode: TextMode = TextMode.PRESERVE_ALL
    ) -> "Caesar":
        """
        Build a Caesar cipher from derived key bytes: shift = material[0] mod 26.

        Raises:
            InvalidKeyError: if ``material`` is empty.
        """
        if len(material) < 1:
            raise InvalidKeyError(
                "Key material must contain at least 1 byte",
                algorithm=ALGORITHM_NAME,
                context={"required": 1, "actual": 0},
            )
        return cls(material[0] % ALPHABET_SIZE, mode)

    @property
    def name(self) -> str:
        return ALGORITHM_NAME

    @property
    def shift(self) -> int:
        return self._shift

    @property
    def mode(self) -> TextMode:
        return self._mode

    def _shift_all(self, indices: Tuple[int, ...], shift: int) -> Tuple[int, ...]:
        return tuple((i + shift) % ALPHABET_SIZE for i in indices)

    def encrypt(self, plaintext: str) -> str:
        ensure_text(plaintext, ALGORITHM_NAME)
        return transform(plaintext, self._mode, lambda ix: self._shift_all(ix, self._shift))

    def decrypt(self, ciphertext: str) -> str:
        ensure_text(ciphertext, ALGORITHM_NAME)
        return transform(ciphertext, self._mode, lambda ix: self._shift_all(ix, -self._shift))

    def __repr__(self) -> str:
        return f"Caesar(shift={self._shift}, mode={self._mode.value})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Caesar):
            return NotImplemented
        return self._shift == other._shift and self._mode == other._mode

    def __hash__(self) -> int:
        return hash((ALGORITHM_NAME, self._shift, self._mode))


METADATA_CAESAR = create_cipher_metadata(
    name=ALGORITHM_NAME,
    category=CipherCategory.MONOALPHABETIC,
    implementation_class="src.polygraphia.algorithms.caesar.Caesar",
    block_size=1,
    key_description="integer shift, reduced mod 26",
    description="Shift every letter by a fixed amount.",
)


__all__ = ["Caesar", "METADATA_CAESAR", "ALGORITHM_NAME"]
