# -*- coding: utf-8 -*-
"""
RU: Аффинный шифр. Множитель должен быть обратим по модулю 26, это
проверяется в конструкторе.

EN: Affine cipher: E(i) = (a*i + b) mod 26, D(i) = a^-1 * (i - b) mod 26.

The multiplier must be a unit mod 26 (12 valid residues: 1, 3, 5, 7, 9, 11,
15, 17, 19, 21, 23, 25). The check and the inverse computation both happen
in the constructor; an Affine instance always decrypts what it encrypts.
"""

from __future__ import annotations

import math
from typing import Final, Tuple

from src import get_logger
from src.polygraphia.core.exceptions import InvalidKeyError
from src.polygraphia.core.metadata import CipherCategory, create_cipher_metadata
from src.polygraphia.utils.alphabet import ALPHABET_SIZE
from src.polygraphia.utils.modmath import mod_inverse, units
from src.polygraphia.utils.text import TextMode, coerce_mode, ensure_text, transform

logger = get_logger(__name__)

ALGORITHM_NAME: Final[str] = "affine"
VALID_MULTIPLIERS: Final[Tuple[int, ...]] = units(ALPHABET_SIZE)


class Affine:
    """
    Affine cipher with key (a, b).

    Args:
        a: multiplier, must satisfy gcd(a, 26) == 1.
        b: additive shift, any int (reduced mod 26).
        mode: text mode for non-letters.

    Raises:
        InvalidKeyError: if ``a`` is not invertible mod 26 or either part is not an int.

    Examples:
        >>> Affine(5, 8).encrypt("AFFINE CIPHER")
        'IHHWVC SWFRCP'
        >>> Affine(5, 8).a_inverse
        21
    """

    __slots__ = ("_a", "_b", "_a_inv", "_mode")

    def __init__(self, a: int, b: int, mode: TextMode = TextMode.PRESERVE_ALL) -> None:
        for label, value in (("a", a), ("b", b)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidKeyError(
                    f"Key part '{label}' must be int, got {type(value).__name__}",
                    algorithm=ALGORITHM_NAME,
                )
        a_reduced = a % ALPHABET_SIZE
        try:
            a_inv = mod_inverse(a_reduced, ALPHABET_SIZE)
        except ValueError as exc:
            divisor = math.gcd(a_reduced, ALPHABET_SIZE)
            raise InvalidKeyError(
                f"Multiplier {a} is not coprime with 26",
                algorithm=ALGORITHM_NAME,
                reason="multiplier not invertible mod 26",
                context={"gcd": divisor},
            ) from exc

        self._a = a_reduced
        self._b = b % ALPHABET_SIZE
        self._a_inv = a_inv
        self._mode = coerce_mode(mode, ALGORITHM_NAME)
        logger.debug("Affine cipher initialized (mode=%s)", self._mode.value)

    @classmethod
    def from_key_material(
        cls, material: bytes, mode: TextMode = TextMode.PRESERVE_ALL
    ) -> "Affine":
        """
        Build an Affine cipher from derived key bytes.

        ``a`` is picked from the 12 valid multipliers by ``material[0] mod 12``
        and ``b = material[1] mod 26``, so every input yields a valid key.

        Raises:
            InvalidKeyError: if fewer than 2 bytes are supplied.
        """
        if len(material) < 2:
            raise InvalidKeyError(
                "Key material must contain at least 2 bytes",
                algorithm=ALGORITHM_NAME,
                context={"required": 2, "actual": len(material)},
            )
        a = VALID_MULTIPLIERS[material[0] % len(VALID_MULTIPLIERS)]
        return cls(a, material[1] % ALPHABET_SIZE, mode)

    @property
    def name(self) -> str:
        return ALGORITHM_NAME

    @property
    def a(self) -> int:
        return self._a

    @property
    def b(self) -> int:
        return self._b

    @property
    def a_inverse(self) -> int:
        return self._a_inv

    @property
    def mode(self) -> TextMode:
        return self._mode

    def _encrypt_indices(self, indices: Tuple[int, ...]) -> Tuple[int, ...]:
        return tuple((self._a * i + self._b) % ALPHABET_SIZE for i in indices)

    def _decrypt_indices(self, indices: Tuple[int, ...]) -> Tuple[int, ...]:
        return tuple((self._a_inv * (i - self._b)) % ALPHABET_SIZE for i in indices)

    def encrypt(self, plaintext: str) -> str:
        ensure_text(plaintext, ALGORITHM_NAME)
        return transform(plaintext, self._mode, self._encrypt_indices)

    def decrypt(self, ciphertext: str) -> str:
        ensure_text(ciphertext, ALGORITHM_NAME)
        return transform(ciphertext, self._mode, self._decrypt_indices)

    def __repr__(self) -> str:
        return f"Affine(a={self._a}, b={self._b}, mode={self._mode.value})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Affine):
            return NotImplemented
        return (self._a, self._b, self._mode) == (other._a, other._b, other._mode)

    def __hash__(self) -> int:
        return hash((ALGORITHM_NAME, self._a, self._b, self._mode))


METADATA_AFFINE = create_cipher_metadata(
    name=ALGORITHM_NAME,
    category=CipherCategory.MONOALPHABETIC,
    implementation_class="src.polygraphia.algorithms.affine.Affine",
    block_size=1,
    key_description="(a, b) with gcd(a, 26) == 1",
    description="Modular-linear substitution a*i + b.",
    test_vectors_source="Wikipedia: Affine cipher (a=5, b=8)",
    extra={"valid_multipliers": list(VALID_MULTIPLIERS)},
)


__all__ = ["Affine", "METADATA_AFFINE", "VALID_MULTIPLIERS", "ALGORITHM_NAME"]
