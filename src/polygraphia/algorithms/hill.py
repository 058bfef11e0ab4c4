# -*- coding: utf-8 -*-
"""
Hill cipher: блочный шифр на матрицах по модулю 26.

Каждый блок из n букв рассматривается как вектор-столбец и умножается на
ключевую матрицу K (n x n): C = K·P mod 26. Расшифрование использует
K^-1 = det(K)^-1 · adj(K) mod 26, вычисленную один раз в конструкторе.

Padding
-------
Неполный последний блок дополняется буквой 'X' (индекс 23) только при
шифровании. При расшифровании заполнитель НЕ удаляется: вызывающая сторона
видит его в открытом тексте.

Text mode
---------
PRESERVE_ALL возвращает преобразованные буквы на исходные позиции букв,
небуквенные символы остаются на месте, а буквы-заполнители дописываются
в конец текста.

Example:
    >>> Hill([[6, 24, 1], [13, 16, 10], [20, 17, 15]]).encrypt("ACT")
    'POH'
    >>> Hill.from_keyword("hill").encrypt("short example")
    'apadj tftwlfj'

References:
- Hill, L. S. (1929). Cryptography in an Algebraic Alphabet.
"""

from __future__ import annotations

import math
from typing import Final, List, Sequence, Tuple

from src import get_logger
from src.polygraphia.core.exceptions import InvalidKeyError
from src.polygraphia.core.metadata import CipherCategory, create_cipher_metadata
from src.polygraphia.utils.alphabet import ALPHABET_SIZE, to_index
from src.polygraphia.utils.matrix import ModMatrix
from src.polygraphia.utils.text import TextMode, coerce_mode, ensure_text, transform

logger = get_logger(__name__)

ALGORITHM_NAME: Final[str] = "hill"
PADDING_INDEX: Final[int] = 23  # 'X'


class Hill:
    """
    Hill cipher with an invertible n x n key matrix.

    Args:
        matrix: square matrix of ints (entries reduced mod 26).
        mode: text mode for non-letters.

    Raises:
        InvalidKeyError: if the matrix is empty, not square, has non-int
            entries, or det(matrix) mod 26 shares a factor with 26.
    """

    __slots__ = ("_key", "_inverse", "_mode")

    def __init__(
        self, matrix: Sequence[Sequence[int]], mode: TextMode = TextMode.PRESERVE_ALL
    ) -> None:
        try:
            key = ModMatrix(matrix, ALPHABET_SIZE)
        except (ValueError, TypeError) as exc:
            raise InvalidKeyError(
                f"Invalid key matrix: {exc}",
                algorithm=ALGORITHM_NAME,
                reason="malformed matrix",
            ) from exc

        det = key.determinant()
        try:
            inverse = key.inverse()
        except ValueError as exc:
            raise InvalidKeyError(
                f"Matrix determinant {det} is not coprime with 26",
                algorithm=ALGORITHM_NAME,
                reason="matrix not invertible mod 26",
                context={"size": key.size, "gcd": math.gcd(det, ALPHABET_SIZE)},
            ) from exc

        self._key = key
        self._inverse = inverse
        self._mode = coerce_mode(mode, ALGORITHM_NAME)
        logger.debug(
            "Hill cipher initialized (size=%d, mode=%s)", key.size, self._mode.value
        )

    @classmethod
    def from_keyword(
        cls, keyword: str, mode: TextMode = TextMode.PRESERVE_ALL
    ) -> "Hill":
        """
        Build the key matrix row-major from the letters of ``keyword``.

        Non-letters are ignored; the letter count must be a perfect square
        (4, 9, 16, ...). ``"hill"`` gives [[7, 8], [11, 11]].

        Raises:
            InvalidKeyError: on a non-square letter count or a singular matrix.
        """
        letters = [i for i in (to_index(c) for c in keyword) if i is not None]
        size = math.isqrt(len(letters))
        if size == 0 or size * size != len(letters):
            raise InvalidKeyError(
                f"Keyword letter count {len(letters)} must be a perfect square (4, 9, 16, ...)",
                algorithm=ALGORITHM_NAME,
                reason="keyword length not a perfect square",
            )
        rows = [letters[r * size:(r + 1) * size] for r in range(size)]
        return cls(rows, mode)

    @classmethod
    def from_key_material(
        cls, material: bytes, size: int = 2, mode: TextMode = TextMode.PRESERVE_ALL
    ) -> "Hill":
        """
        Fold derived key bytes into an invertible ``size`` x ``size`` matrix.

        A window of size*size bytes slides over ``material`` one byte at a
        time; each byte is reduced mod 26 and the first invertible matrix wins.

        Raises:
            InvalidKeyError: if ``material`` is too short or no window is invertible.
        """
        if size < 1:
            raise InvalidKeyError(
                f"Matrix size must be >= 1, got {size}", algorithm=ALGORITHM_NAME
            )
        cells = size * size
        if len(material) < cells:
            raise InvalidKeyError(
                f"Key material must contain at least {cells} bytes",
                algorithm=ALGORITHM_NAME,
                context={"required": cells, "actual": len(material)},
            )
        for offset in range(len(material) - cells + 1):
            window = [b % ALPHABET_SIZE for b in material[offset:offset + cells]]
            candidate = ModMatrix(
                [window[r * size:(r + 1) * size] for r in range(size)], ALPHABET_SIZE
            )
            if candidate.is_invertible():
                logger.debug("Hill key folded from material (offset=%d)", offset)
                return cls(candidate.rows, mode)
        raise InvalidKeyError(
            "Key material does not contain an invertible matrix",
            algorithm=ALGORITHM_NAME,
            reason="no invertible window",
            context={"size": size, "material_length": len(material)},
        )

    @property
    def name(self) -> str:
        return ALGORITHM_NAME

    @property
    def key(self) -> ModMatrix:
        return self._key

    @property
    def inverse_key(self) -> ModMatrix:
        return self._inverse

    @property
    def block_size(self) -> int:
        return self._key.size

    @property
    def mode(self) -> TextMode:
        return self._mode

    def _apply(self, matrix: ModMatrix, indices: Tuple[int, ...]) -> List[int]:
        n = matrix.size
        padded = list(indices)
        remainder = len(padded) % n
        if remainder:
            padded.extend([PADDING_INDEX] * (n - remainder))
        out: List[int] = []
        for start in range(0, len(padded), n):
            out.extend(matrix.multiply_vector(padded[start:start + n]))
        return out

    def encrypt(self, plaintext: str) -> str:
        ensure_text(plaintext, ALGORITHM_NAME)
        return transform(plaintext, self._mode, lambda ix: self._apply(self._key, ix))

    def decrypt(self, ciphertext: str) -> str:
        """
        Decrypt with the inverse matrix.

        Padding letters from encryption are kept. A ciphertext whose letter
        count is not a multiple of the block size is padded the same way as
        on encryption, so decryption stays total.
        """
        ensure_text(ciphertext, ALGORITHM_NAME)
        return transform(ciphertext, self._mode, lambda ix: self._apply(self._inverse, ix))

    def __repr__(self) -> str:
        return f"Hill(size={self._key.size}, mode={self._mode.value})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Hill):
            return NotImplemented
        return self._key == other._key and self._mode == other._mode

    def __hash__(self) -> int:
        return hash((ALGORITHM_NAME, self._key, self._mode))


METADATA_HILL = create_cipher_metadata(
    name=ALGORITHM_NAME,
    category=CipherCategory.POLYGRAPHIC,
    implementation_class="src.polygraphia.algorithms.hill.Hill",
    block_size=None,
    key_description="n x n matrix with det mod 26 coprime with 26",
    description="Block cipher multiplying letter vectors by a key matrix mod 26.",
    test_vectors_source="Wikipedia: Hill cipher (GYBNQKURP, HILL)",
    extra={"padding_letter": "X"},
)


__all__ = ["Hill", "METADATA_HILL", "PADDING_INDEX", "ALGORITHM_NAME"]
