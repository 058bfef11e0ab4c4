# -*- coding: utf-8 -*-
"""
RU: Квадратные целочисленные матрицы по модулю m.

EN: Square integer matrices over Z/mZ. The determinant uses fraction-free
Bareiss elimination (O(n^3), exact integer division at every step), and the
inverse is det^-1 * adj(M). No floating point anywhere.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from src.polygraphia.utils.modmath import MODULUS, mod_inverse

Rows = Tuple[Tuple[int, ...], ...]


class ModMatrix:
    """
    Immutable n x n matrix with entries reduced mod ``modulus``.

    Examples:
        >>> m = ModMatrix([[7, 8], [11, 11]])
        >>> m.determinant()
        15
        >>> m.inverse().rows
        ((25, 22), (1, 23))
    """

    __slots__ = ("_rows", "_size", "_modulus")

    def __init__(self, rows: Iterable[Sequence[int]], modulus: int = MODULUS) -> None:
        materialized = tuple(tuple(row) for row in rows)
        size = len(materialized)
        if size == 0:
            raise ValueError("Matrix must have at least one row")
        for row in materialized:
            if len(row) != size:
                raise ValueError(
                    f"Matrix must be square: expected {size} columns, got {len(row)}"
                )
            for value in row:
                if isinstance(value, bool) or not isinstance(value, int):
                    raise TypeError(
                        f"Matrix entries must be int, got {type(value).__name__}"
                    )
        self._modulus = modulus
        self._size = size
        self._rows: Rows = tuple(tuple(v % modulus for v in row) for row in materialized)

    @property
    def size(self) -> int:
        return self._size

    @property
    def modulus(self) -> int:
        return self._modulus

    @property
    def rows(self) -> Rows:
        return self._rows

    def __getitem__(self, position: Tuple[int, int]) -> int:
        row, col = position
        return self._rows[row][col]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ModMatrix):
            return NotImplemented
        return self._rows == other._rows and self._modulus == other._modulus

    def __hash__(self) -> int:
        return hash((self._rows, self._modulus))

    def __repr__(self) -> str:
        return f"ModMatrix({[list(r) for r in self._rows]!r}, modulus={self._modulus})"

    def determinant(self) -> int:
        """Determinant reduced mod ``modulus``."""
        return _determinant(self._rows) % self._modulus

    def minor(self, skip_row: int, skip_col: int) -> Rows:
        return tuple(
            tuple(v for c, v in enumerate(row) if c != skip_col)
            for r, row in enumerate(self._rows)
            if r != skip_row
        )

    def adjugate(self) -> "ModMatrix":
        """Transpose of the cofactor matrix."""
        n = self._size
        if n == 1:
            return ModMatrix([[1]], self._modulus)
        adj: List[List[int]] = [[0] * n for _ in range(n)]
        for r in range(n):
            for c in range(n):
                sign = 1 if (r + c) % 2 == 0 else -1
                adj[c][r] = sign * _determinant(self.minor(r, c))
        return ModMatrix(adj, self._modulus)

    def is_invertible(self) -> bool:
        try:
            mod_inverse(self.determinant(), self._modulus)
        except ValueError:
            return False
        return True

    def inverse(self) -> "ModMatrix":
        """
        Inverse mod ``modulus``: det^-1 * adj(M).

        Raises:
            ValueError: if the determinant is not invertible mod ``modulus``.
        """
        det_inv = mod_inverse(self.determinant(), self._modulus)
        adj = self.adjugate()
        return ModMatrix(
            [[det_inv * v for v in row] for row in adj.rows], self._modulus
        )

    def multiply_vector(self, vector: Sequence[int]) -> Tuple[int, ...]:
        """Matrix times column vector, reduced mod ``modulus``."""
        if len(vector) != self._size:
            raise ValueError(
                f"Vector length {len(vector)} does not match matrix size {self._size}"
            )
        return tuple(
            sum(a * b for a, b in zip(row, vector)) % self._modulus
            for row in self._rows
        )


def _determinant(rows: Rows) -> int:
    """Exact integer determinant by Bareiss elimination."""
    m = [list(row) for row in rows]
    n = len(m)
    sign = 1
    previous_pivot = 1
    for k in range(n - 1):
        if m[k][k] == 0:
            for swap in range(k + 1, n):
                if m[swap][k] != 0:
                    m[k], m[swap] = m[swap], m[k]
                    sign = -sign
                    break
            else:
                return 0
        pivot = m[k][k]
        for i in range(k + 1, n):
            for j in range(k + 1, n):
                m[i][j] = (m[i][j] * pivot - m[i][k] * m[k][j]) // previous_pivot
        previous_pivot = pivot
    return sign * m[n - 1][n - 1]


__all__ = ["ModMatrix"]
