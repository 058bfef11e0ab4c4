# -*- coding: utf-8 -*-
"""
RU: Точная целочисленная арифметика по модулю m (по умолчанию 26).

EN: Exact integer arithmetic over Z/mZ. ``math.gcd`` covers the plain
divisor; the extended form is needed for inverses.
"""

from __future__ import annotations

import math
from typing import Final, Tuple

MODULUS: Final[int] = 26


def are_coprime(a: int, b: int) -> bool:
    return math.gcd(a, b) == 1


def egcd(a: int, b: int) -> Tuple[int, int, int]:
    """
    Extended Euclid: returns (g, x, y) with a*x + b*y == g == gcd(a, b).

    Examples:
        >>> egcd(5, 26)
        (1, -5, 1)
    """
    old_r, r = a, b
    old_x, x = 1, 0
    old_y, y = 0, 1
    while r:
        q = old_r // r
        old_r, r = r, old_r - q * r
        old_x, x = x, old_x - q * x
        old_y, y = y, old_y - q * y
    return old_r, old_x, old_y


def mod_inverse(a: int, m: int = MODULUS) -> int:
    """
    Modular multiplicative inverse of ``a`` mod ``m``.

    Raises:
        ValueError: if gcd(a, m) != 1.

    Examples:
        >>> mod_inverse(5), mod_inverse(3), mod_inverse(25)
        (21, 9, 25)
    """
    a %= m
    g, x, _ = egcd(a, m)
    if g != 1:
        raise ValueError(f"No modular inverse for {a} mod {m} (gcd={g})")
    return x % m


def units(m: int = MODULUS) -> Tuple[int, ...]:
    """Residues in 0..m-1 that are invertible mod m."""
    return tuple(a for a in range(m) if are_coprime(a, m))


__all__ = ["MODULUS", "are_coprime", "egcd", "mod_inverse", "units"]
