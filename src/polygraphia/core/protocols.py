# -*- coding: utf-8 -*-
"""
RU: Протоколы (контракты) для шифров и KDF: единый интерфейс encrypt/decrypt
для всех классических шифров и derive_key для функций вывода ключа.

EN: Structural contracts for the cipher engine.

Design notes:
- Protocols are @runtime_checkable to allow isinstance checks in tests and in
  the registry.
- Errors are raised, not returned: construction raises InvalidKeyError,
  encrypt/decrypt raise CipherError subclasses.
"""

from __future__ import annotations

from typing import Protocol, Union, runtime_checkable

BytesLike = Union[bytes, bytearray, memoryview]


@runtime_checkable
class CipherProtocol(Protocol):
    """Uniform contract implemented by Caesar, Affine, Hill and Playfair."""

    @property
    def name(self) -> str:
        """Short lowercase cipher identifier, e.g. "caesar"."""
        ...

    def encrypt(self, plaintext: str) -> str:
        """
        Encrypt text.

        Args:
            plaintext: arbitrary text; handling of non-letters follows the
                cipher's text mode.

        Returns:
            Ciphertext.

        Raises:
            CipherError: on call-time failures (non-str input).
        """
        ...

    def decrypt(self, ciphertext: str) -> str:
        """
        Decrypt text.

        Args:
            ciphertext: text produced by ``encrypt`` (or any text).

        Returns:
            Plaintext.

        Raises:
            CipherError: on call-time failures (non-str input).
        """
        ...


@runtime_checkable
class KDFProtocol(Protocol):
    """Password-based key derivation provider."""

    def derive_key(
        self,
        passphrase: Union[str, BytesLike],
        salt: BytesLike,
        iterations: int,
        output_length: int,
    ) -> bytes:
        """
        Derive key material.

        Args:
            passphrase: secret; str is UTF-8 encoded.
            salt: caller-supplied salt.
            iterations: iteration count (>= 1), no implicit default.
            output_length: number of bytes to produce (>= 1).

        Returns:
            Derived bytes of length ``output_length``.
        """
        ...


__all__ = ["BytesLike", "CipherProtocol", "KDFProtocol"]
