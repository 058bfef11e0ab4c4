# -*- coding: utf-8 -*-
"""
RU: PBKDF2-HMAC-SHA512/256: вывод ключевого материала из парольной фразы.
Соль и число итераций всегда передаёт вызывающая сторона: библиотека не
содержит неявной политики безопасности.

EN: Password-based key derivation (PBKDF2, RFC 8018) with HMAC-SHA-512/256 as
the PRF, computed by the ``cryptography`` package. The output is raw bytes;
reducing them to a cipher key (mod 26 folding, matrix layout) is done by each
cipher's ``from_key_material`` constructor, never here.

Use Case Guidance
-----------------
    >>> salt = generate_salt()                 # store alongside the ciphertext
    >>> material = derive_key("correct horse", salt, 210_000, 32)
    >>> cipher = Hill.from_key_material(material, size=3)

⚠️ Security Warnings
--------------------
1. The ciphers fed by this KDF are classical and offer no confidentiality
   against modern cryptanalysis, however strong the derived key is.
2. Do not log passphrases or derived bytes. This module logs only the
   output length and iteration count.

Standards & References
----------------------
- RFC 8018: PKCS #5 v2.1 (PBKDF2)
- FIPS 180-4: SHA-512/256
"""

from __future__ import annotations

import base64
import hmac
import secrets
from typing import Final, Union

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from src import get_logger
from src.polygraphia.config import KdfConfig
from src.polygraphia.core.exceptions import KDFParameterError, KeyDerivationError
from src.polygraphia.core.metadata import create_kdf_metadata
from src.polygraphia.core.protocols import BytesLike

logger = get_logger(__name__)

# ============================================================================
# CONSTANTS
# ============================================================================

ALGORITHM_ID: Final[str] = "pbkdf2-hmac-sha512/256"
DIGEST_SIZE: Final[int] = 32  # SHA-512/256 output, bytes
MIN_SALT_LENGTH: Final[int] = 8
DEFAULT_SALT_LENGTH: Final[int] = 16
MAX_OUTPUT_LENGTH: Final[int] = (2**32 - 1) * DIGEST_SIZE


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================


def _passphrase_bytes(passphrase: Union[str, BytesLike]) -> bytes:
    if isinstance(passphrase, str):
        return passphrase.encode("utf-8")
    if isinstance(passphrase, (bytes, bytearray, memoryview)):
        return bytes(passphrase)
    raise KDFParameterError(
        "passphrase", f"must be str or bytes-like, got {type(passphrase).__name__}"
    )


def _validate(salt: object, iterations: object, output_length: object) -> bytes:
    """
    Check KDF parameters.

    Raises:
        KDFParameterError: wrong type or out of range.
    """
    if not isinstance(salt, (bytes, bytearray, memoryview)):
        raise KDFParameterError("salt", f"must be bytes-like, got {type(salt).__name__}")
    if isinstance(iterations, bool) or not isinstance(iterations, int):
        raise KDFParameterError("iterations", "must be int")
    if iterations < 1:
        raise KDFParameterError("iterations", f"must be >= 1, got {iterations}")
    if isinstance(output_length, bool) or not isinstance(output_length, int):
        raise KDFParameterError("output_length", "must be int")
    if output_length < 1 or output_length > MAX_OUTPUT_LENGTH:
        raise KDFParameterError(
            "output_length", f"must be between 1 and {MAX_OUTPUT_LENGTH}, got {output_length}"
        )
    return bytes(salt)


def generate_salt(length: int = DEFAULT_SALT_LENGTH) -> bytes:
    """
    Generate a random salt with ``secrets``.

    Args:
        length: salt length in bytes (>= 8).

    Returns:
        Random salt bytes.

    Raises:
        KDFParameterError: if length is below the minimum.

    Example:
        >>> len(generate_salt())
        16
    """
    if length < MIN_SALT_LENGTH:
        raise KDFParameterError(
            "length", f"salt length must be >= {MIN_SALT_LENGTH}, got {length}"
        )
    return secrets.token_bytes(length)


# ============================================================================
# PROVIDER
# ============================================================================


class PBKDF2SHA512_256KDF:
    """
    PBKDF2 with HMAC-SHA-512/256.

    Implements KDFProtocol:
      - derive_key(passphrase, salt, iterations, output_length) -> bytes

    Deterministic: identical inputs always give identical output. Stateless,
    so one instance can be shared between threads.

    Example:
        >>> kdf = PBKDF2SHA512_256KDF()
        >>> key = kdf.derive_key(b"password", b"saltsalt", 1_000, 32)
        >>> len(key)
        32
    """

    __slots__ = ()

    ALGORITHM_ID = ALGORITHM_ID

    def derive_key(
        self,
        passphrase: Union[str, BytesLike],
        salt: BytesLike,
        iterations: int,
        output_length: int,
    ) -> bytes:
        """
        Derive ``output_length`` bytes.

        Raises:
            KDFParameterError: invalid passphrase/salt/iterations/length.
            KeyDerivationError: the backend rejected the computation.
        """
        pw = _passphrase_bytes(passphrase)
        salt_bytes = _validate(salt, iterations, output_length)

        logger.debug(
            "PBKDF2-HMAC-SHA512/256: deriving %d-byte key (iterations=%d)",
            output_length,
            iterations,
        )
        try:
            kdf = PBKDF2HMAC(
                algorithm=hashes.SHA512_256(),
                length=output_length,
                salt=salt_bytes,
                iterations=iterations,
            )
            derived = kdf.derive(pw)
        except Exception as exc:
            raise KeyDerivationError(
                f"PBKDF2-HMAC-SHA512/256 derivation failed: {exc.__class__.__name__}",
                algorithm=ALGORITHM_ID,
            ) from exc

        logger.debug("PBKDF2-HMAC-SHA512/256: key derived (%d bytes)", len(derived))
        return derived


_DEFAULT_PROVIDER: Final = PBKDF2SHA512_256KDF()


# ============================================================================
# PUBLIC API
# ============================================================================


def derive_key(
    passphrase: Union[str, BytesLike],
    salt: BytesLike,
    iterations: int,
    output_length: int,
) -> bytes:
    """
    PBKDF2-HMAC-SHA512/256 over caller-supplied parameters.

    There is no default salt or iteration count.

    Args:
        passphrase: secret; str is UTF-8 encoded.
        salt: salt bytes.
        iterations: iteration count (>= 1).
        output_length: number of bytes to produce.

    Returns:
        Derived key material.
    """
    return _DEFAULT_PROVIDER.derive_key(passphrase, salt, iterations, output_length)


def derive_key_with_config(
    passphrase: Union[str, BytesLike], salt: BytesLike, config: KdfConfig
) -> bytes:
    """Derive using the iteration count and output length from ``config``."""
    return derive_key(passphrase, salt, config.iterations, config.output_length)


def derive_key_encoded(
    passphrase: Union[str, BytesLike],
    salt: BytesLike,
    iterations: int,
    output_length: int,
) -> str:
    """
    Same as ``derive_key`` but returns URL-safe base64 text.

    Example:
        >>> len(derive_key_encoded(b"pw", b"saltsalt", 1_000, 32))
        44
    """
    raw = derive_key(passphrase, salt, iterations, output_length)
    return base64.urlsafe_b64encode(raw).decode("ascii")


def verify_passphrase(
    passphrase: Union[str, BytesLike],
    salt: BytesLike,
    expected: Union[str, bytes],
    iterations: int,
) -> bool:
    """
    Re-derive and compare with ``expected`` in constant time.

    Args:
        passphrase: candidate secret.
        salt: salt used for the stored key.
        expected: raw derived bytes, or the URL-safe base64 text from
            ``derive_key_encoded``.
        iterations: iteration count used for the stored key.

    Returns:
        True if the derived key matches.
    """
    if isinstance(expected, str):
        try:
            expected_raw = base64.urlsafe_b64decode(expected.encode("ascii"))
        except (ValueError, UnicodeEncodeError):
            return False
    else:
        expected_raw = bytes(expected)
    if not expected_raw:
        return False
    candidate = derive_key(passphrase, salt, iterations, len(expected_raw))
    return hmac.compare_digest(candidate, expected_raw)


METADATA_PBKDF2_SHA512_256 = create_kdf_metadata(
    name=ALGORITHM_ID,
    implementation_class="src.polygraphia.algorithms.kdf.PBKDF2SHA512_256KDF",
    digest_size=DIGEST_SIZE,
    description="PBKDF2 (RFC 8018) with HMAC-SHA-512/256.",
    test_vectors_source="RFC 8018 construction; cross-checked against hashlib HMAC",
)


__all__ = [
    "ALGORITHM_ID",
    "PBKDF2SHA512_256KDF",
    "generate_salt",
    "derive_key",
    "derive_key_with_config",
    "derive_key_encoded",
    "verify_passphrase",
    "METADATA_PBKDF2_SHA512_256",
]
