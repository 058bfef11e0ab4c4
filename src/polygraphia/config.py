# -*- coding: utf-8 -*-
"""
RU: Параметры вывода ключа (PBKDF2) с именованными профилями.
EN: Key-derivation parameter sets with named profiles.

Profiles are an explicit caller choice; ``derive_key`` itself has no default
iteration count.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final


class KdfProfile(str, Enum):
    """Predefined PBKDF2-HMAC-SHA512/256 parameter profiles."""

    # Unlocking a document on the user's own machine (default)
    INTERACTIVE = "interactive"

    # Long-lived keys, slower derivation accepted
    SENSITIVE = "sensitive"

    @classmethod
    def from_str(cls, value: str) -> "KdfProfile":
        try:
            return cls[value.upper()]
        except KeyError:
            raise ValueError(
                f"Unknown KDF profile: {value}. Allowed: {[p.value for p in cls]}"
            ) from None


@dataclass(frozen=True)
class KdfConfig:
    """
    PBKDF2 configuration parameters.

    Attributes:
        iterations: PBKDF2 iteration count (>= 1).
        output_length: bytes of key material to derive (>= 1).
        salt_length: salt length in bytes for ``generate_salt`` (8..64).

    Examples:
        >>> config = KdfConfig.from_profile(KdfProfile.INTERACTIVE)
        >>> config.iterations
        210000

        >>> KdfConfig(iterations=1_000, output_length=16).salt_length
        16
    """

    iterations: int
    output_length: int
    salt_length: int = 16

    def __post_init__(self) -> None:
        """Validate parameters."""
        if self.iterations < 1:
            raise ValueError("iterations must be >= 1")
        if self.output_length < 1:
            raise ValueError("output_length must be >= 1")
        if self.salt_length < 8 or self.salt_length > 64:
            raise ValueError("salt_length must be between 8 and 64 bytes")

    @staticmethod
    def from_profile(profile: KdfProfile) -> "KdfConfig":
        """
        Create configuration from a predefined profile.

        Examples:
            >>> KdfConfig.from_profile(KdfProfile.SENSITIVE).output_length
            64
        """
        return _PROFILE_PARAMS[KdfProfile(profile)]


_PROFILE_PARAMS: Final[dict[KdfProfile, KdfConfig]] = {
    # OWASP 2023 minimum for PBKDF2-HMAC-SHA512
    KdfProfile.INTERACTIVE: KdfConfig(iterations=210_000, output_length=32),
    KdfProfile.SENSITIVE: KdfConfig(
        iterations=600_000,
        output_length=64,
        salt_length=32,
    ),
}


__all__ = [
    "KdfProfile",
    "KdfConfig",
]
