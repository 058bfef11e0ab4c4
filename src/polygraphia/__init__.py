"""
Модуль объединяет классические шифры и вывод ключа в единую точку импорта.
EN: Top-level API of the classical cipher engine: Caesar, Affine, Hill and
Playfair behind one encrypt/decrypt contract, plus PBKDF2-HMAC-SHA512/256.
"""

from src.polygraphia.algorithms.affine import Affine
from src.polygraphia.algorithms.caesar import Caesar
from src.polygraphia.algorithms.hill import Hill
from src.polygraphia.algorithms.kdf import (
    PBKDF2SHA512_256KDF,
    derive_key,
    derive_key_encoded,
    derive_key_with_config,
    generate_salt,
    verify_passphrase,
)
from src.polygraphia.algorithms.playfair import Playfair
from src.polygraphia.config import KdfConfig, KdfProfile
from src.polygraphia.core.exceptions import (
    AlgorithmNotRegisteredError,
    CipherError,
    DuplicateRegistrationError,
    InvalidInputError,
    InvalidKeyError,
    KDFParameterError,
    KeyDerivationError,
    PolygraphiaError,
    RegistryError,
)
from src.polygraphia.core.protocols import CipherProtocol, KDFProtocol
from src.polygraphia.core.registry import CipherRegistry, get_cipher_registry
from src.polygraphia.utils.text import TextMode

__all__ = [
    # Ciphers
    "Caesar",
    "Affine",
    "Hill",
    "Playfair",
    "TextMode",
    "CipherProtocol",
    # KDF
    "derive_key",
    "derive_key_encoded",
    "derive_key_with_config",
    "verify_passphrase",
    "generate_salt",
    "PBKDF2SHA512_256KDF",
    "KDFProtocol",
    "KdfConfig",
    "KdfProfile",
    # Registry
    "CipherRegistry",
    "get_cipher_registry",
    # Errors
    "PolygraphiaError",
    "InvalidKeyError",
    "CipherError",
    "InvalidInputError",
    "KeyDerivationError",
    "KDFParameterError",
    "RegistryError",
    "AlgorithmNotRegisteredError",
    "DuplicateRegistrationError",
]
