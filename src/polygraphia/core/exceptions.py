"""
Централизованные исключения Polygraphia.

Иерархия типизированных исключений для шифров, вывода ключей и реестра.
Ключевые ошибки возникают только при конструировании шифра; ошибки
вызова encrypt/decrypt относятся к CipherError.

Example:
    >>> from src.polygraphia.core.exceptions import PolygraphiaError
    >>> try:
    ...     Affine(2, 3)
    ... except PolygraphiaError as e:
    ...     print(e.algorithm)
    affine

Иерархия:
    PolygraphiaError (базовое)
    ├── InvalidKeyError
    ├── CipherError
    │   └── InvalidInputError
    ├── KeyDerivationError
    │   └── KDFParameterError
    └── RegistryError
        ├── AlgorithmNotRegisteredError
        └── DuplicateRegistrationError

Security Note:
    Сообщения НЕ содержат парольных фраз, соли и выведенных байтов.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

__all__: list[str] = [
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


# ==============================================================================
# BASE EXCEPTION
# ==============================================================================


class PolygraphiaError(Exception):
    """
    Базовое исключение для всех ошибок библиотеки.

    Attributes:
        message: Человекочитаемое сообщение об ошибке
        algorithm: Имя алгоритма, вызвавшего ошибку (опционально)
        context: Дополнительный контекст для отладки (опционально)

    Example:
        >>> raise PolygraphiaError(
        ...     "Operation failed",
        ...     algorithm="hill",
        ...     context={"size": 2},
        ... )
    """

    def __init__(
        self,
        message: str,
        *,
        algorithm: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.algorithm = algorithm
        self.context = context or {}

    def __str__(self) -> str:
        """
        Строковое представление исключения.

        Example:
            >>> str(error)
            'InvalidKeyError: Multiplier 2 is not coprime with 26 [algorithm=affine]'
        """
        parts = [self.__class__.__name__, ": ", self.message]

        if self.algorithm:
            parts.append(f" [algorithm={self.algorithm}]")

        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            parts.append(f" ({ctx_str})")

        return "".join(parts)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"algorithm={self.algorithm!r}, "
            f"context={self.context!r})"
        )


# ==============================================================================
# KEY ERRORS
# ==============================================================================


class InvalidKeyError(PolygraphiaError):
    """
    Некорректный ключ шифра.

    Raises когда (только при конструировании):
    - Affine: множитель `a` не взаимно прост с 26
    - Hill: определитель матрицы mod 26 не взаимно прост с 26,
      матрица не квадратная или ключевое слово не квадратной длины
    - Playfair: решётка не содержит 25 различных букв
    - Недостаточно ключевого материала для from_key_material()

    Attributes:
        reason: Краткая причина (без ключевого материала)

    Example:
        >>> Affine(13, 0)
        InvalidKeyError: Multiplier 13 is not coprime with 26 [algorithm=affine] (gcd=13)
    """

    def __init__(
        self,
        message: str,
        *,
        algorithm: Optional[str] = None,
        reason: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, algorithm=algorithm, context=context)
        self.reason = reason or message


# ==============================================================================
# CIPHER (CALL-TIME) ERRORS
# ==============================================================================


class CipherError(PolygraphiaError):
    """
    Ошибка вызова encrypt/decrypt.

    Для четырёх шифров с уже проверенным ключом операции тотальны;
    канал существует для ошибок входных данных и будущих алгоритмов.
    """

    pass


class InvalidInputError(CipherError):
    """
    Некорректный вход encrypt/decrypt.

    Example:
        >>> Caesar(3).encrypt(b"bytes")
        InvalidInputError: Text must be str, got bytes [algorithm=caesar]
    """

    pass


# ==============================================================================
# KEY DERIVATION ERRORS
# ==============================================================================


class KeyDerivationError(PolygraphiaError):
    """
    Ошибка вывода ключа (сбой PBKDF2 бэкенда).

    Example:
        >>> derive_key(...)
        KeyDerivationError: PBKDF2-HMAC-SHA512/256 derivation failed
    """

    pass


class KDFParameterError(KeyDerivationError):
    """
    Некорректный параметр KDF.

    Attributes:
        parameter_name: Имя параметра
        reason: Причина ошибки

    Example:
        >>> derive_key(b"pw", b"salt", 0, 32)
        KDFParameterError: Invalid parameter 'iterations': must be >= 1
    """

    def __init__(self, parameter_name: str, reason: str) -> None:
        message = f"Invalid parameter '{parameter_name}': {reason}"
        super().__init__(
            message,
            algorithm="pbkdf2-hmac-sha512/256",
            context={"parameter": parameter_name},
        )
        self.parameter_name = parameter_name
        self.reason = reason


# ==============================================================================
# REGISTRY ERRORS
# ==============================================================================


class RegistryError(PolygraphiaError):
    """Ошибки реестра шифров."""

    pass


class AlgorithmNotRegisteredError(RegistryError):
    """
    Шифр не зарегистрирован.

    Attributes:
        algorithm_name: Имя запрошенного шифра
        available: Список зарегистрированных имён

    Example:
        >>> registry.create("vigenere")
        AlgorithmNotRegisteredError: Cipher 'vigenere' is not registered. Available: affine, caesar
    """

    def __init__(
        self,
        algorithm_name: str,
        available: Optional[List[str]] = None,
    ) -> None:
        message = f"Cipher '{algorithm_name}' is not registered"
        if available:
            message += f". Available: {', '.join(available)}"

        super().__init__(
            message,
            algorithm=algorithm_name,
            context={"available_count": len(available) if available else 0},
        )
        self.algorithm_name = algorithm_name
        self.available = available or []


class DuplicateRegistrationError(RegistryError):
    """
    Попытка повторной регистрации шифра под тем же именем.

    Attributes:
        algorithm_name: Имя шифра
    """

    def __init__(self, algorithm_name: str) -> None:
        message = f"Cipher '{algorithm_name}' is already registered"
        super().__init__(message, algorithm=algorithm_name)
        self.algorithm_name = algorithm_name
