"""
Метаданные шифров и KDF.

Определяет:
- CipherCategory: категория алгоритма (моноалфавитный, полиграфический, KDF)
- CipherMetadata: immutable dataclass с характеристиками алгоритма
- Factory functions для создания метаданных

Example:
    >>> from src.polygraphia.core.metadata import create_cipher_metadata, CipherCategory
    >>> meta = create_cipher_metadata(
    ...     name="caesar",
    ...     category=CipherCategory.MONOALPHABETIC,
    ...     implementation_class="src.polygraphia.algorithms.caesar.Caesar",
    ...     block_size=1,
    ... )
    >>> meta.honors_text_mode
    True
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Type

from src.polygraphia.core.protocols import CipherProtocol, KDFProtocol


# ==============================================================================
# ENUM: CIPHER CATEGORY
# ==============================================================================


class CipherCategory(str, Enum):
    """
    Категория алгоритма. Наследует str для корректной JSON сериализации.

    Example:
        >>> CipherCategory.POLYGRAPHIC.label()
        'Polygraphic substitution'
    """

    MONOALPHABETIC = "monoalphabetic"
    POLYGRAPHIC = "polygraphic"
    KDF = "kdf"

    def label(self) -> str:
        labels = {
            CipherCategory.MONOALPHABETIC: "Monoalphabetic substitution",
            CipherCategory.POLYGRAPHIC: "Polygraphic substitution",
            CipherCategory.KDF: "Key derivation",
        }
        return labels[self]

    @classmethod
    def from_str(cls, value: str) -> CipherCategory:
        """
        Парсинг из строки (case-insensitive).

        Raises:
            ValueError: Некорректное значение
        """
        try:
            return cls[value.upper()]
        except KeyError:
            raise ValueError(
                f"Unknown cipher category: {value}. "
                f"Allowed: {[c.value for c in cls]}"
            ) from None


# ==============================================================================
# DATACLASS: CIPHER METADATA
# ==============================================================================


@dataclass(frozen=True)
class CipherMetadata:
    """
    Метаданные алгоритма.

    Attributes:
        name: Уникальное имя (ключ в реестре), например "hill"
        category: Категория алгоритма
        protocol_class: Protocol класс для проверки соответствия
        implementation_class: Полное имя класса
        block_size: Число букв в блоке (None если зависит от ключа)
        honors_text_mode: Учитывает ли шифр TextMode
        key_description: Описание формы ключа
        description: Краткое описание
        test_vectors_source: Источник тестовых векторов
        extra: Дополнительные параметры
    """

    name: str
    category: CipherCategory
    protocol_class: Type[object]
    implementation_class: str
    block_size: Optional[int] = None
    honors_text_mode: bool = True
    key_description: str = ""
    description: str = ""
    test_vectors_source: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """
        Валидация метаданных после инициализации.

        Raises:
            ValueError: Некорректные значения полей
        """
        if not self.name or not self.name.strip():
            raise ValueError("name must not be empty")
        if self.name != self.name.lower():
            raise ValueError(f"name must be lowercase, got {self.name!r}")

        if self.block_size is not None and self.block_size <= 0:
            raise ValueError(f"block_size must be > 0, got {self.block_size}")

        if self.category == CipherCategory.KDF and self.block_size is not None:
            raise ValueError(f"KDF {self.name} cannot have block_size")

    @property
    def is_cipher(self) -> bool:
        return self.category != CipherCategory.KDF

    def to_dict(self) -> Dict[str, Any]:
        """
        Сериализация в словарь (protocol_class не сериализуется).

        Example:
            >>> meta.to_dict()["category"]
            'monoalphabetic'
        """
        return {
            "name": self.name,
            "category": self.category.value,
            "implementation_class": self.implementation_class,
            "block_size": self.block_size,
            "honors_text_mode": self.honors_text_mode,
            "key_description": self.key_description,
            "description": self.description,
            "test_vectors_source": self.test_vectors_source,
            "extra": dict(self.extra),
        }


# ==============================================================================
# FACTORY FUNCTIONS
# ==============================================================================


def create_cipher_metadata(
    name: str,
    category: CipherCategory,
    implementation_class: str,
    *,
    block_size: Optional[int] = None,
    honors_text_mode: bool = True,
    key_description: str = "",
    description: str = "",
    test_vectors_source: Optional[str] = None,
    extra: Optional[Dict[str, Any]] = None,
) -> CipherMetadata:
    """Factory для метаданных шифра (protocol_class = CipherProtocol)."""
    return CipherMetadata(
        name=name,
        category=category,
        protocol_class=CipherProtocol,
        implementation_class=implementation_class,
        block_size=block_size,
        honors_text_mode=honors_text_mode,
        key_description=key_description,
        description=description,
        test_vectors_source=test_vectors_source,
        extra=extra or {},
    )


def create_kdf_metadata(
    name: str,
    implementation_class: str,
    *,
    digest_size: int,
    description: str = "",
    test_vectors_source: Optional[str] = None,
    extra: Optional[Dict[str, Any]] = None,
) -> CipherMetadata:
    """Factory для метаданных KDF (protocol_class = KDFProtocol)."""
    extra = dict(extra or {})
    extra["digest_size"] = digest_size
    return CipherMetadata(
        name=name,
        category=CipherCategory.KDF,
        protocol_class=KDFProtocol,
        implementation_class=implementation_class,
        honors_text_mode=False,
        key_description="passphrase + caller-supplied salt and iteration count",
        description=description,
        test_vectors_source=test_vectors_source,
        extra=extra,
    )


__all__: list[str] = [
    "CipherCategory",
    "CipherMetadata",
    "create_cipher_metadata",
    "create_kdf_metadata",
]
