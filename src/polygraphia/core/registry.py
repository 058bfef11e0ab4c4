"""
Реестр шифров Polygraphia.

Thread-safe Singleton реестр, связывающий имя шифра с фабрикой (классом) и
метаданными. Обеспечивает:
- Регистрацию шифров с проверкой CipherProtocol
- Фабричный метод create(name, *args, **kwargs)
- Query API (список, категория, метаданные)

Example:
    >>> from src.polygraphia.core.registry import get_cipher_registry
    >>> registry = get_cipher_registry()
    >>> cipher = registry.create("affine", 5, 8)
    >>> cipher.encrypt("hello")
    'rclla'

Thread Safety:
    Все публичные методы защищены RLock.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from src import get_logger
from src.polygraphia.core.exceptions import (
    AlgorithmNotRegisteredError,
    DuplicateRegistrationError,
    RegistryError,
)
from src.polygraphia.core.metadata import CipherCategory, CipherMetadata

logger = get_logger(__name__)


# ==============================================================================
# DATACLASSES
# ==============================================================================


@dataclass(frozen=True)
class RegistryEntry:
    """
    Запись в реестре.

    Attributes:
        name: Имя шифра
        factory: Callable, принимающий ключевые параметры шифра
        metadata: Метаданные шифра
    """

    name: str
    factory: Callable[..., Any]
    metadata: CipherMetadata


# ==============================================================================
# MAIN CLASS: CIPHER REGISTRY
# ==============================================================================


class CipherRegistry:
    """
    Thread-safe реестр шифров (Singleton).

    Example:
        >>> registry = CipherRegistry.get_instance()
        >>> registry.register_cipher(
        ...     "caesar", Caesar, METADATA_CAESAR, probe=lambda: Caesar(3)
        ... )
        >>> registry.create("caesar", 3).encrypt("abc")
        'def'
    """

    _instance: Optional[CipherRegistry] = None
    _lock: threading.RLock = threading.RLock()

    def __init__(self) -> None:
        """
        Приватный конструктор (используйте get_instance()).

        Raises:
            RuntimeError: Если экземпляр уже создан
        """
        if CipherRegistry._instance is not None:
            raise RuntimeError(
                "CipherRegistry is a singleton. Use CipherRegistry.get_instance()"
            )
        self._registry: Dict[str, RegistryEntry] = {}
        logger.debug("CipherRegistry initialized")

    @classmethod
    def get_instance(cls) -> CipherRegistry:
        """Singleton instance (double-checked locking)."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Сбросить singleton (только для тестов)."""
        with cls._lock:
            cls._instance = None
            logger.debug("CipherRegistry instance reset")

    def register_cipher(
        self,
        name: str,
        factory: Callable[..., Any],
        metadata: CipherMetadata,
        *,
        probe: Optional[Callable[[], Any]] = None,
    ) -> None:
        """
        Зарегистрировать шифр.

        Args:
            name: Уникальное имя (совпадает с metadata.name)
            factory: Класс шифра или фабрика, принимающая ключ
            metadata: Метаданные шифра
            probe: Фабрика тестового экземпляра без аргументов; если задана,
                экземпляр проверяется на соответствие metadata.protocol_class

        Raises:
            ValueError: Пустое имя или имя не совпадает с metadata.name
            TypeError: factory не callable или metadata неверного типа
            DuplicateRegistrationError: Имя уже занято
            RegistryError: probe-экземпляр не реализует Protocol
        """
        with self._lock:
            if not name or not name.strip():
                raise ValueError("Cipher name must not be empty")
            if not callable(factory):
                raise TypeError(
                    f"factory must be callable, got {type(factory).__name__}"
                )
            if not isinstance(metadata, CipherMetadata):
                raise TypeError(
                    f"metadata must be CipherMetadata, got {type(metadata).__name__}"
                )
            if metadata.name != name:
                raise ValueError(
                    f"Name {name!r} does not match metadata name {metadata.name!r}"
                )
            if name in self._registry:
                raise DuplicateRegistrationError(name)

            if probe is not None:
                self._validate_protocol(probe, metadata)

            self._registry[name] = RegistryEntry(
                name=name, factory=factory, metadata=metadata
            )
            logger.debug(
                "Registered cipher: %s (category=%s)", name, metadata.category.value
            )

    def _validate_protocol(
        self, probe: Callable[[], Any], metadata: CipherMetadata
    ) -> None:
        instance = probe()
        if not isinstance(instance, metadata.protocol_class):
            raise RegistryError(
                f"{type(instance).__name__} does not implement "
                f"{metadata.protocol_class.__name__}",
                algorithm=metadata.name,
            )

    def _entry(self, name: str) -> RegistryEntry:
        try:
            return self._registry[name]
        except KeyError:
            raise AlgorithmNotRegisteredError(
                name, sorted(self._registry.keys())
            ) from None

    def create(self, name: str, *args: Any, **kwargs: Any) -> Any:
        """
        Создать шифр по имени; аргументы передаются фабрике.

        Raises:
            AlgorithmNotRegisteredError: Имя не зарегистрировано
            InvalidKeyError: Ключ отклонён конструктором шифра
        """
        with self._lock:
            entry = self._entry(name)
        instance = entry.factory(*args, **kwargs)
        logger.debug("Created instance of %s", name)
        return instance

    def get_metadata(self, name: str) -> CipherMetadata:
        """
        Raises:
            AlgorithmNotRegisteredError: Имя не зарегистрировано
        """
        with self._lock:
            return self._entry(name).metadata

    def list_ciphers(self) -> List[str]:
        """Имена зарегистрированных шифров (sorted)."""
        with self._lock:
            return sorted(self._registry.keys())

    def list_by_category(self, category: CipherCategory) -> List[str]:
        with self._lock:
            return sorted(
                name
                for name, entry in self._registry.items()
                if entry.metadata.category == category
            )

    def is_registered(self, name: str) -> bool:
        with self._lock:
            return name in self._registry

    def unregister(self, name: str) -> None:
        """
        Удалить шифр из реестра.

        Raises:
            AlgorithmNotRegisteredError: Имя не зарегистрировано
        """
        with self._lock:
            self._entry(name)
            del self._registry[name]
            logger.debug("Unregistered cipher: %s", name)


# ==============================================================================
# REGISTRATION FUNCTION
# ==============================================================================


def register_builtin_ciphers(registry: CipherRegistry) -> None:
    """
    Зарегистрировать Caesar, Affine, Hill и Playfair (пропуская уже
    зарегистрированные имена). Импорты ленивые, чтобы избежать циклов.
    """
    from src.polygraphia.algorithms.affine import METADATA_AFFINE, Affine
    from src.polygraphia.algorithms.caesar import METADATA_CAESAR, Caesar
    from src.polygraphia.algorithms.hill import METADATA_HILL, Hill
    from src.polygraphia.algorithms.playfair import METADATA_PLAYFAIR, Playfair

    builtins = (
        (Caesar, METADATA_CAESAR, lambda: Caesar(3)),
        (Affine, METADATA_AFFINE, lambda: Affine(5, 8)),
        (Hill, METADATA_HILL, lambda: Hill([[3, 3], [2, 5]])),
        (Playfair, METADATA_PLAYFAIR, lambda: Playfair("")),
    )
    with registry._lock:
        for factory, metadata, probe in builtins:
            if not registry.is_registered(metadata.name):
                registry.register_cipher(metadata.name, factory, metadata, probe=probe)


def get_cipher_registry() -> CipherRegistry:
    """
    Singleton реестр с зарегистрированными встроенными шифрами.

    Example:
        >>> get_cipher_registry().list_ciphers()
        ['affine', 'caesar', 'hill', 'playfair']
    """
    registry = CipherRegistry.get_instance()
    register_builtin_ciphers(registry)
    return registry


__all__: list[str] = [
    "CipherRegistry",
    "RegistryEntry",
    "register_builtin_ciphers",
    "get_cipher_registry",
]
