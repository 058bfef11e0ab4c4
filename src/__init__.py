"""
Пакет Polygraphia
=================

Библиотека классических шифров и вывода ключей из парольных фраз.

Этот пакет предоставляет:
    - Шифры Цезаря, аффинный, Хилла и Плейфера
    - Два режима обработки текста (сохранение всех символов / только буквы)
    - PBKDF2-HMAC-SHA512/256 для получения ключевого материала из пароля
    - Реестр шифров для создания экземпляров по имени

EN: Classical cipher engine (Caesar, Affine, Hill, Playfair) plus
PBKDF2-HMAC-SHA512/256 key derivation. This module holds version metadata and
the package-wide logging setup.

Пример базового использования:
    >>> from src.polygraphia import Caesar, derive_key
    >>> from src import get_logger
    >>>
    >>> logger = get_logger(__name__)
    >>> cipher = Caesar(3)
    >>> cipher.encrypt("Hello")
    'Khoor'
    >>> material = derive_key(b"passphrase", b"salt-1234", 1_000, 16)
    >>> Caesar.from_key_material(material).decrypt(
    ...     Caesar.from_key_material(material).encrypt("attack at dawn")
    ... )
    'attack at dawn'

Уровень логирования задаётся переменной окружения POLYGRAPHIA_LOG_LEVEL.

Версия: 0.1.0
Лицензия: MIT
"""

import logging
import os
import sys

# =============================================================================
# МЕТАДАННЫЕ ВЕРСИИ
# =============================================================================

__version__ = "0.1.0"
__author__ = "Polygraphia Development Team"
__description__ = "Classical cipher engine with PBKDF2-HMAC-SHA512/256 key derivation"
__license__ = "MIT"
__python_requires__ = ">=3.10"

VERSION_MAJOR = 0
VERSION_MINOR = 1
VERSION_PATCH = 0

_ROOT_LOGGER_NAME = "polygraphia"
_LOG_LEVEL_ENV = "POLYGRAPHIA_LOG_LEVEL"
_CONSOLE_HANDLER_NAME = "polygraphia.console"

# =============================================================================
# ПРОВЕРКА ВЕРСИИ PYTHON
# =============================================================================

if sys.version_info < (3, 10):
    raise RuntimeError(
        f"Polygraphia требует Python 3.10 или выше. "
        f"Текущая версия: {sys.version_info.major}."
        f"{sys.version_info.minor}.{sys.version_info.micro}"
    )

# =============================================================================
# КОНФИГУРАЦИЯ ЛОГИРОВАНИЯ
# =============================================================================


def setup_logging() -> None:
    """
    Инициализировать общепакетную конфигурацию логирования.

    Настраивает логгер пакета с консольным обработчиком (stderr) и
    структурированным форматом. Уровень берётся из переменной окружения
    POLYGRAPHIA_LOG_LEVEL (DEBUG, INFO, WARNING, ERROR, CRITICAL),
    по умолчанию WARNING.

    Функция идемпотентна: повторные вызовы не добавляют обработчики.
    Проверяется только именованный обработчик пакета; посторонние
    обработчики на логгере не учитываются.
    """
    log_level_str = os.environ.get(_LOG_LEVEL_ENV, "WARNING").upper()

    log_level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    log_level = log_level_map.get(log_level_str, logging.WARNING)

    root_logger = logging.getLogger(_ROOT_LOGGER_NAME)
    if any(h.get_name() == _CONSOLE_HANDLER_NAME for h in root_logger.handlers):
        return

    root_logger.setLevel(log_level)

    formatter = logging.Formatter(
        fmt="[%(asctime)s] %(levelname)-8s [%(name)s.%(funcName)s:%(lineno)d] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.set_name(_CONSOLE_HANDLER_NAME)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    root_logger.propagate = False


def get_logger(module_name: str) -> logging.Logger:
    """
    Получить логгер в пространстве имён пакета.

    Логгеры именуются как 'polygraphia.<module_name>' и наследуют
    конфигурацию, установленную setup_logging().

    Args:
        module_name: Имя модуля, обычно `__name__`.

    Returns:
        Экземпляр logging.Logger.

    Example:
        >>> logger = get_logger("src.polygraphia.algorithms.hill")
        >>> logger.name
        'polygraphia.src.polygraphia.algorithms.hill'
    """
    if module_name.startswith(_ROOT_LOGGER_NAME):
        return logging.getLogger(module_name)
    if module_name == "__main__":
        return logging.getLogger(f"{_ROOT_LOGGER_NAME}.main")
    clean_name = module_name.lstrip(".")
    return logging.getLogger(f"{_ROOT_LOGGER_NAME}.{clean_name}")


__all__ = [
    "__version__",
    "__author__",
    "__description__",
    "__license__",
    "__python_requires__",
    "VERSION_MAJOR",
    "VERSION_MINOR",
    "VERSION_PATCH",
    "setup_logging",
    "get_logger",
]

# Инициализация логирования при импорте пакета
setup_logging()
