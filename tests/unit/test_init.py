"""
Модульные тесты для src/__init__.py
Тестирует метаданные версии, конфигурацию логирования и публичный API.
"""

import logging
import re
import sys
from typing import Generator

import pytest

import src


class TestVersionMetadata:
    """Тестирование метаданных версии и констант."""

    def test_version_format(self) -> None:
        assert re.match(r"^\d+\.\d+\.\d+$", src.__version__)

    def test_version_components(self) -> None:
        expected = f"{src.VERSION_MAJOR}.{src.VERSION_MINOR}.{src.VERSION_PATCH}"
        assert src.__version__ == expected

    def test_metadata_attributes(self) -> None:
        for attr in ("__author__", "__description__", "__license__", "__python_requires__"):
            value = getattr(src, attr)
            assert isinstance(value, str) and value, f"{attr} должен быть непустой строкой"


class TestPublicAPI:
    def test_all_exports_exist(self) -> None:
        for name in src.__all__:
            assert hasattr(src, name), f"Имя '{name}' из __all__ не существует в модуле"


class TestGetLogger:
    def test_namespaced(self) -> None:
        assert src.get_logger("src.polygraphia.algorithms.hill").name == (
            "polygraphia.src.polygraphia.algorithms.hill"
        )

    def test_already_namespaced(self) -> None:
        assert src.get_logger("polygraphia.custom").name == "polygraphia.custom"

    def test_main(self) -> None:
        assert src.get_logger("__main__").name == "polygraphia.main"

    def test_leading_dots_stripped(self) -> None:
        assert src.get_logger(".relative").name == "polygraphia.relative"


class TestSetupLogging:
    HANDLER_NAME = "polygraphia.console"

    @pytest.fixture
    def clean_root(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> Generator[logging.Logger, None, None]:
        """Логгер пакета без собственного обработчика; чужие обработчики остаются."""
        root = logging.getLogger("polygraphia")
        saved_level = root.level
        monkeypatch.setattr(
            root,
            "handlers",
            [h for h in root.handlers if h.get_name() != self.HANDLER_NAME],
        )
        try:
            yield root
        finally:
            root.setLevel(saved_level)

    def own_handlers(self, logger: logging.Logger) -> list:
        return [h for h in logger.handlers if h.get_name() == self.HANDLER_NAME]

    def test_default_level_warning(
        self, clean_root: logging.Logger, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("POLYGRAPHIA_LOG_LEVEL", raising=False)
        src.setup_logging()
        assert clean_root.level == logging.WARNING
        handlers = self.own_handlers(clean_root)
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.StreamHandler)
        assert handlers[0].stream is sys.stderr
        assert clean_root.propagate is False

    def test_level_from_env(
        self, clean_root: logging.Logger, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("POLYGRAPHIA_LOG_LEVEL", "debug")
        src.setup_logging()
        assert clean_root.level == logging.DEBUG

    def test_unknown_level_falls_back(
        self, clean_root: logging.Logger, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("POLYGRAPHIA_LOG_LEVEL", "verbose")
        src.setup_logging()
        assert clean_root.level == logging.WARNING

    def test_idempotent(self, clean_root: logging.Logger) -> None:
        src.setup_logging()
        src.setup_logging()
        assert len(self.own_handlers(clean_root)) == 1

    def test_foreign_handler_does_not_block_setup(
        self, clean_root: logging.Logger, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("POLYGRAPHIA_LOG_LEVEL", raising=False)
        foreign = logging.NullHandler()
        clean_root.handlers.append(foreign)

        src.setup_logging()

        assert foreign in clean_root.handlers
        assert len(self.own_handlers(clean_root)) == 1
