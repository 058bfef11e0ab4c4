"""
Unit-тесты для реестра шифров.

Проверяет:
- Singleton паттерн
- Thread-safety (concurrent доступ)
- Регистрацию с валидацией Protocol
- Создание экземпляров и Query API
- Error handling
"""

import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Generator

import pytest

from src.polygraphia.algorithms.caesar import METADATA_CAESAR, Caesar
from src.polygraphia.core.exceptions import (
    AlgorithmNotRegisteredError,
    DuplicateRegistrationError,
    InvalidKeyError,
    RegistryError,
)
from src.polygraphia.core.metadata import CipherCategory, create_cipher_metadata
from src.polygraphia.core.registry import CipherRegistry, get_cipher_registry


# ==============================================================================
# MOCK CIPHERS
# ==============================================================================


class MockReverse:
    """Mock шифра: переворачивает строку."""

    metadata = create_cipher_metadata(
        name="reverse",
        category=CipherCategory.POLYGRAPHIC,
        implementation_class="tests.mocks.MockReverse",
    )

    @property
    def name(self) -> str:
        return "reverse"

    def encrypt(self, plaintext: str) -> str:
        return plaintext[::-1]

    def decrypt(self, ciphertext: str) -> str:
        return ciphertext[::-1]


class NotACipher:
    def encrypt(self, plaintext: str) -> str:
        return plaintext


# ==============================================================================
# FIXTURES
# ==============================================================================


@pytest.fixture(autouse=True)
def fresh_registry() -> Generator[None, None, None]:
    CipherRegistry.reset_instance()
    yield
    CipherRegistry.reset_instance()


@pytest.fixture
def registry() -> CipherRegistry:
    return CipherRegistry.get_instance()


# ==============================================================================
# TESTS
# ==============================================================================


class TestSingleton:
    def test_same_instance(self) -> None:
        assert CipherRegistry.get_instance() is CipherRegistry.get_instance()

    def test_direct_construction_forbidden(self, registry: CipherRegistry) -> None:
        with pytest.raises(RuntimeError, match="singleton"):
            CipherRegistry()

    def test_reset_gives_empty_registry(self, registry: CipherRegistry) -> None:
        registry.register_cipher("reverse", MockReverse, MockReverse.metadata)
        CipherRegistry.reset_instance()
        assert CipherRegistry.get_instance().list_ciphers() == []

    def test_concurrent_get_instance(self) -> None:
        with ThreadPoolExecutor(max_workers=8) as pool:
            instances = list(pool.map(lambda _: CipherRegistry.get_instance(), range(32)))
        assert all(i is instances[0] for i in instances)


class TestRegistration:
    def test_register_and_create(self, registry: CipherRegistry) -> None:
        registry.register_cipher("reverse", MockReverse, MockReverse.metadata, probe=MockReverse)
        cipher = registry.create("reverse")
        assert cipher.encrypt("abc") == "cba"
        assert registry.is_registered("reverse")

    def test_duplicate(self, registry: CipherRegistry) -> None:
        registry.register_cipher("reverse", MockReverse, MockReverse.metadata)
        with pytest.raises(DuplicateRegistrationError):
            registry.register_cipher("reverse", MockReverse, MockReverse.metadata)

    def test_empty_name(self, registry: CipherRegistry) -> None:
        with pytest.raises(ValueError, match="empty"):
            registry.register_cipher(" ", MockReverse, MockReverse.metadata)

    def test_name_must_match_metadata(self, registry: CipherRegistry) -> None:
        with pytest.raises(ValueError, match="does not match"):
            registry.register_cipher("mirror", MockReverse, MockReverse.metadata)

    def test_factory_not_callable(self, registry: CipherRegistry) -> None:
        with pytest.raises(TypeError, match="callable"):
            registry.register_cipher("reverse", "MockReverse", MockReverse.metadata)  # type: ignore[arg-type]

    def test_metadata_type(self, registry: CipherRegistry) -> None:
        with pytest.raises(TypeError, match="CipherMetadata"):
            registry.register_cipher("reverse", MockReverse, {"name": "reverse"})  # type: ignore[arg-type]

    def test_probe_must_satisfy_protocol(self, registry: CipherRegistry) -> None:
        with pytest.raises(RegistryError, match="does not implement"):
            registry.register_cipher(
                "reverse", NotACipher, MockReverse.metadata, probe=NotACipher
            )
        assert not registry.is_registered("reverse")

    def test_unregister(self, registry: CipherRegistry) -> None:
        registry.register_cipher("reverse", MockReverse, MockReverse.metadata)
        registry.unregister("reverse")
        assert not registry.is_registered("reverse")
        with pytest.raises(AlgorithmNotRegisteredError):
            registry.unregister("reverse")

    def test_concurrent_registration(self, registry: CipherRegistry) -> None:
        errors = []
        barrier = threading.Barrier(4)

        def register() -> None:
            barrier.wait()
            try:
                registry.register_cipher("reverse", MockReverse, MockReverse.metadata)
            except DuplicateRegistrationError as exc:
                errors.append(exc)

        threads = [threading.Thread(target=register) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(errors) == 3
        assert registry.list_ciphers() == ["reverse"]


class TestQueries:
    def test_unknown_name(self, registry: CipherRegistry) -> None:
        registry.register_cipher("caesar", Caesar, METADATA_CAESAR)
        with pytest.raises(AlgorithmNotRegisteredError) as exc_info:
            registry.create("vigenere")
        assert exc_info.value.available == ["caesar"]
        with pytest.raises(AlgorithmNotRegisteredError):
            registry.get_metadata("vigenere")

    def test_create_passes_arguments(self, registry: CipherRegistry) -> None:
        registry.register_cipher("caesar", Caesar, METADATA_CAESAR)
        assert registry.create("caesar", 3).encrypt("hello") == "khoor"
        assert registry.create("caesar", shift=1).shift == 1

    def test_create_propagates_key_errors(self, registry: CipherRegistry) -> None:
        registry.register_cipher("caesar", Caesar, METADATA_CAESAR)
        with pytest.raises(InvalidKeyError):
            registry.create("caesar", "three")

    def test_list_by_category(self, registry: CipherRegistry) -> None:
        registry.register_cipher("caesar", Caesar, METADATA_CAESAR)
        registry.register_cipher("reverse", MockReverse, MockReverse.metadata)
        assert registry.list_by_category(CipherCategory.MONOALPHABETIC) == ["caesar"]
        assert registry.list_by_category(CipherCategory.POLYGRAPHIC) == ["reverse"]
        assert registry.list_by_category(CipherCategory.KDF) == []


class TestBuiltinRegistry:
    def test_builtin_names(self) -> None:
        assert get_cipher_registry().list_ciphers() == ["affine", "caesar", "hill", "playfair"]

    def test_idempotent(self) -> None:
        first = get_cipher_registry()
        assert get_cipher_registry() is first
        assert len(first.list_ciphers()) == 4

    @pytest.mark.parametrize(
        "name,args,plaintext,expected",
        [
            ("caesar", (3,), "hello", "khoor"),
            ("affine", (5, 8), "hello", "rclla"),
            ("hill", ([[6, 24, 1], [13, 16, 10], [20, 17, 15]],), "ACT", "POH"),
            ("playfair", ("secret",), "instruments", "HOESTQITUSCV"),
        ],
    )
    def test_create_builtin(self, name: str, args: tuple, plaintext: str, expected: str) -> None:
        cipher = get_cipher_registry().create(name, *args)
        assert cipher.name == name
        assert cipher.encrypt(plaintext) == expected

    def test_metadata(self) -> None:
        assert get_cipher_registry().get_metadata("playfair").block_size == 2

    def test_keeps_custom_registrations(self) -> None:
        registry = CipherRegistry.get_instance()
        registry.register_cipher("reverse", MockReverse, MockReverse.metadata)
        assert "reverse" in get_cipher_registry().list_ciphers()
