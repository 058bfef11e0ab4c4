"""
Тесты для PBKDF2-HMAC-SHA512/256.

Покрытие:
- Фиксированные векторы (OpenSSL)
- Сверка с независимой реализацией PBKDF2 (hmac + hashlib)
- Детерминизм и чувствительность к параметрам
- Валидация параметров
- Кодирование и проверка парольной фразы
- Связка KDF -> from_key_material
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import logging

import pytest

from src.polygraphia.algorithms.affine import Affine
from src.polygraphia.algorithms.caesar import Caesar
from src.polygraphia.algorithms.hill import Hill
from src.polygraphia.algorithms.kdf import (
    ALGORITHM_ID,
    PBKDF2SHA512_256KDF,
    derive_key,
    derive_key_encoded,
    derive_key_with_config,
    generate_salt,
    verify_passphrase,
)
from src.polygraphia.algorithms.playfair import Playfair
from src.polygraphia.config import KdfConfig
from src.polygraphia.core.exceptions import KDFParameterError, KeyDerivationError

requires_sha512_256 = pytest.mark.skipif(
    "sha512_256" not in hashlib.algorithms_available,
    reason="hashlib lacks SHA-512/256",
)

# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture
def passphrase() -> bytes:
    return b"correct horse battery staple"


@pytest.fixture
def salt() -> bytes:
    return b"polygraphia-salt"


def _reference_pbkdf2(password: bytes, salt: bytes, iterations: int, length: int) -> bytes:
    """RFC 8018 section 5.2, written directly against hmac."""
    out = b""
    block = 1
    while len(out) < length:
        u = hmac.new(password, salt + block.to_bytes(4, "big"), "sha512_256").digest()
        acc = bytearray(u)
        for _ in range(iterations - 1):
            u = hmac.new(password, u, "sha512_256").digest()
            acc = bytearray(a ^ b for a, b in zip(acc, u))
        out += bytes(acc)
        block += 1
    return out[:length]


# ============================================================================
# CORRECTNESS
# ============================================================================


class TestKnownVectors:
    """Fixed vectors, computed with `openssl kdf ... -kdfopt digest:SHA512-256 PBKDF2`."""

    VECTORS = [
        (
            b"password",
            b"salt",
            1,
            "4b6a63117d3ec0032624616082c1c1912f56fa5f0c1f94574d515e20e5ddd74a",
        ),
        (
            b"password",
            b"salt",
            2,
            "fcfd108c99cc888ec0af9f184885aff5f02d19a956afad9ccea4d56a482b851b"
            "ec1af5635d574bc1bf1a5c16e252c0edc6b0a361fe92dc8c4998936f24f27894",
        ),
        (
            b"password",
            b"salt",
            4096,
            "f2fbe5f8ec3618bb145279a8c6a8dfa476c282a3ed53d8c257d51ce021d3877d"
            "3b50c84a7f9158d4654e64deb9b9a85babebcfd714dda6c05da4584d22672423",
        ),
        (
            b"passwordPASSWORDpassword",
            b"saltSALTsaltSALTsaltSALTsaltSALTsalt",
            4096,
            "31cf94e3d8e36aa18d40ad92654ab80f500ed7fb575a2215547db6f82dd227ed"
            "0f41215e8f9bb976",
        ),
    ]

    @pytest.mark.parametrize("password,salt_value,iterations,expected_hex", VECTORS)
    def test_vector(
        self, password: bytes, salt_value: bytes, iterations: int, expected_hex: str
    ) -> None:
        expected = bytes.fromhex(expected_hex)
        assert derive_key(password, salt_value, iterations, len(expected)) == expected

    def test_str_passphrase_is_utf8(self) -> None:
        assert derive_key("password", b"salt", 1, 32) == bytes.fromhex(self.VECTORS[0][3])

    def test_shorter_output_is_prefix(self) -> None:
        full = bytes.fromhex(self.VECTORS[0][3])
        assert derive_key(b"password", b"salt", 1, 10) == full[:10]


@requires_sha512_256
class TestAgainstReference:
    @pytest.mark.parametrize("iterations", [1, 2, 50])
    @pytest.mark.parametrize("length", [1, 16, 32, 33, 100])
    def test_matches_reference(
        self, passphrase: bytes, salt: bytes, iterations: int, length: int
    ) -> None:
        expected = _reference_pbkdf2(passphrase, salt, iterations, length)
        assert derive_key(passphrase, salt, iterations, length) == expected

    def test_matches_hashlib(self, passphrase: bytes, salt: bytes) -> None:
        try:
            expected = hashlib.pbkdf2_hmac("sha512_256", passphrase, salt, 1_000, 48)
        except ValueError:
            pytest.skip("hashlib.pbkdf2_hmac does not support SHA-512/256")
        assert derive_key(passphrase, salt, 1_000, 48) == expected


class TestDeterminism:
    def test_same_inputs_same_output(self, passphrase: bytes, salt: bytes) -> None:
        assert derive_key(passphrase, salt, 100, 32) == derive_key(passphrase, salt, 100, 32)

    def test_output_length(self, passphrase: bytes, salt: bytes) -> None:
        assert len(derive_key(passphrase, salt, 10, 7)) == 7
        assert len(derive_key(passphrase, salt, 10, 65)) == 65

    def test_prefix_property(self, passphrase: bytes, salt: bytes) -> None:
        long_key = derive_key(passphrase, salt, 10, 64)
        assert derive_key(passphrase, salt, 10, 32) == long_key[:32]

    @pytest.mark.parametrize(
        "change",
        [
            {"passphrase": b"other"},
            {"salt": b"other-salt"},
            {"iterations": 11},
        ],
    )
    def test_parameter_sensitivity(self, passphrase: bytes, salt: bytes, change: dict) -> None:
        base = {"passphrase": passphrase, "salt": salt, "iterations": 10, "output_length": 32}
        assert derive_key(**base) != derive_key(**{**base, **change})

    def test_str_passphrase_is_utf8(self, salt: bytes) -> None:
        assert derive_key("пароль", salt, 10, 32) == derive_key(
            "пароль".encode("utf-8"), salt, 10, 32
        )

    def test_bytes_like_inputs(self, passphrase: bytes, salt: bytes) -> None:
        expected = derive_key(passphrase, salt, 10, 16)
        assert derive_key(bytearray(passphrase), memoryview(salt), 10, 16) == expected

    def test_empty_passphrase_and_salt_allowed(self) -> None:
        assert len(derive_key(b"", b"", 1, 16)) == 16


# ============================================================================
# VALIDATION
# ============================================================================


class TestValidation:
    @pytest.mark.parametrize("iterations", [0, -1])
    def test_iterations_range(self, passphrase: bytes, salt: bytes, iterations: int) -> None:
        with pytest.raises(KDFParameterError) as exc_info:
            derive_key(passphrase, salt, iterations, 32)
        assert exc_info.value.parameter_name == "iterations"

    @pytest.mark.parametrize("length", [0, -5])
    def test_output_length_range(self, passphrase: bytes, salt: bytes, length: int) -> None:
        with pytest.raises(KDFParameterError) as exc_info:
            derive_key(passphrase, salt, 1, length)
        assert exc_info.value.parameter_name == "output_length"

    @pytest.mark.parametrize("iterations", [1.5, "10", None, True])
    def test_iterations_type(self, passphrase: bytes, salt: bytes, iterations: object) -> None:
        with pytest.raises(KDFParameterError, match="must be int"):
            derive_key(passphrase, salt, iterations, 32)  # type: ignore[arg-type]

    @pytest.mark.parametrize("bad_salt", ["salt", None, 1234])
    def test_salt_type(self, passphrase: bytes, bad_salt: object) -> None:
        with pytest.raises(KDFParameterError, match="salt"):
            derive_key(passphrase, bad_salt, 1, 32)  # type: ignore[arg-type]

    @pytest.mark.parametrize("bad_passphrase", [None, 42, ["pw"]])
    def test_passphrase_type(self, salt: bytes, bad_passphrase: object) -> None:
        with pytest.raises(KDFParameterError, match="passphrase"):
            derive_key(bad_passphrase, salt, 1, 32)  # type: ignore[arg-type]

    def test_parameter_error_is_key_derivation_error(self, passphrase: bytes, salt: bytes) -> None:
        with pytest.raises(KeyDerivationError):
            derive_key(passphrase, salt, 0, 32)


# ============================================================================
# HELPERS
# ============================================================================


class TestGenerateSalt:
    def test_default_length(self) -> None:
        assert len(generate_salt()) == 16

    def test_random(self) -> None:
        assert generate_salt(32) != generate_salt(32)

    def test_minimum(self) -> None:
        with pytest.raises(KDFParameterError, match=">= 8"):
            generate_salt(7)


class TestEncodedAndVerify:
    def test_encoded_is_urlsafe_base64(self, passphrase: bytes, salt: bytes) -> None:
        encoded = derive_key_encoded(passphrase, salt, 10, 32)
        assert len(encoded) == 44
        assert base64.urlsafe_b64decode(encoded) == derive_key(passphrase, salt, 10, 32)
        assert "+" not in encoded and "/" not in encoded

    def test_verify_raw(self, passphrase: bytes, salt: bytes) -> None:
        stored = derive_key(passphrase, salt, 10, 32)
        assert verify_passphrase(passphrase, salt, stored, 10)
        assert not verify_passphrase(b"wrong", salt, stored, 10)
        assert not verify_passphrase(passphrase, salt, stored, 11)

    def test_verify_encoded(self, passphrase: bytes, salt: bytes) -> None:
        stored = derive_key_encoded(passphrase, salt, 10, 32)
        assert verify_passphrase(passphrase, salt, stored, 10)
        assert not verify_passphrase(b"wrong", salt, stored, 10)

    @pytest.mark.parametrize("garbage", ["", "!!!", "ключ", b""])
    def test_verify_garbage(self, passphrase: bytes, salt: bytes, garbage: object) -> None:
        assert not verify_passphrase(passphrase, salt, garbage, 10)  # type: ignore[arg-type]


class TestProviderAndConfig:
    def test_provider_matches_function(self, passphrase: bytes, salt: bytes) -> None:
        kdf = PBKDF2SHA512_256KDF()
        assert kdf.ALGORITHM_ID == ALGORITHM_ID == "pbkdf2-hmac-sha512/256"
        assert kdf.derive_key(passphrase, salt, 10, 32) == derive_key(passphrase, salt, 10, 32)

    def test_with_config(self, passphrase: bytes, salt: bytes) -> None:
        config = KdfConfig(iterations=12, output_length=24)
        assert derive_key_with_config(passphrase, salt, config) == derive_key(
            passphrase, salt, 12, 24
        )


class TestLogging:
    def test_no_secrets_in_logs(
        self, passphrase: bytes, salt: bytes, caplog: pytest.LogCaptureFixture
    ) -> None:
        logger = logging.getLogger("polygraphia")
        logger.addHandler(caplog.handler)
        try:
            with caplog.at_level(logging.DEBUG, logger="polygraphia"):
                key = derive_key(passphrase, salt, 10, 32)
        finally:
            logger.removeHandler(caplog.handler)
        assert "32-byte key" in caplog.text
        assert passphrase.decode() not in caplog.text
        assert salt.decode() not in caplog.text
        assert key.hex() not in caplog.text


# ============================================================================
# KEY MATERIAL -> CIPHER
# ============================================================================


class TestKeyMaterialPipeline:
    @pytest.mark.parametrize(
        "build",
        [
            Caesar.from_key_material,
            Affine.from_key_material,
            Playfair.from_key_material,
        ],
        ids=["caesar", "affine", "playfair"],
    )
    def test_cipher_from_derived_key(self, passphrase: bytes, salt: bytes, build) -> None:
        material = derive_key(passphrase, salt, 10, 32)
        cipher = build(material)
        assert cipher == build(derive_key(passphrase, salt, 10, 32))
        assert cipher.decrypt(cipher.encrypt("attack at dawn")).lower().startswith("attack")

    def test_hill_from_derived_key(self, passphrase: bytes, salt: bytes) -> None:
        cipher = Hill.from_key_material(derive_key(passphrase, salt, 10, 64), size=2)
        assert cipher.decrypt(cipher.encrypt("attack at dawn")) == "attack at dawn"
