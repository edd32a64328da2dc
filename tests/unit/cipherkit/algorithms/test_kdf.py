"""
Тесты для kdf.py - детерминированный PBKDF2 с солью из digest.

Покрытие:
- Длина ключа (digest_size / output_size)
- Детерминизм и зависимость от пароля/итераций
- Эквивалентность ручному PBKDF2-HMAC-SHA1
- Предусловия (пустой пароль, None engine, iterations, output_size)
"""

from __future__ import annotations

import hashlib
from unittest.mock import patch

import pytest

from cipherkit.algorithms import kdf
from cipherkit.algorithms.hashing import MD5Hash, SHA1Hash, SHA256Hash, SHA512Hash
from cipherkit.algorithms.kdf import (
    DEFAULT_ITERATIONS,
    MIN_ITERATIONS,
    PBKDF2_PRF,
    derive_key,
    derive_key_for_digest,
)
from cipherkit.core.exceptions import InvalidArgumentError, InvalidParameterError


class TestDeriveKeyForDigest:
    @pytest.mark.parametrize(
        "engine,size",
        [(MD5Hash(), 16), (SHA1Hash(), 20), (SHA256Hash(), 32), (SHA512Hash(), 64)],
    )
    def test_length_matches_digest(self, engine, size: int) -> None:
        assert len(derive_key_for_digest("passphrase", engine)) == size

    def test_deterministic(self) -> None:
        first = derive_key_for_digest("passphrase", SHA256Hash())
        second = derive_key_for_digest("passphrase", SHA256Hash())
        assert first == second

    def test_different_passphrase_different_key(self) -> None:
        assert derive_key_for_digest("a-pass", SHA256Hash()) != derive_key_for_digest(
            "b-pass", SHA256Hash()
        )

    def test_iterations_change_key(self) -> None:
        assert derive_key_for_digest(
            "passphrase", SHA256Hash(), 5_000
        ) != derive_key_for_digest("passphrase", SHA256Hash(), 6_000)

    def test_matches_manual_pbkdf2(self) -> None:
        salt = hashlib.sha256(b"passphrase").digest()
        expected = hashlib.pbkdf2_hmac("sha1", b"passphrase", salt, DEFAULT_ITERATIONS, 32)
        assert derive_key_for_digest("passphrase", SHA256Hash()) == expected

    @pytest.mark.parametrize("value", [None, ""])
    def test_empty_passphrase(self, value: object) -> None:
        with pytest.raises(InvalidArgumentError):
            derive_key_for_digest(value, SHA256Hash())  # type: ignore[arg-type]

    def test_none_engine(self) -> None:
        with pytest.raises(InvalidArgumentError):
            derive_key_for_digest("passphrase", None)  # type: ignore[arg-type]

    def test_iterations_below_floor(self) -> None:
        with pytest.raises(InvalidParameterError) as exc_info:
            derive_key_for_digest("passphrase", SHA256Hash(), MIN_ITERATIONS - 1)
        assert exc_info.value.parameter == "iterations"

    def test_validation_before_stretching(self) -> None:
        with patch.object(hashlib, "pbkdf2_hmac") as pbkdf2:
            with pytest.raises(InvalidParameterError):
                derive_key_for_digest("passphrase", SHA256Hash(), 10)
        pbkdf2.assert_not_called()


class TestDeriveKey:
    @pytest.mark.parametrize("size", [8, 16, 24, 32, 100])
    def test_length(self, size: int) -> None:
        assert len(derive_key("passphrase", size)) == size

    def test_deterministic(self) -> None:
        assert derive_key("passphrase", 8) == derive_key("passphrase", 8)

    def test_uses_sha512_salt(self) -> None:
        salt = hashlib.sha512(b"passphrase").digest()
        expected = hashlib.pbkdf2_hmac(PBKDF2_PRF, b"passphrase", salt, 5_000, 8)
        assert derive_key("passphrase", 8, 5_000) == expected

    def test_output_size_below_minimum(self) -> None:
        with pytest.raises(InvalidParameterError) as exc_info:
            derive_key("passphrase", 7)
        assert exc_info.value.parameter == "output_size"

    def test_iterations_below_floor(self) -> None:
        with pytest.raises(InvalidParameterError):
            derive_key("passphrase", 8, 4_999)

    def test_empty_passphrase(self) -> None:
        with pytest.raises(InvalidArgumentError):
            derive_key("", 8)

    def test_non_int_iterations(self) -> None:
        with pytest.raises(TypeError):
            derive_key("passphrase", 8, 10_000.0)  # type: ignore[arg-type]


def test_debug_log_has_no_secret(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level("DEBUG", logger=kdf.__name__):
        derive_key("hunter2-secret", 8)
    assert caplog.records
    assert "hunter2-secret" not in caplog.text
