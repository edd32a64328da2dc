"""
Тесты иерархии исключений cipherkit.

Покрытие:
- Наследование от CryptoError
- Атрибуты (algorithm, context, argument, sizes)
- __str__ / __repr__ без секретов
"""

from __future__ import annotations

import pytest

from cipherkit.core.exceptions import (
    AlgorithmError,
    AlgorithmNotFoundError,
    CryptoError,
    CryptoKeyError,
    EncryptionError,
    HashError,
    HashingFailedError,
    InvalidArgumentError,
    InvalidIVSizeError,
    InvalidKeyError,
    InvalidKeySizeError,
    InvalidParameterError,
    OperationFailedError,
    PasswordHashError,
    ValidationError,
)


@pytest.mark.parametrize(
    "exc_class,parent",
    [
        (ValidationError, CryptoError),
        (InvalidArgumentError, ValidationError),
        (InvalidParameterError, ValidationError),
        (AlgorithmNotFoundError, AlgorithmError),
        (InvalidKeyError, CryptoKeyError),
        (InvalidKeySizeError, InvalidKeyError),
        (InvalidIVSizeError, EncryptionError),
        (HashingFailedError, HashError),
        (PasswordHashError, HashError),
        (OperationFailedError, CryptoError),
    ],
)
def test_hierarchy(exc_class: type, parent: type) -> None:
    assert issubclass(exc_class, parent)
    assert issubclass(exc_class, CryptoError)


class TestCryptoError:
    def test_str_includes_algorithm_and_context(self) -> None:
        err = CryptoError("boom", algorithm="AES", context={"size": 3})
        assert str(err) == "CryptoError: boom [algorithm=AES] (size=3)"

    def test_str_without_extras(self) -> None:
        assert str(CryptoError("boom")) == "CryptoError: boom"

    def test_repr(self) -> None:
        err = CryptoError("boom", algorithm="DES")
        assert repr(err) == "CryptoError(message='boom', algorithm='DES', context={})"


class TestSpecificErrors:
    def test_invalid_argument(self) -> None:
        err = InvalidArgumentError("password")
        assert err.argument == "password"
        assert "password" in err.message
        assert err.context == {"argument": "password"}

    def test_invalid_argument_custom_message(self) -> None:
        err = InvalidArgumentError("data", "'data' must not be None")
        assert err.message == "'data' must not be None"

    def test_invalid_parameter(self) -> None:
        err = InvalidParameterError("too low", parameter="iterations", algorithm="PBKDF2")
        assert err.parameter == "iterations"
        assert err.algorithm == "PBKDF2"

    def test_algorithm_not_found(self) -> None:
        err = AlgorithmNotFoundError("rc4", ["aes", "des"])
        assert err.algorithm_name == "rc4"
        assert err.available == ["aes", "des"]
        assert "Available: aes, des" in err.message

    def test_invalid_key_size(self) -> None:
        err = InvalidKeySizeError("bad", algorithm="AES", expected_size=32, actual_size=5)
        assert err.expected_size == 32
        assert err.actual_size == 5
        assert err.context == {"expected_size": 32, "actual_size": 5}

    def test_invalid_iv_size(self) -> None:
        err = InvalidIVSizeError("AES", 16, 5)
        assert err.expected_size == 16
        assert err.actual_size == 5
        assert "expected 16 bytes, got 5 bytes" in str(err)

    def test_operation_failed(self) -> None:
        err = OperationFailedError("nope", operation="RSA.decrypt")
        assert err.operation == "RSA.decrypt"
        assert err.context == {"operation": "RSA.decrypt"}
