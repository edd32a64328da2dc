"""
Централизованные исключения cipherkit.

Иерархия типизированных исключений для всех примитивов пакета:
хеширование, KDF, блочные шифры, RSA, подписи и хранение паролей.
Обеспечивает единообразную обработку ошибок и безопасность
(NO раскрытия секретных данных).

Precondition failures (пустые аргументы, неверные размеры ключа/IV)
поднимаются немедленно. Сбои самих примитивов (неверный пароль,
повреждённый ciphertext, битый ключ) возвращаются как
OperationResult.failure и превращаются в OperationFailedError
только при явном unwrap().

Иерархия:
    CryptoError (базовое)
    ├── ValidationError
    │   ├── InvalidArgumentError
    │   └── InvalidParameterError
    ├── AlgorithmError
    │   └── AlgorithmNotFoundError
    ├── CryptoKeyError
    │   └── InvalidKeyError
    │       └── InvalidKeySizeError
    ├── EncryptionError
    │   └── InvalidIVSizeError
    ├── HashError
    │   ├── HashingFailedError
    │   └── PasswordHashError
    └── OperationFailedError

Example:
    >>> from cipherkit.core.exceptions import CryptoError
    >>> try:
    ...     cipher.encrypt(b"", "secret")
    ... except CryptoError as e:
    ...     print(f"Algorithm: {e.algorithm}")

Security Note:
    Все исключения НЕ раскрывают:
    - Ключи, пароли или их части
    - Plaintext или ciphertext
    - IV значения
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

__all__: list[str] = [
    "CryptoError",
    "ValidationError",
    "InvalidArgumentError",
    "InvalidParameterError",
    "AlgorithmError",
    "AlgorithmNotFoundError",
    "CryptoKeyError",
    "InvalidKeyError",
    "InvalidKeySizeError",
    "EncryptionError",
    "InvalidIVSizeError",
    "HashError",
    "HashingFailedError",
    "PasswordHashError",
    "OperationFailedError",
]


# ==============================================================================
# BASE EXCEPTION
# ==============================================================================


class CryptoError(Exception):
    """
    Базовое исключение для всех криптографических ошибок.

    Attributes:
        message: Человекочитаемое сообщение об ошибке
        algorithm: Имя алгоритма, вызвавшего ошибку (опционально)
        context: Дополнительный контекст без секретов (опционально)
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
        parts = [self.__class__.__name__, ": ", self.message]

        if self.algorithm:
            parts.append(f" [algorithm={self.algorithm}]")

        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            parts.append(f" ({ctx_str})")

        return "".join(parts)

    def __repr__(self) -> str:
        """Представление для отладки."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"algorithm={self.algorithm!r}, "
            f"context={self.context!r})"
        )


# ==============================================================================
# VALIDATION ERRORS
# ==============================================================================


class ValidationError(CryptoError):
    """Базовая ошибка валидации входных данных."""

    pass


class InvalidArgumentError(ValidationError):
    """
    Обязательный аргумент отсутствует или пуст.

    Raises когда:
    - data/password/key material равны None
    - передана пустая строка или пустой буфер

    Attributes:
        argument: Имя аргумента

    Example:
        >>> to_bytes("")
        InvalidArgumentError: 'text' must not be empty (argument=text)
    """

    def __init__(self, argument: str, message: Optional[str] = None) -> None:
        super().__init__(
            message or f"'{argument}' must not be empty",
            context={"argument": argument},
        )
        self.argument = argument


class InvalidParameterError(ValidationError):
    """
    Параметр вне допустимого диапазона.

    Raises когда:
    - iterations ниже минимального порога
    - размер выходного ключа меньше минимума
    - параметры конфигурации некорректны

    Example:
        >>> derive_key("secret", 8, iterations=10)
        InvalidParameterError: iterations must be >= 5000
    """

    def __init__(
        self,
        message: str,
        *,
        parameter: Optional[str] = None,
        algorithm: Optional[str] = None,
    ) -> None:
        context: Dict[str, Any] = {}
        if parameter is not None:
            context["parameter"] = parameter
        super().__init__(message, algorithm=algorithm, context=context)
        self.parameter = parameter


# ==============================================================================
# ALGORITHM ERRORS
# ==============================================================================


class AlgorithmError(CryptoError):
    """Ошибки выбора алгоритма."""

    pass


class AlgorithmNotFoundError(AlgorithmError):
    """
    Алгоритм не найден в закрытом перечне.

    Attributes:
        algorithm_name: Имя запрошенного алгоритма
        available: Список доступных алгоритмов
    """

    def __init__(
        self,
        algorithm_name: str,
        available: Optional[List[str]] = None,
    ) -> None:
        message = f"Algorithm '{algorithm_name}' not found"
        if available:
            message += f". Available: {', '.join(available)}"

        super().__init__(
            message,
            algorithm=algorithm_name,
            context={"available_count": len(available) if available else 0},
        )
        self.algorithm_name = algorithm_name
        self.available = available or []


# ==============================================================================
# KEY ERRORS
# ==============================================================================


class CryptoKeyError(CryptoError):
    """
    Базовая ошибка для операций с ключами.

    Note:
        Названа CryptoKeyError чтобы не конфликтовать с builtin KeyError.
    """

    pass


class InvalidKeyError(CryptoKeyError):
    """
    Некорректный ключ (формат, тип или размер).

    Attributes:
        expected_size: Ожидаемый размер ключа
        actual_size: Фактический размер ключа
    """

    def __init__(
        self,
        message: str,
        *,
        algorithm: Optional[str] = None,
        expected_size: Optional[int] = None,
        actual_size: Optional[int] = None,
    ) -> None:
        context: Dict[str, Any] = {}
        if expected_size is not None:
            context["expected_size"] = expected_size
        if actual_size is not None:
            context["actual_size"] = actual_size

        super().__init__(message, algorithm=algorithm, context=context)
        self.expected_size = expected_size
        self.actual_size = actual_size


class InvalidKeySizeError(InvalidKeyError):
    """
    Размер ключа вне допустимой области алгоритма.

    Используется как для симметричного key material (байты),
    так и для RSA key size (биты).

    Example:
        >>> RSACipher().generate_key_pair(2047)
        InvalidKeySizeError: Invalid RSA key size 2047: must be 384..16384 in steps of 8
    """

    pass


# ==============================================================================
# ENCRYPTION ERRORS
# ==============================================================================


class EncryptionError(CryptoError):
    """Базовая ошибка операций шифрования."""

    pass


class InvalidIVSizeError(EncryptionError):
    """
    Некорректный размер IV, переданного вызывающей стороной.

    Attributes:
        expected_size: Ожидаемый размер IV (block size)
        actual_size: Фактический размер IV

    Example:
        >>> AESCipher().encrypt(b"data", "pw", iv=b"short")
        InvalidIVSizeError: Invalid IV size for AES: expected 16 bytes, got 5 bytes
    """

    def __init__(
        self,
        algorithm: str,
        expected: int,
        actual: int,
    ) -> None:
        message = (
            f"Invalid IV size for {algorithm}: "
            f"expected {expected} bytes, got {actual} bytes"
        )
        super().__init__(
            message,
            algorithm=algorithm,
            context={"expected_iv_size": expected, "actual_iv_size": actual},
        )
        self.expected_size = expected
        self.actual_size = actual


# ==============================================================================
# HASH ERRORS
# ==============================================================================


class HashError(CryptoError):
    """Базовая ошибка операций хеширования."""

    pass


class HashingFailedError(HashError):
    """
    Примитив хеширования не смог вычислить digest.

    Для корректного входа это фатальная ошибка конфигурации
    (например, алгоритм отключён политикой OpenSSL), а не
    восстанавливаемый сбой.
    """

    pass


class PasswordHashError(HashError):
    """Unsupported or invalid password hashing scheme or parameters."""

    pass


# ==============================================================================
# OPERATION FAILURES
# ==============================================================================


class OperationFailedError(CryptoError):
    """
    Криптографическая операция не дала результата.

    Поднимается только из OperationResult.unwrap(). Причина намеренно
    не различает "неверный пароль" и "повреждённые данные".

    Attributes:
        operation: Имя операции (например, "AES.decrypt")
    """

    def __init__(self, message: str, *, operation: str = "") -> None:
        super().__init__(
            message, context={"operation": operation} if operation else None
        )
        self.operation = operation
