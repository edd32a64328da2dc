"""
Key Derivation: преобразование пароля в ключ фиксированного размера.

Схема (детерминированная, без хранимой соли):

    salt = digest(passphrase)                         # HashEngine
    key  = PBKDF2-HMAC-SHA1(passphrase, salt, iterations, dklen=size)

Один и тот же пароль всегда даёт один и тот же ключ, поэтому
зашифрованное паролем можно расшифровать тем же паролем без
передачи соли. Обратная сторона: одинаковые пароли дают одинаковые
ключи, предвычисление по словарю возможно.

⚠️ Security Warnings
--------------------
1. Только для растяжения ключа шифрования, НЕ для хранения паролей.
   Для хранения используйте cipherkit.passwords.PasswordHasher
   (случайная соль, PBKDF2-SHA256 или Argon2id).
2. 10 000 итераций HMAC-SHA1 значительно ниже рекомендаций OWASP 2023;
   значение сохранено для совместимости с уже зашифрованными данными.
   Профиль KdfProfile.HARDENED поднимает порог.
3. Пароли не логируются, только размеры.

Example:
    >>> key = derive_key_for_digest("correct horse", SHA256Hash())
    >>> len(key)
    32
    >>> derive_key("correct horse", 8) == derive_key("correct horse", 8)
    True

References:
    - RFC 8018: PKCS #5 v2.1 (PBKDF2)
    - NIST SP 800-132: Recommendation for Password-Based Key Derivation
"""

from __future__ import annotations

import hashlib
import logging
from typing import Final

from cipherkit import codec
from cipherkit.algorithms.hashing import SHA512Hash
from cipherkit.core.exceptions import InvalidParameterError
from cipherkit.core.protocols import HashProtocol
from cipherkit.utils import require_not_none, require_text

logger = logging.getLogger(__name__)

# ============================================================================
# CONSTANTS
# ============================================================================

PBKDF2_PRF: Final[str] = "sha1"
DEFAULT_ITERATIONS: Final[int] = 10_000
MIN_ITERATIONS: Final[int] = 5_000
MIN_OUTPUT_SIZE: Final[int] = 8


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================


def _validate_iterations(iterations: int) -> None:
    """
    Raises:
        TypeError: iterations не int
        InvalidParameterError: iterations < MIN_ITERATIONS
    """
    if not isinstance(iterations, int) or isinstance(iterations, bool):
        raise TypeError(f"iterations must be int, got {type(iterations).__name__}")
    if iterations < MIN_ITERATIONS:
        raise InvalidParameterError(
            f"iterations must be >= {MIN_ITERATIONS:,}, got {iterations:,}",
            parameter="iterations",
            algorithm="PBKDF2",
        )


def _validate_output_size(output_size: int) -> None:
    if not isinstance(output_size, int) or isinstance(output_size, bool):
        raise TypeError(f"output_size must be int, got {type(output_size).__name__}")
    if output_size < MIN_OUTPUT_SIZE:
        raise InvalidParameterError(
            f"output_size must be >= {MIN_OUTPUT_SIZE} bytes, got {output_size}",
            parameter="output_size",
            algorithm="PBKDF2",
        )


def _stretch(passphrase: str, salt: bytes, iterations: int, size: int) -> bytes:
    derived = hashlib.pbkdf2_hmac(
        hash_name=PBKDF2_PRF,
        password=codec.to_bytes(passphrase),
        salt=salt,
        iterations=iterations,
        dklen=size,
    )
    logger.debug(
        "PBKDF2-%s: derived %d-byte key (iterations=%d)",
        PBKDF2_PRF.upper(),
        size,
        iterations,
    )
    return derived


# ============================================================================
# PUBLIC API
# ============================================================================


def derive_key_for_digest(
    passphrase: str,
    hash_engine: HashProtocol,
    iterations: int = DEFAULT_ITERATIONS,
) -> bytes:
    """
    Вывести ключ длиной hash_engine.digest_size байт.

    Соль = hash_engine.digest(passphrase). AES использует SHA-256,
    что даёт 32-байтовый ключ AES-256.

    Args:
        passphrase: Непустой пароль
        hash_engine: Хеш-функция для соли (определяет длину ключа)
        iterations: Количество итераций PBKDF2 (>= 5000)

    Returns:
        Ключ длиной hash_engine.digest_size

    Raises:
        InvalidArgumentError: passphrase пустой/None, hash_engine None
        InvalidParameterError: iterations < 5000
    """
    passphrase = require_text(passphrase, "passphrase")
    require_not_none(hash_engine, "hash_engine")
    _validate_iterations(iterations)

    salt = hash_engine.digest(passphrase)
    return _stretch(passphrase, salt, iterations, hash_engine.digest_size)


def derive_key(
    passphrase: str,
    output_size: int,
    iterations: int = DEFAULT_ITERATIONS,
) -> bytes:
    """
    Вывести ключ произвольной длины (>= 8 байт).

    Соль = SHA-512(passphrase). DES использует output_size=8.

    Raises:
        InvalidArgumentError: passphrase пустой/None
        InvalidParameterError: output_size < 8 или iterations < 5000
    """
    passphrase = require_text(passphrase, "passphrase")
    _validate_output_size(output_size)
    _validate_iterations(iterations)

    salt = SHA512Hash().digest(passphrase)
    return _stretch(passphrase, salt, iterations, output_size)


__all__ = [
    "PBKDF2_PRF",
    "DEFAULT_ITERATIONS",
    "MIN_ITERATIONS",
    "MIN_OUTPUT_SIZE",
    "derive_key_for_digest",
    "derive_key",
]
