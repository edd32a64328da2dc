"""
Криптографические хеш-функции cipherkit.

Пять алгоритмов из hashlib, закрытый перечень:
- MD5 (128 бит): только для совместимости, НЕ для новых схем
- SHA-1 (160 бит): только для совместимости, НЕ для новых схем
- SHA-256, SHA-384, SHA-512 (NIST FIPS 180-4)

Текстовый вход кодируется в UTF-8 через cipherkit.codec.to_bytes.
Для одинакового входа digest всегда одинаков (нет соли, нет состояния).

Example:
    >>> from cipherkit.algorithms.hashing import SHA256Hash
    >>> SHA256Hash().digest("abc").hex()[:16]
    'ba7816bf8f01cfea'
    >>> get_hash_algorithm("sha512").digest_size
    64
    >>> hash_text("abc", HashAlgorithm.SHA256)
    'ungWv48Bz+pBQUDeXa4iI7ADYaOWF3qctBD/YfIAFa0='

References:
    - FIPS 180-4: Secure Hash Standard (SHA-1, SHA-2)
    - RFC 1321: The MD5 Message-Digest Algorithm
    - RFC 6151: Updated Security Considerations for MD5
"""

from __future__ import annotations

import hashlib
import logging
from typing import Dict, Final, Type, Union

from cipherkit import codec
from cipherkit.core.exceptions import AlgorithmNotFoundError, HashingFailedError
from cipherkit.core.metadata import HashAlgorithm
from cipherkit.core.protocols import HashProtocol
from cipherkit.utils import require_bytes

logger = logging.getLogger(__name__)

HashInput = Union[bytes, bytearray, str]


# ==============================================================================
# BASE CLASS FOR STDLIB HASHES
# ==============================================================================


class _StdlibHashBase:
    """
    Базовый класс для хеш-функций из hashlib.

    Attributes:
        algorithm: Идентификатор алгоритма (имя для hashlib.new())
        hash_size: Размер digest в битах
        digest_size: Размер digest в байтах
    """

    algorithm: HashAlgorithm
    hash_size: int
    digest_size: int

    def digest(self, data: HashInput) -> bytes:
        """
        Вычислить digest (one-shot).

        Args:
            data: Непустые bytes/bytearray или str (кодируется в UTF-8)

        Returns:
            Digest фиксированного размера (digest_size байт)

        Raises:
            TypeError: Если data не bytes/bytearray/str
            InvalidArgumentError: Если data None или пустые
            HashingFailedError: Если примитив не смог вычислить digest

        Example:
            >>> len(SHA1Hash().digest(b"test data"))
            20
        """
        if isinstance(data, str):
            payload = codec.to_bytes(data)
        else:
            payload = require_bytes(data, "data")

        try:
            hasher = hashlib.new(self.algorithm.value)
            hasher.update(payload)
            result = hasher.digest()
        except ValueError as exc:
            # OpenSSL в FIPS-режиме может отключить MD5/SHA-1
            logger.warning(
                "%s hashing failed: %s", self.algorithm.name, exc.__class__.__name__
            )
            raise HashingFailedError(
                f"{self.algorithm.name} hashing failed", algorithm=self.algorithm.name
            ) from exc

        logger.debug("%s digest of %d bytes", self.algorithm.name, len(payload))
        return result

    def digest_base64(self, data: HashInput) -> str:
        """Digest в виде стандартной Base64 строки."""
        return codec.to_base64(self.digest(data))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


# ==============================================================================
# CONCRETE ALGORITHMS
# ==============================================================================


class MD5Hash(_StdlibHashBase):
    """
    MD5 (RFC 1321), 128 бит.

    Security Notes:
        - Коллизии находятся за секунды; НЕ использовать для подписей
        - Оставлен для совместимости со старыми checksum'ами
    """

    algorithm = HashAlgorithm.MD5
    hash_size = 128
    digest_size = 16


class SHA1Hash(_StdlibHashBase):
    """
    SHA-1, 160 бит.

    Security Notes:
        - Практические коллизии (SHAttered, 2017)
        - Только для совместимости
    """

    algorithm = HashAlgorithm.SHA1
    hash_size = 160
    digest_size = 20


class SHA256Hash(_StdlibHashBase):
    """
    SHA-256: хеш-функция семейства SHA-2, 256 бит.

    Используется по умолчанию: соль KDF для AES, digest для
    equal_by_digest и фасада HashCrypto.
    """

    algorithm = HashAlgorithm.SHA256
    hash_size = 256
    digest_size = 32


class SHA384Hash(_StdlibHashBase):
    """SHA-384: truncated SHA-512, 384 бит."""

    algorithm = HashAlgorithm.SHA384
    hash_size = 384
    digest_size = 48


class SHA512Hash(_StdlibHashBase):
    """
    SHA-512, 512 бит.

    Соль для derive_key(passphrase, output_size).
    """

    algorithm = HashAlgorithm.SHA512
    hash_size = 512
    digest_size = 64


# ==============================================================================
# REGISTRY & FACTORY
# ==============================================================================

HASH_ALGORITHMS: Final[Dict[HashAlgorithm, Type[_StdlibHashBase]]] = {
    HashAlgorithm.MD5: MD5Hash,
    HashAlgorithm.SHA1: SHA1Hash,
    HashAlgorithm.SHA256: SHA256Hash,
    HashAlgorithm.SHA384: SHA384Hash,
    HashAlgorithm.SHA512: SHA512Hash,
}


def get_hash_algorithm(algorithm: Union[HashAlgorithm, str]) -> HashProtocol:
    """
    Получить экземпляр хеш-алгоритма по идентификатору.

    Args:
        algorithm: HashAlgorithm или его строковое значение
            ("md5", "sha1", "sha256", "sha384", "sha512", без учёта регистра)

    Returns:
        Экземпляр, реализующий HashProtocol

    Raises:
        AlgorithmNotFoundError: Если алгоритм не входит в перечень
    """
    try:
        key = HashAlgorithm(algorithm.lower() if isinstance(algorithm, str) else algorithm)
    except ValueError:
        raise AlgorithmNotFoundError(
            str(algorithm), [alg.value for alg in HASH_ALGORITHMS]
        ) from None

    instance: HashProtocol = HASH_ALGORITHMS[key]()
    return instance


def hash_text(
    text: str, algorithm: Union[HashAlgorithm, str] = HashAlgorithm.SHA256
) -> str:
    """
    Base64 digest строки.

    Example:
        >>> hash_text("abc", "md5")
        'kAFQmDzST7DWlj99KOF/cg=='
    """
    return get_hash_algorithm(algorithm).digest_base64(text)


# ==============================================================================
# EXPORTS
# ==============================================================================

__all__ = [
    "HashInput",
    "MD5Hash",
    "SHA1Hash",
    "SHA256Hash",
    "SHA384Hash",
    "SHA512Hash",
    "HASH_ALGORITHMS",
    "get_hash_algorithm",
    "hash_text",
]
