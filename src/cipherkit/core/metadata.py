"""
Дескрипторы алгоритмов cipherkit.

Закрытые перечни идентификаторов (не plugin registry) и неизменяемые
описания шифров:

- HashAlgorithm: MD5, SHA1, SHA256, SHA384, SHA512
- SymmetricAlgorithm: AES, DES
- AsymmetricAlgorithm: RSA
- IVPolicy: STATIC_DEFAULT, SELF_GENERATED, CALLER_SUPPLIED
- CipherSuite: алгоритм + размер ключа + размер IV (block size)

Example:
    >>> HashAlgorithm.SHA256.digest_size
    32
    >>> HashAlgorithm("sha512").hash_size
    512
    >>> AES_SUITE.key_size, AES_SUITE.iv_size
    (32, 16)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Final, Union

from cipherkit.core.exceptions import InvalidIVSizeError, InvalidKeySizeError

__all__ = [
    "HashAlgorithm",
    "SymmetricAlgorithm",
    "AsymmetricAlgorithm",
    "IVPolicy",
    "CipherSuite",
    "AES_SUITE",
    "DES_SUITE",
    "RSA_MIN_KEY_SIZE",
    "RSA_MAX_KEY_SIZE",
    "RSA_KEY_SIZE_STEP",
    "DEFAULT_RSA_KEY_SIZE",
    "is_valid_rsa_key_size",
]


# ==============================================================================
# ALGORITHM IDENTIFIERS
# ==============================================================================

_DIGEST_SIZES: Final[Dict[str, int]] = {
    "md5": 16,
    "sha1": 20,
    "sha256": 32,
    "sha384": 48,
    "sha512": 64,
}


class HashAlgorithm(str, Enum):
    """
    Digest algorithm identifier.

    Values match hashlib names, so ``hashlib.new(alg.value)`` works directly.
    """

    MD5 = "md5"
    SHA1 = "sha1"
    SHA256 = "sha256"
    SHA384 = "sha384"
    SHA512 = "sha512"

    @property
    def digest_size(self) -> int:
        """Digest length in bytes."""
        return _DIGEST_SIZES[self.value]

    @property
    def hash_size(self) -> int:
        """Digest length in bits."""
        return _DIGEST_SIZES[self.value] * 8


class SymmetricAlgorithm(str, Enum):
    """Block cipher identifier."""

    AES = "aes"
    DES = "des"


class AsymmetricAlgorithm(str, Enum):
    """Public-key cipher identifier."""

    RSA = "rsa"


class IVPolicy(str, Enum):
    """
    Политика выбора IV для одного вызова encrypt/decrypt.

    STATIC_DEFAULT:
        Встроенная константа шифра. Детерминированный ciphertext для
        одинаковых (data, password); одинаковые префиксы plaintext
        видны в ciphertext. Сохранена для совместимости.
    SELF_GENERATED:
        Шифр генерирует IV через CSPRNG и возвращает его вызывающему.
    CALLER_SUPPLIED:
        IV передаёт вызывающий; длина проверяется (InvalidIVSizeError).
    """

    STATIC_DEFAULT = "static_default"
    SELF_GENERATED = "self_generated"
    CALLER_SUPPLIED = "caller_supplied"


# ==============================================================================
# CIPHER SUITE
# ==============================================================================


@dataclass(frozen=True)
class CipherSuite:
    """
    Fixed description of a block cipher configuration.

    Attributes:
        algorithm: Cipher identifier.
        name: Display name used in logs and error messages.
        key_size: Required key length in bytes.
        iv_size: Required IV length in bytes.
        block_size: Cipher block size in bytes (equals iv_size for CBC).
    """

    algorithm: SymmetricAlgorithm
    name: str
    key_size: int
    iv_size: int
    block_size: int

    def validate_key(self, key: Union[bytes, bytearray]) -> None:
        """
        Raises:
            InvalidKeySizeError: if ``len(key) != key_size``.
        """
        if len(key) != self.key_size:
            raise InvalidKeySizeError(
                f"Invalid key size for {self.name}: "
                f"expected {self.key_size} bytes, got {len(key)} bytes",
                algorithm=self.name,
                expected_size=self.key_size,
                actual_size=len(key),
            )

    def validate_iv(self, iv: Union[bytes, bytearray]) -> None:
        """
        Raises:
            InvalidIVSizeError: if ``len(iv) != iv_size``.
        """
        if len(iv) != self.iv_size:
            raise InvalidIVSizeError(self.name, self.iv_size, len(iv))


# AES-256-CBC: ключ из SHA-256 derivation (32 байта), блок 128 бит
AES_SUITE: Final[CipherSuite] = CipherSuite(
    algorithm=SymmetricAlgorithm.AES,
    name="AES",
    key_size=32,
    iv_size=16,
    block_size=16,
)

# DES-CBC: 56 бит + 8 бит чётности
DES_SUITE: Final[CipherSuite] = CipherSuite(
    algorithm=SymmetricAlgorithm.DES,
    name="DES",
    key_size=8,
    iv_size=8,
    block_size=8,
)


# ==============================================================================
# RSA KEY SIZES
# ==============================================================================

RSA_MIN_KEY_SIZE: Final[int] = 384
RSA_MAX_KEY_SIZE: Final[int] = 16384
RSA_KEY_SIZE_STEP: Final[int] = 8
DEFAULT_RSA_KEY_SIZE: Final[int] = 4096


def is_valid_rsa_key_size(key_size: int) -> bool:
    """
    RSA modulus size in bits: 384..16384, multiple of 8.

    Example:
        >>> is_valid_rsa_key_size(2048), is_valid_rsa_key_size(2047)
        (True, False)
    """
    if not isinstance(key_size, int) or isinstance(key_size, bool):
        return False
    return (
        RSA_MIN_KEY_SIZE <= key_size <= RSA_MAX_KEY_SIZE
        and key_size % RSA_KEY_SIZE_STEP == 0
    )
