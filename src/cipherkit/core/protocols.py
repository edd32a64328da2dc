"""
Протокольные интерфейсы cipherkit.

Одна capability-интерфейс на категорию алгоритмов:
- HashProtocol: MD5, SHA1, SHA256, SHA384, SHA512
- SymmetricCipherProtocol: AES, DES
- AsymmetricCipherProtocol: RSA
- SignatureProtocol: RSA PKCS#1 v1.5

Фасады (cipherkit.service) принимают любой объект, удовлетворяющий
протоколу, поэтому алгоритм можно подменить без изменения вызывающего
кода. Все Protocol классы помечены @runtime_checkable для isinstance()
проверок в тестах.

Example:
    >>> from cipherkit.algorithms.hashing import SHA256Hash
    >>> isinstance(SHA256Hash(), HashProtocol)
    True
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol, Union, runtime_checkable

if TYPE_CHECKING:
    from cipherkit.algorithms.asymmetric import SessionKeyPair
    from cipherkit.algorithms.symmetric import EncryptedPayload
    from cipherkit.core.metadata import (
        CipherSuite,
        HashAlgorithm,
    )
    from cipherkit.core.result import OperationResult

__all__ = [
    "HashProtocol",
    "SymmetricCipherProtocol",
    "AsymmetricCipherProtocol",
    "SignatureProtocol",
]


# ==============================================================================
# HASH PROTOCOL
# ==============================================================================


@runtime_checkable
class HashProtocol(Protocol):
    """
    Протокол для хеш-функций.

    Attributes:
        algorithm: Идентификатор алгоритма
        hash_size: Размер digest в битах
        digest_size: Размер digest в байтах
    """

    algorithm: HashAlgorithm
    hash_size: int
    digest_size: int

    def digest(self, data: Union[bytes, bytearray, str]) -> bytes:
        """
        Вычислить digest.

        Args:
            data: Непустые bytes или str (str кодируется в UTF-8)

        Returns:
            Digest фиксированного размера (digest_size байт)

        Raises:
            InvalidArgumentError: Пустой вход
            HashingFailedError: Примитив не смог вычислить digest
        """
        ...

    def digest_base64(self, data: Union[bytes, bytearray, str]) -> str:
        """Digest в виде Base64 строки."""
        ...


# ==============================================================================
# SYMMETRIC CIPHER PROTOCOL
# ==============================================================================


@runtime_checkable
class SymmetricCipherProtocol(Protocol):
    """
    Протокол для блочных шифров с паролем вместо ключа.

    Пароль всегда проходит через KDF до нужного key_size.
    IV policy выбирается формой вызова:

        encrypt(data, password)                 -> STATIC_DEFAULT
        encrypt(data, password, iv=iv)          -> CALLER_SUPPLIED
        encrypt_with_random_iv(data, password)  -> SELF_GENERATED
    """

    suite: CipherSuite

    def encrypt(
        self,
        data: bytes,
        password: str,
        iv: Optional[bytes] = None,
    ) -> OperationResult[bytes]:
        """Зашифровать data (static IV если iv=None)."""
        ...

    def encrypt_with_random_iv(
        self, data: bytes, password: str
    ) -> OperationResult[EncryptedPayload]:
        """Зашифровать data со свежим IV из CSPRNG."""
        ...

    def decrypt(
        self,
        data: bytes,
        password: str,
        iv: Optional[bytes] = None,
    ) -> OperationResult[bytes]:
        """Расшифровать data (static IV если iv=None)."""
        ...

    def encrypt_text(self, plain_text: str, password: str) -> OperationResult[str]:
        """UTF-8 текст -> Base64 ciphertext (static IV)."""
        ...

    def decrypt_text(self, cipher_text: str, password: str) -> OperationResult[str]:
        """Base64 ciphertext -> UTF-8 текст (static IV)."""
        ...


# ==============================================================================
# ASYMMETRIC CIPHER PROTOCOL
# ==============================================================================


@runtime_checkable
class AsymmetricCipherProtocol(Protocol):
    """
    Протокол для шифрования с открытым ключом.

    Ключи передаются как сериализованные строки (PEM), выданные
    generate_key_pair() того же шифра.
    """

    def generate_key_pair(self, key_size: int) -> OperationResult[SessionKeyPair]:
        """Сгенерировать пару ключей."""
        ...

    def encrypt(
        self, data: bytes, public_key: str, key_size: int
    ) -> OperationResult[bytes]:
        """Зашифровать открытым ключом."""
        ...

    def decrypt(
        self, data: bytes, private_key: str, key_size: int
    ) -> OperationResult[bytes]:
        """Расшифровать закрытым ключом."""
        ...


# ==============================================================================
# SIGNATURE PROTOCOL
# ==============================================================================


@runtime_checkable
class SignatureProtocol(Protocol):
    """
    Протокол цифровой подписи с выбираемым digest.

    verify() возвращает bool и никогда не бросает исключение из-за
    неверной подписи, чужого ключа или изменённых данных.
    """

    def sign(
        self, data: bytes, hash_algorithm: HashAlgorithm, private_key: str
    ) -> OperationResult[bytes]:
        """Подписать data."""
        ...

    def verify(
        self,
        data: bytes,
        signature: bytes,
        hash_algorithm: HashAlgorithm,
        public_key: str,
    ) -> bool:
        """Проверить подпись."""
        ...
