"""
Симметричное шифрование с паролем: AES-256-CBC и DES-CBC.

Пароль всегда проходит через KDF (cipherkit.algorithms.kdf) до
CipherSuite.key_size, затем данные шифруются в режиме CBC с PKCS7.

**Ciphers:**
- AES-256-CBC: cryptography (Cipher + padding.PKCS7), ключ 32 байта, IV 16
- DES-CBC: pycryptodome (Crypto.Cipher.DES), ключ 8 байт, IV 8 ⛔ BROKEN

**IV policy** выбирается формой вызова:

    encrypt(data, password)                  -> IVPolicy.STATIC_DEFAULT
    encrypt(data, password, iv=my_iv)        -> IVPolicy.CALLER_SUPPLIED
    encrypt_with_random_iv(data, password)   -> IVPolicy.SELF_GENERATED

⚠️ STATIC_DEFAULT использует встроенную константу (STATIC_IV): для
одинаковых (data, password) ciphertext одинаков, общие префиксы
plaintext видны. Политика сохранена для чтения существующих данных;
новые данные шифруйте через encrypt_with_random_iv и храните IV рядом.

Failure policy:
    - Пустые data/password -> InvalidArgumentError (сразу)
    - Неверная длина IV -> InvalidIVSizeError, ключа -> InvalidKeySizeError
    - Сбой самого шифра (неверный пароль, повреждённые данные, битый
      padding) -> OperationResult.failure без уточнения причины

Example:
    >>> cipher = AESCipher()
    >>> ct = cipher.encrypt(b"Secret message", "password").unwrap()
    >>> cipher.decrypt(ct, "password").unwrap()
    b'Secret message'
    >>> payload = cipher.encrypt_with_random_iv(b"Secret", "password").unwrap()
    >>> cipher.decrypt(payload.ciphertext, "password", iv=payload.iv).unwrap()
    b'Secret'

Compliance:
    - NIST FIPS 197 (AES), NIST SP 800-38A (CBC)
    - NIST FIPS 46-3 (DES, withdrawn 2005)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Final, Optional, Type, Union

from Crypto.Cipher import DES as DESImpl
from Crypto.Util.Padding import pad, unpad
from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from cipherkit import codec
from cipherkit.algorithms.hashing import SHA256Hash
from cipherkit.algorithms.kdf import derive_key, derive_key_for_digest
from cipherkit.config import DEFAULT_CONFIG, CryptoConfig
from cipherkit.core.exceptions import AlgorithmNotFoundError, InvalidArgumentError
from cipherkit.core.metadata import (
    AES_SUITE,
    DES_SUITE,
    CipherSuite,
    IVPolicy,
    SymmetricAlgorithm,
)
from cipherkit.core.protocols import SymmetricCipherProtocol
from cipherkit.core.result import OperationResult
from cipherkit.utils import BytesLike, generate_random_bytes, require_bytes, require_text

logger = logging.getLogger(__name__)


# ==============================================================================
# RESULT TYPES
# ==============================================================================


@dataclass(frozen=True)
class EncryptedPayload:
    """
    Результат encrypt_with_random_iv.

    Attributes:
        ciphertext: Зашифрованные данные (без IV)
        iv: IV, который нужно сохранить для decrypt
        policy: Всегда IVPolicy.SELF_GENERATED
    """

    ciphertext: bytes
    iv: bytes
    policy: IVPolicy = IVPolicy.SELF_GENERATED


# ==============================================================================
# BASE CLASS
# ==============================================================================


class _BlockCipherBase:
    """
    Общая логика паролевых CBC шифров.

    Подклассы задают suite, STATIC_IV, derive_key() и два native
    преобразования. Экземпляр хранит только неизменяемую конфигурацию;
    контексты шифра создаются на каждый вызов.
    """

    suite: CipherSuite
    STATIC_IV: bytes

    def __init__(self, config: Optional[CryptoConfig] = None) -> None:
        self._config = config or DEFAULT_CONFIG

    @property
    def config(self) -> CryptoConfig:
        return self._config

    # --- hooks ---------------------------------------------------------------

    def derive_key(self, password: str) -> bytes:
        """Ключ, который шифр получит из пароля (suite.key_size байт)."""
        raise NotImplementedError

    def _encrypt_block(self, key: bytes, iv: bytes, data: bytes) -> bytes:
        raise NotImplementedError

    def _decrypt_block(self, key: bytes, iv: bytes, data: bytes) -> bytes:
        raise NotImplementedError

    # --- validation ------------------------------------------------------------

    def _resolve_iv(self, iv: Optional[BytesLike]) -> bytes:
        if iv is None:
            return self.STATIC_IV
        if not isinstance(iv, (bytes, bytearray)):
            raise TypeError(f"iv must be bytes, got {type(iv).__name__}")
        self.suite.validate_iv(iv)
        return bytes(iv)

    def _checked_key(self, key: BytesLike) -> bytes:
        key = require_bytes(key, "key")
        self.suite.validate_key(key)
        return key

    # --- native calls ----------------------------------------------------------

    def _run_encrypt(self, key: bytes, iv: bytes, data: bytes) -> OperationResult[bytes]:
        operation = f"{self.suite.name}.encrypt"
        try:
            ciphertext = self._encrypt_block(key, iv, data)
        except ValueError as exc:
            logger.warning("%s failed: %s", operation, exc.__class__.__name__)
            return OperationResult.failure("Encryption failed", operation=operation)

        logger.debug(
            "%s: %d bytes -> %d bytes", operation, len(data), len(ciphertext)
        )
        return OperationResult.success(ciphertext, operation=operation)

    def _run_decrypt(self, key: bytes, iv: bytes, data: bytes) -> OperationResult[bytes]:
        operation = f"{self.suite.name}.decrypt"
        try:
            plaintext = self._decrypt_block(key, iv, data)
        except ValueError as exc:
            # Неверный пароль и повреждённые данные неразличимы
            logger.warning("%s failed: %s", operation, exc.__class__.__name__)
            return OperationResult.failure(
                "Decryption failed: wrong password or corrupted data",
                operation=operation,
            )

        logger.debug(
            "%s: %d bytes -> %d bytes", operation, len(data), len(plaintext)
        )
        return OperationResult.success(plaintext, operation=operation)

    # --- public API ------------------------------------------------------------

    def encrypt(
        self,
        data: BytesLike,
        password: str,
        iv: Optional[BytesLike] = None,
    ) -> OperationResult[bytes]:
        """
        Зашифровать data ключом из password.

        Args:
            data: Непустой plaintext
            password: Непустой пароль
            iv: None -> STATIC_IV; иначе ровно suite.iv_size байт

        Returns:
            Success с ciphertext или failure

        Raises:
            InvalidArgumentError: data/password пустые или None
            InvalidIVSizeError: iv неверной длины
        """
        data = require_bytes(data, "data")
        password = require_text(password, "password")
        iv_bytes = self._resolve_iv(iv)
        return self._run_encrypt(self.derive_key(password), iv_bytes, data)

    def encrypt_with_random_iv(
        self, data: BytesLike, password: str
    ) -> OperationResult[EncryptedPayload]:
        """
        Зашифровать data со свежим IV из CSPRNG.

        IV возвращается в EncryptedPayload; его нужно передать в decrypt().
        """
        data = require_bytes(data, "data")
        password = require_text(password, "password")
        iv = generate_random_bytes(self.suite.iv_size)

        result = self._run_encrypt(self.derive_key(password), iv, data)
        if not result.ok:
            return OperationResult.failure(
                result.reason or "Encryption failed", operation=result.operation
            )
        return OperationResult.success(
            EncryptedPayload(ciphertext=result.unwrap(), iv=iv),
            operation=result.operation,
        )

    def decrypt(
        self,
        data: BytesLike,
        password: str,
        iv: Optional[BytesLike] = None,
    ) -> OperationResult[bytes]:
        """
        Расшифровать data ключом из password.

        Args:
            data: Непустой ciphertext
            password: Непустой пароль
            iv: Тот же IV, что при шифровании (None -> STATIC_IV)

        Returns:
            Success с plaintext или failure (неверный пароль / повреждённые
            данные); частичный plaintext никогда не возвращается.

        Raises:
            InvalidArgumentError: data/password пустые или None
            InvalidIVSizeError: iv неверной длины
        """
        data = require_bytes(data, "data")
        password = require_text(password, "password")
        iv_bytes = self._resolve_iv(iv)
        return self._run_decrypt(self.derive_key(password), iv_bytes, data)

    def encrypt_with_key(
        self,
        data: BytesLike,
        key: BytesLike,
        iv: Optional[BytesLike] = None,
    ) -> OperationResult[bytes]:
        """
        Зашифровать готовым ключом (без KDF).

        Raises:
            InvalidArgumentError: data/key пустые или None
            InvalidKeySizeError: len(key) != suite.key_size
            InvalidIVSizeError: iv неверной длины
        """
        data = require_bytes(data, "data")
        key_bytes = self._checked_key(key)
        return self._run_encrypt(key_bytes, self._resolve_iv(iv), data)

    def decrypt_with_key(
        self,
        data: BytesLike,
        key: BytesLike,
        iv: Optional[BytesLike] = None,
    ) -> OperationResult[bytes]:
        """Расшифровать готовым ключом (без KDF)."""
        data = require_bytes(data, "data")
        key_bytes = self._checked_key(key)
        return self._run_decrypt(key_bytes, self._resolve_iv(iv), data)

    def encrypt_text(self, plain_text: str, password: str) -> OperationResult[str]:
        """
        UTF-8 текст -> Base64 ciphertext (STATIC_IV).

        Example:
            >>> token = AESCipher().encrypt_text("hello", "pw").unwrap()
            >>> AESCipher().decrypt_text(token, "pw").unwrap()
            'hello'
        """
        result = self.encrypt(codec.to_bytes(plain_text), password)
        if not result.ok:
            return OperationResult.failure(
                result.reason or "Encryption failed", operation=result.operation
            )
        return OperationResult.success(
            codec.to_base64(result.unwrap()), operation=result.operation
        )

    def decrypt_text(self, cipher_text: str, password: str) -> OperationResult[str]:
        """
        Base64 ciphertext -> UTF-8 текст (STATIC_IV).

        Raises:
            InvalidArgumentError: cipher_text пустой или не Base64
        """
        decoded = codec.from_base64(cipher_text)
        if not decoded.ok or not decoded.value:
            raise InvalidArgumentError(
                "cipher_text", "'cipher_text' is not valid Base64"
            )

        result = self.decrypt(decoded.value, password)
        if not result.ok:
            return OperationResult.failure(
                result.reason or "Decryption failed", operation=result.operation
            )
        plaintext = result.unwrap()
        if not plaintext:
            return OperationResult.success("", operation=result.operation)
        return OperationResult.success(codec.to_text(plaintext), operation=result.operation)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(kdf_iterations={self._config.kdf_iterations})"


# ==============================================================================
# AES-256-CBC
# ==============================================================================


class AESCipher(_BlockCipherBase):
    """
    AES-256-CBC с PKCS7 padding (cryptography).

    Ключ: derive_key_for_digest(password, SHA256Hash()) -> 32 байта.
    """

    suite = AES_SUITE
    STATIC_IV = bytes(
        [255, 126, 242, 239, 122, 156, 180, 151, 176, 121, 145, 143, 152, 254, 125, 156]
    )

    def derive_key(self, password: str) -> bytes:
        return derive_key_for_digest(
            password, SHA256Hash(), self._config.kdf_iterations
        )

    def _encrypt_block(self, key: bytes, iv: bytes, data: bytes) -> bytes:
        padder = padding.PKCS7(algorithms.AES.block_size).padder()
        padded = padder.update(data) + padder.finalize()

        encryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
        return encryptor.update(padded) + encryptor.finalize()

    def _decrypt_block(self, key: bytes, iv: bytes, data: bytes) -> bytes:
        decryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).decryptor()
        padded = decryptor.update(data) + decryptor.finalize()

        unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
        return unpadder.update(padded) + unpadder.finalize()


# ==============================================================================
# DES-CBC (LEGACY)
# ==============================================================================


class DESCipher(_BlockCipherBase):
    """
    DES-CBC с PKCS7 padding (pycryptodome).

    ⛔ 56-битный ключ перебирается за часы. Только для чтения
    существующих данных.

    Ключ: derive_key(password, 8) -> 8 байт (SHA-512 соль).
    """

    suite = DES_SUITE
    STATIC_IV = bytes([144, 121, 235, 22, 85, 91, 182, 197])

    def derive_key(self, password: str) -> bytes:
        return derive_key(password, self.suite.key_size, self._config.kdf_iterations)

    def _encrypt_block(self, key: bytes, iv: bytes, data: bytes) -> bytes:
        cipher = DESImpl.new(key, DESImpl.MODE_CBC, iv=iv)
        return cipher.encrypt(pad(data, self.suite.block_size, style="pkcs7"))

    def _decrypt_block(self, key: bytes, iv: bytes, data: bytes) -> bytes:
        cipher = DESImpl.new(key, DESImpl.MODE_CBC, iv=iv)
        return unpad(cipher.decrypt(data), self.suite.block_size, style="pkcs7")


# ==============================================================================
# REGISTRY & FACTORY
# ==============================================================================

SYMMETRIC_ALGORITHMS: Final[Dict[SymmetricAlgorithm, Type[_BlockCipherBase]]] = {
    SymmetricAlgorithm.AES: AESCipher,
    SymmetricAlgorithm.DES: DESCipher,
}


def get_symmetric_algorithm(
    algorithm: Union[SymmetricAlgorithm, str],
    config: Optional[CryptoConfig] = None,
) -> SymmetricCipherProtocol:
    """
    Получить шифр по идентификатору ("aes" или "des", без учёта регистра).

    Raises:
        AlgorithmNotFoundError: Если алгоритм не входит в перечень
    """
    try:
        key = SymmetricAlgorithm(
            algorithm.lower() if isinstance(algorithm, str) else algorithm
        )
    except ValueError:
        raise AlgorithmNotFoundError(
            str(algorithm), [alg.value for alg in SYMMETRIC_ALGORITHMS]
        ) from None

    instance: SymmetricCipherProtocol = SYMMETRIC_ALGORITHMS[key](config)
    return instance


__all__ = [
    "EncryptedPayload",
    "AESCipher",
    "DESCipher",
    "SYMMETRIC_ALGORITHMS",
    "get_symmetric_algorithm",
]
