"""
Фасады выбора алгоритма (strategy selection).

Каждый фасад держит одну стратегию, удовлетворяющую протоколу из
cipherkit.core.protocols, и делегирует ей вызовы без собственной логики.
Если стратегия не передана, выбирается алгоритм по умолчанию:

    HashCrypto        -> config.hash_algorithm (SHA-256)
    SymmetricCrypto   -> AESCipher
    AsymmetricCrypto  -> RSACipher (+ RSASignatureEngine для подписей)

Example:
    >>> HashCrypto().digest_base64("abc")
    'ungWv48Bz+pBQUDeXa4iI7ADYaOWF3qctBD/YfIAFa0='
    >>> legacy = SymmetricCrypto(DESCipher())
    >>> token = legacy.encrypt_text("hello", "pw").unwrap()
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from cipherkit.algorithms.asymmetric import RSACipher, SessionKeyPair
from cipherkit.algorithms.hashing import HashInput, get_hash_algorithm
from cipherkit.algorithms.signing import RSASignatureEngine
from cipherkit.algorithms.symmetric import AESCipher, EncryptedPayload
from cipherkit.config import DEFAULT_CONFIG, CryptoConfig
from cipherkit.core.metadata import HashAlgorithm
from cipherkit.core.protocols import (
    AsymmetricCipherProtocol,
    HashProtocol,
    SignatureProtocol,
    SymmetricCipherProtocol,
)
from cipherkit.core.result import OperationResult
from cipherkit.utils import BytesLike

logger = logging.getLogger(__name__)


# ==============================================================================
# HASH FACADE
# ==============================================================================


class HashCrypto:
    """Hash facade; defaults to config.hash_algorithm."""

    def __init__(
        self,
        engine: Optional[HashProtocol] = None,
        config: Optional[CryptoConfig] = None,
    ) -> None:
        cfg = config or DEFAULT_CONFIG
        self._engine = engine or get_hash_algorithm(cfg.hash_algorithm)
        logger.debug("HashCrypto using %s", self._engine.algorithm.name)

    @property
    def engine(self) -> HashProtocol:
        return self._engine

    @property
    def hash_size(self) -> int:
        return self._engine.hash_size

    def digest(self, data: HashInput) -> bytes:
        return self._engine.digest(data)

    def digest_base64(self, data: HashInput) -> str:
        return self._engine.digest_base64(data)


# ==============================================================================
# SYMMETRIC FACADE
# ==============================================================================


class SymmetricCrypto:
    """Password-based block cipher facade; defaults to AES-256-CBC."""

    def __init__(
        self,
        cipher: Optional[SymmetricCipherProtocol] = None,
        config: Optional[CryptoConfig] = None,
    ) -> None:
        self._cipher = cipher or AESCipher(config)
        logger.debug("SymmetricCrypto using %s", self._cipher.suite.name)

    @property
    def cipher(self) -> SymmetricCipherProtocol:
        return self._cipher

    def encrypt(
        self, data: BytesLike, password: str, iv: Optional[BytesLike] = None
    ) -> OperationResult[bytes]:
        return self._cipher.encrypt(data, password, iv)

    def encrypt_with_random_iv(
        self, data: BytesLike, password: str
    ) -> OperationResult[EncryptedPayload]:
        return self._cipher.encrypt_with_random_iv(data, password)

    def decrypt(
        self, data: BytesLike, password: str, iv: Optional[BytesLike] = None
    ) -> OperationResult[bytes]:
        return self._cipher.decrypt(data, password, iv)

    def encrypt_text(self, plain_text: str, password: str) -> OperationResult[str]:
        return self._cipher.encrypt_text(plain_text, password)

    def decrypt_text(self, cipher_text: str, password: str) -> OperationResult[str]:
        return self._cipher.decrypt_text(cipher_text, password)


# ==============================================================================
# ASYMMETRIC FACADE
# ==============================================================================


class AsymmetricCrypto:
    """
    RSA facade: encryption strategy plus signature strategy.

    key_size defaults to config.rsa_key_size where an operation needs one.
    """

    def __init__(
        self,
        cipher: Optional[AsymmetricCipherProtocol] = None,
        signer: Optional[SignatureProtocol] = None,
        config: Optional[CryptoConfig] = None,
    ) -> None:
        self._config = config or DEFAULT_CONFIG
        self._cipher = cipher or RSACipher(self._config)
        self._signer = signer or RSASignatureEngine(self._config)

    def _key_size(self, key_size: Optional[int]) -> int:
        return self._config.rsa_key_size if key_size is None else key_size

    @property
    def cipher(self) -> AsymmetricCipherProtocol:
        return self._cipher

    @property
    def signer(self) -> SignatureProtocol:
        return self._signer

    def generate_key_pair(
        self, key_size: Optional[int] = None
    ) -> OperationResult[SessionKeyPair]:
        return self._cipher.generate_key_pair(self._key_size(key_size))

    def encrypt(
        self, data: BytesLike, public_key: str, key_size: Optional[int] = None
    ) -> OperationResult[bytes]:
        return self._cipher.encrypt(
            data, public_key, self._key_size(key_size)
        )

    def decrypt(
        self, data: BytesLike, private_key: str, key_size: Optional[int] = None
    ) -> OperationResult[bytes]:
        return self._cipher.decrypt(
            data, private_key, self._key_size(key_size)
        )

    def sign(
        self,
        data: BytesLike,
        hash_algorithm: Union[HashAlgorithm, str],
        private_key: str,
    ) -> OperationResult[bytes]:
        return self._signer.sign(data, hash_algorithm, private_key)

    def verify(
        self,
        data: BytesLike,
        signature: BytesLike,
        hash_algorithm: Union[HashAlgorithm, str],
        public_key: str,
    ) -> bool:
        return self._signer.verify(data, signature, hash_algorithm, public_key)


__all__ = ["HashCrypto", "SymmetricCrypto", "AsymmetricCrypto"]
