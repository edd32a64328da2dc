"""
Цифровые подписи RSA PKCS#1 v1.5 с выбираемым digest.

Данные сначала хешируются через HashEngine (cipherkit.algorithms.hashing),
затем digest подписывается как Prehashed. Подпись привязана к
HashAlgorithm: проверка с другим алгоритмом возвращает False.

Failure policy:
    - Пустые data/signature/ключи -> InvalidArgumentError
    - sign(): битый ключ или ключ слишком короткий для digest -> failure
    - verify(): любой сбой (чужой ключ, изменённые данные, неверная подпись,
      другой digest, битый ключ) -> False, исключение не бросается

Example:
    >>> engine = RSASignatureEngine()
    >>> sig = engine.sign(b"doc", HashAlgorithm.SHA256, pair.private_key).unwrap()
    >>> engine.verify(b"doc", sig, HashAlgorithm.SHA256, pair.public_key)
    True
    >>> engine.verify(b"doc", sig, HashAlgorithm.SHA512, pair.public_key)
    False

⚠️ MD5 и SHA-1 поддерживаются только для проверки старых подписей.
"""

from __future__ import annotations

import logging
from typing import Dict, Final, Optional, Union

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, utils

from cipherkit.algorithms.asymmetric import load_private_key, load_public_key
from cipherkit.algorithms.hashing import get_hash_algorithm
from cipherkit.config import DEFAULT_CONFIG, CryptoConfig
from cipherkit.core.exceptions import InvalidKeyError
from cipherkit.core.metadata import HashAlgorithm
from cipherkit.core.result import OperationResult
from cipherkit.utils import BytesLike, require_bytes, require_text

logger = logging.getLogger(__name__)

_PREHASH: Final[Dict[HashAlgorithm, hashes.HashAlgorithm]] = {
    HashAlgorithm.MD5: hashes.MD5(),
    HashAlgorithm.SHA1: hashes.SHA1(),
    HashAlgorithm.SHA256: hashes.SHA256(),
    HashAlgorithm.SHA384: hashes.SHA384(),
    HashAlgorithm.SHA512: hashes.SHA512(),
}


class RSASignatureEngine:
    """
    RSA PKCS#1 v1.5 signatures over a HashEngine digest.

    hash_algorithm=None selects config.hash_algorithm (SHA-256 by default).
    """

    def __init__(self, config: Optional[CryptoConfig] = None) -> None:
        self._config = config or DEFAULT_CONFIG

    @property
    def config(self) -> CryptoConfig:
        return self._config

    def _prehashed(
        self, data: bytes, hash_algorithm: Optional[Union[HashAlgorithm, str]]
    ) -> "tuple[bytes, utils.Prehashed]":
        if hash_algorithm is None:
            hash_algorithm = self._config.hash_algorithm
        engine = get_hash_algorithm(hash_algorithm)
        digest = engine.digest(data)
        return digest, utils.Prehashed(_PREHASH[engine.algorithm])

    def sign(
        self,
        data: BytesLike,
        hash_algorithm: Optional[Union[HashAlgorithm, str]],
        private_key: str,
    ) -> OperationResult[bytes]:
        """
        Подписать data закрытым ключом (PEM PKCS#8).

        Returns:
            Success с подписью (key_size/8 байт) или failure

        Raises:
            InvalidArgumentError: data/private_key пустые или None
            AlgorithmNotFoundError: неизвестный hash_algorithm
        """
        data = require_bytes(data, "data")
        require_text(private_key, "private_key")
        digest, prehashed = self._prehashed(data, hash_algorithm)
        operation = "RSA.sign"

        try:
            key = load_private_key(private_key)
            signature = key.sign(digest, padding.PKCS1v15(), prehashed)
        except (InvalidKeyError, ValueError, UnsupportedAlgorithm) as exc:
            logger.warning("%s failed: %s", operation, exc.__class__.__name__)
            return OperationResult.failure("Signing failed", operation=operation)

        logger.debug("Signed %d bytes -> %d-byte signature", len(data), len(signature))
        return OperationResult.success(signature, operation=operation)

    def verify(
        self,
        data: BytesLike,
        signature: BytesLike,
        hash_algorithm: Optional[Union[HashAlgorithm, str]],
        public_key: str,
    ) -> bool:
        """
        Проверить подпись открытым ключом (PEM SubjectPublicKeyInfo).

        Returns:
            True только для подлинной подписи этих данных этим ключом
            с этим digest.

        Raises:
            InvalidArgumentError: data/signature/public_key пустые или None
            AlgorithmNotFoundError: неизвестный hash_algorithm
        """
        data = require_bytes(data, "data")
        signature = require_bytes(signature, "signature")
        require_text(public_key, "public_key")
        digest, prehashed = self._prehashed(data, hash_algorithm)

        try:
            key = load_public_key(public_key)
            key.verify(signature, digest, padding.PKCS1v15(), prehashed)
        except InvalidSignature:
            logger.debug("Signature verification failed")
            return False
        except (InvalidKeyError, ValueError, UnsupportedAlgorithm) as exc:
            logger.warning("RSA.verify failed: %s", exc.__class__.__name__)
            return False

        return True

    def __repr__(self) -> str:
        return "RSASignatureEngine()"


__all__ = ["RSASignatureEngine"]
