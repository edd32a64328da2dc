"""
Асимметричное шифрование RSA-OAEP с ключами в PEM.

Особенности:
- Размер ключа: 384..16384 бит с шагом 8 (проверяется до любой работы)
- Padding: OAEP, SHA-256 + MGF1-SHA-256
- Ключи: PEM текст (SubjectPublicKeyInfo / PKCS#8 без шифрования)
- Public exponent: 65537 (F4)

Ограничения:
- Максимальный plaintext: key_size/8 - 2*32 - 2 байт
  (2048 -> 190, 3072 -> 318, 4096 -> 446)
- cryptography не генерирует ключи короче 1024 бит: generate_key_pair(512)
  проходит валидацию, но возвращает failure
- Для больших данных используйте гибридную схему (RSA + AESCipher)

Failure policy:
    - Пустые аргументы -> InvalidArgumentError
    - Недопустимый key_size -> InvalidKeySizeError
    - Битый ключ, ключ другого размера, слишком большой plaintext,
      нерасшифровываемый ciphertext -> OperationResult.failure

Example:
    >>> cipher = RSACipher()
    >>> pair = cipher.generate_key_pair(2048).unwrap()
    >>> ct = cipher.encrypt(b"Secret", pair.public_key, 2048).unwrap()
    >>> cipher.decrypt(ct, pair.private_key, 2048).unwrap()
    b'Secret'

References:
    - RFC 8017: PKCS #1 v2.2 (RSA-OAEP)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Final, Optional, Type, Union

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from cipherkit.config import DEFAULT_CONFIG, CryptoConfig
from cipherkit.core.exceptions import (
    AlgorithmNotFoundError,
    InvalidKeyError,
    InvalidKeySizeError,
)
from cipherkit.core.metadata import (
    RSA_KEY_SIZE_STEP,
    RSA_MAX_KEY_SIZE,
    RSA_MIN_KEY_SIZE,
    AsymmetricAlgorithm,
    is_valid_rsa_key_size,
)
from cipherkit.core.protocols import AsymmetricCipherProtocol
from cipherkit.core.result import OperationResult
from cipherkit.utils import BytesLike, require_bytes, require_text

logger = logging.getLogger(__name__)


# ==============================================================================
# CONSTANTS
# ==============================================================================

# RSA standard public exponent (F4 = 2^16 + 1)
RSA_PUBLIC_EXPONENT: Final[int] = 65537

# OAEP overhead for SHA-256: 2 * 32 + 2
OAEP_OVERHEAD: Final[int] = 66


# ==============================================================================
# KEY TYPES
# ==============================================================================


@dataclass(frozen=True)
class SessionKeyPair:
    """
    Сериализованная пара RSA ключей.

    Attributes:
        public_key: PEM SubjectPublicKeyInfo
        private_key: PEM PKCS#8 (без шифрования)
        key_size: Размер модуля в битах
    """

    public_key: str
    private_key: str
    key_size: int

    def __repr__(self) -> str:
        return f"SessionKeyPair(key_size={self.key_size}, private_key=<redacted>)"


# ==============================================================================
# HELPER FUNCTIONS
# ==============================================================================


def valid_rsa_key_sizes() -> range:
    """Все допустимые размеры ключа: 384, 392, ..., 16384."""
    return range(RSA_MIN_KEY_SIZE, RSA_MAX_KEY_SIZE + 1, RSA_KEY_SIZE_STEP)


def _validate_key_size(key_size: int) -> None:
    """
    Raises:
        InvalidKeySizeError: key_size вне 384..16384 или не кратен 8
    """
    if not is_valid_rsa_key_size(key_size):
        raise InvalidKeySizeError(
            f"Invalid RSA key size {key_size}: must be "
            f"{RSA_MIN_KEY_SIZE}..{RSA_MAX_KEY_SIZE} in steps of {RSA_KEY_SIZE_STEP}",
            algorithm="RSA",
            actual_size=key_size if isinstance(key_size, int) else None,
        )


def max_payload_size(key_size: int) -> int:
    """
    Максимальный размер plaintext для RSA-OAEP-SHA256.

    Для ключей короче 528 бит OAEP-SHA256 неприменим (возвращается 0).

    Raises:
        InvalidKeySizeError: недопустимый key_size
    """
    _validate_key_size(key_size)
    return max(key_size // 8 - OAEP_OVERHEAD, 0)


def load_public_key(pem: str) -> rsa.RSAPublicKey:
    """
    Разобрать PEM открытый ключ.

    Raises:
        InvalidArgumentError: pem пустой или None
        InvalidKeyError: не PEM или не RSA ключ
    """
    pem = require_text(pem, "public_key")
    try:
        key = serialization.load_pem_public_key(pem.encode("utf-8"))
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise InvalidKeyError("Malformed public key", algorithm="RSA") from exc

    if not isinstance(key, rsa.RSAPublicKey):
        raise InvalidKeyError("Key must be RSA public key", algorithm="RSA")
    return key


def load_private_key(pem: str) -> rsa.RSAPrivateKey:
    """
    Разобрать PEM закрытый ключ (PKCS#8 без пароля).

    Raises:
        InvalidArgumentError: pem пустой или None
        InvalidKeyError: не PEM, зашифрован паролем или не RSA ключ
    """
    pem = require_text(pem, "private_key")
    try:
        key = serialization.load_pem_private_key(pem.encode("utf-8"), password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise InvalidKeyError("Malformed private key", algorithm="RSA") from exc

    if not isinstance(key, rsa.RSAPrivateKey):
        raise InvalidKeyError("Key must be RSA private key", algorithm="RSA")
    return key


def _oaep() -> padding.OAEP:
    return padding.OAEP(
        mgf=padding.MGF1(algorithm=hashes.SHA256()),
        algorithm=hashes.SHA256(),
        label=None,
    )


# ==============================================================================
# RSA-OAEP
# ==============================================================================


class RSACipher:
    """
    RSA-OAEP шифр с PEM ключами и явным размером ключа.

    key_size передаётся в каждый вызов и сверяется с модулем ключа:
    ключ другого размера даёт failure, а не молчаливое шифрование.

    Security Note:
        OAEP рандомизирован: одинаковый plaintext даёт разный ciphertext.
        Причина сбоя decrypt намеренно не уточняется.
    """

    algorithm = AsymmetricAlgorithm.RSA

    def __init__(self, config: Optional[CryptoConfig] = None) -> None:
        self._config = config or DEFAULT_CONFIG

    @property
    def config(self) -> CryptoConfig:
        return self._config

    def generate_key_pair(
        self, key_size: Optional[int] = None
    ) -> OperationResult[SessionKeyPair]:
        """
        Сгенерировать новую пару ключей.

        Args:
            key_size: Размер модуля в битах (None -> config.rsa_key_size, 4096)

        Returns:
            Success с SessionKeyPair или failure, если backend отказался
            генерировать ключ такого размера

        Raises:
            InvalidKeySizeError: key_size вне 384..16384 или не кратен 8
        """
        if key_size is None:
            key_size = self._config.rsa_key_size
        _validate_key_size(key_size)

        operation = "RSA.generate_key_pair"
        logger.debug("Generating RSA-%d keypair...", key_size)
        try:
            private_key = rsa.generate_private_key(
                public_exponent=RSA_PUBLIC_EXPONENT,
                key_size=key_size,
            )
        except (ValueError, UnsupportedAlgorithm) as exc:
            logger.warning(
                "RSA-%d key generation failed: %s", key_size, exc.__class__.__name__
            )
            return OperationResult.failure(
                f"Backend cannot generate RSA-{key_size} keys", operation=operation
            )

        private_pem = private_key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption(),
        ).decode("ascii")
        public_pem = (
            private_key.public_key()
            .public_bytes(
                encoding=serialization.Encoding.PEM,
                format=serialization.PublicFormat.SubjectPublicKeyInfo,
            )
            .decode("ascii")
        )

        logger.debug("Generated RSA-%d keypair", key_size)
        return OperationResult.success(
            SessionKeyPair(public_key=public_pem, private_key=private_pem, key_size=key_size),
            operation=operation,
        )

    def encrypt(
        self, data: BytesLike, public_key: str, key_size: int
    ) -> OperationResult[bytes]:
        """
        Зашифровать data открытым ключом.

        Returns:
            Success с ciphertext (key_size/8 байт) или failure: битый ключ,
            ключ другого размера, plaintext больше max_payload_size

        Raises:
            InvalidArgumentError: data/public_key пустые или None
            InvalidKeySizeError: недопустимый key_size
        """
        data = require_bytes(data, "data")
        require_text(public_key, "public_key")
        _validate_key_size(key_size)
        operation = "RSA.encrypt"

        try:
            key = load_public_key(public_key)
        except InvalidKeyError:
            logger.warning("%s failed: InvalidKeyError", operation)
            return OperationResult.failure("Malformed public key", operation=operation)

        if key.key_size != key_size:
            return OperationResult.failure(
                f"Key size mismatch: key is RSA-{key.key_size}", operation=operation
            )

        limit = max_payload_size(key_size)
        if len(data) > limit:
            return OperationResult.failure(
                f"Data too large: {len(data)} bytes (max {limit} for RSA-{key_size})",
                operation=operation,
            )

        try:
            ciphertext = key.encrypt(data, _oaep())
        except ValueError as exc:
            logger.warning("%s failed: %s", operation, exc.__class__.__name__)
            return OperationResult.failure("Encryption failed", operation=operation)

        logger.debug("Encrypted %dB -> %dB (RSA-%d)", len(data), len(ciphertext), key_size)
        return OperationResult.success(ciphertext, operation=operation)

    def decrypt(
        self, data: BytesLike, private_key: str, key_size: int
    ) -> OperationResult[bytes]:
        """
        Расшифровать data закрытым ключом.

        Raises:
            InvalidArgumentError: data/private_key пустые или None
            InvalidKeySizeError: недопустимый key_size
        """
        data = require_bytes(data, "data")
        require_text(private_key, "private_key")
        _validate_key_size(key_size)
        operation = "RSA.decrypt"

        try:
            key = load_private_key(private_key)
        except InvalidKeyError:
            logger.warning("%s failed: InvalidKeyError", operation)
            return OperationResult.failure("Malformed private key", operation=operation)

        if key.key_size != key_size:
            return OperationResult.failure(
                f"Key size mismatch: key is RSA-{key.key_size}", operation=operation
            )

        try:
            plaintext = key.decrypt(data, _oaep())
        except ValueError as exc:
            # НЕ раскрываем детали ошибки (padding oracle)
            logger.warning("%s failed: %s", operation, exc.__class__.__name__)
            return OperationResult.failure(
                "Decryption failed: invalid key or ciphertext", operation=operation
            )

        logger.debug("Decrypted %dB -> %dB (RSA-%d)", len(data), len(plaintext), key_size)
        return OperationResult.success(plaintext, operation=operation)

    def __repr__(self) -> str:
        return f"RSACipher(rsa_key_size={self._config.rsa_key_size})"


# ==============================================================================
# REGISTRY & FACTORY
# ==============================================================================

ASYMMETRIC_ALGORITHMS: Final[Dict[AsymmetricAlgorithm, Type[RSACipher]]] = {
    AsymmetricAlgorithm.RSA: RSACipher,
}


def get_asymmetric_algorithm(
    algorithm: Union[AsymmetricAlgorithm, str],
    config: Optional[CryptoConfig] = None,
) -> AsymmetricCipherProtocol:
    """
    Получить асимметричный шифр по идентификатору ("rsa").

    Raises:
        AlgorithmNotFoundError: Если алгоритм не входит в перечень
    """
    try:
        key = AsymmetricAlgorithm(
            algorithm.lower() if isinstance(algorithm, str) else algorithm
        )
    except ValueError:
        raise AlgorithmNotFoundError(
            str(algorithm), [alg.value for alg in ASYMMETRIC_ALGORITHMS]
        ) from None

    instance: AsymmetricCipherProtocol = ASYMMETRIC_ALGORITHMS[key](config)
    return instance


__all__ = [
    "RSA_PUBLIC_EXPONENT",
    "OAEP_OVERHEAD",
    "SessionKeyPair",
    "RSACipher",
    "is_valid_rsa_key_size",
    "valid_rsa_key_sizes",
    "max_payload_size",
    "load_public_key",
    "load_private_key",
    "ASYMMETRIC_ALGORITHMS",
    "get_asymmetric_algorithm",
]
