# -*- coding: utf-8 -*-
"""
RU: Конфигурация cipherkit: число итераций KDF, алгоритм хеширования
по умолчанию и размер RSA ключа, с профилями стойкости.
EN: cipherkit configuration with KDF strength profiles.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final

from cipherkit.algorithms.kdf import DEFAULT_ITERATIONS, MIN_ITERATIONS
from cipherkit.core.exceptions import InvalidKeySizeError, InvalidParameterError
from cipherkit.core.metadata import (
    DEFAULT_RSA_KEY_SIZE,
    HashAlgorithm,
    is_valid_rsa_key_size,
)


class KdfProfile(str, Enum):
    """Predefined PBKDF2 iteration profiles."""

    # Floor accepted by the KDF; only for data encrypted by old deployments
    LEGACY = "legacy"

    # Default, compatible with existing ciphertexts
    STANDARD = "standard"

    # New deployments that do not need to read old ciphertexts
    HARDENED = "hardened"


@dataclass(frozen=True)
class CryptoConfig:
    """
    Immutable cipherkit parameters.

    Attributes:
        kdf_iterations: PBKDF2 iteration count for password-based ciphers.
        hash_algorithm: Default digest for HashCrypto and RSA signatures.
        rsa_key_size: Default RSA modulus size in bits for key generation.

    Examples:
        >>> CryptoConfig.from_profile(KdfProfile.HARDENED).kdf_iterations
        100000

        >>> CryptoConfig(kdf_iterations=20_000).rsa_key_size
        4096
    """

    kdf_iterations: int = DEFAULT_ITERATIONS
    hash_algorithm: HashAlgorithm = HashAlgorithm.SHA256
    rsa_key_size: int = DEFAULT_RSA_KEY_SIZE

    def __post_init__(self) -> None:
        """Validate parameters."""
        if self.kdf_iterations < MIN_ITERATIONS:
            raise InvalidParameterError(
                f"kdf_iterations must be >= {MIN_ITERATIONS}",
                parameter="kdf_iterations",
            )
        if not isinstance(self.hash_algorithm, HashAlgorithm):
            raise TypeError("hash_algorithm must be a HashAlgorithm")
        if not is_valid_rsa_key_size(self.rsa_key_size):
            raise InvalidKeySizeError(
                f"Invalid RSA key size {self.rsa_key_size}",
                algorithm="RSA",
                actual_size=self.rsa_key_size,
            )

    @staticmethod
    def from_profile(profile: KdfProfile) -> "CryptoConfig":
        """
        Create configuration from predefined profile.

        Examples:
            >>> CryptoConfig.from_profile(KdfProfile.LEGACY).kdf_iterations
            5000
        """
        return _PROFILE_PARAMS[profile]


_PROFILE_PARAMS: Final[dict[KdfProfile, CryptoConfig]] = {
    KdfProfile.LEGACY: CryptoConfig(kdf_iterations=5_000),
    KdfProfile.STANDARD: CryptoConfig(kdf_iterations=10_000),
    KdfProfile.HARDENED: CryptoConfig(kdf_iterations=100_000),
}

DEFAULT_CONFIG: Final[CryptoConfig] = CryptoConfig()


__all__ = [
    "KdfProfile",
    "CryptoConfig",
    "DEFAULT_CONFIG",
]
