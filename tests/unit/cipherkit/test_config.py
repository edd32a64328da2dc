"""Tests for CryptoConfig and KdfProfile."""

from __future__ import annotations

import dataclasses

import pytest

from cipherkit.config import DEFAULT_CONFIG, CryptoConfig, KdfProfile
from cipherkit.core.exceptions import InvalidKeySizeError, InvalidParameterError
from cipherkit.core.metadata import HashAlgorithm
from cipherkit.service import HashCrypto


def test_defaults() -> None:
    assert DEFAULT_CONFIG.kdf_iterations == 10_000
    assert DEFAULT_CONFIG.hash_algorithm is HashAlgorithm.SHA256
    assert DEFAULT_CONFIG.rsa_key_size == 4096


@pytest.mark.parametrize(
    "profile,iterations",
    [
        (KdfProfile.LEGACY, 5_000),
        (KdfProfile.STANDARD, 10_000),
        (KdfProfile.HARDENED, 100_000),
    ],
)
def test_profiles(profile: KdfProfile, iterations: int) -> None:
    assert CryptoConfig.from_profile(profile).kdf_iterations == iterations


def test_frozen() -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        DEFAULT_CONFIG.kdf_iterations = 1  # type: ignore[misc]


def test_iterations_below_floor() -> None:
    with pytest.raises(InvalidParameterError):
        CryptoConfig(kdf_iterations=4_999)


@pytest.mark.parametrize("size", [2047, 16385, 256])
def test_invalid_rsa_key_size(size: int) -> None:
    with pytest.raises(InvalidKeySizeError):
        CryptoConfig(rsa_key_size=size)


def test_hash_algorithm_type() -> None:
    with pytest.raises(TypeError):
        CryptoConfig(hash_algorithm="sha256")  # type: ignore[arg-type]


def test_hash_algorithm_selects_hash_crypto_engine() -> None:
    crypto = HashCrypto(config=CryptoConfig(hash_algorithm=HashAlgorithm.SHA512))
    assert crypto.hash_size == 512
    assert len(crypto.digest(b"abc")) == 64
