"""
Тесты для signing.py - RSA PKCS#1 v1.5 подписи поверх HashEngine.

Покрытие:
- sign/verify roundtrip для MD5, SHA-1 и SHA-2
- Подпись привязана к digest, данным и ключу
- verify() никогда не бросает для неверной подписи
- Предусловия
"""

from __future__ import annotations

import pytest
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding

from cipherkit.algorithms.asymmetric import SessionKeyPair, load_public_key
from cipherkit.algorithms.signing import RSASignatureEngine
from cipherkit.core.exceptions import AlgorithmNotFoundError, InvalidArgumentError
from cipherkit.core.metadata import HashAlgorithm

DATA = b"document to sign"

SIGNING_HASHES = [
    HashAlgorithm.MD5,
    HashAlgorithm.SHA1,
    HashAlgorithm.SHA256,
    HashAlgorithm.SHA384,
    HashAlgorithm.SHA512,
]


@pytest.fixture
def engine() -> RSASignatureEngine:
    return RSASignatureEngine()


class TestSignVerify:
    @pytest.mark.parametrize("hash_algorithm", SIGNING_HASHES)
    def test_roundtrip(
        self,
        engine: RSASignatureEngine,
        rsa_pair_2048: SessionKeyPair,
        hash_algorithm: HashAlgorithm,
    ) -> None:
        signature = engine.sign(DATA, hash_algorithm, rsa_pair_2048.private_key).unwrap()
        assert len(signature) == 256
        assert engine.verify(DATA, signature, hash_algorithm, rsa_pair_2048.public_key)

    def test_compatible_with_plain_pkcs1v15(
        self, engine: RSASignatureEngine, rsa_pair_2048: SessionKeyPair
    ) -> None:
        signature = engine.sign(DATA, HashAlgorithm.SHA256, rsa_pair_2048.private_key).unwrap()
        public = load_public_key(rsa_pair_2048.public_key)
        public.verify(signature, DATA, padding.PKCS1v15(), hashes.SHA256())

    def test_deterministic(self, engine: RSASignatureEngine, rsa_pair_2048: SessionKeyPair) -> None:
        first = engine.sign(DATA, "sha256", rsa_pair_2048.private_key).unwrap()
        second = engine.sign(DATA, "sha256", rsa_pair_2048.private_key).unwrap()
        assert first == second

    def test_default_hash_from_config(
        self, engine: RSASignatureEngine, rsa_pair_2048: SessionKeyPair
    ) -> None:
        signature = engine.sign(DATA, None, rsa_pair_2048.private_key).unwrap()
        assert engine.verify(DATA, signature, HashAlgorithm.SHA256, rsa_pair_2048.public_key)


class TestVerifyRejects:
    @pytest.fixture
    def signature(self, engine: RSASignatureEngine, rsa_pair_2048: SessionKeyPair) -> bytes:
        return engine.sign(DATA, HashAlgorithm.SHA256, rsa_pair_2048.private_key).unwrap()

    def test_tampered_data(
        self, engine: RSASignatureEngine, rsa_pair_2048: SessionKeyPair, signature: bytes
    ) -> None:
        assert not engine.verify(
            DATA + b"!", signature, HashAlgorithm.SHA256, rsa_pair_2048.public_key
        )

    def test_tampered_signature(
        self, engine: RSASignatureEngine, rsa_pair_2048: SessionKeyPair, signature: bytes
    ) -> None:
        tampered = bytes([signature[0] ^ 0x01]) + signature[1:]
        assert not engine.verify(DATA, tampered, HashAlgorithm.SHA256, rsa_pair_2048.public_key)

    def test_different_digest(
        self, engine: RSASignatureEngine, rsa_pair_2048: SessionKeyPair, signature: bytes
    ) -> None:
        assert not engine.verify(DATA, signature, HashAlgorithm.SHA512, rsa_pair_2048.public_key)

    def test_wrong_key(
        self,
        engine: RSASignatureEngine,
        rsa_pair_2048_other: SessionKeyPair,
        signature: bytes,
    ) -> None:
        assert not engine.verify(
            DATA, signature, HashAlgorithm.SHA256, rsa_pair_2048_other.public_key
        )

    def test_malformed_public_key(self, engine: RSASignatureEngine, signature: bytes) -> None:
        assert not engine.verify(DATA, signature, HashAlgorithm.SHA256, "garbage")

    def test_short_signature(
        self, engine: RSASignatureEngine, rsa_pair_2048: SessionKeyPair
    ) -> None:
        assert not engine.verify(DATA, b"\x00" * 5, HashAlgorithm.SHA256, rsa_pair_2048.public_key)


class TestSignFailures:
    def test_malformed_private_key(self, engine: RSASignatureEngine) -> None:
        result = engine.sign(DATA, HashAlgorithm.SHA256, "garbage")
        assert not result.ok

    def test_unknown_hash(self, engine: RSASignatureEngine, rsa_pair_2048: SessionKeyPair) -> None:
        with pytest.raises(AlgorithmNotFoundError):
            engine.sign(DATA, "whirlpool", rsa_pair_2048.private_key)

    @pytest.mark.parametrize("data,key", [(b"", "k"), (None, "k"), (DATA, ""), (DATA, None)])
    def test_empty_arguments(self, engine: RSASignatureEngine, data: object, key: object) -> None:
        with pytest.raises(InvalidArgumentError):
            engine.sign(data, HashAlgorithm.SHA256, key)  # type: ignore[arg-type]

    def test_verify_empty_signature(
        self, engine: RSASignatureEngine, rsa_pair_2048: SessionKeyPair
    ) -> None:
        with pytest.raises(InvalidArgumentError):
            engine.verify(DATA, b"", HashAlgorithm.SHA256, rsa_pair_2048.public_key)
