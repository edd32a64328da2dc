# -*- coding: utf-8 -*-
"""
Tests for PasswordHasher

Coverage goals:
- Hash/verify paths (PBKDF2, Argon2id)
- Random salt per hash
- needs_rehash logic
- Malformed input handling
"""

from __future__ import annotations

import pytest

from cipherkit import codec
from cipherkit.core.exceptions import PasswordHashError
from cipherkit.passwords import PasswordHasher

# ============================================
# FIXTURES
# ============================================


@pytest.fixture(scope="module")
def pbkdf2() -> PasswordHasher:
    return PasswordHasher("pbkdf2", iterations=100_000)


@pytest.fixture(scope="module")
def argon2id() -> PasswordHasher:
    return PasswordHasher("argon2id", time_cost=2, memory_cost=65_536, parallelism=1)


# ============================================
# PBKDF2
# ============================================


class TestPbkdf2:
    def test_roundtrip(self, pbkdf2: PasswordHasher) -> None:
        encoded = pbkdf2.hash_password("s3cret")
        assert pbkdf2.verify_password("s3cret", encoded)
        assert not pbkdf2.verify_password("s3cret!", encoded)

    def test_encoding_layout(self, pbkdf2: PasswordHasher) -> None:
        parts = pbkdf2.hash_password("s3cret").split(":")
        assert parts[:3] == ["pbkdf2", "sha256", "100000"]
        assert len(codec.from_base64(parts[3]).unwrap()) == 16
        assert len(codec.from_base64(parts[4]).unwrap()) == 32

    def test_random_salt(self, pbkdf2: PasswordHasher) -> None:
        assert pbkdf2.hash_password("s3cret") != pbkdf2.hash_password("s3cret")

    def test_low_iterations_rejected(self) -> None:
        with pytest.raises(PasswordHashError):
            PasswordHasher("pbkdf2", iterations=1_000)


# ============================================
# ARGON2ID
# ============================================


class TestArgon2id:
    def test_roundtrip(self, argon2id: PasswordHasher) -> None:
        encoded = argon2id.hash_password("пароль")
        assert encoded.startswith("argon2id:2:65536:1:v=19:")
        assert argon2id.verify_password("пароль", encoded)
        assert not argon2id.verify_password("парол", encoded)

    def test_cross_scheme_verify(
        self, pbkdf2: PasswordHasher, argon2id: PasswordHasher
    ) -> None:
        assert argon2id.verify_password("s3cret", pbkdf2.hash_password("s3cret"))

    @pytest.mark.parametrize(
        "kwargs",
        [{"time_cost": 1}, {"memory_cost": 1024}, {"parallelism": 0}],
    )
    def test_weak_parameters_rejected(self, kwargs: dict) -> None:
        with pytest.raises(PasswordHashError):
            PasswordHasher("argon2id", **kwargs)


# ============================================
# VALIDATION & MALFORMED INPUT
# ============================================


class TestValidation:
    def test_unknown_scheme(self) -> None:
        with pytest.raises(PasswordHashError):
            PasswordHasher("md5crypt")

    @pytest.mark.parametrize("salt_len", [4, 65])
    def test_salt_length_bounds(self, salt_len: int) -> None:
        with pytest.raises(PasswordHashError):
            PasswordHasher(salt_len=salt_len)

    @pytest.mark.parametrize("password", ["", "x" * 4097])
    def test_bad_password_length(self, pbkdf2: PasswordHasher, password: str) -> None:
        with pytest.raises(PasswordHashError):
            pbkdf2.hash_password(password)

    @pytest.mark.parametrize(
        "encoded",
        [
            "",
            "garbage",
            "pbkdf2:sha256:abc:AAAA:AAAA",
            "pbkdf2:sha1:100000:AAAA:AAAA",
            "pbkdf2:sha256:100000:!!!!:AAAA",
            "pbkdf2:sha256:100000::AAAA",
            "pbkdf2:sha256:100000:AAAA:AAA",
            "argon2id:3:65536:2:v=19::AAAA",
            "argon2id:2:65536:1:v=16:AAAA:AAAA",
            "bcrypt:$2b$12$abc",
        ],
    )
    def test_malformed_encoding_is_false(self, pbkdf2: PasswordHasher, encoded: str) -> None:
        assert not pbkdf2.verify_password("s3cret", encoded)


# ============================================
# NEEDS_REHASH
# ============================================


class TestNeedsRehash:
    def test_current_parameters(self, pbkdf2: PasswordHasher) -> None:
        assert not pbkdf2.needs_rehash(pbkdf2.hash_password("s3cret"))

    def test_stronger_policy(self, pbkdf2: PasswordHasher) -> None:
        stronger = PasswordHasher("pbkdf2", iterations=200_000)
        assert stronger.needs_rehash(pbkdf2.hash_password("s3cret"))

    def test_other_scheme(self, pbkdf2: PasswordHasher, argon2id: PasswordHasher) -> None:
        assert argon2id.needs_rehash(pbkdf2.hash_password("s3cret"))

    def test_argon2_weaker_memory(self, argon2id: PasswordHasher) -> None:
        stronger = PasswordHasher("argon2id", time_cost=2, memory_cost=131_072, parallelism=1)
        assert stronger.needs_rehash(argon2id.hash_password("s3cret"))

    @pytest.mark.parametrize("encoded", ["", "garbage", "pbkdf2:sha256:x:a:b"])
    def test_malformed(self, pbkdf2: PasswordHasher, encoded: str) -> None:
        assert pbkdf2.needs_rehash(encoded)
