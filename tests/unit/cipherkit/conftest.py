"""Shared fixtures for cipherkit tests."""

from __future__ import annotations

import pytest

from cipherkit.algorithms.asymmetric import RSACipher, SessionKeyPair


@pytest.fixture(scope="session")
def rsa_pair_2048() -> SessionKeyPair:
    """One RSA-2048 pair for the whole run (key generation is slow)."""
    return RSACipher().generate_key_pair(2048).unwrap()


@pytest.fixture(scope="session")
def rsa_pair_2048_other() -> SessionKeyPair:
    """Second, unrelated RSA-2048 pair for wrong-key checks."""
    return RSACipher().generate_key_pair(2048).unwrap()


@pytest.fixture(scope="session")
def rsa_pair_1024() -> SessionKeyPair:
    return RSACipher().generate_key_pair(1024).unwrap()
