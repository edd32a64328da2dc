# -*- coding: utf-8 -*-
"""
RU: Хранение паролей: Argon2id/PBKDF2 со случайной солью в закодированной строке.
EN: Password storage hashing with Argon2id/PBKDF2 and a stored random salt.

Unlike cipherkit.algorithms.kdf (deterministic salt, meant for turning a
password into a cipher key), every hash here gets a fresh CSPRNG salt, so
equal passwords produce different encodings.

Encodings:
    pbkdf2:sha256:<iterations>:<b64 salt>:<b64 dk>
    argon2id:<t>:<m>:<p>:v=19:<b64 salt>:<b64 hash>

Best practices:
- Use Argon2id for all new hashes
- Monitor needs_rehash() for parameter upgrades
"""
from __future__ import annotations

import hashlib
import logging
from typing import Final, Tuple

from argon2.exceptions import HashingError
from argon2.low_level import Type, hash_secret_raw

from cipherkit import codec
from cipherkit.core.exceptions import PasswordHashError
from cipherkit.utils import generate_random_bytes, secure_compare

_LOGGER: Final = logging.getLogger(__name__)

# Security limits
_MAX_PASSWORD_LEN: Final[int] = 4096
_MIN_ITERS: Final[int] = 100_000
_DEF_ITERS: Final[int] = 200_000
_MIN_SALT_LEN: Final[int] = 8
_MAX_SALT_LEN: Final[int] = 64
_HASH_LEN: Final[int] = 32

# Argon2id defaults
_DEF_T: Final[int] = 3
_DEF_M: Final[int] = 65_536
_DEF_P: Final[int] = 2
_ARGON2_VERSION: Final[int] = 19

_SCHEMES: Final[Tuple[str, ...]] = ("pbkdf2", "argon2id")


def _unb64(field: str) -> bytes:
    if not field:
        raise PasswordHashError("Empty Base64 field")
    decoded = codec.from_base64(field)
    if not decoded.ok or not decoded.value:
        raise PasswordHashError("Malformed Base64 field")
    return decoded.value


class PasswordHasher:
    """
    Password hasher with Argon2id (default) or PBKDF2-HMAC-SHA256.

    Examples:
        >>> hasher = PasswordHasher()
        >>> encoded = hasher.hash_password("s3cret")
        >>> hasher.verify_password("s3cret", encoded)
        True
        >>> hasher.verify_password("wrong", encoded)
        False
    """

    __slots__ = ("_scheme", "_iterations", "_salt_len", "_t", "_m", "_p")

    def __init__(
        self,
        scheme: str = "argon2id",
        *,
        iterations: int = _DEF_ITERS,
        salt_len: int = 16,
        time_cost: int = _DEF_T,
        memory_cost: int = _DEF_M,
        parallelism: int = _DEF_P,
    ) -> None:
        if scheme not in _SCHEMES:
            raise PasswordHashError("Scheme must be 'pbkdf2' or 'argon2id'")

        if not (_MIN_SALT_LEN <= salt_len <= _MAX_SALT_LEN):
            raise PasswordHashError(
                f"Salt length must be {_MIN_SALT_LEN}-{_MAX_SALT_LEN} bytes"
            )

        if scheme == "pbkdf2" and iterations < _MIN_ITERS:
            raise PasswordHashError(f"Iterations must be >= {_MIN_ITERS}")
        if scheme == "argon2id":
            if time_cost < 2:
                raise PasswordHashError("time_cost must be >= 2")
            if memory_cost < 65_536:
                raise PasswordHashError("memory_cost must be >= 65536")
            if parallelism < 1:
                raise PasswordHashError("parallelism must be >= 1")

        self._scheme = scheme
        self._salt_len = salt_len
        self._iterations = iterations
        self._t = time_cost
        self._m = memory_cost
        self._p = parallelism

    @property
    def scheme(self) -> str:
        return self._scheme

    def _argon2(self, password: bytes, salt: bytes, t: int, m: int, p: int) -> bytes:
        try:
            return hash_secret_raw(
                password,
                salt,
                time_cost=t,
                memory_cost=m,
                parallelism=p,
                hash_len=_HASH_LEN,
                type=Type.ID,
                version=_ARGON2_VERSION,
            )
        except HashingError as exc:
            raise PasswordHashError("Argon2id hashing failed") from exc

    def hash_password(self, password: str) -> str:
        """
        Hash a password with a fresh random salt.

        Raises:
            PasswordHashError: empty or oversized password.
        """
        if not isinstance(password, str) or not password or len(password) > _MAX_PASSWORD_LEN:
            raise PasswordHashError("Invalid password length")

        pw_bytes = password.encode("utf-8")
        salt = generate_random_bytes(self._salt_len)

        if self._scheme == "pbkdf2":
            dk = hashlib.pbkdf2_hmac("sha256", pw_bytes, salt, self._iterations, dklen=_HASH_LEN)
            parts = [
                "pbkdf2",
                "sha256",
                str(self._iterations),
                codec.to_base64(salt),
                codec.to_base64(dk),
            ]
        else:
            raw_hash = self._argon2(pw_bytes, salt, self._t, self._m, self._p)
            parts = [
                "argon2id",
                str(self._t),
                str(self._m),
                str(self._p),
                f"v={_ARGON2_VERSION}",
                codec.to_base64(salt),
                codec.to_base64(raw_hash),
            ]

        _LOGGER.debug("Password hashed with %s", self._scheme)
        return ":".join(parts)

    def verify_password(self, password: str, hashed: str) -> bool:
        """
        Verify a password against an encoding from hash_password().

        Malformed or unsupported encodings return False.
        """
        if not password or not hashed:
            return False

        try:
            computed, expected = self._recompute(password.encode("utf-8"), hashed)
        except (ValueError, PasswordHashError) as exc:
            _LOGGER.warning("Password verification failed: %s", exc.__class__.__name__)
            return False

        return secure_compare(computed, expected)

    def _recompute(self, pw_bytes: bytes, hashed: str) -> Tuple[bytes, bytes]:
        parts = hashed.split(":")
        scheme = parts[0]

        if scheme == "pbkdf2" and len(parts) == 5 and parts[1] == "sha256":
            iterations = int(parts[2])
            if iterations < 1:
                raise PasswordHashError("Invalid iteration count")
            salt, expected = _unb64(parts[3]), _unb64(parts[4])
            computed = hashlib.pbkdf2_hmac(
                "sha256", pw_bytes, salt, iterations, dklen=len(expected)
            )
            return computed, expected

        if scheme == "argon2id" and len(parts) == 7 and parts[4] == f"v={_ARGON2_VERSION}":
            t, m, p = int(parts[1]), int(parts[2]), int(parts[3])
            salt, expected = _unb64(parts[5]), _unb64(parts[6])
            if len(expected) != _HASH_LEN:
                raise PasswordHashError("Unexpected hash length")
            return self._argon2(pw_bytes, salt, t, m, p), expected

        raise PasswordHashError("Unsupported password hash encoding")

    def needs_rehash(self, hashed: str) -> bool:
        """True if the encoding uses another scheme or weaker parameters."""
        parts = hashed.split(":") if hashed else []
        try:
            if parts and parts[0] != self._scheme:
                return True
            if self._scheme == "pbkdf2" and len(parts) == 5:
                return int(parts[2]) < self._iterations
            if self._scheme == "argon2id" and len(parts) == 7:
                t, m, p = int(parts[1]), int(parts[2]), int(parts[3])
                return t < self._t or m < self._m or p < self._p
        except ValueError:
            return True
        return True

    def __repr__(self) -> str:
        return f"PasswordHasher(scheme={self._scheme!r})"


__all__ = ["PasswordHasher"]
