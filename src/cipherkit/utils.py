# -*- coding: utf-8 -*-
"""
RU: Общие утилиты: CSPRNG с проверкой вырожденного выхода, сравнение в
константное время и валидация обязательных аргументов.

EN: Shared helpers: CSPRNG with degenerate-output checks, constant-time
comparison, and required-argument validation used by every primitive.

Validation policy:
- None or empty required argument -> InvalidArgumentError (fail fast, never swallowed).
- Wrong argument type -> TypeError.
"""
from __future__ import annotations

import hmac
import logging
import secrets
from collections import Counter
from typing import Final, Optional, Union

from cipherkit.core.exceptions import InvalidArgumentError

_LOGGER: Final = logging.getLogger(__name__)

_MAX_RANDOM_BYTES: Final[int] = 10 * 1024 * 1024
_RCT_MIN_N: Final[int] = 16
_APT_MIN_N: Final[int] = 32

BytesLike = Union[bytes, bytearray]


def generate_random_bytes(n: int) -> bytes:
    """
    Generate cryptographically secure random bytes.

    Each call draws from the OS CSPRNG through ``secrets``; no generator
    state is kept between calls.

    Args:
        n: number of bytes to generate (1..10MiB).

    Returns:
        Random bytes of requested length.

    Raises:
        ValueError: if n is out of range or the output is degenerate.
    """
    if not isinstance(n, int) or n <= 0 or n > _MAX_RANDOM_BYTES:
        raise ValueError("Requested random size must be in 1..10MiB")

    out = secrets.token_bytes(n)
    _rct_apt_checks(out)
    _LOGGER.debug("Generated %d random bytes", n)
    return out


def _rct_apt_checks(data: bytes) -> None:
    """
    Repetition Count Test (RCT) and Adaptive Proportion Test (APT) sanity checks.

    Short samples (IVs) are only checked once they reach 16 bytes.

    Raises:
        ValueError: if data fails basic entropy sanity checks.
    """
    if len(data) >= _RCT_MIN_N and all(b == data[0] for b in data):
        raise ValueError("Degenerate RNG output (all bytes equal)")
    if len(data) >= _APT_MIN_N:
        freq: Counter[int] = Counter(data)
        max_prop = max(freq.values()) / float(len(data))
        if max_prop > 0.80:
            raise ValueError("RNG output fails adaptive proportion sanity check")


def secure_compare(a: BytesLike, b: BytesLike) -> bool:
    """
    Constant-time bytes comparison.

    Returns:
        True if sequences are equal, False otherwise.
    """
    return hmac.compare_digest(bytes(a), bytes(b))


def require_bytes(value: Optional[BytesLike], name: str) -> bytes:
    """
    Validate a required, non-empty byte buffer.

    Args:
        value: buffer to check.
        name: argument name for error messages.

    Returns:
        ``bytes(value)``.

    Raises:
        InvalidArgumentError: if value is None or empty.
        TypeError: if value is not bytes/bytearray.
    """
    if value is None:
        raise InvalidArgumentError(name, f"'{name}' must not be None")
    if not isinstance(value, (bytes, bytearray)):
        raise TypeError(f"{name} must be bytes, got {type(value).__name__}")
    if len(value) == 0:
        raise InvalidArgumentError(name)
    return bytes(value)


def require_text(value: Optional[str], name: str) -> str:
    """
    Validate a required, non-empty string.

    Raises:
        InvalidArgumentError: if value is None or "".
        TypeError: if value is not str.
    """
    if value is None:
        raise InvalidArgumentError(name, f"'{name}' must not be None")
    if not isinstance(value, str):
        raise TypeError(f"{name} must be str, got {type(value).__name__}")
    if value == "":
        raise InvalidArgumentError(name)
    return value


def require_not_none(value: object, name: str) -> None:
    """
    Raises:
        InvalidArgumentError: if value is None.
    """
    if value is None:
        raise InvalidArgumentError(name, f"'{name}' must not be None")


__all__ = [
    "BytesLike",
    "generate_random_bytes",
    "secure_compare",
    "require_bytes",
    "require_text",
    "require_not_none",
]
