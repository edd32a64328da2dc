# -*- coding: utf-8 -*-
"""
RU: Сравнение байтовых последовательностей: прямое (в константное время)
и через digest.
EN: Byte-sequence equality, structural and digest-based.

Both comparisons reject unequal lengths before looking at the contents,
so length is never hidden; content comparison is constant-time.
"""
from __future__ import annotations

import logging
from typing import Final, Optional

from cipherkit.algorithms.hashing import SHA256Hash
from cipherkit.core.exceptions import CryptoError, InvalidArgumentError
from cipherkit.core.protocols import HashProtocol
from cipherkit.utils import BytesLike, secure_compare

_LOGGER: Final = logging.getLogger(__name__)

_DEFAULT_ENGINE: Final = object()


def _require_sequence(value: Optional[BytesLike], name: str) -> bytes:
    if value is None:
        raise InvalidArgumentError(name, f"'{name}' must not be None")
    if not isinstance(value, (bytes, bytearray)):
        raise TypeError(f"{name} must be bytes, got {type(value).__name__}")
    return bytes(value)


def equal_bytes(a: BytesLike, b: BytesLike) -> bool:
    """
    Element-wise equality.

    Empty sequences are allowed (two empty sequences are equal).

    Raises:
        InvalidArgumentError: if either argument is None.
    """
    left = _require_sequence(a, "a")
    right = _require_sequence(b, "b")
    if len(left) != len(right):
        return False
    return secure_compare(left, right)


def equal_by_digest(
    a: BytesLike,
    b: BytesLike,
    hash_engine: Optional[HashProtocol] = _DEFAULT_ENGINE,  # type: ignore[assignment]
) -> bool:
    """
    Compare two sequences by their digests.

    Args:
        a, b: sequences to compare.
        hash_engine: digest to use; omitted means SHA-256, explicit None
            is an error.

    Returns:
        False on length mismatch (without hashing), on digest mismatch,
        or if hashing fails for either input (e.g. empty input).

    Raises:
        InvalidArgumentError: if a, b or an explicit hash_engine is None.
    """
    left = _require_sequence(a, "a")
    right = _require_sequence(b, "b")
    if hash_engine is None:
        raise InvalidArgumentError("hash_engine", "'hash_engine' must not be None")
    engine: HashProtocol = (
        SHA256Hash() if hash_engine is _DEFAULT_ENGINE else hash_engine  # type: ignore[assignment]
    )

    if len(left) != len(right):
        return False

    try:
        return equal_bytes(engine.digest(left), engine.digest(right))
    except CryptoError as exc:
        _LOGGER.debug("Digest comparison failed: %s", exc.__class__.__name__)
        return False


__all__ = ["equal_bytes", "equal_by_digest"]
