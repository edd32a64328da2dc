# -*- coding: utf-8 -*-
"""
RU: Кодеки текст <-> байты: UTF-8, Base64 и отладочные представления
binary/octal/hex (по группе на символ, через пробел).

EN: Text/byte codecs used by every other cipherkit component.

Forms:
- UTF-8:   to_bytes / to_text
- Base64:  to_base64 / from_base64 (standard alphabet, with padding)
- Digits:  to_binary / to_octal / to_hexadecimal and their inverses.
  A string becomes one space-separated group per code point
  ("Hi" -> "1001000 1101001"); an integer becomes a single group, negative
  integers as 64-bit two's complement (from_*_int reads them back).
  This is a legacy display/debug format, not a serialization format:
  granularity is one code point, not one byte.

Failure policy:
- None/empty input -> InvalidArgumentError; wrong type -> TypeError.
- Integers outside the signed 64-bit range -> InvalidParameterError.
- Malformed input to a reverse conversion -> OperationResult.failure(...).
  Partial output is never returned.

Examples:
    >>> to_hexadecimal("Hi")
    '48 69'
    >>> from_hexadecimal("48 69").unwrap()
    'Hi'
    >>> from_base64("not base64!").ok
    False
"""
from __future__ import annotations

import base64
import binascii
import logging
import re
from typing import Final, List, Pattern, Union

from cipherkit.core.exceptions import InvalidParameterError
from cipherkit.core.result import OperationResult
from cipherkit.utils import BytesLike, require_bytes, require_text

_LOGGER: Final = logging.getLogger(__name__)

_UINT64_MASK: Final[int] = (1 << 64) - 1
_INT64_MIN: Final[int] = -(1 << 63)
_INT64_MAX: Final[int] = (1 << 63) - 1
_MAX_CODE_POINT: Final[int] = 0x10FFFF
_SURROGATES: Final[range] = range(0xD800, 0xE000)

_BINARY_GROUP: Final[Pattern[str]] = re.compile(r"[01]+")
_OCTAL_GROUP: Final[Pattern[str]] = re.compile(r"[0-7]+")
_HEX_GROUP: Final[Pattern[str]] = re.compile(r"[0-9a-fA-F]+")


# UTF-8


def to_bytes(text: str) -> bytes:
    """
    Encode text as UTF-8.

    Raises:
        InvalidArgumentError: if text is None or empty.
    """
    return require_text(text, "text").encode("utf-8")


def to_text(data: BytesLike) -> str:
    """
    Decode UTF-8 bytes; invalid sequences become U+FFFD.

    Raises:
        InvalidArgumentError: if data is None or empty.
    """
    return require_bytes(data, "data").decode("utf-8", errors="replace")


# Base64


def to_base64(data: BytesLike) -> str:
    """
    Encode bytes to a standard Base64 string (no newlines).

    Raises:
        InvalidArgumentError: if data is None or empty.
    """
    return base64.b64encode(require_bytes(data, "data")).decode("ascii")


def from_base64(text: str) -> OperationResult[bytes]:
    """
    Decode a standard Base64 string.

    Returns:
        Success with decoded bytes, or failure for malformed input.

    Raises:
        InvalidArgumentError: if text is None or empty.
    """
    text = require_text(text, "text")
    try:
        decoded = base64.b64decode(text.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError, ValueError) as exc:
        _LOGGER.debug("Base64 decode rejected: %s", exc.__class__.__name__)
        return OperationResult.failure("Malformed Base64 input", operation="from_base64")
    return OperationResult.success(decoded, operation="from_base64")


def text_to_base64(text: str) -> str:
    """UTF-8 encode text, then Base64 encode it."""
    return to_base64(to_bytes(text))


def text_from_base64(text: str) -> OperationResult[str]:
    """Base64 decode text, then UTF-8 decode it."""
    decoded = from_base64(text)
    if not decoded.ok:
        return OperationResult.failure(
            decoded.reason or "Malformed Base64 input", operation="text_from_base64"
        )
    if not decoded.value:
        return OperationResult.failure(
            "Base64 input decodes to nothing", operation="text_from_base64"
        )
    return OperationResult.success(to_text(decoded.value), operation="text_from_base64")


# Binary / octal / hexadecimal


def _to_groups(value: Union[str, int], fmt: str, name: str) -> str:
    if isinstance(value, int) and not isinstance(value, bool):
        if not _INT64_MIN <= value <= _INT64_MAX:
            raise InvalidParameterError(
                f"{name} must fit in a signed 64-bit integer", parameter=name
            )
        return format(value & _UINT64_MASK, fmt)
    text = require_text(value, name)  # type: ignore[arg-type]
    return " ".join(format(ord(ch), fmt) for ch in text)


def _parse_groups(
    text: str, base: int, pattern: Pattern[str], operation: str
) -> OperationResult[List[int]]:
    text = require_text(text, "text")
    groups = text.split()
    if not groups:
        return OperationResult.failure("No digit groups found", operation=operation)

    values = []
    for group in groups:
        if pattern.fullmatch(group) is None:
            return OperationResult.failure(
                f"Malformed base-{base} group", operation=operation
            )
        values.append(int(group, base))
    return OperationResult.success(values, operation=operation)


def _from_groups(
    text: str, base: int, pattern: Pattern[str], operation: str
) -> OperationResult[str]:
    parsed = _parse_groups(text, base, pattern, operation)
    if not parsed.ok:
        return OperationResult.failure(
            parsed.reason or "Malformed digit groups", operation=operation
        )

    chars = []
    for code_point in parsed.value or []:
        if code_point > _MAX_CODE_POINT or code_point in _SURROGATES:
            return OperationResult.failure(
                "Group value is not a valid code point", operation=operation
            )
        chars.append(chr(code_point))
    return OperationResult.success("".join(chars), operation=operation)


def _from_groups_int(
    text: str, base: int, pattern: Pattern[str], operation: str
) -> OperationResult[List[int]]:
    parsed = _parse_groups(text, base, pattern, operation)
    if not parsed.ok:
        return OperationResult.failure(
            parsed.reason or "Malformed digit groups", operation=operation
        )

    numbers = []
    for raw in parsed.value or []:
        if raw > _UINT64_MASK:
            return OperationResult.failure(
                "Group value does not fit in 64 bits", operation=operation
            )
        # Two's complement: the top bit set means a negative value
        numbers.append(raw - (1 << 64) if raw > _INT64_MAX else raw)
    return OperationResult.success(numbers, operation=operation)


def to_binary(value: Union[str, int]) -> str:
    """Base-2 groups: one per character of a string, or one for an integer."""
    return _to_groups(value, "b", "value")


def to_octal(value: Union[str, int]) -> str:
    """Base-8 groups: one per character of a string, or one for an integer."""
    return _to_groups(value, "o", "value")


def to_hexadecimal(value: Union[str, int]) -> str:
    """Lowercase base-16 groups: one per character of a string, or one for an integer."""
    return _to_groups(value, "x", "value")


def from_binary(text: str) -> OperationResult[str]:
    """Inverse of to_binary for string input."""
    return _from_groups(text, 2, _BINARY_GROUP, "from_binary")


def from_octal(text: str) -> OperationResult[str]:
    """Inverse of to_octal for string input."""
    return _from_groups(text, 8, _OCTAL_GROUP, "from_octal")


def from_hexadecimal(text: str) -> OperationResult[str]:
    """Inverse of to_hexadecimal for string input."""
    return _from_groups(text, 16, _HEX_GROUP, "from_hexadecimal")


def from_binary_int(text: str) -> OperationResult[List[int]]:
    """
    Inverse of to_binary for integer input, one integer per group.

    Groups are read as 64-bit two's complement, so to_binary(-1) comes back
    as -1. A group wider than 64 bits gives a failure.

    Examples:
        >>> from_binary_int("101 " + to_binary(-2)).unwrap()
        [5, -2]
    """
    return _from_groups_int(text, 2, _BINARY_GROUP, "from_binary_int")


def from_octal_int(text: str) -> OperationResult[List[int]]:
    """Inverse of to_octal for integer input, one integer per group."""
    return _from_groups_int(text, 8, _OCTAL_GROUP, "from_octal_int")


def from_hexadecimal_int(text: str) -> OperationResult[List[int]]:
    """Inverse of to_hexadecimal for integer input, one integer per group."""
    return _from_groups_int(text, 16, _HEX_GROUP, "from_hexadecimal_int")


__all__ = [
    "to_bytes",
    "to_text",
    "to_base64",
    "from_base64",
    "text_to_base64",
    "text_from_base64",
    "to_binary",
    "to_octal",
    "to_hexadecimal",
    "from_binary",
    "from_octal",
    "from_hexadecimal",
    "from_binary_int",
    "from_octal_int",
    "from_hexadecimal_int",
]
