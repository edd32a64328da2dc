"""
Явный результат криптографической операции.

OperationResult заменяет "null при любом сбое": вызывающий код ветвится
по ``ok`` (или ``bool(result)``), а низкоуровневые исключения
cryptography/pycryptodome никогда не пересекают границу примитива.

Example:
    >>> result = AESCipher().decrypt(ciphertext, "password")
    >>> if result:
    ...     plaintext = result.value
    ... else:
    ...     log.warning("decrypt failed: %s", result.reason)
    >>> plaintext = result.unwrap()  # raises OperationFailedError on failure
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from cipherkit.core.exceptions import OperationFailedError

__all__ = ["OperationResult"]

T = TypeVar("T")


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    """
    Immutable success-or-failure outcome.

    Attributes:
        ok: True when ``value`` holds a complete, valid result.
        value: Result value (None on failure).
        reason: Short failure description without secrets (None on success).
        operation: Operation label, e.g. "AES.encrypt".
    """

    ok: bool
    value: Optional[T] = None
    reason: Optional[str] = None
    operation: str = ""

    @classmethod
    def success(cls, value: T, *, operation: str = "") -> "OperationResult[T]":
        return cls(ok=True, value=value, operation=operation)

    @classmethod
    def failure(cls, reason: str, *, operation: str = "") -> "OperationResult[T]":
        return cls(ok=False, reason=reason, operation=operation)

    def unwrap(self) -> T:
        """
        Return the value or raise.

        Raises:
            OperationFailedError: if the operation failed.
        """
        if not self.ok:
            raise OperationFailedError(
                self.reason or "Operation failed", operation=self.operation
            )
        return self.value  # type: ignore[return-value]

    def value_or(self, default: T) -> T:
        if not self.ok:
            return default
        return self.value  # type: ignore[return-value]

    def __bool__(self) -> bool:
        return self.ok
