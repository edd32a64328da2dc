"""Tests for cipherkit.comparer."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from cipherkit.algorithms.hashing import MD5Hash, SHA256Hash
from cipherkit.comparer import equal_by_digest, equal_bytes
from cipherkit.core.exceptions import HashingFailedError, InvalidArgumentError


class TestEqualBytes:
    def test_equal(self) -> None:
        assert equal_bytes(b"abc", bytearray(b"abc"))

    def test_different_content(self) -> None:
        assert not equal_bytes(b"abc", b"abd")

    def test_different_length(self) -> None:
        assert not equal_bytes(b"abc", b"abcd")

    def test_both_empty(self) -> None:
        assert equal_bytes(b"", b"")

    @pytest.mark.parametrize("a,b", [(None, b"x"), (b"x", None)])
    def test_none_rejected(self, a: object, b: object) -> None:
        with pytest.raises(InvalidArgumentError):
            equal_bytes(a, b)  # type: ignore[arg-type]

    def test_wrong_type(self) -> None:
        with pytest.raises(TypeError):
            equal_bytes("abc", b"abc")  # type: ignore[arg-type]


class TestEqualByDigest:
    def test_equal(self) -> None:
        assert equal_by_digest(b"payload", b"payload")

    def test_different(self) -> None:
        assert not equal_by_digest(b"payload", b"paylaod")

    def test_custom_engine(self) -> None:
        assert equal_by_digest(b"payload", b"payload", MD5Hash())

    def test_length_mismatch_skips_hashing(self) -> None:
        engine = MagicMock(wraps=SHA256Hash())
        assert not equal_by_digest(b"short", b"longer", engine)
        engine.digest.assert_not_called()

    def test_empty_inputs_are_not_equal(self) -> None:
        assert not equal_by_digest(b"", b"")

    def test_hash_failure_is_false(self) -> None:
        engine = MagicMock()
        engine.digest.side_effect = HashingFailedError("disabled")
        assert not equal_by_digest(b"abc", b"abc", engine)

    def test_explicit_none_engine(self) -> None:
        with pytest.raises(InvalidArgumentError):
            equal_by_digest(b"abc", b"abc", None)

    def test_none_input(self) -> None:
        with pytest.raises(InvalidArgumentError):
            equal_by_digest(None, b"abc")  # type: ignore[arg-type]
