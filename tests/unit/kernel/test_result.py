"""Unit tests for the Ok / Err result type."""

from __future__ import annotations

import pytest

from mp_keyset.kernel.types import Err, Ok


class TestOk:
    def test_unwrap_returns_value(self) -> None:
        assert Ok(3).unwrap() == 3

    def test_flags(self) -> None:
        assert Ok(1).is_ok()
        assert not Ok(1).is_err()

    def test_map(self) -> None:
        assert Ok(2).map(lambda v: v * 10).value == 20

    def test_unwrap_or_ignores_default(self) -> None:
        assert Ok("a").unwrap_or("b") == "a"

    def test_equality(self) -> None:
        assert Ok(1) == Ok(1)
        assert Ok(1) != Ok(2)


class TestErr:
    def test_unwrap_raises_carried_error(self) -> None:
        with pytest.raises(ValueError, match="boom"):
            Err(ValueError("boom")).unwrap()

    def test_flags(self) -> None:
        err = Err(ValueError("x"))
        assert err.is_err()
        assert not err.is_ok()

    def test_map_is_noop(self) -> None:
        err = Err(ValueError("x"))
        assert err.map(lambda v: v * 2) is err

    def test_unwrap_or_returns_default(self) -> None:
        assert Err(ValueError("x")).unwrap_or(5) == 5
