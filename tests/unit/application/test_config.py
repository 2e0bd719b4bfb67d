"""Unit tests for PaginationConfig, options and limit coercion."""

from __future__ import annotations

import pytest

from mp_keyset.application.pagination import (
    Direction,
    Inclusivity,
    PaginationConfig,
    PaginationOption,
    Seekability,
    coerce_limit,
)
from mp_keyset.application.pagination.config import option_setting
from mp_keyset.kernel.errors import LimitParameterError, QueryError


class TestCoerceLimit:
    def test_int(self) -> None:
        assert coerce_limit(10) == 10

    def test_digit_string(self) -> None:
        assert coerce_limit("25") == 25

    @pytest.mark.parametrize("value", [0, -1, "0", "-3", "ten", "1.5", 1.5, None, True, False, "", [3]])
    def test_invalid_raises(self, value: object) -> None:
        with pytest.raises(LimitParameterError):
            coerce_limit(value)

    def test_max_limit(self) -> None:
        assert coerce_limit(100, max_limit=100) == 100
        with pytest.raises(LimitParameterError):
            coerce_limit(101, max_limit=100)


class TestPaginationConfig:
    def test_defaults(self) -> None:
        config = PaginationConfig(limit=10)
        assert config.direction is Direction.FORWARD
        assert config.inclusivity is Inclusivity.EXCLUSIVE
        assert config.seekability is Seekability.UNSEEKABLE
        assert config.is_forward
        assert not config.is_inclusive
        assert not config.is_seekable

    def test_limit_validated(self) -> None:
        with pytest.raises(LimitParameterError):
            PaginationConfig(limit=0)

    def test_frozen(self) -> None:
        config = PaginationConfig(limit=10)
        with pytest.raises((AttributeError, TypeError)):
            config.limit = 5  # type: ignore[misc]

    @pytest.mark.parametrize(
        ("option", "enabled", "attr", "expected"),
        [
            (PaginationOption.BACKWARD, True, "direction", Direction.BACKWARD),
            (PaginationOption.FORWARD, False, "direction", Direction.BACKWARD),
            (PaginationOption.INCLUSIVE, True, "inclusivity", Inclusivity.INCLUSIVE),
            (PaginationOption.EXCLUSIVE, False, "inclusivity", Inclusivity.INCLUSIVE),
            (PaginationOption.SEEKABLE, True, "seekability", Seekability.SEEKABLE),
            (PaginationOption.UNSEEKABLE, False, "seekability", Seekability.SEEKABLE),
        ],
    )
    def test_with_option(self, option: PaginationOption, enabled: bool, attr: str, expected: object) -> None:
        config = PaginationConfig(limit=10).with_option(option, enabled)
        assert getattr(config, attr) is expected

    def test_with_option_accepts_name(self) -> None:
        assert PaginationConfig(limit=1).with_option("backward").direction is Direction.BACKWARD

    def test_unknown_option_raises(self) -> None:
        with pytest.raises(QueryError):
            PaginationConfig(limit=1).with_option("sideways")

    def test_unknown_option_lists_name(self) -> None:
        with pytest.raises(QueryError) as exc_info:
            option_setting("limit")
        assert exc_info.value.detail == {"unknown": ["limit"]}

    def test_to_dict(self) -> None:
        assert PaginationConfig(limit=3).to_dict() == {
            "limit": 3,
            "direction": "forward",
            "inclusivity": "exclusive",
            "seekability": "unseekable",
        }

    def test_reversed_enums(self) -> None:
        assert Direction.FORWARD.reversed() is Direction.BACKWARD
        assert Inclusivity.INCLUSIVE.reversed() is Inclusivity.EXCLUSIVE
