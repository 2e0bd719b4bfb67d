"""Unit tests for CursorResolver and read_value."""

from __future__ import annotations

import dataclasses
import datetime

import pytest

from mp_keyset.application.pagination import CursorResolver, OrderSpecification, SortKey
from mp_keyset.application.pagination.cursor import read_value
from mp_keyset.kernel.errors import InsufficientConstraintsError


@dataclasses.dataclass
class Post:
    id: int
    status: str
    created_at: datetime.datetime


T0 = datetime.datetime(2024, 1, 1, 12, 0)
ORDER = OrderSpecification([("status", "ASC"), ("created_at", "DESC")])


class TestReadValue:
    def test_mapping(self) -> None:
        assert read_value({"id": 1}, "id") == 1

    def test_object(self) -> None:
        assert read_value(Post(1, "open", T0), "status") == "open"

    def test_qualified_identity_falls_back_to_column_name(self) -> None:
        assert read_value({"id": 7}, "posts.id") == 7
        assert read_value(Post(7, "open", T0), "posts.id") == 7

    def test_qualified_identity_exact_match_wins(self) -> None:
        assert read_value({"posts.id": 1, "id": 2}, "posts.id") == 1

    def test_fallback_disabled_reads_exact_identity(self) -> None:
        with pytest.raises(KeyError):
            read_value({"id": 7}, "posts.id", fallback=False)

    def test_none_value_is_present(self) -> None:
        assert read_value({"id": None}, "id") is None

    def test_missing_raises_key_error(self) -> None:
        with pytest.raises(KeyError):
            read_value({"id": 1}, "status")

    def test_expression_identity_on_object_is_missing(self) -> None:
        with pytest.raises(KeyError):
            read_value(Post(1, "open", T0), "lower(status)")


class TestCursorResolver:
    def test_resolve_mapping_in_order(self) -> None:
        resolved = CursorResolver().resolve({"created_at": T0, "status": "open"}, ORDER)
        assert resolved == ((ORDER.keys[0], "open"), (ORDER.keys[1], T0))

    def test_resolve_row_object(self) -> None:
        resolved = CursorResolver().resolve(Post(3, "open", T0), ORDER)
        assert [value for _, value in resolved] == ["open", T0]

    def test_resolve_accepts_key_sequence(self) -> None:
        resolved = CursorResolver().resolve({"id": 1}, [SortKey("id")])
        assert resolved == ((SortKey("id"), 1),)

    def test_partial_cursor_raises_with_missing(self) -> None:
        with pytest.raises(InsufficientConstraintsError) as exc_info:
            CursorResolver().resolve({"status": "open"}, ORDER)
        assert exc_info.value.missing == ("created_at",)

    def test_empty_order_raises(self) -> None:
        with pytest.raises(InsufficientConstraintsError):
            CursorResolver().resolve({"id": 1}, OrderSpecification())

    @pytest.mark.parametrize("cursor", [None, "id=3", 3, b"raw"])
    def test_unsupported_shapes_raise(self, cursor: object) -> None:
        with pytest.raises(InsufficientConstraintsError):
            CursorResolver().resolve(cursor, ORDER)

    def test_missing_lists_every_absent_identity(self) -> None:
        assert CursorResolver().missing({}, ORDER.keys) == ("status", "created_at")

    def test_missing_on_scalar_lists_everything(self) -> None:
        assert CursorResolver().missing(42, ORDER.keys) == ("status", "created_at")

    @pytest.mark.parametrize(("cursor", "empty"), [(None, True), ({}, True), ({"id": 1}, False)])
    def test_is_empty(self, cursor: object, empty: bool) -> None:
        assert CursorResolver.is_empty(cursor) is empty

    def test_bare_name_fills_unambiguous_qualified_key(self) -> None:
        keys = [SortKey("posts.created_at"), SortKey("posts.id")]
        resolved = CursorResolver().resolve({"created_at": T0, "id": 5}, keys)
        assert [value for _, value in resolved] == [T0, 5]

    def test_shared_bare_name_requires_qualified_identities(self) -> None:
        keys = [SortKey("posts.id"), SortKey("users.id")]
        with pytest.raises(InsufficientConstraintsError) as exc_info:
            CursorResolver().resolve({"id": 5}, keys)
        assert exc_info.value.missing == ("posts.id", "users.id")

    def test_shared_bare_name_with_qualified_cursor(self) -> None:
        keys = [SortKey("posts.id"), SortKey("users.id")]
        resolved = CursorResolver().resolve({"posts.id": 5, "users.id": 9, "id": 1}, keys)
        assert [value for _, value in resolved] == [5, 9]
