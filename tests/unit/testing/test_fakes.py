"""Unit tests for the in-memory executor fake."""

from __future__ import annotations

import dataclasses

from mp_keyset.application.pagination import (
    Comparison,
    FetchRequest,
    Operator,
    SortDirection,
    SortKey,
)
from mp_keyset.testing import InMemoryExecutor


@dataclasses.dataclass
class Item:
    id: int
    group: str


class TestInMemoryExecutor:
    def test_sorts_by_mixed_directions(self) -> None:
        executor = InMemoryExecutor([Item(1, "b"), Item(2, "a"), Item(3, "b"), Item(4, "a")])
        rows = executor.fetch(
            FetchRequest(None, (SortKey("group"), SortKey("id", SortDirection.DESC)), limit=10)
        )
        assert [r.id for r in rows] == [4, 2, 3, 1]

    def test_filters_and_limits(self) -> None:
        executor = InMemoryExecutor([{"id": n} for n in range(10)])
        rows = executor.fetch(FetchRequest(Comparison("id", Operator.GT, 5), (SortKey("id"),), limit=2))
        assert rows == [{"id": 6}, {"id": 7}]

    def test_records_requests(self) -> None:
        executor = InMemoryExecutor()
        request = FetchRequest(None, (SortKey("id"),), limit=1)
        executor.add({"id": 1})
        executor.fetch(request)
        assert executor.requests == [request]

    def test_clear(self) -> None:
        executor = InMemoryExecutor([{"id": 1}])
        executor.fetch(FetchRequest(None, (SortKey("id"),), limit=1))
        executor.clear()
        assert executor.requests == []
        assert executor.fetch(FetchRequest(None, (SortKey("id"),), limit=1)) == []

    def test_nulls_sort_last_ascending(self) -> None:
        executor = InMemoryExecutor([{"id": 1, "score": None}, {"id": 2, "score": 4}, {"id": 3, "score": 2}])
        rows = executor.fetch(FetchRequest(None, (SortKey("score"), SortKey("id")), limit=10))
        assert [r["id"] for r in rows] == [3, 2, 1]

    def test_nulls_sort_first_descending(self) -> None:
        executor = InMemoryExecutor(
            [{"id": 1, "score": 4}, {"id": 2, "score": None}, {"id": 3, "score": None}, {"id": 4, "score": 9}]
        )
        rows = executor.fetch(
            FetchRequest(None, (SortKey("score", SortDirection.DESC), SortKey("id")), limit=10)
        )
        assert [r["id"] for r in rows] == [2, 3, 4, 1]
