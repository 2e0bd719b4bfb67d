"""Application pagination – PaginationResult and ResultAssembler."""
from __future__ import annotations

import dataclasses
from typing import Any, Callable, Generic, Iterator, Sequence, TypeVar

from mp_keyset.application.pagination.config import Direction
from mp_keyset.application.pagination.cursor import read_value
from mp_keyset.application.pagination.order import OrderSpecification, SortKey
from mp_keyset.application.pagination.planner import FetchPlan

T = TypeVar("T")


@dataclasses.dataclass(frozen=True)
class PaginationResult(Generic[T]):
    """One page of rows in the caller's order, plus navigation flags."""

    rows: tuple[T, ...]
    has_previous: bool = False
    has_next: bool = False

    def __iter__(self) -> Iterator[T]:
        return iter(self.rows)

    def __len__(self) -> int:
        return len(self.rows)

    def map(self, fn: Callable[[T], Any]) -> "PaginationResult[Any]":
        """Return a new result with each row transformed by *fn*."""
        return PaginationResult(
            rows=tuple(fn(row) for row in self.rows),
            has_previous=self.has_previous,
            has_next=self.has_next,
        )

    def next_cursor(self, order: OrderSpecification | Sequence[SortKey]) -> dict[str, Any] | None:
        """Cursor of the last row; paginate forward from it for the next page."""
        return _cursor_of(self.rows[-1], order) if self.rows else None

    def previous_cursor(self, order: OrderSpecification | Sequence[SortKey]) -> dict[str, Any] | None:
        """Cursor of the first row; paginate backward from it for the previous page."""
        return _cursor_of(self.rows[0], order) if self.rows else None


def _cursor_of(row: Any, order: OrderSpecification | Sequence[SortKey]) -> dict[str, Any]:
    return {key.identity: read_value(row, key.identity) for key in order}


class ResultAssembler:
    """Trim lookahead rows, restore logical order and derive navigation flags.

    ``rows`` arrive in fetch order: nearest to the cursor first, which for a
    backward plan is the reverse of the caller's order.  ``support_rows`` are
    the result of the plan's support request, when one was executed.
    """

    def assemble(
        self,
        rows: Sequence[T],
        plan: FetchPlan,
        support_rows: Sequence[Any] | None = None,
    ) -> PaginationResult[T]:
        fetched = list(rows)
        further = len(fetched) > plan.limit
        page = fetched[: plan.limit]
        if plan.reversed:
            page.reverse()

        if not plan.has_cursor:
            behind = False
        elif plan.needs_support and support_rows is not None:
            behind = len(support_rows) > 0
        else:
            behind = True

        if plan.direction is Direction.FORWARD:
            return PaginationResult(rows=tuple(page), has_previous=behind, has_next=further)
        return PaginationResult(rows=tuple(page), has_previous=further, has_next=behind)


__all__ = ["PaginationResult", "ResultAssembler"]
