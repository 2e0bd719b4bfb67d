"""Application pagination – PageFetchPlanner.

Unseekable pages fetch one lookahead row past the page.  Seekable pages also
spend one row on the opposite side of the cursor, fetched by a separate
support request, so the whole page costs ``limit + 2`` rows at most.
"""
from __future__ import annotations

import dataclasses
from typing import Any

from mp_keyset.application.pagination.config import Direction, Seekability, coerce_limit


@dataclasses.dataclass(frozen=True, slots=True)
class FetchPlan:
    """How many rows to ask the host for, and in which order."""

    limit: int
    fetch_count: int
    main_limit: int
    support_limit: int
    reversed: bool
    direction: Direction
    seekability: Seekability
    has_cursor: bool

    @property
    def needs_support(self) -> bool:
        return self.support_limit > 0


class PageFetchPlanner:
    def __init__(self, max_limit: int | None = None) -> None:
        self._max_limit = max_limit

    def plan(
        self,
        limit: Any,
        direction: Direction = Direction.FORWARD,
        seekability: Seekability = Seekability.UNSEEKABLE,
        *,
        has_cursor: bool = False,
    ) -> FetchPlan:
        page_size = coerce_limit(limit, max_limit=self._max_limit)
        seekable = seekability is Seekability.SEEKABLE
        return FetchPlan(
            limit=page_size,
            fetch_count=page_size + (2 if seekable else 1),
            main_limit=page_size + 1,
            # without a cursor there is nothing on the opposite side to look for
            support_limit=1 if seekable and has_cursor else 0,
            reversed=direction is Direction.BACKWARD,
            direction=direction,
            seekability=seekability,
            has_cursor=has_cursor,
        )


__all__ = ["FetchPlan", "PageFetchPlanner"]
