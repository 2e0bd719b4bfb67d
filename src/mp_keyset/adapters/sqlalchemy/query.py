"""SQLAlchemy adapter – KeysetSelect.

Wraps a ``Select`` and paginates it by keyset instead of OFFSET::

    query = (
        KeysetSelect(select(posts))
        .order_by(posts.c.status, posts.c.created_at.desc(), posts.c.id.desc())
        .limit(20)
        .cursor({"posts.status": "open", "posts.created_at": ts, "posts.id": 41})
    )
    page = await query.paginate(session)
"""
from __future__ import annotations

from typing import Any, Mapping, Sequence

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select
from sqlalchemy.sql.elements import ColumnElement

from mp_keyset.adapters.sqlalchemy.renderer import order_term, render_order, render_predicate, statement_limit
from mp_keyset.application.pagination.assembler import PaginationResult
from mp_keyset.application.pagination.config import PaginationOption
from mp_keyset.application.pagination.paginator import FetchRequest, PaginationQuery, Paginator
from mp_keyset.config.settings import PaginationSettings
from mp_keyset.kernel.errors import InsufficientConstraintsError
from mp_keyset.kernel.types import Result
from mp_keyset.observability.logging import get_logger

_log = get_logger(__name__)


class KeysetSelect:
    """Keyset pagination over a SQLAlchemy ``Select``.

    An ORDER BY and LIMIT already on the wrapped statement are taken in as if
    passed to ``order_by`` / ``limit``; from then on both live here and are
    rendered per fetch.  With ``scalars=True`` rows are the first selected
    entity (ORM objects), otherwise ``RowMapping`` objects.
    """

    def __init__(
        self,
        statement: Select[Any],
        *,
        paginator: Paginator | None = None,
        scalars: bool = False,
    ) -> None:
        self._statement = statement.order_by(None).limit(None)
        self._paginator = paginator or Paginator()
        self._columns: dict[str, ColumnElement[Any]] = {}
        self._cursor: Any = None
        self._scalars = scalars
        self.order_by(*statement._order_by_clauses)
        limit = statement_limit(statement)
        if limit is not None:
            self.limit(limit)

    @classmethod
    def from_settings(
        cls,
        statement: Select[Any],
        settings: PaginationSettings,
        *,
        scalars: bool = False,
    ) -> "KeysetSelect":
        return cls(statement, paginator=Paginator.from_settings(settings), scalars=scalars)

    def copy(self) -> "KeysetSelect":
        clone = type(self)(self._statement, paginator=self._paginator.copy(), scalars=self._scalars)
        clone._columns = dict(self._columns)
        clone._cursor = self._cursor
        return clone

    @property
    def paginator(self) -> Paginator:
        return self._paginator

    def order_by(self, *clauses: Any, overwrite: bool = False) -> "KeysetSelect":
        """Append ORDER BY terms; ``overwrite=True`` replaces the existing ones."""
        if overwrite:
            self.clear_order_by()
        for clause in clauses:
            key, column = order_term(clause)
            self._columns[key.identity] = column
            self._paginator.order_by(key.identity, key.direction)
        return self

    def clear_order_by(self) -> "KeysetSelect":
        self._paginator.clear_order_by()
        self._columns.clear()
        return self

    def limit(self, value: Any) -> "KeysetSelect":
        self._paginator.limit(value)
        return self

    def cursor(self, cursor: Mapping[str, Any] | Any = None) -> "KeysetSelect":
        self._cursor = cursor
        return self

    def configure(self, option: PaginationOption | str, enabled: bool = True) -> "KeysetSelect":
        self._paginator.configure(option, enabled)
        return self

    def forward(self, forward: bool = True) -> "KeysetSelect":
        return self.configure(PaginationOption.FORWARD, forward)

    def backward(self, backward: bool = True) -> "KeysetSelect":
        return self.configure(PaginationOption.BACKWARD, backward)

    def exclusive(self, exclusive: bool = True) -> "KeysetSelect":
        return self.configure(PaginationOption.EXCLUSIVE, exclusive)

    def inclusive(self, inclusive: bool = True) -> "KeysetSelect":
        return self.configure(PaginationOption.INCLUSIVE, inclusive)

    def seekable(self, seekable: bool = True) -> "KeysetSelect":
        return self.configure(PaginationOption.SEEKABLE, seekable)

    def unseekable(self, unseekable: bool = True) -> "KeysetSelect":
        return self.configure(PaginationOption.UNSEEKABLE, unseekable)

    # Rendering ----------------------------------------------------------
    def build(self) -> PaginationQuery[Any]:
        return self._paginator.build(self._cursor)

    def compile(self, request: FetchRequest) -> Select[Any]:
        """Apply one fetch request to the wrapped statement."""
        statement = self._statement
        if request.predicate is not None:
            statement = statement.where(render_predicate(request.predicate, self._columns))
        return statement.order_by(*render_order(request.order, self._columns)).limit(request.limit)

    def statement(self) -> Select[Any]:
        """The main SELECT for the current cursor."""
        return self.compile(self.build().main)

    def describe(self) -> Result[dict[str, Any], InsufficientConstraintsError]:
        return self._paginator.describe(self._cursor).map(
            lambda query: {**query.explain(), "sql": str(self.compile(query.main))}
        )

    # Execution ----------------------------------------------------------
    async def paginate(self, session: AsyncSession) -> PaginationResult[Any]:
        query = self.build()
        rows = await self._fetch(session, query.main)
        support_rows = await self._fetch(session, query.support) if query.support is not None else None
        result = query.assemble(rows, support_rows)
        _log.debug(
            "keyset.page_fetched",
            fetched=len(rows),
            returned=len(result.rows),
            has_previous=result.has_previous,
            has_next=result.has_next,
        )
        return result

    async def _fetch(self, session: AsyncSession, request: FetchRequest) -> Sequence[Any]:
        result = await session.execute(self.compile(request))
        if self._scalars:
            return list(result.scalars().all())
        return list(result.mappings().all())

    def __repr__(self) -> str:
        return f"KeysetSelect(paginator={self._paginator!r}, scalars={self._scalars})"


__all__ = ["KeysetSelect"]
