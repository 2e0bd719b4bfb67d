"""Application pagination – Paginator facade.

A :class:`Paginator` collects order keys, a limit and traversal options, and
turns a cursor into an immutable :class:`PaginationQuery`: the boundary
predicate, the effective ORDER BY and the row limit a host must execute.
The host executes the query and hands the rows back for assembly::

    paginator = Paginator().order_by("status").order_by("created_at", "DESC").limit(20)
    query = paginator.build({"status": "open", "created_at": ts})
    rows = host.fetch(query.main)
    page = query.assemble(rows)
"""
from __future__ import annotations

import dataclasses
from typing import Any, Generic, Iterable, Mapping, Protocol, Sequence, TypeVar

from mp_keyset.application.pagination.assembler import PaginationResult, ResultAssembler
from mp_keyset.application.pagination.config import (
    Direction,
    Inclusivity,
    PaginationConfig,
    PaginationOption,
    Seekability,
    coerce_limit,
    option_setting,
)
from mp_keyset.application.pagination.cursor import CursorResolver
from mp_keyset.application.pagination.order import OrderSpecification, SortDirection, SortKey
from mp_keyset.application.pagination.planner import FetchPlan, PageFetchPlanner
from mp_keyset.application.pagination.predicate import BoundaryPredicate, PredicateBuilder
from mp_keyset.config.settings import PaginationSettings
from mp_keyset.kernel.errors import InsufficientConstraintsError, LimitParameterError, QueryError
from mp_keyset.kernel.types import Err, Ok, Result
from mp_keyset.observability.logging import get_logger

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)

_log = get_logger(__name__)


@dataclasses.dataclass(frozen=True, slots=True)
class FetchRequest:
    """One SELECT for the host: ``WHERE predicate ORDER BY order LIMIT limit``.

    ``predicate`` is ``None`` on the first page.  ``order`` is already reversed
    for backward traversal.
    """

    predicate: BoundaryPredicate | None
    order: tuple[SortKey, ...]
    limit: int


class RowExecutor(Protocol[T_co]):
    """Host collaborator that runs a :class:`FetchRequest`.

    Rows must come back in exactly the requested order.
    """

    def fetch(self, request: FetchRequest) -> Sequence[T_co]: ...


@dataclasses.dataclass(frozen=True)
class PaginationQuery(Generic[T]):
    """Everything derived from one ``Paginator.build`` call."""

    order: tuple[SortKey, ...]
    config: PaginationConfig
    cursor: tuple[tuple[SortKey, Any], ...]
    plan: FetchPlan
    main: FetchRequest
    support: FetchRequest | None = None

    @property
    def has_cursor(self) -> bool:
        return bool(self.cursor)

    def assemble(self, rows: Sequence[T], support_rows: Sequence[Any] | None = None) -> PaginationResult[T]:
        return ResultAssembler().assemble(rows, self.plan, support_rows)

    def execute(self, executor: RowExecutor[T]) -> PaginationResult[T]:
        rows = executor.fetch(self.main)
        support_rows = executor.fetch(self.support) if self.support is not None else None
        return self.assemble(rows, support_rows)

    def explain(self) -> dict[str, Any]:
        """Rendered plan; cursor values appear only inside the predicate text."""
        return {
            "order": [str(key) for key in self.main.order],
            "predicate": None if self.main.predicate is None else str(self.main.predicate),
            "limit": self.main.limit,
            "support": None
            if self.support is None
            else {
                "order": [str(key) for key in self.support.order],
                "predicate": str(self.support.predicate),
                "limit": self.support.limit,
            },
            **self.config.to_dict(),
        }


class Paginator:
    """Mutable builder for keyset queries; every ``build`` takes a snapshot."""

    def __init__(
        self,
        order: OrderSpecification | Iterable[SortKey | tuple[str, SortDirection | str]] | None = None,
        *,
        limit: Any = None,
        max_limit: int | None = None,
    ) -> None:
        self._order = order.copy() if isinstance(order, OrderSpecification) else OrderSpecification(order or ())
        self._max_limit = max_limit
        self._limit: int | None = None if limit is None else coerce_limit(limit, max_limit=max_limit)
        self._direction = Direction.FORWARD
        self._inclusivity = Inclusivity.EXCLUSIVE
        self._seekability = Seekability.UNSEEKABLE
        self._resolver = CursorResolver()
        self._builder = PredicateBuilder()

    @classmethod
    def from_settings(cls, settings: PaginationSettings) -> "Paginator":
        paginator = cls(limit=settings.default_limit, max_limit=settings.max_limit)
        return (
            paginator.backward(settings.backward)
            .inclusive(settings.inclusive)
            .seekable(settings.seekable)
        )

    def copy(self) -> "Paginator":
        """Clone order keys, limit and options; nothing else is shared."""
        clone = type(self)(self._order, max_limit=self._max_limit)
        clone._limit = self._limit
        clone._direction = self._direction
        clone._inclusivity = self._inclusivity
        clone._seekability = self._seekability
        return clone

    # Order --------------------------------------------------------------
    @property
    def order(self) -> tuple[SortKey, ...]:
        return self._order.keys

    def order_by(
        self,
        identity: str,
        direction: SortDirection | str = SortDirection.ASC,
        *,
        reorder: bool = False,
    ) -> "Paginator":
        self._order.add(identity, direction, reorder=reorder)
        return self

    def order_by_expression(self, sql: str, *, reorder: bool = False) -> "Paginator":
        self._order.add_expression(sql, reorder=reorder)
        return self

    def clear_order_by(self) -> "Paginator":
        self._order.clear()
        return self

    # Limit --------------------------------------------------------------
    def limit(self, value: Any) -> "Paginator":
        self._limit = coerce_limit(value, max_limit=self._max_limit)
        return self

    # Options ------------------------------------------------------------
    @property
    def config(self) -> PaginationConfig:
        if self._limit is None:
            raise LimitParameterError("Limit is required", value=None)
        return PaginationConfig(
            limit=self._limit,
            direction=self._direction,
            inclusivity=self._inclusivity,
            seekability=self._seekability,
        )

    def configure(self, option: PaginationOption | str, enabled: bool = True) -> "Paginator":
        field, value = option_setting(option, enabled)
        setattr(self, f"_{field}", value)
        return self

    def forward(self, forward: bool = True) -> "Paginator":
        return self.configure(PaginationOption.FORWARD, forward)

    def backward(self, backward: bool = True) -> "Paginator":
        return self.configure(PaginationOption.BACKWARD, backward)

    def exclusive(self, exclusive: bool = True) -> "Paginator":
        return self.configure(PaginationOption.EXCLUSIVE, exclusive)

    def inclusive(self, inclusive: bool = True) -> "Paginator":
        return self.configure(PaginationOption.INCLUSIVE, inclusive)

    def seekable(self, seekable: bool = True) -> "Paginator":
        return self.configure(PaginationOption.SEEKABLE, seekable)

    def unseekable(self, unseekable: bool = True) -> "Paginator":
        return self.configure(PaginationOption.UNSEEKABLE, unseekable)

    def from_mapping(self, options: Mapping[str, Any]) -> "Paginator":
        """Apply options given as a mapping.

        Keys are option names (``forward``, ``inclusive``, ...) with boolean
        values, plus ``limit`` and ``orders``.  ``orders`` is a mapping of
        identity to direction or a sequence of ``(identity, direction)`` pairs
        and replaces the current order.  Unknown keys raise :class:`QueryError`.
        """
        known = {option.value for option in PaginationOption} | {"limit", "orders"}
        unknown = sorted(set(options) - known)
        if unknown:
            raise QueryError(f"Unknown pagination options: {', '.join(unknown)}", detail={"unknown": unknown})

        if "orders" in options:
            orders = options["orders"]
            pairs = orders.items() if isinstance(orders, Mapping) else orders
            self.clear_order_by()
            for identity, direction in pairs:
                self.order_by(identity, direction)
        if "limit" in options:
            self.limit(options["limit"])
        for option in PaginationOption:
            if option.value in options:
                self.configure(option, bool(options[option.value]))
        return self

    # Build --------------------------------------------------------------
    def _constraint_problem(self, cursor: Any) -> InsufficientConstraintsError | None:
        if not self._order:
            return InsufficientConstraintsError("At least one order constraint required")
        if self._resolver.is_empty(cursor):
            return None
        if not self._resolver.is_supported(cursor):
            return InsufficientConstraintsError(
                f"Cursor must be a mapping or a row, got {type(cursor).__name__}"
            )
        missing = self._resolver.missing(cursor, self._order.keys)
        if missing:
            return InsufficientConstraintsError(
                f"Cursor parameter missing: {', '.join(missing)}",
                missing=missing,
            )
        return None

    def build(self, cursor: Any = None) -> PaginationQuery[Any]:
        """Snapshot the current state into a :class:`PaginationQuery`.

        Raises :class:`LimitParameterError` before anything else when no valid
        limit is set, then :class:`InsufficientConstraintsError` when the order
        is empty or the cursor lacks a key.
        """
        config = self.config
        problem = self._constraint_problem(cursor)
        if problem is not None:
            raise problem
        return self._build(cursor, config)

    def _build(self, cursor: Any, config: PaginationConfig) -> PaginationQuery[Any]:
        keys = self._order.keys
        has_cursor = not self._resolver.is_empty(cursor)
        plan = PageFetchPlanner(self._max_limit).plan(
            config.limit, config.direction, config.seekability, has_cursor=has_cursor
        )
        resolved = self._resolver.resolve(cursor, keys) if has_cursor else ()
        fetch_order = keys if config.is_forward else tuple(key.reversed() for key in keys)

        main = FetchRequest(
            predicate=self._builder.build(resolved, config.direction, config.inclusivity) if has_cursor else None,
            order=fetch_order,
            limit=plan.main_limit,
        )
        support = None
        if plan.needs_support:
            # opposite side of the cursor: everything the main predicate excludes
            support = FetchRequest(
                predicate=self._builder.build(
                    resolved, config.direction.reversed(), config.inclusivity.reversed()
                ),
                order=tuple(key.reversed() for key in fetch_order),
                limit=plan.support_limit,
            )

        _log.debug(
            "keyset.query_built",
            order=[str(key) for key in keys],
            direction=config.direction.value,
            inclusivity=config.inclusivity.value,
            seekability=config.seekability.value,
            limit=config.limit,
            has_cursor=has_cursor,
        )
        return PaginationQuery(
            order=keys,
            config=config,
            cursor=resolved,
            plan=plan,
            main=main,
            support=support,
        )

    def paginate(self, cursor: Any, executor: RowExecutor[T]) -> PaginationResult[T]:
        return self.build(cursor).execute(executor)

    def describe(self, cursor: Any = None) -> Result[PaginationQuery[Any], InsufficientConstraintsError]:
        """Return ``Ok(query)`` or ``Err(diagnostic)`` when constraints are insufficient."""
        config = self.config
        problem = self._constraint_problem(cursor)
        if problem is not None:
            return Err(problem)
        return Ok(self._build(cursor, config))

    def __repr__(self) -> str:
        return (
            f"Paginator(order={self._order!r}, limit={self._limit!r}, "
            f"direction={self._direction.value}, inclusivity={self._inclusivity.value}, "
            f"seekability={self._seekability.value})"
        )


__all__ = ["FetchRequest", "PaginationQuery", "Paginator", "RowExecutor"]
