"""SQLAlchemy adapter – translate engine requests into SQLAlchemy clauses."""
from __future__ import annotations

from typing import Any, Mapping

import sqlalchemy as sa
from sqlalchemy.sql import Select, operators
from sqlalchemy.sql.elements import BindParameter, ColumnElement, Label, UnaryExpression, _label_reference

from mp_keyset.application.pagination.order import SortDirection, SortKey, parse_order_expression
from mp_keyset.application.pagination.predicate import AllOf, AnyOf, BoundaryPredicate, Comparison, Operator
from mp_keyset.kernel.errors import (
    BadKeywordError,
    BadOrderError,
    InsufficientConstraintsError,
    LimitParameterError,
)

_DIRECTION_MODIFIERS = (operators.asc_op, operators.desc_op)


def _unwrap(element: Any) -> Any:
    # ordering by a label inside Select.order_by() is stored as a reference to it
    if isinstance(element, _label_reference):
        element = element.element
    # ORM attributes (User.id) expose their column through __clause_element__
    if hasattr(element, "__clause_element__"):
        return element.__clause_element__()
    return element


def _identify(column: ColumnElement[Any]) -> tuple[str, ColumnElement[Any]]:
    """Identity used in cursors/rows, and the expression to filter on."""
    if isinstance(column, Label):
        return column.name, column.element
    return str(column), column


def order_term(clause: Any) -> tuple[SortKey, ColumnElement[Any]]:
    """Split one ORDER BY clause into a :class:`SortKey` and its column.

    Accepts columns and ORM attributes (ascending), ``col.asc()`` /
    ``col.desc()``, and raw strings such as ``"created_at DESC"``.  As with
    any rendered clause, the direction is read from the trailing keyword of
    the SQL text; ``NULLS FIRST/LAST`` and other modifiers are rejected.
    """
    if isinstance(clause, str):
        key = parse_order_expression(clause)
        return key, sa.literal_column(key.identity)

    clause = _unwrap(clause)
    if isinstance(clause, UnaryExpression) and clause.modifier is not None:
        if clause.modifier not in _DIRECTION_MODIFIERS:
            raise BadKeywordError("Order clause does not have direction", expression=str(clause))
        parsed = parse_order_expression(str(clause))
        identity, column = _identify(_unwrap(clause.element))
        return SortKey(identity, parsed.direction), column

    if isinstance(clause, ColumnElement):
        identity, column = _identify(clause)
        return SortKey(identity, SortDirection.ASC), column

    raise BadOrderError(f"Cannot order by {clause!r}", direction=None)


def statement_limit(statement: Select[Any]) -> Any:
    """The literal LIMIT already on *statement*, or ``None`` when it has none.

    Bound parameters without a value and other expressions cannot be read
    before execution and raise :class:`LimitParameterError`.
    """
    clause = statement._limit_clause
    if clause is None:
        return None
    if isinstance(clause, BindParameter) and clause.value is not None:
        return clause.value
    raise LimitParameterError("Limit must be a literal positive integer", value=str(clause))


def render_order(keys: tuple[SortKey, ...], columns: Mapping[str, ColumnElement[Any]]) -> list[Any]:
    return [
        _column(columns, key.identity).asc() if key.ascending else _column(columns, key.identity).desc()
        for key in keys
    ]


def render_predicate(
    predicate: BoundaryPredicate,
    columns: Mapping[str, ColumnElement[Any]],
) -> ColumnElement[bool]:
    """Render a boundary predicate tree as a SQLAlchemy boolean expression."""
    if isinstance(predicate, Comparison):
        column = _column(columns, predicate.identity)
        if predicate.operator is Operator.EQ:
            return column == predicate.value
        if predicate.operator is Operator.GT:
            return column > predicate.value
        return column < predicate.value
    if isinstance(predicate, AllOf):
        return sa.and_(*(render_predicate(term, columns) for term in predicate.terms))
    if isinstance(predicate, AnyOf):
        return sa.or_(*(render_predicate(term, columns) for term in predicate.terms))
    raise TypeError(f"Unsupported predicate node {predicate!r}")


def _column(columns: Mapping[str, ColumnElement[Any]], identity: str) -> ColumnElement[Any]:
    try:
        return columns[identity]
    except KeyError:
        raise InsufficientConstraintsError(
            f"No column registered for order identity {identity!r}", missing=(identity,)
        ) from None


__all__ = ["order_term", "render_order", "render_predicate", "statement_limit"]
