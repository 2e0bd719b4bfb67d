"""Application pagination – boundary predicate tree and PredicateBuilder.

The boundary predicate for cursor values ``(k1, v1) .. (kN, vN)`` is::

    (k1 op v1)
    OR (k1 = v1 AND k2 op v2)
    ...
    OR (k1 = v1 AND ... AND kN-1 = vN-1 AND kN op vN)
    [OR (k1 = v1 AND ... AND kN = vN)]        -- inclusive only

Only the first key that differs from the cursor decides whether a row lies
after or before it, so the keys can never be filtered independently.
"""
from __future__ import annotations

import dataclasses
import operator as _operator
from enum import Enum
from typing import Any, Callable, Sequence

from mp_keyset.application.pagination.config import Direction, Inclusivity
from mp_keyset.application.pagination.cursor import read_value
from mp_keyset.application.pagination.order import SortKey
from mp_keyset.kernel.errors import BadKeywordError, InsufficientConstraintsError


class Operator(str, Enum):
    EQ = "="
    GT = ">"
    LT = "<"

    def apply(self, left: Any, right: Any) -> bool:
        """Compare like SQL does: anything involving ``NULL`` is not a match."""
        if left is None or right is None:
            return False
        return _APPLY[self](left, right)


_APPLY: dict[Operator, Callable[[Any, Any], bool]] = {
    Operator.EQ: _operator.eq,
    Operator.GT: _operator.gt,
    Operator.LT: _operator.lt,
}


@dataclasses.dataclass(frozen=True, slots=True)
class Comparison:
    """``identity <operator> value`` against a resolved cursor value."""

    identity: str
    operator: Operator
    value: Any

    def evaluate(self, row: Any) -> bool:
        return self.operator.apply(read_value(row, self.identity), self.value)

    def __str__(self) -> str:
        return f"{self.identity} {self.operator.value} {self.value!r}"


@dataclasses.dataclass(frozen=True, slots=True)
class AllOf:
    """Conjunction of predicate terms."""

    terms: tuple["BoundaryPredicate", ...]

    def evaluate(self, row: Any) -> bool:
        return all(term.evaluate(row) for term in self.terms)

    def __str__(self) -> str:
        return " AND ".join(_group(term) for term in self.terms)


@dataclasses.dataclass(frozen=True, slots=True)
class AnyOf:
    """Disjunction of predicate terms."""

    terms: tuple["BoundaryPredicate", ...]

    def evaluate(self, row: Any) -> bool:
        return any(term.evaluate(row) for term in self.terms)

    def __str__(self) -> str:
        return " OR ".join(_group(term) for term in self.terms)


type BoundaryPredicate = Comparison | AllOf | AnyOf


def _group(term: BoundaryPredicate) -> str:
    return str(term) if isinstance(term, Comparison) else f"({term})"


def all_of(*terms: BoundaryPredicate) -> BoundaryPredicate:
    return terms[0] if len(terms) == 1 else AllOf(tuple(terms))


def any_of(*terms: BoundaryPredicate) -> BoundaryPredicate:
    return terms[0] if len(terms) == 1 else AnyOf(tuple(terms))


class PredicateBuilder:
    """Build the boundary predicate selecting rows after (or before) a cursor."""

    @staticmethod
    def operator_for(key: SortKey, direction: Direction) -> Operator:
        if not isinstance(key, SortKey):
            raise BadKeywordError(f"Cannot derive a comparison from {key!r}", expression=repr(key))
        return Operator.GT if key.ascending == (direction is Direction.FORWARD) else Operator.LT

    def build(
        self,
        resolved: Sequence[tuple[SortKey, Any]],
        direction: Direction = Direction.FORWARD,
        inclusivity: Inclusivity = Inclusivity.EXCLUSIVE,
    ) -> BoundaryPredicate:
        if not resolved:
            raise InsufficientConstraintsError("At least one order constraint required")

        operators = [self.operator_for(key, direction) for key, _ in resolved]
        equalities = [Comparison(key.identity, Operator.EQ, value) for key, value in resolved]

        terms: list[BoundaryPredicate] = [
            all_of(*equalities[:index], Comparison(key.identity, operators[index], value))
            for index, (key, value) in enumerate(resolved)
        ]
        if inclusivity is Inclusivity.INCLUSIVE:
            terms.append(all_of(*equalities))
        return any_of(*terms)


__all__ = [
    "AllOf",
    "AnyOf",
    "BoundaryPredicate",
    "Comparison",
    "Operator",
    "PredicateBuilder",
    "all_of",
    "any_of",
]
