"""Application pagination – SortDirection, SortKey, OrderSpecification."""
from __future__ import annotations

import dataclasses
import re
from enum import Enum
from typing import Iterable, Iterator

from mp_keyset.kernel.errors import BadKeywordError, BadOrderError, InsufficientConstraintsError

# Rendered ORDER BY terms end with a single direction keyword, e.g. ``posts.created_at DESC``.
_DIRECTION_SUFFIX = re.compile(r"^(?P<identity>.*\S)\s+(?P<direction>ASC|DESC)$", re.DOTALL)


class SortDirection(str, Enum):
    ASC = "ASC"
    DESC = "DESC"

    @classmethod
    def parse(cls, value: "SortDirection | str", *, identity: str | None = None) -> "SortDirection":
        """Accept a :class:`SortDirection` or ``"asc"``/``"desc"`` in any case."""
        if isinstance(value, SortDirection):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().upper())
            except ValueError:
                pass
        raise BadOrderError(
            f"Order direction must be ASC or DESC, got {value!r}",
            identity=identity,
            direction=value,
        )

    def reversed(self) -> "SortDirection":
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


@dataclasses.dataclass(frozen=True, slots=True)
class SortKey:
    """One ordering column (or deterministic expression) and its direction."""

    identity: str
    direction: SortDirection = SortDirection.ASC

    def __post_init__(self) -> None:
        if not isinstance(self.identity, str) or not self.identity.strip():
            raise BadOrderError("Order identity must be a non-empty string", identity=self.identity)
        object.__setattr__(self, "direction", SortDirection.parse(self.direction, identity=self.identity))

    @property
    def ascending(self) -> bool:
        return self.direction is SortDirection.ASC

    def reversed(self) -> "SortKey":
        return SortKey(self.identity, self.direction.reversed())

    def __str__(self) -> str:
        return f"{self.identity} {self.direction.value}"


def parse_order_expression(sql: str) -> SortKey:
    """Split a rendered ORDER BY term into identity and direction.

    The direction keyword must be the trailing token, so
    ``"COALESCE(updated_at, created_at) DESC"`` yields the identity
    ``COALESCE(updated_at, created_at)`` sorted descending.

    Raises :class:`BadKeywordError` when no ``ASC``/``DESC`` suffix is present.
    """
    match = _DIRECTION_SUFFIX.match(sql.strip()) if isinstance(sql, str) else None
    if match is None:
        raise BadKeywordError("Order expression does not have direction", expression=sql)
    return SortKey(match.group("identity"), SortDirection(match.group("direction")))


class OrderSpecification:
    """Ordered, de-duplicated sequence of :class:`SortKey`.

    Earlier keys take priority; later keys only break ties.  Adding an identity
    that is already present replaces its direction in place, or moves it to the
    end when ``reorder=True``.
    """

    def __init__(self, keys: Iterable[SortKey | tuple[str, SortDirection | str]] = ()) -> None:
        self._keys: list[SortKey] = []
        for key in keys:
            if isinstance(key, SortKey):
                self.add(key.identity, key.direction)
            else:
                self.add(*key)

    def add(
        self,
        identity: str,
        direction: SortDirection | str = SortDirection.ASC,
        *,
        reorder: bool = False,
    ) -> "OrderSpecification":
        key = SortKey(identity, SortDirection.parse(direction, identity=identity))
        for index, existing in enumerate(self._keys):
            if existing.identity != identity:
                continue
            if reorder:
                del self._keys[index]
                break
            self._keys[index] = key
            return self
        self._keys.append(key)
        return self

    def add_expression(self, sql: str, *, reorder: bool = False) -> "OrderSpecification":
        key = parse_order_expression(sql)
        return self.add(key.identity, key.direction, reorder=reorder)

    def clear(self) -> "OrderSpecification":
        self._keys.clear()
        return self

    @property
    def keys(self) -> tuple[SortKey, ...]:
        return tuple(self._keys)

    @property
    def identities(self) -> tuple[str, ...]:
        return tuple(key.identity for key in self._keys)

    def require_keys(self) -> tuple[SortKey, ...]:
        """Return the keys, failing when there is nothing to paginate by."""
        if not self._keys:
            raise InsufficientConstraintsError("At least one order constraint required")
        return self.keys

    def copy(self) -> "OrderSpecification":
        return OrderSpecification(self._keys)

    def __iter__(self) -> Iterator[SortKey]:
        return iter(tuple(self._keys))

    def __len__(self) -> int:
        return len(self._keys)

    def __bool__(self) -> bool:
        return bool(self._keys)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OrderSpecification):
            return NotImplemented
        return self._keys == other._keys

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"OrderSpecification({', '.join(str(k) for k in self._keys)})"


__all__ = ["OrderSpecification", "SortDirection", "SortKey", "parse_order_expression"]
