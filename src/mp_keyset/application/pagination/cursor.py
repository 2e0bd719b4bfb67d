"""Application pagination – CursorResolver.

A cursor is either a flat mapping of order identity to boundary value, or a
row previously returned by the host (a mapping or an object with attributes).
"""
from __future__ import annotations

from collections import Counter
from collections.abc import Mapping
from typing import Any, Iterable

from mp_keyset.application.pagination.order import OrderSpecification, SortKey
from mp_keyset.kernel.errors import InsufficientConstraintsError

_SCALARS = (str, bytes, bytearray, int, float, complex)


def _bare(identity: str) -> str:
    return identity.rsplit(".", 1)[-1]


def read_value(source: Any, identity: str, *, fallback: bool = True) -> Any:
    """Read *identity* from a mapping or an object.

    Qualified identities (``posts.id``) fall back to their last segment, since
    rows usually carry bare column names; ``fallback=False`` reads the exact
    identity only.  Raises ``KeyError`` when absent.
    """
    candidates = (identity, _bare(identity)) if fallback and "." in identity else (identity,)
    if isinstance(source, Mapping):
        for name in candidates:
            if name in source:
                return source[name]
    else:
        for name in candidates:
            if name.isidentifier() and hasattr(source, name):
                return getattr(source, name)
    raise KeyError(identity)


class CursorResolver:
    """Turn a cursor into one ``(SortKey, value)`` pair per order key.

    A key is looked up by its bare column name only when no other order key
    shares that name: with ``posts.id`` and ``users.id`` both ordered, the
    cursor must carry both qualified identities.
    """

    @staticmethod
    def is_empty(cursor: Any) -> bool:
        """``None`` and ``{}`` both mean "no cursor" (the first page)."""
        return cursor is None or (isinstance(cursor, Mapping) and not cursor)

    @staticmethod
    def is_supported(cursor: Any) -> bool:
        return cursor is not None and not isinstance(cursor, _SCALARS)

    @staticmethod
    def _lookups(keys: Iterable[SortKey]) -> list[tuple[SortKey, bool]]:
        keys = list(keys)
        shared = Counter(_bare(key.identity) for key in keys)
        return [(key, shared[_bare(key.identity)] == 1) for key in keys]

    def missing(self, cursor: Any, keys: Iterable[SortKey]) -> tuple[str, ...]:
        """Identities of *keys* the cursor has no value for."""
        if not self.is_supported(cursor):
            return tuple(key.identity for key in keys)
        absent: list[str] = []
        for key, fallback in self._lookups(keys):
            try:
                read_value(cursor, key.identity, fallback=fallback)
            except KeyError:
                absent.append(key.identity)
        return tuple(absent)

    def resolve(
        self,
        cursor: Any,
        order: OrderSpecification | Iterable[SortKey],
    ) -> tuple[tuple[SortKey, Any], ...]:
        keys = order.require_keys() if isinstance(order, OrderSpecification) else tuple(order)
        if not keys:
            raise InsufficientConstraintsError("At least one order constraint required")
        if not self.is_supported(cursor):
            raise InsufficientConstraintsError(
                f"Cursor must be a mapping or a row, got {type(cursor).__name__}"
            )

        missing = self.missing(cursor, keys)
        if missing:
            raise InsufficientConstraintsError(
                f"Cursor parameter missing: {', '.join(missing)}",
                missing=missing,
            )
        return tuple(
            (key, read_value(cursor, key.identity, fallback=fallback)) for key, fallback in self._lookups(keys)
        )


__all__ = ["CursorResolver", "read_value"]
