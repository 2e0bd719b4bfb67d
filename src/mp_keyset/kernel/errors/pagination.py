"""Pagination query errors: raised while a keyset query is being built.

Every error here is a programming or configuration error detected before the
host executes anything; none of them is retryable.
"""

from __future__ import annotations

from typing import Any

from mp_keyset.kernel.errors.base import BaseError


class QueryError(BaseError):
    """A pagination query could not be built."""

    default_code = "query_error"


class BadOrderError(QueryError):
    """An order direction is missing or is neither ascending nor descending."""

    default_code = "bad_order"

    def __init__(
        self,
        message: str,
        *,
        identity: str | None = None,
        direction: Any = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.identity = identity
        self.direction = direction


class BadKeywordError(BadOrderError):
    """A raw order expression does not end with an ``ASC``/``DESC`` keyword."""

    default_code = "bad_keyword"

    def __init__(self, message: str, *, expression: str | None = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.expression = expression


class InsufficientConstraintsError(QueryError):
    """The order is empty, or the cursor lacks a value for an order key."""

    default_code = "insufficient_constraints"

    def __init__(
        self,
        message: str,
        *,
        missing: tuple[str, ...] = (),
        **kwargs: Any,
    ) -> None:
        if missing:
            kwargs.setdefault("detail", {"missing": list(missing)})
        super().__init__(message, **kwargs)
        self.missing = missing


class LimitParameterError(QueryError):
    """The page-size limit is missing, not an integer, or not positive."""

    default_code = "limit_parameter"

    def __init__(self, message: str = "Limit must be positive integer", *, value: Any = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.value = value


__all__ = [
    "BadKeywordError",
    "BadOrderError",
    "InsufficientConstraintsError",
    "LimitParameterError",
    "QueryError",
]
