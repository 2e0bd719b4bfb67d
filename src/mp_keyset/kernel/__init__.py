"""Kernel – framework-agnostic building blocks."""

from mp_keyset.kernel.errors import (
    BadKeywordError,
    BadOrderError,
    BaseError,
    InsufficientConstraintsError,
    LimitParameterError,
    QueryError,
)
from mp_keyset.kernel.types import Err, Ok, Result

__all__ = [
    "BadKeywordError",
    "BadOrderError",
    "BaseError",
    "Err",
    "InsufficientConstraintsError",
    "LimitParameterError",
    "Ok",
    "QueryError",
    "Result",
]
