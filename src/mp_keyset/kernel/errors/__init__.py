"""Kernel error hierarchy: public re-export surface.

Hierarchy::

    BaseError
    └── QueryError                      (pagination.py)
        ├── BadOrderError
        │   └── BadKeywordError
        ├── InsufficientConstraintsError
        └── LimitParameterError
"""

from mp_keyset.kernel.errors.base import BaseError
from mp_keyset.kernel.errors.pagination import (
    BadKeywordError,
    BadOrderError,
    InsufficientConstraintsError,
    LimitParameterError,
    QueryError,
)

__all__ = [
    "BadKeywordError",
    "BadOrderError",
    "BaseError",
    "InsufficientConstraintsError",
    "LimitParameterError",
    "QueryError",
]
