"""Application pagination – keyset order, cursor, predicate, plan and result primitives."""
from mp_keyset.application.pagination.assembler import PaginationResult, ResultAssembler
from mp_keyset.application.pagination.config import (
    Direction,
    Inclusivity,
    PaginationConfig,
    PaginationOption,
    Seekability,
    coerce_limit,
)
from mp_keyset.application.pagination.cursor import CursorResolver
from mp_keyset.application.pagination.order import (
    OrderSpecification,
    SortDirection,
    SortKey,
    parse_order_expression,
)
from mp_keyset.application.pagination.paginator import (
    FetchRequest,
    PaginationQuery,
    Paginator,
    RowExecutor,
)
from mp_keyset.application.pagination.planner import FetchPlan, PageFetchPlanner
from mp_keyset.application.pagination.predicate import (
    AllOf,
    AnyOf,
    BoundaryPredicate,
    Comparison,
    Operator,
    PredicateBuilder,
)

__all__ = [
    "AllOf",
    "AnyOf",
    "BoundaryPredicate",
    "Comparison",
    "CursorResolver",
    "Direction",
    "FetchPlan",
    "FetchRequest",
    "Inclusivity",
    "Operator",
    "OrderSpecification",
    "PageFetchPlanner",
    "PaginationConfig",
    "PaginationOption",
    "PaginationQuery",
    "PaginationResult",
    "Paginator",
    "PredicateBuilder",
    "ResultAssembler",
    "RowExecutor",
    "Seekability",
    "SortDirection",
    "SortKey",
    "coerce_limit",
    "parse_order_expression",
]
