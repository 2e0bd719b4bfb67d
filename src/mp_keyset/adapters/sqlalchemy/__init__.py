"""SQLAlchemy adapter – keyset pagination over ``Select`` statements."""
from mp_keyset.adapters.sqlalchemy.query import KeysetSelect
from mp_keyset.adapters.sqlalchemy.renderer import order_term, render_order, render_predicate, statement_limit

__all__ = ["KeysetSelect", "order_term", "render_order", "render_predicate", "statement_limit"]
