"""
mp_keyset – keyset ("cursor") pagination engine.

Import path convention::

    from mp_keyset.application.pagination import Paginator, OrderSpecification
    from mp_keyset.kernel.errors import InsufficientConstraintsError
    from mp_keyset.adapters.sqlalchemy import KeysetSelect
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
