"""Kernel types."""
from mp_keyset.kernel.types.result import Err, Ok, Result

__all__ = ["Err", "Ok", "Result"]
