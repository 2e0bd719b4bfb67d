"""Testing helpers – fakes for driving the pagination engine without a database."""
from mp_keyset.testing.fakes import InMemoryExecutor

__all__ = ["InMemoryExecutor"]
