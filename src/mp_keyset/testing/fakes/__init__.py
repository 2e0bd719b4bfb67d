"""Testing fakes."""
from mp_keyset.testing.fakes.executor import InMemoryExecutor

__all__ = ["InMemoryExecutor"]
