"""Application layer – the keyset pagination engine."""
