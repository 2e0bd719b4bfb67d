"""Adapters – host integrations for the pagination engine."""
