"""Observability – structlog configuration and logger access."""
from mp_keyset.observability.logging.factory import JsonLoggerFactory
from mp_keyset.observability.logging.logger import Logger, get_logger

__all__ = ["JsonLoggerFactory", "Logger", "get_logger"]
