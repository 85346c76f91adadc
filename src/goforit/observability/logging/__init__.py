"""Observability – structlog helpers."""
from goforit.observability.logging.factory import JsonLoggerFactory
from goforit.observability.logging.processors import ErrorDetailProcessor, get_logger

__all__ = ["ErrorDetailProcessor", "JsonLoggerFactory", "get_logger"]
