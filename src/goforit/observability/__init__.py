"""Observability – logging configuration for the library and its callers."""
