"""Benchmarks for the flag evaluation hot path.

Run explicitly, e.g. ``pytest tests/benchmarks/bench_flagset.py``.
"""
