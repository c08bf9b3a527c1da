"""Tabu Search for quadratic binary functions."""

__version__ = "0.1.0"
