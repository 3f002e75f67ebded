"""Dependency graph and lifecycle phase engines for software-delivery projects."""

__version__ = "0.1.0"
