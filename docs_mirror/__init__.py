"""Differential mirror of a documentation site to local markdown files."""

__version__ = "1.0.0"
