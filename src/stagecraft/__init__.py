"""Versioned pipeline configuration resolution and migration."""

__version__ = "0.3.0"
