"""System domain package.

This package contains system-level components:
- PathResolver: Path resolution for pipeline config files
"""
