"""
Command-line interface for cacher.

Provides Click-based commands for inspecting and purging a SQLite cache.
"""

from cacher.cli.main import cli

__all__ = ["cli"]
