"""
CLI module for pathtree.

Provides the command-line interface using Click.
"""

from pathtree.cli.main import cli, main

__all__ = ["main", "cli"]
