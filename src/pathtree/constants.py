"""
Shared constants for pathtree.

This module provides a single source of truth for default values
that are used across multiple modules.
"""

DEFAULT_DELIMITER = "."
"""Default path delimiter ("a.b.c")."""

DEFAULT_OUTPUT_FORMAT = "json"
"""Default document format for CLI output."""

DEFAULT_JSON_INDENT = 2
"""Default indentation for CLI JSON output."""

YAML_SUFFIXES = (".yaml", ".yml")
"""File suffixes read and written as YAML by the CLI."""
