"""
Type aliases and the value classifier for PathTree.

This module provides:
- Key: A mapping key or list index (str or non-negative int)
- Segments: The list of keys a path string splits into
- Kind: The four shapes a stored value can take
- kind_of(): Tag a value with its Kind
"""

from __future__ import annotations

import collections.abc as _abc
import enum as _enum
import typing as _typing

Key: _typing.TypeAlias = "str | int"

# Example: "config.model.name" -> ["config", "model", "name"]
Segments: _typing.TypeAlias = "list[Key]"

Value: _typing.TypeAlias = _typing.Any


class Kind(_enum.Enum):
    """Shape of a stored value."""

    NULL = "null"
    SCALAR = "scalar"
    SEQUENCE = "sequence"
    MAPPING = "mapping"


def kind_of(value: _typing.Any) -> Kind:
    """
    Classify a value.

    - None → NULL
    - Mapping (dict, OrderedDict, ...) → MAPPING
    - list/tuple → SEQUENCE (str and bytes are scalars)
    - everything else → SCALAR

    Example:
        >>> kind_of({"a": 1})
        <Kind.MAPPING: 'mapping'>
        >>> kind_of("abc")
        <Kind.SCALAR: 'scalar'>
    """
    if value is None:
        return Kind.NULL
    if isinstance(value, _abc.Mapping):
        return Kind.MAPPING
    if isinstance(value, (list, tuple)):
        return Kind.SEQUENCE
    return Kind.SCALAR


def is_container(value: _typing.Any) -> bool:
    """Check if a value can be descended into by a path segment."""
    return kind_of(value) in (Kind.MAPPING, Kind.SEQUENCE)
