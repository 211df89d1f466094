"""
Whole-structure utilities for PathTree: flattening and key sorting.

These functions never mutate their input.
"""

from __future__ import annotations

import collections.abc as _abc
import copy as _copy
import typing as _typing

import pathtree.tree._types as _types


def entries(value: _typing.Any) -> _typing.Iterator[tuple[_types.Key, _typing.Any]]:
    """Iterate (key, value) pairs of a mapping, or (index, item) of a list."""
    if isinstance(value, _abc.Mapping):
        return iter(value.items())
    return enumerate(value)


def flatten(
    items: _typing.Any,
    delimiter: str,
    prepend: str = "",
) -> dict[str, _typing.Any]:
    """
    Collapse a nested structure into a single-level dict.

    Every leaf is keyed by its full path joined with delimiter and
    prefixed with prepend. Scalars and empty containers are leaves;
    only non-empty containers are expanded.

    Example:
        >>> flatten({"foo": {"abc": "xyz", "bar": ["baz"]}}, ".")
        {'foo.abc': 'xyz', 'foo.bar.0': 'baz'}
    """
    result: dict[str, _typing.Any] = {}
    for key, value in entries(items):
        if _types.is_container(value) and len(value) > 0:
            result.update(flatten(value, delimiter, f"{prepend}{key}{delimiter}"))
        else:
            result[f"{prepend}{key}"] = value
    return result


def is_list_shaped(value: _abc.Mapping[_typing.Any, _typing.Any]) -> bool:
    """Check if a mapping's keys are exactly the integers 0..n-1."""
    keys = list(value)
    if not all(isinstance(key, int) and not isinstance(key, bool) for key in keys):
        return False
    return sorted(keys) == list(range(len(keys)))


def _ordered_keys(value: _abc.Mapping[_typing.Any, _typing.Any]) -> list[_typing.Any]:
    if is_list_shaped(value):
        return sorted(value)
    return sorted(value, key=str)


def sort_keys(value: _typing.Any) -> _typing.Any:
    """
    Return a copy of value with mapping keys in ascending order.

    List-shaped mappings sort numerically, all others compare keys as
    strings. Lists and scalars are returned as copies, unchanged.
    """
    if _types.kind_of(value) is not _types.Kind.MAPPING:
        return _copy.deepcopy(value)
    return {key: _copy.deepcopy(value[key]) for key in _ordered_keys(value)}


def sort_recursive(value: _typing.Any) -> _typing.Any:
    """Like sort_keys(), applied at every nested mapping level."""
    kind = _types.kind_of(value)
    if kind is _types.Kind.MAPPING:
        children = {key: sort_recursive(child) for key, child in value.items()}
        return {key: children[key] for key in _ordered_keys(value)}
    if kind is _types.Kind.SEQUENCE:
        return [sort_recursive(item) for item in value]
    return _copy.deepcopy(value)
