"""
Merge strategies for PathTree.

Each strategy combines two values into a new one. Inputs are never
mutated; values taken from the incoming side are deep-copied so the
result does not alias the caller's data.

| Strategy  | Rule on key collision                                         |
|-----------|---------------------------------------------------------------|
| SHALLOW   | incoming value replaces the existing one                      |
| RECURSIVE | mappings recurse, lists concatenate, anything else accumulates |
|           | into a list ``[old, new]``                                    |
| DISTINCT  | mappings recurse, anything else is replaced by incoming       |

Example:
    >>> combine({"a": {"b": 1}}, {"a": {"b": 2}}, MergeStrategy.RECURSIVE)
    {'a': {'b': [1, 2]}}
    >>> combine({"a": {"b": 1}}, {"a": {"b": 2}}, MergeStrategy.DISTINCT)
    {'a': {'b': 2}}
"""

from __future__ import annotations

import copy as _copy
import enum as _enum
import typing as _typing

import pathtree.tree._types as _types

_MAPPING = _types.Kind.MAPPING
_SEQUENCE = _types.Kind.SEQUENCE


class MergeStrategy(_enum.Enum):
    """How colliding keys are combined."""

    SHALLOW = "shallow"
    RECURSIVE = "recursive"
    DISTINCT = "distinct"


def merge_shallow(base: _typing.Any, incoming: _typing.Any) -> _typing.Any:
    """
    Top-level merge: incoming keys replace existing keys entirely.

    Two lists do not concatenate; the incoming list wins. Integer keys
    are matched like any other key, never renumbered, so this is also
    the key-wise replace of one integer-keyed root by another.
    """
    if _types.kind_of(base) is _MAPPING and _types.kind_of(incoming) is _MAPPING:
        result = dict(base)
        for key, value in incoming.items():
            result[key] = _copy.deepcopy(value)
        return result
    return _copy.deepcopy(incoming)


def merge_recursive(base: _typing.Any, incoming: _typing.Any) -> _typing.Any:
    """
    Recursive merge where colliding values accumulate.

    - Both mappings: merged key by key
    - Both lists: concatenated
    - One list: the other value is appended (or prepended)
    - Otherwise: collected into ``[base, incoming]``. This includes a
      mapping colliding with a scalar: ``{"x": 1}`` and ``2`` give
      ``[{"x": 1}, 2]``, the scalar is not filed into the mapping under
      a new integer key.
    """
    base_kind = _types.kind_of(base)
    incoming_kind = _types.kind_of(incoming)

    if base_kind is _MAPPING and incoming_kind is _MAPPING:
        result = dict(base)
        for key, value in incoming.items():
            if key in result:
                result[key] = merge_recursive(result[key], value)
            else:
                result[key] = _copy.deepcopy(value)
        return result

    if base_kind is _SEQUENCE and incoming_kind is _SEQUENCE:
        return list(base) + _copy.deepcopy(list(incoming))
    if base_kind is _SEQUENCE:
        return list(base) + [_copy.deepcopy(incoming)]
    if incoming_kind is _SEQUENCE:
        return [base] + _copy.deepcopy(list(incoming))
    return [base, _copy.deepcopy(incoming)]


def merge_recursive_distinct(base: _typing.Any, incoming: _typing.Any) -> _typing.Any:
    """
    Recursive merge where colliding non-mapping values are overwritten.

    Nested mappings merge; lists and scalars from incoming replace
    whatever was there.
    """
    if _types.kind_of(base) is _MAPPING and _types.kind_of(incoming) is _MAPPING:
        result = dict(base)
        for key, value in incoming.items():
            if key in result:
                result[key] = merge_recursive_distinct(result[key], value)
            else:
                result[key] = _copy.deepcopy(value)
        return result
    return _copy.deepcopy(incoming)


_STRATEGIES: dict[MergeStrategy, _typing.Callable[[_typing.Any, _typing.Any], _typing.Any]] = {
    MergeStrategy.SHALLOW: merge_shallow,
    MergeStrategy.RECURSIVE: merge_recursive,
    MergeStrategy.DISTINCT: merge_recursive_distinct,
}


def combine(
    base: _typing.Any,
    incoming: _typing.Any,
    strategy: MergeStrategy,
) -> _typing.Any:
    """
    Combine two values with the given strategy.

    Args:
        base: The existing value.
        incoming: The value merged on top of it.
        strategy: Collision rule to apply.

    Returns:
        New merged value.
    """
    return _STRATEGIES[strategy](base, incoming)
