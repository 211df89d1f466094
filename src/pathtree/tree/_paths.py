"""
Path tokenization and resolution for PathTree.

A path string is split literally on the delimiter into segments, and the
segments are walked through nested mappings and lists:

- resolve(): read walk, never mutates
- resolve_slot(): write walk, auto-vivifies every intermediate hop
- resolve_parent(): delete walk, never vivifies

Digit segments match integer keys and list indexes, so "items.0" reaches
the first element of a list as well as the key 0 of a mapping.

Example:
    >>> root = {"a": {"b": [10, 20]}}
    >>> resolve(root, split("a.b.1", "."))
    (True, 20)
    >>> container, key = resolve_slot(root, split("x.y", "."))
    >>> store(container, key, 1)
    >>> root["x"]
    {'y': 1}
"""

from __future__ import annotations

import collections.abc as _abc
import logging as _logging
import typing as _typing

import pathtree.tree._types as _types

_logger = _logging.getLogger(__name__)


def split(path: _types.Key, delimiter: str) -> _types.Segments:
    """
    Split a path into segments.

    Integer paths are a single segment. Strings are split literally,
    there is no escaping of the delimiter.

    Raises:
        TypeError: If path is neither a str nor an int.
    """
    if isinstance(path, int) and not isinstance(path, bool):
        return [path]
    if not isinstance(path, str):
        raise TypeError(f"Path must be a str or int, not {type(path).__name__}")
    return path.split(delimiter)


def as_index(segment: _types.Key) -> int | None:
    """Interpret a segment as a list index, or None if it is not one."""
    if isinstance(segment, bool):
        return None
    if isinstance(segment, int):
        return segment if segment >= 0 else None
    if isinstance(segment, str) and segment.isascii() and segment.isdigit():
        return int(segment)
    return None


def lookup_key(container: _typing.Any, segment: _types.Key) -> tuple[bool, _types.Key]:
    """
    Find the key under which a segment is stored in a container.

    Returns:
        Tuple of (found, key). For mappings the key is the segment itself,
        or its int/str twin when only that form is present. For lists the
        key is the integer index.
    """
    if isinstance(container, _abc.Mapping):
        if segment in container:
            return True, segment
        if isinstance(segment, str):
            index = as_index(segment)
            if index is not None and index in container:
                return True, index
        elif isinstance(segment, int) and str(segment) in container:
            return True, str(segment)
        return False, segment

    if isinstance(container, (list, tuple)):
        index = as_index(segment)
        if index is not None and index < len(container):
            return True, index
    return False, segment


def resolve(root: _typing.Any, segments: _types.Segments) -> tuple[bool, _typing.Any]:
    """
    Walk segments through root for reading.

    Returns:
        Tuple of (found, value). Resolution fails as soon as a segment
        is absent or the current value is not a container.
    """
    current = root
    for segment in segments:
        if not _types.is_container(current):
            return False, None
        found, key = lookup_key(current, segment)
        if not found:
            return False, None
        current = current[key]
    return True, current


def _is_writable(value: _typing.Any) -> bool:
    return isinstance(value, (_abc.MutableMapping, list))


def _accepts(value: _typing.Any, segment: _types.Key) -> bool:
    """Check if a segment can be written into value without replacing it."""
    if isinstance(value, _abc.MutableMapping):
        return True
    if isinstance(value, (list, tuple)):
        index = as_index(segment)
        return index is not None and index <= len(value)
    return False


def _write_key(container: _typing.Any, segment: _types.Key) -> _types.Key:
    found, key = lookup_key(container, segment)
    if found:
        return key
    if isinstance(container, list):
        # _accepts() guarantees an index no further than one past the end
        return _typing.cast(int, as_index(segment))
    return segment


def store(container: _typing.Any, key: _types.Key, value: _typing.Any) -> None:
    """Write value at key, appending when key is one past the end of a list."""
    if isinstance(container, list) and key == len(container):
        container.append(value)
    else:
        container[key] = value


def remove(container: _typing.Any, key: _types.Key) -> None:
    """Remove key from a mapping, or pop the index from a list."""
    del container[key]


def resolve_slot(
    root: _abc.MutableMapping[_types.Key, _typing.Any],
    segments: _types.Segments,
) -> tuple[_typing.Any, _types.Key]:
    """
    Walk segments through root for writing.

    Every intermediate hop that is missing, or that cannot take the next
    segment (a scalar, or a list with a non-index segment), is replaced
    with an empty dict. A tuple on the way is rebuilt as a list, keeping
    its elements. The final segment is never created here; the caller
    stores into the returned slot.

    Returns:
        Tuple of (container, key) addressing the final slot.
    """
    current: _typing.Any = root
    for segment, next_segment in zip(segments[:-1], segments[1:]):
        key = _write_key(current, segment)
        found, _ = lookup_key(current, key)
        child = current[key] if found else None
        if not _accepts(child, next_segment):
            if child is not None:
                _logger.debug(
                    "Replacing %s value at segment %r with an empty mapping",
                    _types.kind_of(child).value,
                    segment,
                )
            child = {}
            store(current, key, child)
        elif isinstance(child, tuple):
            child = list(child)
            store(current, key, child)
        current = child
    return current, _write_key(current, segments[-1])


def resolve_parent(
    root: _typing.Any,
    segments: _types.Segments,
) -> tuple[_typing.Any, _types.Key] | None:
    """
    Walk segments through root for deletion.

    Returns:
        Tuple of (container, key) when the final entry exists, otherwise
        None. Nothing is created along the way.
    """
    current = root
    for segment in segments[:-1]:
        if not _is_writable(current):
            return None
        found, key = lookup_key(current, segment)
        if not found:
            return None
        current = current[key]
    if not _is_writable(current):
        return None
    found, key = lookup_key(current, segments[-1])
    if not found:
        return None
    return current, key
