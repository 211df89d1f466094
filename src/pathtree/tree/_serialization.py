"""
Text serialization for PathTree values.

Provides JSON (standard library) and YAML (PyYAML safe dumper/loader)
round-tripping. Formatting options are passed through to the underlying
serializer unchanged, apart from a couple of YAML defaults that keep
insertion order and block style.

Example:
    >>> dump_json({"a": {"b": 1}}, sort_keys=True)
    '{"a": {"b": 1}}'
    >>> load_yaml("a:\\n  b: 1\\n")
    {'a': {'b': 1}}
"""

from __future__ import annotations

import collections.abc as _abc
import json as _json
import typing as _typing

import yaml as _yaml


def to_plain(value: _typing.Any) -> _typing.Any:
    """
    Convert a value to plain dicts and lists.

    Mapping subclasses and tuples are not understood by the YAML safe
    dumper, so they are rebuilt as dict and list.
    """
    if isinstance(value, _abc.Mapping):
        return {key: to_plain(child) for key, child in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(item) for item in value]
    return value


def dump_json(value: _typing.Any, **options: _typing.Any) -> str:
    """
    Serialize a value to JSON.

    Args:
        value: Value to serialize. Integer keys become strings.
        **options: Passed to json.dumps (indent, ensure_ascii, ...).
    """
    return _json.dumps(to_plain(value), **options)


def dump_yaml(value: _typing.Any, **options: _typing.Any) -> str:
    """
    Serialize a value to YAML.

    Args:
        value: Value to serialize.
        **options: Passed to yaml.safe_dump. Defaults to insertion order
            (sort_keys=False) and block style (default_flow_style=False).
    """
    options.setdefault("sort_keys", False)
    options.setdefault("default_flow_style", False)
    return _typing.cast(str, _yaml.safe_dump(to_plain(value), **options))


def load_json(text: str | bytes) -> _typing.Any:
    """Parse JSON text. Raises json.JSONDecodeError on malformed input."""
    return _json.loads(text)


def load_yaml(stream: _typing.Any) -> _typing.Any:
    """
    Parse YAML text with the safe loader.

    Args:
        stream: YAML content (string, bytes, or file-like object).

    Raises:
        yaml.YAMLError: If the document is malformed.
    """
    return _yaml.safe_load(stream)
