"""
Reading and writing JSON/YAML documents for the CLI.

The format of a file is picked by suffix: .yaml/.yml are YAML, anything
else is JSON. Standard input ("-") is parsed as YAML, which also accepts
JSON documents.
"""

import collections.abc as _abc
import json as _json
import pathlib as _pathlib
import typing as _typing

import click as _click
import yaml as _yaml

import pathtree.config as config
import pathtree.constants as constants
import pathtree.tree as tree

STDIN = "-"


class DocumentError(Exception):
    """Error loading, parsing or writing a document."""

    def __init__(self, source: str, message: str) -> None:
        self.source = source
        super().__init__(f"Error in document {source}: {message}")


def is_yaml_path(source: str) -> bool:
    """Check if a document path should be read and written as YAML."""
    return _pathlib.Path(source).suffix.lower() in constants.YAML_SUFFIXES


def load_document(source: str, delimiter: str) -> tree.PathTree:
    """
    Load a document into a PathTree.

    Args:
        source: File path, or "-" for standard input.
        delimiter: Path delimiter for the resulting tree.

    Raises:
        DocumentError: If the file cannot be read or parsed.
    """
    try:
        if source == STDIN:
            text = _click.get_text_stream("stdin").read()
            return tree.PathTree.from_yaml(text, delimiter=delimiter)
        text = _pathlib.Path(source).read_text(encoding="utf-8")
        if is_yaml_path(source):
            return tree.PathTree.from_yaml(text, delimiter=delimiter)
        return tree.PathTree.from_json(text, delimiter=delimiter)
    except OSError as e:
        raise DocumentError(source, e.strerror or str(e)) from e
    except (_json.JSONDecodeError, _yaml.YAMLError, tree.ConstructionError) as e:
        raise DocumentError(source, str(e)) from e


def render(
    value: _typing.Any,
    settings: config.Settings,
    output_format: str | None = None,
) -> str:
    """Serialize a value using the configured format and options."""
    output_format = output_format or settings.output_format
    if output_format == "yaml":
        return tree.dump_yaml(value, sort_keys=settings.sort_keys, allow_unicode=True)
    return tree.dump_json(
        value,
        indent=settings.indent,
        sort_keys=settings.sort_keys,
        ensure_ascii=False,
    )


def as_document(value: _typing.Any) -> _typing.Any:
    """
    Shape a whole-document value for output.

    A list document is held as a root keyed 0..n-1; such a root is turned
    back into a list so arrays are written as arrays.
    """
    if isinstance(value, _abc.Mapping) and value and tree.is_list_shaped(value):
        return [value[index] for index in range(len(value))]
    return value


def write_document(
    target: str,
    document: tree.PathTree,
    settings: config.Settings,
) -> None:
    """
    Write a tree back to a file in the file's own format.

    Raises:
        DocumentError: If the file cannot be written.
    """
    if target == STDIN:
        raise DocumentError(target, "cannot write in place to standard input")
    output_format = "yaml" if is_yaml_path(target) else "json"
    text = render(as_document(document.all()), settings, output_format)
    try:
        _pathlib.Path(target).write_text(text.rstrip("\n") + "\n", encoding="utf-8")
    except OSError as e:
        raise DocumentError(target, e.strerror or str(e)) from e


def parse_value(text: str) -> _typing.Any:
    """
    Interpret a command-line value as a YAML flow value.

    "5" → 5, "true" → True, "[a, b]" → ["a", "b"], "{a: 1}" → {"a": 1}.
    Text that does not parse is kept as a string.
    """
    try:
        return _yaml.safe_load(text)
    except _yaml.YAMLError:
        return text
