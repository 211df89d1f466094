"""
PathTree: delimited-path access to nested mappings and lists.

This package provides a MutableMapping that reads, writes, merges and
deletes deeply nested values through a single path string.

Example:
    >>> from pathtree.tree import PathTree
    >>> tree = PathTree({"model": {"name": "llama"}})
    >>> tree["model.size"] = "70b"
    >>> tree["model"]
    {'name': 'llama', 'size': '70b'}
"""

from pathtree.tree._collections import is_list_shaped
from pathtree.tree._core import ConstructionError, PathTree, dot
from pathtree.tree._merge import MergeStrategy
from pathtree.tree._serialization import dump_json, dump_yaml, load_json, load_yaml
from pathtree.tree._types import Kind, kind_of

__all__ = [
    "ConstructionError",
    "Kind",
    "MergeStrategy",
    "PathTree",
    "dot",
    "dump_json",
    "dump_yaml",
    "is_list_shaped",
    "kind_of",
    "load_json",
    "load_yaml",
]
