"""
pathtree - delimited-path access to nested data.

Read, write, merge and delete deeply nested values of dicts and lists
with a single path string such as "database.primary.host".
"""

import importlib.metadata as _metadata

# Version is defined in pyproject.toml - read it and parse into tuple (primary representation)
_raw_version = _metadata.version("pathtree")
__version_info__: tuple[int, int, int] = tuple(int(x) for x in _raw_version.split(".")[:3])  # type: ignore[assignment]
__version__: str = ".".join(str(x) for x in __version_info__)

from pathtree.tree import ConstructionError, MergeStrategy, PathTree, dot  # noqa: E402

__all__ = [
    "__version__",
    "__version_info__",
    "ConstructionError",
    "MergeStrategy",
    "PathTree",
    "dot",
]
