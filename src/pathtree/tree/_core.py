"""
PathTree: path-addressed access to nested mappings and lists.

A PathTree owns a root dict and a delimiter. Every operation takes a
delimited path ("a.b.c") instead of a chain of subscripts:

- get/has: read walk, unresolved paths yield the default / False
- set/add/push/clear: write walk, missing intermediates become {}
- delete/pull: delete walk, unresolved paths are silently ignored
- merge/merge_recursive/merge_recursive_distinct: combine with another
  mapping or tree, at the root or at a path

Ownership:
- Exclusive (default): the constructor deep-copies its input.
- Shared: bind()/set_reference() make the root the caller's own dict,
  so writes through either side are visible to the other. Operations
  that replace the whole root do so in place to keep the binding.

Thread safety: NOT thread-safe. Serialize access externally if a tree
(or a bound dict) is shared between threads.
"""

from __future__ import annotations

import collections.abc as _abc
import copy as _copy
import logging as _logging
import typing as _typing

import pathtree.constants as constants
import pathtree.tree._collections as _collections
import pathtree.tree._merge as _merge
import pathtree.tree._paths as _paths
import pathtree.tree._serialization as _serialization
import pathtree.tree._types as _types

_logger = _logging.getLogger(__name__)


class ConstructionError(TypeError):
    """Raised when input cannot be interpreted as a container or scalar."""

    pass


# Sentinel for push() called with a single argument
class _MissingType:
    """Sentinel type marking an omitted argument."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "<MISSING>"


_MISSING = _MissingType()

_SCALAR_TYPES = (str, int, float, bool)


def _is_path_collection(keys: _typing.Any) -> bool:
    return isinstance(keys, (list, tuple, set, frozenset))


def _as_paths(keys: _typing.Any) -> list[_typing.Any]:
    """Normalize a single path or a collection of paths to a list."""
    if _is_path_collection(keys):
        return list(keys)
    return [keys]


def _normalize(items: _typing.Any) -> dict[_types.Key, _typing.Any]:
    """
    Build a private root dict from construction input.

    - None → {}
    - PathTree → deep copy of its root
    - Mapping → deep copy as a dict
    - list/tuple → dict keyed by position
    - str/int/float/bool → {0: value}

    Raises:
        ConstructionError: For any other input type.
    """
    if isinstance(items, PathTree):
        return _copy.deepcopy(dict(items.all()))

    kind = _types.kind_of(items)
    if kind is _types.Kind.NULL:
        return {}
    if kind is _types.Kind.MAPPING:
        return _copy.deepcopy(dict(items))
    if kind is _types.Kind.SEQUENCE:
        return dict(enumerate(_copy.deepcopy(list(items))))
    if isinstance(items, _SCALAR_TYPES):
        return {0: items}
    raise ConstructionError(
        f"Cannot build a PathTree from {type(items).__name__}; "
        "expected a mapping, list, scalar or PathTree"
    )


class PathTree(_abc.MutableMapping[_typing.Any, _typing.Any]):
    """
    A nested mapping addressed by delimited paths.

    Example:
        >>> tree = PathTree({"db": {"host": "localhost"}})
        >>> tree.get("db.host")
        'localhost'
        >>> tree.set("db.port", 5432).get("db")
        {'host': 'localhost', 'port': 5432}
        >>> tree.has(["db.host", "db.port"])
        True

    Args:
        items: Initial data (mapping, list, scalar, PathTree or None).
        parse: If True, every top-level key of items is treated as a
            path and re-inserted through set(), so {"a.b": 1} becomes
            {"a": {"b": 1}}. If False, keys are taken literally.
        delimiter: Path delimiter. Empty or None falls back to ".".

    Raises:
        ConstructionError: If items is not a supported type.

    Note:
        Subscript access follows Python mapping conventions:
        ``tree["a.b"]`` raises KeyError when the path does not resolve
        (use get() for a default), ``del tree["a.b"]`` is silent.

        A top-level key that literally equals a full path wins over the
        split interpretation in get(), has() and delete():
        ``PathTree({"a.b": 1, "a": {"b": 2}}).get("a.b") == 1``.
    """

    __slots__ = ("_items", "_delimiter")

    def __init__(
        self,
        items: _typing.Any = None,
        parse: bool = False,
        delimiter: str | None = constants.DEFAULT_DELIMITER,
    ) -> None:
        self._delimiter: str = delimiter or constants.DEFAULT_DELIMITER
        self._items: _abc.MutableMapping[_types.Key, _typing.Any] = {}

        normalized = _normalize(items)
        if parse:
            self.set(normalized)
        else:
            self._items = normalized

    @classmethod
    def bind(
        cls,
        items: _abc.MutableMapping[_types.Key, _typing.Any],
        delimiter: str | None = constants.DEFAULT_DELIMITER,
    ) -> PathTree:
        """
        Create a tree whose root is the caller's dict (shared ownership).

        Example:
            >>> config = {}
            >>> tree = PathTree.bind(config)
            >>> tree["a.b"] = 1
            >>> config
            {'a': {'b': 1}}
        """
        return cls(delimiter=delimiter).set_reference(items)

    @classmethod
    def from_json(
        cls,
        text: str | bytes,
        parse: bool = False,
        delimiter: str | None = constants.DEFAULT_DELIMITER,
    ) -> PathTree:
        """Create a tree from a JSON document."""
        return cls(_serialization.load_json(text), parse=parse, delimiter=delimiter)

    @classmethod
    def from_yaml(
        cls,
        stream: _typing.Any,
        parse: bool = False,
        delimiter: str | None = constants.DEFAULT_DELIMITER,
    ) -> PathTree:
        """Create a tree from a YAML document (safe loader)."""
        return cls(_serialization.load_yaml(stream), parse=parse, delimiter=delimiter)

    @property
    def delimiter(self) -> str:
        """The path delimiter (read-only)."""
        return self._delimiter

    # =========================================================================
    # Internal helpers
    # =========================================================================

    def _split(self, key: _types.Key) -> _types.Segments:
        return _paths.split(key, self._delimiter)

    def _lookup(self, key: _typing.Any) -> tuple[bool, _typing.Any]:
        """
        Resolve a path for reading.

        A literal top-level key is tried first. Only strings containing
        the delimiter are split and walked.
        """
        found, literal = _paths.lookup_key(self._items, key)
        if found:
            return True, self._items[literal]
        if not isinstance(key, str) or self._delimiter not in key:
            return False, None
        return _paths.resolve(self._items, self._split(key))

    def _replace_root(self, items: _abc.Mapping[_types.Key, _typing.Any]) -> None:
        """Replace the root content in place, keeping any bound reference."""
        if items is self._items:
            return
        self._items.clear()
        self._items.update(items)

    def _next_index(self) -> int:
        indexes = [
            key for key in self._items
            if isinstance(key, int) and not isinstance(key, bool)
        ]
        return max(indexes) + 1 if indexes else 0

    # =========================================================================
    # Read operations
    # =========================================================================

    def all(self) -> _abc.MutableMapping[_types.Key, _typing.Any]:
        """Return the root container itself (not a copy)."""
        return self._items

    def get(self, key: _typing.Any = None, default: _typing.Any = None) -> _typing.Any:
        """
        Return the value at a path.

        Args:
            key: Path to read. None returns the whole root.
            default: Returned when the path does not resolve.
        """
        if key is None:
            return self._items
        found, value = self._lookup(key)
        return value if found else default

    def has(self, keys: _typing.Any) -> bool:
        """
        Check if a path, or every path in a collection, resolves.

        An empty collection, or an empty tree, is always False.
        """
        paths = _as_paths(keys)
        if not self._items or not paths:
            return False
        return all(self._lookup(key)[0] for key in paths)

    def is_empty(self, keys: _typing.Any = None) -> bool:
        """
        Check if the tree, or the values at the given paths, are empty.

        A path counts as empty when its value is falsy or unresolved.
        """
        if keys is None:
            return not self._items
        return all(not self.get(key) for key in _as_paths(keys))

    def count(self, key: _typing.Any = None) -> int:
        """Return the number of items at a path (or the root)."""
        value = self.get(key)
        if value is None:
            return 0
        if _types.is_container(value):
            return len(value)
        return 1

    # =========================================================================
    # Write operations
    # =========================================================================

    def set(self, keys: _typing.Any, value: _typing.Any = None) -> PathTree:
        """
        Set a value at a path, or several from a mapping of path → value.

        Intermediate segments that are missing or hold a non-container
        are replaced with {}. The stored value is a deep copy. A path of
        None appends value to the root, like push(value).

        Example:
            >>> PathTree({"a": 5}).set("a.b", 1).all()
            {'a': {'b': 1}}

        Raises:
            TypeError: If a path is not a str, an int or None.
        """
        if isinstance(keys, _abc.Mapping):
            for key, item in list(keys.items()):
                self.set(key, item)
            return self
        if keys is None:
            return self.push(value)

        container, slot = _paths.resolve_slot(self._items, self._split(keys))
        _paths.store(container, slot, _copy.deepcopy(value))
        return self

    def add(self, keys: _typing.Any, value: _typing.Any = None) -> PathTree:
        """
        Set a value only where the path currently holds None.

        A mapping of path → value is applied entry by entry. When value is
        a non-empty mapping and the path already holds a mapping, each
        child is added individually, filling in only the missing keys.
        """
        if isinstance(keys, _abc.Mapping):
            for key, item in list(keys.items()):
                self.add(key, item)
            return self

        current = self.get(keys)
        if current is None:
            self.set(keys, value)
        elif (
            _types.kind_of(value) is _types.Kind.MAPPING
            and value
            and _types.kind_of(current) is _types.Kind.MAPPING
        ):
            for child_key, child in value.items():
                if keys is not None:
                    child_key = f"{keys}{self._delimiter}{child_key}"
                self.add(child_key, child)
        else:
            _logger.debug("add(): keeping existing value at %r", keys)
        return self

    def push(self, key: _typing.Any, value: _typing.Any = _MISSING) -> PathTree:
        """
        Append a value to the list at a path.

        With a single argument, the argument is appended to the root under
        the next integer key. A missing, None or empty value at the path
        becomes a one-item list; any other non-list value is left alone.

        Example:
            >>> PathTree({"tags": ["a"]}).push("tags", "b").get("tags")
            ['a', 'b']
        """
        if value is _MISSING:
            self._items[self._next_index()] = _copy.deepcopy(key)
            return self

        items = self.get(key)
        kind = _types.kind_of(items)
        if isinstance(items, list):
            items.append(_copy.deepcopy(value))
        elif kind is _types.Kind.SEQUENCE:
            self.set(key, list(items) + [value])
        elif kind is _types.Kind.NULL or (kind is _types.Kind.MAPPING and not items):
            self.set(key, [value])
        else:
            _logger.debug(
                "push(): value at %r is a %s, not a list; ignoring", key, kind.value
            )
        return self

    def clear(self, keys: _typing.Any = None) -> PathTree:  # type: ignore[override]
        """
        Empty the tree, or set each given path to {}.

        Clearing the whole tree empties the root in place.
        """
        if keys is None:
            self._items.clear()
            return self
        for key in _as_paths(keys):
            self.set(key, {})
        return self

    def delete(self, keys: _typing.Any) -> PathTree:
        """
        Delete a path, or every path in a collection.

        Unresolved paths are ignored. Nothing is created along the way.
        """
        for key in _as_paths(keys):
            found, literal = _paths.lookup_key(self._items, key)
            if found:
                del self._items[literal]
                continue
            if not isinstance(key, (str, int)):
                continue
            target = _paths.resolve_parent(self._items, self._split(key))
            if target is not None:
                _paths.remove(*target)
        return self

    def pull(self, key: _typing.Any = None, default: _typing.Any = None) -> _typing.Any:
        """
        Return the value at a path and delete it.

        pull() with no path returns a copy of the whole root and empties
        the tree.
        """
        if key is None:
            value = dict(self._items)
            self.clear()
            return value
        value = self.get(key, default)
        self.delete(key)
        return value

    def set_array(self, items: _typing.Any) -> PathTree:
        """Replace all content with a normalized copy of items."""
        self._replace_root(_normalize(items))
        return self

    def set_reference(
        self,
        items: _abc.MutableMapping[_types.Key, _typing.Any],
    ) -> PathTree:
        """
        Make the caller's dict the root of this tree.

        Raises:
            ConstructionError: If items is not a mutable mapping.
        """
        if not isinstance(items, _abc.MutableMapping):
            raise ConstructionError(
                f"Can only bind to a mutable mapping, not {type(items).__name__}"
            )
        _logger.debug("Binding tree root to external %s", type(items).__name__)
        self._items = items
        return self

    # =========================================================================
    # Merge operations
    # =========================================================================

    def _merge(
        self,
        key: _typing.Any,
        value: _typing.Any,
        strategy: _merge.MergeStrategy,
    ) -> PathTree:
        if isinstance(key, PathTree):
            self._replace_root(_merge.combine(self._items, key.all(), strategy))
        elif isinstance(key, _abc.Mapping):
            self._replace_root(_merge.combine(self._items, key, strategy))
        elif _types.kind_of(key) is _types.Kind.SEQUENCE:
            # Same integer-keyed shape the constructor gives a list
            self._replace_root(_merge.combine(self._items, _normalize(key), strategy))
        elif key is not None:
            incoming = value.all() if isinstance(value, PathTree) else value
            current = self.get(key)
            self.set(
                key,
                _merge.combine(
                    {} if current is None else current,
                    {} if incoming is None else incoming,
                    strategy,
                ),
            )
        return self

    def merge(self, key: _typing.Any, value: _typing.Any = None) -> PathTree:
        """
        Shallow merge: incoming top-level keys replace existing ones.

        Args:
            key: A mapping or PathTree merged at the root, or a path.
            value: With a path, the mapping/list/PathTree merged there.

        Example:
            >>> PathTree({"a": {"b": 1}}).merge({"a": {"c": 2}}).all()
            {'a': {'c': 2}}
        """
        return self._merge(key, value, _merge.MergeStrategy.SHALLOW)

    def merge_recursive(self, key: _typing.Any, value: _typing.Any = None) -> PathTree:
        """
        Recursive merge where colliding values accumulate into lists.

        Example:
            >>> PathTree({"a": {"b": 1}}).merge_recursive({"a": {"b": 2}}).all()
            {'a': {'b': [1, 2]}}
        """
        return self._merge(key, value, _merge.MergeStrategy.RECURSIVE)

    def merge_recursive_distinct(
        self,
        key: _typing.Any,
        value: _typing.Any = None,
    ) -> PathTree:
        """
        Recursive merge where colliding non-mapping values are overwritten.

        Example:
            >>> PathTree({"a": {"b": 1}}).merge_recursive_distinct({"a": {"b": 2}}).all()
            {'a': {'b': 2}}
        """
        return self._merge(key, value, _merge.MergeStrategy.DISTINCT)

    # =========================================================================
    # Whole-structure views
    # =========================================================================

    def flatten(
        self,
        delimiter: str = constants.DEFAULT_DELIMITER,
        items: _typing.Any = None,
        prepend: str = "",
    ) -> dict[str, _typing.Any]:
        """
        Collapse the tree (or items) into a single-level dict of paths.

        Example:
            >>> PathTree({"foo": {"bar": ["baz"]}}).flatten()
            {'foo.bar.0': 'baz'}
        """
        if items is None:
            items = self._items
        return _collections.flatten(items, delimiter, prepend)

    def sort(self, key: _typing.Any = None) -> _typing.Any:
        """Return a copy of the value at a path with its keys sorted."""
        return _collections.sort_keys(self.get(key))

    def sort_recursive(self, key: _typing.Any = None) -> _typing.Any:
        """Return a copy of the value at a path with keys sorted at every level."""
        return _collections.sort_recursive(self.get(key))

    def copy(self) -> PathTree:
        """Return an independent deep copy with the same delimiter."""
        return type(self)(self, delimiter=self._delimiter)

    def to_json(self, key: _typing.Any = None, **options: _typing.Any) -> str:
        """
        Serialize the tree, or the value at a path, to JSON.

        Args:
            key: Path to serialize. None serializes the whole tree.
            **options: Passed to json.dumps (indent, ensure_ascii, ...).
        """
        return _serialization.dump_json(self.get(key), **options)

    def to_yaml(self, key: _typing.Any = None, **options: _typing.Any) -> str:
        """Serialize the tree, or the value at a path, to YAML."""
        return _serialization.dump_yaml(self.get(key), **options)

    # =========================================================================
    # Mapping protocol
    # =========================================================================

    def __getitem__(self, key: _typing.Any) -> _typing.Any:
        """
        Get the value at a path.

        Raises:
            KeyError: If the path does not resolve.
        """
        found, value = self._lookup(key)
        if not found:
            raise KeyError(key)
        return value

    def __setitem__(self, key: _typing.Any, value: _typing.Any) -> None:
        """Set the value at a path (see set()); a key of None appends."""
        self.set(key, value)

    def __delitem__(self, key: _typing.Any) -> None:
        """Delete a path; unresolved paths are ignored."""
        self.delete(key)

    def __contains__(self, key: object) -> bool:
        """Check if a single path resolves."""
        if not isinstance(key, (str, int)):
            return False
        return self._lookup(key)[0]

    def __iter__(self) -> _typing.Iterator[_typing.Any]:
        """Iterate over root keys, snapshotted when iteration starts."""
        return iter(list(self._items))

    def __len__(self) -> int:
        """Return the number of root entries."""
        return len(self._items)

    def __repr__(self) -> str:
        return f"PathTree({dict(self._items)!r})"


def dot(
    items: _typing.Any = None,
    parse: bool = False,
    delimiter: str | None = constants.DEFAULT_DELIMITER,
) -> PathTree:
    """
    Create a PathTree.

    Example:
        >>> dot({"a.b": 1}, parse=True).all()
        {'a': {'b': 1}}
    """
    return PathTree(items, parse=parse, delimiter=delimiter)
