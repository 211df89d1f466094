"""
Shared fixtures for PathTree tests.
"""

import pytest as _pytest

import pathtree.tree as tree


@_pytest.fixture
def nested_tree() -> tree.PathTree:
    """Tree with mappings, a list and scalars at several depths."""
    return tree.PathTree(
        {
            "app": {
                "name": "demo",
                "debug": False,
                "servers": [{"host": "a.local"}, {"host": "b.local"}],
            },
            "version": 3,
        }
    )


@_pytest.fixture
def empty_tree() -> tree.PathTree:
    """Tree built with no input."""
    return tree.PathTree()
