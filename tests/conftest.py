"""
Shared pytest fixtures for pathtree tests.

This file is automatically loaded by pytest. Fixtures defined here are
available to all test files without explicit imports.
"""

import json as _json
import os as _os
import pathlib as _pathlib
import typing as _typing
import unittest.mock as _mock

import click.testing as _click_testing
import pytest as _pytest


def clean_env() -> dict[str, str]:
    """Return environment dict with pathtree settings and NO_COLOR removed."""
    return {
        k: v
        for k, v in _os.environ.items()
        if not k.startswith("PATHTREE_") and k != "NO_COLOR"
    }


@_pytest.fixture
def isolated_env() -> _typing.Iterator[None]:
    """Run the test with no PATHTREE_* variables set."""
    with _mock.patch.dict(_os.environ, clean_env(), clear=True):
        yield


@_pytest.fixture
def runner(isolated_env: None) -> _click_testing.CliRunner:
    """Click test runner inside an isolated environment."""
    return _click_testing.CliRunner()


@_pytest.fixture
def json_document(tmp_path: _pathlib.Path) -> _pathlib.Path:
    """JSON file with a nested mapping and a list."""
    path = tmp_path / "config.json"
    path.write_text(
        _json.dumps(
            {
                "db": {"host": "localhost", "port": 5432},
                "tags": ["a", "b"],
                "name": "demo",
            }
        ),
        encoding="utf-8",
    )
    return path


@_pytest.fixture
def yaml_document(tmp_path: _pathlib.Path) -> _pathlib.Path:
    """YAML file with a nested mapping."""
    path = tmp_path / "override.yaml"
    path.write_text(
        "db:\n  host: db.internal\n  user: admin\ntags:\n  - c\n",
        encoding="utf-8",
    )
    return path
