"""
Tests that enforce coding standards.

These tests verify that the codebase follows our import and logging
conventions:
- 'import X as _x' (external) or 'import X as x' (internal), never
  'from X import Y' outside __init__.py re-exports
- modules that log use a module-level '_logger = logging.getLogger(__name__)'
- library code never prints
"""

import ast as _ast
import pathlib as _pathlib

import pytest as _pytest

ROOT_DIR = _pathlib.Path(__file__).parent.parent
SRC_DIR = ROOT_DIR / "src" / "pathtree"
TESTS_DIR = ROOT_DIR / "tests"


def _python_files(directory: _pathlib.Path) -> list[_pathlib.Path]:
    return sorted(directory.rglob("*.py"))


def _parse(path: _pathlib.Path) -> _ast.Module:
    return _ast.parse(path.read_text(encoding="utf-8"), filename=str(path))


def _is_type_checking_block(node: _ast.AST) -> bool:
    """Check if node is 'if TYPE_CHECKING:' or 'if _typing.TYPE_CHECKING:'."""
    if not isinstance(node, _ast.If):
        return False
    test = node.test
    if isinstance(test, _ast.Name):
        return test.id == "TYPE_CHECKING"
    return isinstance(test, _ast.Attribute) and test.attr == "TYPE_CHECKING"


def find_from_imports(tree: _ast.Module) -> list[tuple[int, str]]:
    """
    Find 'from X import Y' statements.

    Returns list of (line_number, module) tuples. '__future__' imports and
    imports under a TYPE_CHECKING guard are allowed.
    """
    skipped: set[int] = set()
    for node in _ast.walk(tree):
        if _is_type_checking_block(node):
            for child in _ast.walk(node):
                skipped.add(id(child))

    found: list[tuple[int, str]] = []
    for node in _ast.walk(tree):
        if not isinstance(node, _ast.ImportFrom) or id(node) in skipped:
            continue
        if node.module == "__future__":
            continue
        found.append((node.lineno, node.module or "."))
    return sorted(found)


def _imports_logging(tree: _ast.Module) -> bool:
    return any(
        isinstance(node, _ast.Import) and any(alias.name == "logging" for alias in node.names)
        for node in tree.body
    )


def _defines_module_logger(tree: _ast.Module) -> bool:
    for node in tree.body:
        if not isinstance(node, _ast.Assign):
            continue
        targets = [t.id for t in node.targets if isinstance(t, _ast.Name)]
        if "_logger" in targets and "getLogger(__name__)" in _ast.unparse(node.value):
            return True
    return False


def _print_calls(tree: _ast.Module) -> list[int]:
    return [
        node.lineno
        for node in _ast.walk(tree)
        if isinstance(node, _ast.Call)
        and isinstance(node.func, _ast.Name)
        and node.func.id == "print"
    ]


def _fail(header: str, violations: list[str], hint: str) -> None:
    msg = header + "\n" + "\n".join(f"  {v}" for v in violations)
    _pytest.fail(msg + "\n\n" + hint)


class TestImportStyle:
    """Tests for import style compliance."""

    @_pytest.mark.parametrize("directory", [SRC_DIR, TESTS_DIR], ids=["src", "tests"])
    def test_no_from_imports(self, directory: _pathlib.Path) -> None:
        """Modules should not use 'from X import Y' (re-exports in __init__.py excepted)."""
        violations = [
            f"{path}:{line}: from {module} import ..."
            for path in _python_files(directory)
            if path.name != "__init__.py"
            for line, module in find_from_imports(_parse(path))
        ]
        if violations:
            _fail(
                "Found forbidden 'from X import Y' imports:",
                violations,
                "Use 'import X as _x' (external) or 'import X as x' (internal) instead.",
            )


class TestLoggingStyle:
    """Tests for logging conventions in library code."""

    def test_module_logger(self) -> None:
        """Modules that use logging define '_logger' from __name__."""
        violations = [
            str(path)
            for path in _python_files(SRC_DIR)
            if _imports_logging(tree := _parse(path))
            and not _defines_module_logger(tree)
        ]
        if violations:
            _fail(
                "Modules import logging without a module logger:",
                violations,
                "Add '_logger = _logging.getLogger(__name__)' at module level.",
            )

    def test_no_print(self) -> None:
        """Library code reports through logging or click, never print()."""
        violations = [
            f"{path}:{line}"
            for path in _python_files(SRC_DIR)
            for line in _print_calls(_parse(path))
        ]
        if violations:
            _fail("Found print() calls:", violations, "Use _logger or click.echo instead.")


class TestImportDetection:
    """Tests for the import detection logic itself."""

    def test_detects_from_import(self) -> None:
        assert find_from_imports(_ast.parse("from pathlib import Path")) == [(1, "pathlib")]

    def test_allows_future_imports(self) -> None:
        assert find_from_imports(_ast.parse("from __future__ import annotations")) == []

    def test_ignores_type_checking_block(self) -> None:
        content = """
import typing as _typing

if _typing.TYPE_CHECKING:
    from some_module import SomeType
"""
        assert find_from_imports(_ast.parse(content)) == []

    def test_detects_import_after_type_checking(self) -> None:
        content = """
import typing as _typing

if _typing.TYPE_CHECKING:
    from allowed import Type

from forbidden import Other
"""
        assert find_from_imports(_ast.parse(content)) == [(7, "forbidden")]
