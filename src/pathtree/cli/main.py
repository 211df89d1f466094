"""
Main CLI entry point for pathtree.

Provides the command-line interface using Click. Every command loads a
JSON or YAML document, applies one PathTree operation and writes the
result to stdout (or back to the file with --in-place).
"""

import logging as _logging
import os as _os
import sys as _sys
import typing as _typing

import click as _click
import pydantic as _pydantic
import rich.console as _rich_console
import rich.syntax as _rich_syntax

import pathtree
import pathtree.cli.documents as documents
import pathtree.config as config
import pathtree.tree as tree

_logger = _logging.getLogger(__name__)

# Custom Click context settings for better help formatting
CONTEXT_SETTINGS: dict[str, _typing.Any] = {
    "help_option_names": ["-h", "--help"],
    "max_content_width": 100,
}

STRATEGY_CHOICES = [strategy.value for strategy in tree.MergeStrategy]


def _should_use_color(cli_flag: bool | None) -> tuple[bool, bool]:
    """Determine whether to use color output.

    Priority:
    1. CLI flag (--color / --no-color) if specified
    2. NO_COLOR env var (if set, disable color) - standard convention
    3. Auto-detect: color if stdout is a TTY

    Returns:
        Tuple of (color_enabled, force_color).
        force_color is True when color was explicitly requested (not auto-detected).
    """
    if cli_flag is not None:
        return (cli_flag, cli_flag)

    # https://no-color.org/
    if _os.environ.get("NO_COLOR") is not None:
        return (False, False)

    return (_sys.stdout.isatty(), False)


def _echo_document(ctx: _click.Context, value: _typing.Any) -> None:
    """Print a value in the configured format, highlighted on a terminal."""
    settings: config.Settings = ctx.obj["settings"]
    text = documents.render(value, settings).rstrip("\n")
    color, force_color = _should_use_color(ctx.obj["use_color"])

    if not color:
        _click.echo(text)
        return

    console = _rich_console.Console(
        force_terminal=force_color,
        no_color=False if force_color else None,
        color_system="truecolor" if force_color else "auto",
    )
    console.print(
        _rich_syntax.Syntax(
            text,
            settings.output_format,
            theme="monokai",
            background_color="default",
        )
    )


def _load(ctx: _click.Context, source: str) -> tree.PathTree:
    settings: config.Settings = ctx.obj["settings"]
    _logger.debug("Loading %s (delimiter %r)", source, settings.delimiter)
    try:
        return documents.load_document(source, settings.delimiter)
    except documents.DocumentError as e:
        raise _click.ClickException(str(e)) from e


def _finish(ctx: _click.Context, source: str, document: tree.PathTree, in_place: bool) -> None:
    """Write the document back to source, or print it."""
    if not in_place:
        _echo_document(ctx, documents.as_document(document.all()))
        return
    try:
        documents.write_document(source, document, ctx.obj["settings"])
    except documents.DocumentError as e:
        raise _click.ClickException(str(e)) from e


_in_place_option = _click.option(
    "-i",
    "--in-place",
    is_flag=True,
    help="Write the result back to FILE instead of stdout",
)


@_click.group(context_settings=CONTEXT_SETTINGS)
@_click.version_option(pathtree.__version__, "-v", "--version", prog_name="pathtree")
@_click.option(
    "-d",
    "--delimiter",
    default=None,
    help="Path delimiter (default: '.', env: PATHTREE_DELIMITER)",
)
@_click.option(
    "-f",
    "--format",
    "output_format",
    type=_click.Choice(["json", "yaml"], case_sensitive=False),
    default=None,
    help="Output format (env: PATHTREE_OUTPUT_FORMAT)",
)
@_click.option(
    "--indent",
    type=_click.IntRange(min=0),
    default=None,
    help="JSON indentation (env: PATHTREE_INDENT)",
)
@_click.option(
    "--sort-keys/--no-sort-keys",
    default=None,
    help="Sort mapping keys in output (env: PATHTREE_SORT_KEYS)",
)
@_click.option(
    "--color/--no-color",
    "use_color",
    default=None,
    help="Force syntax highlighting on or off (default: auto)",
)
@_click.option(
    "--verbose/--quiet",
    default=None,
    help="Enable DEBUG logging (env: PATHTREE_VERBOSE)",
)
@_click.pass_context
def cli(
    ctx: _click.Context,
    delimiter: str | None,
    output_format: str | None,
    indent: int | None,
    sort_keys: bool | None,
    use_color: bool | None,
    verbose: bool | None,
) -> None:
    """pathtree - read and edit nested JSON/YAML documents by path.

    \b
    Examples:
        pathtree get config.yaml db.host
        pathtree set -i config.json db.port 5432
        pathtree merge base.yaml override.yaml --strategy distinct
        pathtree flatten config.yaml
    """
    overrides = {
        "delimiter": delimiter,
        "output_format": output_format,
        "indent": indent,
        "sort_keys": sort_keys,
        "verbose": verbose,
    }
    try:
        settings = config.Settings(**{k: v for k, v in overrides.items() if v is not None})
    except _pydantic.ValidationError as e:
        raise _click.ClickException(f"Invalid configuration:\n{e}") from e

    if settings.verbose:
        _logging.basicConfig(
            level=_logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings
    ctx.obj["use_color"] = use_color


@cli.command()
@_click.argument("source", metavar="FILE", type=_click.Path(allow_dash=True))
@_click.argument("path")
@_click.option("--default", "default", default=None, help="Value printed when PATH is missing")
@_click.option("-r", "--raw", is_flag=True, help="Print strings without quoting")
@_click.pass_context
def get(
    ctx: _click.Context,
    source: str,
    path: str,
    default: str | None,
    raw: bool,
) -> None:
    """Print the value at PATH."""
    document = _load(ctx, source)
    if path not in document:
        if default is None:
            raise _click.ClickException(f"Path not found: {path}")
        value = documents.parse_value(default)
    else:
        value = document[path]

    if raw and isinstance(value, str):
        _click.echo(value)
    else:
        _echo_document(ctx, value)


@cli.command()
@_click.argument("source", metavar="FILE", type=_click.Path(allow_dash=True))
@_click.argument("paths", metavar="PATH...", nargs=-1, required=True)
@_click.pass_context
def has(ctx: _click.Context, source: str, paths: tuple[str, ...]) -> None:
    """Exit 0 if every PATH exists, 1 otherwise."""
    document = _load(ctx, source)
    found = document.has(list(paths))
    _click.echo("true" if found else "false")
    ctx.exit(0 if found else 1)


@cli.command(name="set")
@_click.argument("source", metavar="FILE", type=_click.Path(allow_dash=True))
@_click.argument("path")
@_click.argument("value")
@_click.option("-s", "--string", "as_string", is_flag=True, help="Store VALUE as a string")
@_in_place_option
@_click.pass_context
def set_(
    ctx: _click.Context,
    source: str,
    path: str,
    value: str,
    as_string: bool,
    in_place: bool,
) -> None:
    """Set PATH to VALUE (parsed as YAML unless --string)."""
    document = _load(ctx, source)
    document.set(path, value if as_string else documents.parse_value(value))
    _finish(ctx, source, document, in_place)


@cli.command()
@_click.argument("source", metavar="FILE", type=_click.Path(allow_dash=True))
@_click.argument("path")
@_click.argument("value")
@_click.option("-s", "--string", "as_string", is_flag=True, help="Append VALUE as a string")
@_in_place_option
@_click.pass_context
def push(
    ctx: _click.Context,
    source: str,
    path: str,
    value: str,
    as_string: bool,
    in_place: bool,
) -> None:
    """Append VALUE to the list at PATH."""
    document = _load(ctx, source)
    document.push(path, value if as_string else documents.parse_value(value))
    _finish(ctx, source, document, in_place)


@cli.command()
@_click.argument("source", metavar="FILE", type=_click.Path(allow_dash=True))
@_click.argument("paths", metavar="PATH...", nargs=-1, required=True)
@_in_place_option
@_click.pass_context
def delete(
    ctx: _click.Context,
    source: str,
    paths: tuple[str, ...],
    in_place: bool,
) -> None:
    """Delete each PATH. Missing paths are ignored."""
    document = _load(ctx, source)
    document.delete(list(paths))
    _finish(ctx, source, document, in_place)


@cli.command()
@_click.argument("source", metavar="FILE", type=_click.Path(allow_dash=True))
@_click.option("--separator", default=None, help="Key separator (default: the delimiter)")
@_click.option("--prefix", default="", help="Prefix for every flattened key")
@_click.pass_context
def flatten(
    ctx: _click.Context,
    source: str,
    separator: str | None,
    prefix: str,
) -> None:
    """Print the document as a single-level mapping of paths."""
    document = _load(ctx, source)
    _echo_document(ctx, document.flatten(separator or document.delimiter, prepend=prefix))


@cli.command()
@_click.argument("source", metavar="FILE", type=_click.Path(allow_dash=True))
@_click.argument("other", type=_click.Path(allow_dash=True))
@_click.option(
    "--strategy",
    type=_click.Choice(STRATEGY_CHOICES),
    default=tree.MergeStrategy.SHALLOW.value,
    show_default=True,
    help="How colliding keys are combined",
)
@_click.option("--path", default=None, help="Merge OTHER into this path instead of the root")
@_in_place_option
@_click.pass_context
def merge(
    ctx: _click.Context,
    source: str,
    other: str,
    strategy: str,
    path: str | None,
    in_place: bool,
) -> None:
    """Merge document OTHER into FILE.

    \b
    Strategies:
        shallow    top-level keys of OTHER replace those of FILE
        recursive  nested merge, colliding values are collected into lists
        distinct   nested merge, colliding values are overwritten by OTHER
    """
    document = _load(ctx, source)
    incoming = _load(ctx, other)

    operation = {
        tree.MergeStrategy.SHALLOW: document.merge,
        tree.MergeStrategy.RECURSIVE: document.merge_recursive,
        tree.MergeStrategy.DISTINCT: document.merge_recursive_distinct,
    }[tree.MergeStrategy(strategy)]

    if path is None:
        operation(incoming)
    else:
        operation(path, incoming)
    _finish(ctx, source, document, in_place)


@cli.command(name="sort")
@_click.argument("source", metavar="FILE", type=_click.Path(allow_dash=True))
@_click.argument("path", required=False)
@_click.option("-r", "--recursive", is_flag=True, help="Sort keys at every level")
@_click.pass_context
def sort_(
    ctx: _click.Context,
    source: str,
    path: str | None,
    recursive: bool,
) -> None:
    """Print the document (or the value at PATH) with keys sorted."""
    document = _load(ctx, source)
    if path is not None and path not in document:
        raise _click.ClickException(f"Path not found: {path}")
    result = document.sort_recursive(path) if recursive else document.sort(path)
    _echo_document(ctx, documents.as_document(result) if path is None else result)


def main() -> None:
    """Main entry point with correct program name."""
    cli(prog_name="pathtree")


if __name__ == "__main__":
    main()
