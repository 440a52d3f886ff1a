"""
Main CLI entry point for treefold.

Provides the command-line interface using Click: read values out of tree
files, merge tree files, and show the effective settings.
"""

import json as _json
import logging as _logging
import os as _os
import pathlib as _pathlib
import sys as _sys
import typing as _typing

import click as _click
import pydantic as _pydantic
import rich.console as _rich_console
import rich.syntax as _rich_syntax
import yaml as _yaml

import treefold
import treefold.config as config
import treefold.tree as tree

# Custom Click context settings for better help formatting
CONTEXT_SETTINGS: dict[str, _typing.Any] = {
    "help_option_names": ["-h", "--help"],
    "max_content_width": 100,
}

_MISSING = object()

_FILE_TYPE = _click.Path(dir_okay=False, path_type=_pathlib.Path)

_JSON_KEY_TYPES = (str, int, float, bool, type(None))


def _configure_logging(level: str | int) -> None:
    """Send treefold log records to stderr at the given level."""
    _logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
    _logging.getLogger("treefold").setLevel(level)


@_click.group(context_settings=CONTEXT_SETTINGS)
@_click.version_option(treefold.__version__, "-v", "--version", prog_name="treefold")
@_click.option(
    "--verbose",
    is_flag=True,
    help="Enable debug logging",
)
@_click.pass_context
def cli(ctx: _click.Context, verbose: bool) -> None:
    """
    treefold - read and merge nested YAML/JSON trees.

    \b
    Examples:
        treefold get config.yaml server.port          # Read one value
        treefold merge defaults.yaml local.yaml       # Merge, later wins
        treefold merge a.json b.json --ignore-arrays  # Replace lists
        treefold settings                             # Show defaults
    """
    try:
        settings = config.Settings()
    except _pydantic.ValidationError as e:
        raise _click.ClickException(f"Invalid settings: {e}") from None

    _configure_logging(_logging.DEBUG if verbose else settings.log_level)

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


@cli.command()
@_click.argument("file", type=_FILE_TYPE)
@_click.argument("path")
@_click.option("--default", "default", type=str, default=None, help="Printed when PATH is absent")
@_click.option("--json", "as_json", is_flag=True, help="Always output JSON (quote strings)")
def get(file: _pathlib.Path, path: str, default: str | None, as_json: bool) -> None:
    """Print the value at a dotted PATH in FILE.

    Strings print as-is; other values print as JSON. Exits with status 1
    when PATH is absent and no --default is given.

    \b
    Examples:
        treefold get config.yaml server.host
        treefold get config.yaml server.ports.0
        treefold get config.yaml server.timeout --default 30
    """
    try:
        data = config.load_tree_file(file)
    except config.LayerFileError as e:
        raise _click.ClickException(str(e)) from None

    value = tree.deep_get(data, path, _MISSING)
    if value is _MISSING:
        if default is None:
            raise _click.ClickException(f"Path not found: {path}")
        value = default

    if isinstance(value, str) and not as_json:
        _click.echo(value)
    else:
        _click.echo(_json.dumps(_json_ready(value), indent=2, default=str))


@cli.command()
@_click.argument("files", nargs=-1, required=True, type=_FILE_TYPE)
@_click.option(
    "--ignore-arrays/--concat-arrays",
    "ignore_arrays",
    default=None,
    help="Replace lists instead of concatenating them (default: from settings)",
)
@_click.option(
    "--on-conflict",
    "on_conflict",
    type=_click.Choice([policy.value for policy in tree.ConflictPolicy]),
    default=None,
    help="What to do when a list meets a non-list value (default: from settings)",
)
@_click.option(
    "--reserve",
    "reserve",
    multiple=True,
    help="Extra key to drop while merging (repeatable)",
)
@_click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@_click.option(
    "--color/--no-color",
    "use_color",
    default=None,
    help="Enable/disable syntax highlighting (default: auto-detect TTY)",
)
@_click.pass_context
def merge(
    ctx: _click.Context,
    files: tuple[_pathlib.Path, ...],
    ignore_arrays: bool | None,
    on_conflict: str | None,
    reserve: tuple[str, ...],
    as_json: bool,
    use_color: bool | None,
) -> None:
    """Deep merge FILES in order and print the result.

    Later files take precedence. Nested mappings merge key by key, lists
    are concatenated unless --ignore-arrays is given.

    \b
    Examples:
        treefold merge defaults.yaml site.yaml local.yaml
        treefold merge base.json override.json --json
        treefold merge a.yaml b.yaml --on-conflict raise
    """
    settings: config.Settings = ctx.obj["settings"]

    if ignore_arrays is None:
        ignore_arrays = settings.ignore_arrays
    conflict = tree.ConflictPolicy(on_conflict) if on_conflict else settings.conflict_policy
    reserved = settings.all_reserved_keys | frozenset(reserve)

    try:
        merged = config.merge_files(
            files,
            ignore_arrays=ignore_arrays,
            conflict=conflict,
            reserved_keys=reserved,
        )
    except (config.LayerFileError, tree.MergeConflictError) as e:
        raise _click.ClickException(str(e)) from None

    if as_json:
        _click.echo(_json.dumps(_json_ready(merged), indent=2, default=str))
    else:
        color_enabled, force_color = _should_use_color(use_color)
        _print_yaml(_dump_yaml(merged), color=color_enabled, force_color=force_color)


@cli.command(name="settings")
@_click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@_click.pass_context
def settings_cmd(ctx: _click.Context, as_json: bool) -> None:
    """Show effective settings (defaults plus TREEFOLD_* environment)."""
    settings: config.Settings = ctx.obj["settings"]
    data = settings.model_dump(mode="json")
    if as_json:
        _click.echo(_json.dumps(data, indent=2))
    else:
        _click.echo(_dump_yaml(data), nl=False)


def _json_ready(node: _typing.Any) -> _typing.Any:
    """Stringify mapping keys JSON cannot hold (YAML dates, for one)."""
    if tree.is_mapping(node):
        return {
            key if isinstance(key, _JSON_KEY_TYPES) else str(key): _json_ready(value)
            for key, value in node.items()
        }
    if tree.is_sequence(node):
        return [_json_ready(item) for item in node]
    return node


def _dump_yaml(data: dict[str, _typing.Any]) -> str:
    return _yaml.safe_dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)


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

    if _os.environ.get("NO_COLOR") is not None:
        return (False, False)

    return (_sys.stdout.isatty(), False)


def _print_yaml(yaml_text: str, *, color: bool = True, force_color: bool = False) -> None:
    """Print YAML text, optionally with syntax highlighting.

    Args:
        yaml_text: The YAML text to print
        color: Whether to use syntax highlighting
        force_color: Force color even when not a TTY (for piping with --color)
    """
    if not color:
        _click.echo(yaml_text, nl=False)
        return

    console = _rich_console.Console(
        force_terminal=True if force_color else None,
        no_color=False if force_color else None,
        color_system="truecolor" if force_color else "auto",
    )
    syntax = _rich_syntax.Syntax(
        yaml_text.rstrip("\n"),
        "yaml",
        theme="monokai",
        background_color="default",
    )
    console.print(syntax)


def main() -> None:
    """Main entry point with correct program name."""
    cli(prog_name="treefold")


if __name__ == "__main__":
    main()
