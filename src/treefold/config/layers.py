"""Load tree files and fold them into one tree.

Each file holds one layer: a YAML (or JSON, which YAML accepts) document
whose top level is a mapping. Layers are merged in the order given, so
later files take precedence:

    defaults.yaml  <  site.yaml  <  local.yaml
"""

import collections.abc as _abc
import logging as _logging
import pathlib as _pathlib
import typing as _typing

import yaml as _yaml

import treefold.tree as tree

_logger = _logging.getLogger(__name__)


class LayerFileError(Exception):
    """Error loading or parsing a tree file."""

    def __init__(self, path: _pathlib.Path, message: str) -> None:
        self.path = path
        super().__init__(f"Error in tree file {path}: {message}")


def load_tree_file(path: _pathlib.Path | str) -> dict[str, _typing.Any]:
    """
    Load a YAML or JSON file whose top level is a mapping.

    Args:
        path: File to load.

    Returns:
        Parsed mapping. An empty file gives an empty dict.

    Raises:
        LayerFileError: If the file cannot be read, is malformed, or its
            top level is not a mapping.
    """
    path = _pathlib.Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise LayerFileError(path, f"cannot read file: {e.strerror or e}") from e
    except UnicodeDecodeError as e:
        raise LayerFileError(path, f"not valid UTF-8: {e}") from e

    try:
        data = _yaml.safe_load(content)
    except _yaml.YAMLError as e:
        raise LayerFileError(path, f"invalid YAML: {e}") from e

    if data is None:
        return {}
    if not tree.is_mapping(data):
        raise LayerFileError(
            path,
            f"top level must be a mapping, got {tree.shape_of(data).value}",
        )
    return dict(data)


def merge_files(
    paths: _abc.Iterable[_pathlib.Path | str],
    *,
    ignore_arrays: bool = False,
    conflict: tree.ConflictPolicy | str = tree.ConflictPolicy.REPLACE,
    reserved_keys: _abc.Iterable[str] | None = None,
) -> dict[str, _typing.Any]:
    """
    Load tree files and deep merge them in order (later files win).

    Args:
        paths: Files to merge, lowest precedence first.
        ignore_arrays: Replace sequences instead of concatenating.
        conflict: Policy for sequence vs non-sequence conflicts.
        reserved_keys: Extra keys to skip during the merge.

    Returns:
        A new dict holding the merged tree.

    Raises:
        LayerFileError: If any file fails to load.
        tree.MergeConflictError: If conflict is RAISE and a conflict occurs.
    """
    merged: dict[str, _typing.Any] = {}
    for path in paths:
        layer = load_tree_file(path)
        _logger.debug("Merging layer %s (%d top-level keys)", path, len(layer))
        tree.deep_merge_key(
            merged,
            ignore_arrays,
            layer,
            conflict=conflict,
            reserved_keys=reserved_keys,
        )
    return merged
