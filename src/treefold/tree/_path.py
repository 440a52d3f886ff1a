"""
Safe path-based retrieval from data trees.

Paths are either dotted strings ("server.ports.0") or sequences of
segments (["server", "ports", "0"]). Missing intermediate levels never
raise; the caller's default is returned instead.

Example:
    >>> config = {"server": {"host": "localhost", "ports": [80, 443]}}
    >>> deep_get(config, "server.host")
    'localhost'
    >>> deep_get(config, "server.ports.1")
    443
    >>> deep_get(config, "server.timeout", 30)
    30
"""

from __future__ import annotations

import typing as _typing

import treefold.constants as constants
import treefold.tree._types as _types


class _AbsentType:
    """Sentinel for a lookup that found nothing (distinct from None)."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "<ABSENT>"


_ABSENT = _AbsentType()


def split_path(path: _types.PathLike | None) -> _types.KeyPath:
    """
    Normalize a path specification into a tuple of segments.

    A string containing the separator is split on it; any other string is
    a single segment. Sequences are taken segment by segment.

    Example:
        >>> split_path("a.b.c")
        ('a', 'b', 'c')
        >>> split_path("plain")
        ('plain',)
        >>> split_path(["a", "b.c"])
        ('a', 'b.c')
    """
    if path is None:
        return ()
    if isinstance(path, str):
        if not path:
            return ()
        if constants.PATH_SEPARATOR in path:
            return tuple(path.split(constants.PATH_SEPARATOR))
        return (path,)
    return tuple(path)


def _sequence_index(segment: _types.Segment) -> int | None:
    """Return the index a segment addresses in a sequence, if any."""
    if isinstance(segment, bool):
        return None
    if isinstance(segment, int):
        return segment if segment >= 0 else None
    if isinstance(segment, str) and segment.isdecimal():
        return int(segment)
    return None


def _lookup(node: _types.Node, segment: _types.Segment) -> _typing.Any:
    """One step of a walk. Returns _ABSENT instead of raising."""
    if _types.is_mapping(node):
        try:
            return node[segment]
        except (KeyError, TypeError):
            return _ABSENT
    if _types.is_sequence(node):
        index = _sequence_index(segment)
        if index is None or index >= len(node):
            return _ABSENT
        return node[index]
    # Scalars (and absent nodes) behave like an empty mapping
    return _ABSENT


def deep_get(
    source: _types.Node,
    path: _types.PathLike | None,
    default: _typing.Any = None,
) -> _typing.Any:
    """
    Get the value at a path, or default if any level is missing.

    Only absence triggers the default: a present None is returned as None.
    Numeric-looking segments are plain keys on mappings and indexes on
    sequences.

    Args:
        source: The data tree to read. Falsy sources return default.
        path: Dotted string or sequence of segments. None or empty
              returns default.
        default: Value returned when the path does not resolve.

    Returns:
        The value found, or default.
    """
    if not source or path is None:
        return default
    segments = split_path(path)
    if not segments:
        return default

    if len(segments) == 1:
        value = _lookup(source, segments[0])
        return default if value is _ABSENT else value

    current: _typing.Any = source
    for segment in segments:
        current = _lookup(current, segment)
        if current is _ABSENT:
            return default
    return current
