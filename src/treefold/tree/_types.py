"""
Type aliases and shape classification for data trees.

This module provides the vocabulary used throughout the tree package:
- Node: any value that can appear in a data tree
- PathLike: a dotted string or a sequence of path segments
- KeyPath: tuple of segments representing a normalized path
- Shape: closed classification of a node (scalar, sequence, mapping)
"""

from __future__ import annotations

import collections.abc as _abc
import enum as _enum
import typing as _typing

# Any value that can appear in a data tree
Node: _typing.TypeAlias = _typing.Any

# Segment of a path: mapping key or sequence index
Segment: _typing.TypeAlias = str | int

# Normalized path
# Example: ("server", "ports", "0") represents server.ports.0
KeyPath: _typing.TypeAlias = tuple[Segment, ...]

# What callers may pass as a path
PathLike: _typing.TypeAlias = str | _abc.Sequence[Segment]

# str/bytes are sequences to Python but scalars in a data tree
_ATOMIC_SEQUENCES = (str, bytes, bytearray)


class Shape(_enum.Enum):
    """Shape of a data tree node."""

    SCALAR = "scalar"
    SEQUENCE = "sequence"
    MAPPING = "mapping"


def is_mapping(node: Node) -> bool:
    """Check if a node is mapping-shaped."""
    return isinstance(node, _abc.Mapping)


def is_sequence(node: Node) -> bool:
    """Check if a node is sequence-shaped (str and bytes are scalars)."""
    return isinstance(node, _abc.Sequence) and not isinstance(node, _ATOMIC_SEQUENCES)


def shape_of(node: Node) -> Shape:
    """
    Classify a node.

    Example:
        >>> shape_of({"a": 1})
        <Shape.MAPPING: 'mapping'>
        >>> shape_of([1, 2])
        <Shape.SEQUENCE: 'sequence'>
        >>> shape_of("text")
        <Shape.SCALAR: 'scalar'>
    """
    if is_mapping(node):
        return Shape.MAPPING
    if is_sequence(node):
        return Shape.SEQUENCE
    return Shape.SCALAR
