"""
Deep copy of data trees.

Containers are rebuilt recursively so the copy shares no mutable
structure with the original. Leaves are returned as-is: scalars are
immutable, and opaque objects (dates, class instances) are copied by
reference.
"""

from __future__ import annotations

import collections.abc as _abc

import treefold.tree._types as _types


def deep_copy(
    node: _types.Node,
    skip_keys: _abc.Container[object] = frozenset(),
) -> _types.Node:
    """
    Return an independent copy of a data tree node.

    - Mapping → new dict with copied values
    - list → new list, tuple → new tuple, elements copied
    - bytearray → new bytearray
    - Anything else → returned unchanged

    Args:
        node: The node to copy.
        skip_keys: Mapping keys left out of the copy, at every depth.

    Example:
        >>> original = {"a": [1, {"b": 2}]}
        >>> clone = deep_copy(original)
        >>> clone["a"][1]["b"] = 99
        >>> original["a"][1]["b"]
        2
    """
    if _types.is_mapping(node):
        return {
            key: deep_copy(value, skip_keys)
            for key, value in node.items()
            if key not in skip_keys
        }
    if _types.is_sequence(node):
        items = [deep_copy(item, skip_keys) for item in node]
        return tuple(items) if isinstance(node, tuple) else items
    if isinstance(node, bytearray):
        return bytearray(node)
    return node
