"""
Structural operations over data trees (nested mappings and sequences).

This package provides safe path-based retrieval, deep copying and deep
merging of JSON/YAML-like structures.

Example:
    >>> from treefold.tree import deep_get, deep_merge
    >>> builtin = {"model": {"name": "llama", "size": "7b"}}
    >>> user = {"model": {"size": "70b"}}  # Override just size
    >>> deep_merge(builtin, user)
    {'model': {'name': 'llama', 'size': '70b'}}
    >>> deep_get(builtin, "model.size")
    '70b'
"""

from treefold.tree._clone import deep_copy
from treefold.tree._merge import ConflictPolicy, MergeConflictError, deep_merge, deep_merge_key
from treefold.tree._path import deep_get, split_path
from treefold.tree._types import KeyPath, Node, PathLike, Shape, is_mapping, is_sequence, shape_of

__all__ = [
    "ConflictPolicy",
    "KeyPath",
    "MergeConflictError",
    "Node",
    "PathLike",
    "Shape",
    "deep_copy",
    "deep_get",
    "deep_merge",
    "deep_merge_key",
    "is_mapping",
    "is_sequence",
    "shape_of",
    "split_path",
]
