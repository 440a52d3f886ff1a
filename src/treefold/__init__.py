"""
treefold - structural operations over data trees

Safe path-based retrieval, deep copying and deep merging of nested
mappings and sequences, such as parsed JSON or YAML configuration.
"""

import importlib.metadata as _metadata

# Version is defined in pyproject.toml - read it and parse into tuple (primary representation)
_raw_version = _metadata.version("treefold")
__version_info__: tuple[int, int, int] = tuple(int(x) for x in _raw_version.split(".")[:3])  # type: ignore[assignment]
__version__: str = ".".join(str(x) for x in __version_info__)
__author__ = "treefold Contributors"

from treefold.config import Settings  # noqa: E402
from treefold.constants import RESERVED_KEYS  # noqa: E402
from treefold.tree import (  # noqa: E402
    ConflictPolicy,
    MergeConflictError,
    deep_copy,
    deep_get,
    deep_merge,
    deep_merge_key,
    split_path,
)

__all__ = [
    "__version__",
    "__version_info__",
    "ConflictPolicy",
    "MergeConflictError",
    "RESERVED_KEYS",
    "Settings",
    "deep_copy",
    "deep_get",
    "deep_merge",
    "deep_merge_key",
    "split_path",
]
