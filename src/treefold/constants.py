"""
Shared constants for treefold.

This module provides a single source of truth for values that are used
across multiple modules.
"""

PATH_SEPARATOR = "."
"""Separator between segments in a dotted path string."""

RESERVED_KEYS: frozenset[str] = frozenset({"__proto__"})
"""Keys that are never written by a merge.

``__proto__`` is the JavaScript prototype key. Python dicts give it no
special meaning, but trees parsed from JSON written for other runtimes can
still carry it, and the merged output may travel back to such runtimes.
"""

ENV_PREFIX = "TREEFOLD_"
"""Prefix for environment variables read by Settings."""

DEFAULT_LOG_LEVEL = "WARNING"
"""Default log level used by the CLI."""
