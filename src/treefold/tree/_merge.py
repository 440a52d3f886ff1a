"""
Recursive deep merge of data trees.

Sources are folded into a target mapping one after another, in place.
Nested mappings merge key by key, sequences concatenate (or are replaced
when arrays are ignored), and everything else is overwritten with an
independent copy of the incoming value.

Example:
    >>> base = {"model": {"name": "llama", "size": "7b"}, "tags": ["a"]}
    >>> deep_merge(base, {"model": {"size": "70b"}, "tags": ["b"]})
    {'model': {'name': 'llama', 'size': '70b'}, 'tags': ['a', 'b']}
    >>> base["tags"]
    ['a', 'b']
"""

from __future__ import annotations

import collections.abc as _abc
import enum as _enum
import logging as _logging
import typing as _typing

import treefold.constants as constants
import treefold.tree._clone as _clone
import treefold.tree._types as _types

_logger = _logging.getLogger(__name__)


class ConflictPolicy(str, _enum.Enum):
    """
    How to resolve an existing sequence meeting a non-sequence value.

    Only consulted when arrays are concatenated (ignore_arrays=False);
    with ignore_arrays=True the incoming value always replaces.
    """

    REPLACE = "replace"
    """Incoming value wins (default)."""

    KEEP = "keep"
    """Existing sequence is left untouched."""

    RAISE = "raise"
    """Raise MergeConflictError."""


class MergeConflictError(ValueError):
    """Raised by ConflictPolicy.RAISE when shapes cannot be merged."""

    def __init__(
        self,
        path: _types.KeyPath,
        existing: _typing.Any,
        incoming: _typing.Any,
    ) -> None:
        self.path = path
        self.existing = existing
        self.incoming = incoming
        dotted = constants.PATH_SEPARATOR.join(str(p) for p in path)
        super().__init__(
            f"Cannot merge {_types.shape_of(incoming).value} into "
            f"{_types.shape_of(existing).value} at '{dotted}'"
        )


class _Merger:
    """Holds the options of one merge call while it recurses."""

    __slots__ = ("_ignore_arrays", "_conflict", "_reserved")

    def __init__(
        self,
        ignore_arrays: bool,
        conflict: ConflictPolicy | str,
        reserved: frozenset[str],
    ) -> None:
        self._ignore_arrays = ignore_arrays
        self._conflict = ConflictPolicy(conflict)
        self._reserved = reserved

    def merge(
        self,
        target: _abc.MutableMapping[_typing.Any, _typing.Any],
        source: _abc.Mapping[_typing.Any, _typing.Any],
        path: _types.KeyPath = (),
    ) -> _abc.MutableMapping[_typing.Any, _typing.Any]:
        """Fold source's keys into target. Returns target."""
        for key, incoming in source.items():
            if key in self._reserved:
                _logger.debug("Skipping reserved key %r at %r", key, path)
                continue

            key_path = path + (key,)
            existing = target.get(key)

            if _types.is_sequence(existing):
                if self._ignore_arrays:
                    target[key] = self._copy(incoming)
                elif _types.is_sequence(incoming):
                    target[key] = [*existing, *self._copy(incoming)]
                else:
                    self._resolve_conflict(target, key, key_path, existing, incoming)
            elif _types.is_mapping(existing) and _types.is_mapping(incoming):
                if not isinstance(existing, _abc.MutableMapping):
                    existing = _clone.deep_copy(existing)
                target[key] = self.merge(existing, incoming, key_path)
            else:
                target[key] = self._copy(incoming)

        return target

    def _copy(self, value: _typing.Any) -> _typing.Any:
        """Independent copy of an incoming value, without reserved keys."""
        return _clone.deep_copy(value, self._reserved)

    def _resolve_conflict(
        self,
        target: _abc.MutableMapping[_typing.Any, _typing.Any],
        key: _typing.Any,
        path: _types.KeyPath,
        existing: _typing.Any,
        incoming: _typing.Any,
    ) -> None:
        """Apply the conflict policy for sequence vs non-sequence."""
        _logger.debug(
            "Merge conflict at %r: %s into sequence, policy=%s",
            path,
            _types.shape_of(incoming).value,
            self._conflict.value,
        )
        if self._conflict is ConflictPolicy.RAISE:
            raise MergeConflictError(path, existing, incoming)
        if self._conflict is ConflictPolicy.REPLACE:
            target[key] = self._copy(incoming)


def deep_merge_key(
    target: _typing.Any,
    ignore_arrays: bool,
    *sources: _typing.Any,
    conflict: ConflictPolicy | str = ConflictPolicy.REPLACE,
    reserved_keys: _abc.Iterable[str] | None = None,
) -> _typing.Any:
    """
    Deep merge sources into target, in place.

    Args:
        target: Mutable mapping to merge into. Sequences, scalars and
                read-only mappings are returned unchanged.
        ignore_arrays: If True, an incoming value replaces an existing
                       sequence. If False, sequences are concatenated
                       (existing items first).
        *sources: Mappings applied left to right (later wins). Non-mapping
                  entries, including None, are skipped.
        conflict: Policy for an existing sequence meeting a non-sequence
                  when ignore_arrays is False.
        reserved_keys: Extra keys to skip, in addition to RESERVED_KEYS. A
                       single string counts as one key.

    Returns:
        The same target object.

    Raises:
        MergeConflictError: If conflict is RAISE and a conflict occurs.
            Sources merged before the conflict remain applied.
    """
    if not isinstance(target, _abc.MutableMapping):
        return target

    if isinstance(reserved_keys, str):
        reserved_keys = (reserved_keys,)

    reserved = constants.RESERVED_KEYS
    if reserved_keys:
        reserved = reserved | frozenset(reserved_keys)

    merger = _Merger(ignore_arrays, conflict, reserved)
    for source in sources:
        if _types.is_mapping(source):
            merger.merge(target, source)
    return target


def deep_merge(
    original: _typing.Any,
    *objects: _typing.Any,
    conflict: ConflictPolicy | str = ConflictPolicy.REPLACE,
    reserved_keys: _abc.Iterable[str] | None = None,
) -> _typing.Any:
    """Deep merge with sequence concatenation. See deep_merge_key."""
    return deep_merge_key(
        original,
        False,
        *objects,
        conflict=conflict,
        reserved_keys=reserved_keys,
    )
