"""
Shared pytest fixtures for treefold tests.

This file is automatically loaded by pytest. Fixtures defined here are
available to all test files without explicit imports.
"""

import os as _os
import pathlib as _pathlib
import typing as _typing

import pytest as _pytest
import yaml as _yaml

# Environment keys that should be cleared for isolated tests
ENV_KEYS_TO_CLEAR = [
    "TREEFOLD_IGNORE_ARRAYS",
    "TREEFOLD_CONFLICT_POLICY",
    "TREEFOLD_RESERVED_KEYS",
    "TREEFOLD_LOG_LEVEL",
    "TREEFOLD_ENV_FILE",
    "NO_COLOR",
]


@_pytest.fixture(autouse=True)
def clean_env(monkeypatch: _pytest.MonkeyPatch) -> None:
    """Remove treefold settings from the environment for every test."""
    for key in ENV_KEYS_TO_CLEAR:
        monkeypatch.delenv(key, raising=False)
    for key in list(_os.environ):
        if key.startswith("TREEFOLD_"):
            monkeypatch.delenv(key, raising=False)


@_pytest.fixture
def write_tree(tmp_path: _pathlib.Path) -> _typing.Callable[[str, _typing.Any], _pathlib.Path]:
    """Factory writing a data tree as YAML under tmp_path."""

    def _write(name: str, data: _typing.Any) -> _pathlib.Path:
        path = tmp_path / name
        path.write_text(_yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
        return path

    return _write
