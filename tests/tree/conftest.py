"""
Shared fixtures for tree tests.
"""

import typing as _typing

import pytest as _pytest


@_pytest.fixture
def server_config() -> dict[str, _typing.Any]:
    """Nested config used by lookup tests."""
    return {
        "server": {
            "host": "localhost",
            "ports": [80, 443],
            "tls": None,
            "0": "zero-key",
        },
        "debug": False,
    }


@_pytest.fixture
def layered_configs() -> tuple[dict[str, _typing.Any], ...]:
    """Three partial configs, lowest precedence first."""
    return (
        {"model": {"name": "llama", "size": "7b"}, "plugins": ["a"]},
        {"model": {"size": "13b"}, "plugins": ["b"]},
        {"model": {"size": "70b", "context": 8192}},
    )
