"""
CLI module for treefold.

Provides the command-line interface using Click.
"""

from treefold.cli.main import cli, main

__all__ = ["main", "cli"]
