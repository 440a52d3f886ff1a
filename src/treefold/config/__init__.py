"""
Configuration module for treefold.

Uses pydantic-settings for environment variable loading and PyYAML for
tree files.
"""

from treefold.config.layers import LayerFileError, load_tree_file, merge_files
from treefold.config.settings import Settings

__all__ = ["LayerFileError", "Settings", "load_tree_file", "merge_files"]
