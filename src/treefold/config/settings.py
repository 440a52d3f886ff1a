"""
Settings configuration using pydantic-settings.

Loads configuration from:
1. Constructor arguments (highest precedence)
2. Environment variables with TREEFOLD_ prefix
3. .env file named by TREEFOLD_ENV_FILE (if present)
4. Field defaults

Example:
  TREEFOLD_IGNORE_ARRAYS=true
  TREEFOLD_CONFLICT_POLICY=raise
  TREEFOLD_RESERVED_KEYS='["constructor", "prototype"]'
"""

import logging as _logging
import os as _os
import pathlib as _pathlib
import typing as _typing

import pydantic as _pydantic
import pydantic_settings as _pydantic_settings

import treefold.constants as constants
import treefold.tree as tree


def _get_env_file() -> str | None:
    """Determine which .env file to load.

    TREEFOLD_ENV_FILE names the file explicitly. If it is unset, or set to
    a path that does not exist, no .env file is loaded.
    """
    if env_file := _os.environ.get("TREEFOLD_ENV_FILE"):
        if _pathlib.Path(env_file).exists():
            return env_file
    return None


class Settings(_pydantic_settings.BaseSettings):
    """
    Default options for merges and for the command line.

    All settings can be overridden via environment variables with the
    TREEFOLD_ prefix.
    """

    model_config = _pydantic_settings.SettingsConfigDict(
        env_prefix=constants.ENV_PREFIX,
        env_file=_get_env_file(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    ignore_arrays: bool = _pydantic.Field(
        default=False,
        description="Replace sequences instead of concatenating them",
    )

    conflict_policy: tree.ConflictPolicy = _pydantic.Field(
        default=tree.ConflictPolicy.REPLACE,
        description="How a sequence meeting a non-sequence is resolved",
    )

    reserved_keys: list[str] = _pydantic.Field(
        default_factory=list,
        description="Keys skipped by merges, in addition to __proto__",
    )

    log_level: str = _pydantic.Field(
        default=constants.DEFAULT_LOG_LEVEL,
        description="Log level for the command line",
    )

    @_pydantic.field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(_logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value!r}")
        return level

    @classmethod
    def construct_without_dotenv(cls, **kwargs: _typing.Any) -> "Settings":
        """Create Settings from environment variables only, without loading .env file.

        Useful for test isolation.
        """
        return cls(_env_file=None, **kwargs)  # type: ignore[call-arg]

    @property
    def all_reserved_keys(self) -> frozenset[str]:
        """Built-in reserved keys plus the configured extras."""
        return constants.RESERVED_KEYS | frozenset(self.reserved_keys)

    def merge_options(self) -> dict[str, _typing.Any]:
        """Keyword arguments for tree.deep_merge_key built from these settings."""
        return {
            "conflict": self.conflict_policy,
            "reserved_keys": self.all_reserved_keys,
        }
