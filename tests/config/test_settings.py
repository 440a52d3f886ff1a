"""Tests for Settings (pydantic-settings defaults and TREEFOLD_* overrides)."""

import pathlib as _pathlib

import pydantic as _pydantic
import pytest as _pytest

import treefold.config as config
import treefold.tree as tree


class TestSettingsDefaults:
    """Defaults without any environment."""

    def test_defaults(self) -> None:
        """Fresh settings concatenate arrays and replace on conflict."""
        settings = config.Settings.construct_without_dotenv()

        assert settings.ignore_arrays is False
        assert settings.conflict_policy is tree.ConflictPolicy.REPLACE
        assert settings.reserved_keys == []
        assert settings.log_level == "WARNING"

    def test_all_reserved_keys_include_proto(self) -> None:
        """__proto__ is always reserved."""
        settings = config.Settings.construct_without_dotenv(reserved_keys=["constructor"])

        assert settings.all_reserved_keys == frozenset({"__proto__", "constructor"})

    def test_merge_options(self) -> None:
        """merge_options feeds deep_merge_key directly."""
        settings = config.Settings.construct_without_dotenv(conflict_policy="keep")

        result = tree.deep_merge({"x": [1]}, {"x": 2, "__proto__": 3}, **settings.merge_options())

        assert result == {"x": [1]}


class TestSettingsEnvironment:
    """TREEFOLD_* environment variables override defaults."""

    def test_env_overrides(self, monkeypatch: _pytest.MonkeyPatch) -> None:
        """Scalar, enum and list fields are read from the environment."""
        monkeypatch.setenv("TREEFOLD_IGNORE_ARRAYS", "true")
        monkeypatch.setenv("TREEFOLD_CONFLICT_POLICY", "raise")
        monkeypatch.setenv("TREEFOLD_RESERVED_KEYS", '["prototype"]')
        monkeypatch.setenv("TREEFOLD_LOG_LEVEL", "debug")

        settings = config.Settings.construct_without_dotenv()

        assert settings.ignore_arrays is True
        assert settings.conflict_policy is tree.ConflictPolicy.RAISE
        assert settings.reserved_keys == ["prototype"]
        assert settings.log_level == "DEBUG"

    def test_constructor_beats_env(self, monkeypatch: _pytest.MonkeyPatch) -> None:
        """Constructor arguments take precedence over the environment."""
        monkeypatch.setenv("TREEFOLD_IGNORE_ARRAYS", "true")

        settings = config.Settings.construct_without_dotenv(ignore_arrays=False)

        assert settings.ignore_arrays is False

    def test_invalid_policy_rejected(self, monkeypatch: _pytest.MonkeyPatch) -> None:
        """Unknown policies fail validation."""
        monkeypatch.setenv("TREEFOLD_CONFLICT_POLICY", "merge")

        with _pytest.raises(_pydantic.ValidationError):
            config.Settings.construct_without_dotenv()

    def test_invalid_log_level_rejected(self) -> None:
        """Unknown log levels fail validation."""
        with _pytest.raises(_pydantic.ValidationError):
            config.Settings.construct_without_dotenv(log_level="LOUD")

    def test_dotenv_file(self, tmp_path: _pathlib.Path) -> None:
        """An explicit .env file is read when passed."""
        env_file = tmp_path / ".env"
        env_file.write_text("TREEFOLD_IGNORE_ARRAYS=1\n", encoding="utf-8")

        settings = config.Settings(_env_file=env_file)  # type: ignore[call-arg]

        assert settings.ignore_arrays is True
