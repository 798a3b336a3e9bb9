"""Tests for validation settings."""

import json
import logging

import pytest
import yaml

from validknobs_common.exceptions import ConfigurationError, NotFoundError
from validknobs_validate.settings import (
    DEFAULTS,
    ValidationSettings,
    get_settings,
    reset_settings,
)


class TestDefaults:
    """Test built-in defaults."""

    def test_defaults(self):
        """Test values with no overrides."""
        settings = ValidationSettings()

        assert settings.slice_internal_errors == "trap"
        assert settings.propagate_slice_internal_errors is False
        assert settings.log_failures is False
        assert settings.to_dict() == DEFAULTS

    def test_to_dict_is_a_copy(self):
        """Test that the returned dict does not alias internal state."""
        settings = ValidationSettings()
        settings.to_dict()["log_failures"] = True

        assert settings.log_failures is False


class TestLoadSettings:
    """Test dictionary settings and checks."""

    def test_overrides(self):
        """Test that provided values replace defaults."""
        settings = ValidationSettings({"slice_internal_errors": "PROPAGATE", "log_failures": True})

        assert settings.slice_internal_errors == "propagate"
        assert settings.propagate_slice_internal_errors is True
        assert settings.log_failures is True

    def test_get_and_set(self):
        """Test single-setting access."""
        settings = ValidationSettings()
        settings.set_setting("log_failures", True)

        assert settings.get_setting("log_failures") is True
        assert settings.get_setting("missing", "fallback") == "fallback"

    def test_unknown_key(self):
        """Test that unknown settings are rejected."""
        with pytest.raises(ConfigurationError) as exc_info:
            ValidationSettings({"fail_fast": True})
        assert exc_info.value.context["key"] == "fail_fast"

    @pytest.mark.parametrize("value", ["ignore", 1, None])
    def test_bad_slice_policy(self, value):
        """Test that only trap and propagate are accepted."""
        with pytest.raises(ConfigurationError):
            ValidationSettings({"slice_internal_errors": value})

    @pytest.mark.parametrize("value", ["true", 1, None])
    def test_log_failures_must_be_bool(self, value):
        """Test that log_failures only takes booleans."""
        with pytest.raises(ConfigurationError):
            ValidationSettings({"log_failures": value})


class TestEnvironmentOverrides:
    """Test VALIDKNOBS_ environment variables."""

    def test_env_wins_over_dict(self, monkeypatch):
        """Test that environment variables are applied last."""
        monkeypatch.setenv("VALIDKNOBS_LOG_FAILURES", "yes")
        monkeypatch.setenv("VALIDKNOBS_SLICE_INTERNAL_ERRORS", "propagate")

        settings = ValidationSettings({"log_failures": False})

        assert settings.log_failures is True
        assert settings.propagate_slice_internal_errors is True

    def test_env_disabled(self, monkeypatch):
        """Test use_env=False ignores the environment."""
        monkeypatch.setenv("VALIDKNOBS_LOG_FAILURES", "true")
        assert ValidationSettings(use_env=False).log_failures is False

    def test_custom_prefix(self, monkeypatch):
        """Test a custom environment prefix."""
        monkeypatch.setenv("MYAPP_LOG_FAILURES", "1")
        assert ValidationSettings(prefix="MYAPP_").log_failures is True

    def test_unrelated_variables_ignored(self, monkeypatch):
        """Test that unknown VALIDKNOBS_ names do not raise."""
        monkeypatch.setenv("VALIDKNOBS_HOME", "/tmp")
        assert ValidationSettings().to_dict() == DEFAULTS

    def test_bad_env_value(self, monkeypatch):
        """Test that invalid environment values are reported."""
        monkeypatch.setenv("VALIDKNOBS_LOG_FAILURES", "maybe")
        with pytest.raises(ConfigurationError):
            ValidationSettings()

    def test_override_logged(self, monkeypatch, caplog):
        """Test the debug line for applied overrides."""
        monkeypatch.setenv("VALIDKNOBS_LOG_FAILURES", "true")
        with caplog.at_level(logging.DEBUG, logger="validknobs_validate.settings"):
            ValidationSettings()
        assert "VALIDKNOBS_LOG_FAILURES" in caplog.text


class TestFromFile:
    """Test loading settings files."""

    def test_yaml(self, tmp_path):
        """Test a YAML file with a settings section."""
        path = tmp_path / "validation.yaml"
        path.write_text(yaml.safe_dump({"settings": {"log_failures": True}}))

        assert ValidationSettings.from_file(path).log_failures is True

    def test_json(self, tmp_path):
        """Test a flat JSON file."""
        path = tmp_path / "validation.json"
        path.write_text(json.dumps({"slice_internal_errors": "propagate"}))

        assert ValidationSettings.from_file(str(path)).propagate_slice_internal_errors is True

    def test_empty_yaml(self, tmp_path):
        """Test that an empty file yields defaults."""
        path = tmp_path / "empty.yml"
        path.write_text("")

        assert ValidationSettings.from_file(path).to_dict() == DEFAULTS

    def test_missing_file(self, tmp_path):
        """Test a missing file."""
        with pytest.raises(NotFoundError):
            ValidationSettings.from_file(tmp_path / "nope.yaml")

    def test_unsupported_format(self, tmp_path):
        """Test an unsupported extension."""
        path = tmp_path / "validation.toml"
        path.write_text("log_failures = true")

        with pytest.raises(ConfigurationError):
            ValidationSettings.from_file(path)

    def test_non_mapping(self, tmp_path):
        """Test a file whose top level is not a mapping."""
        path = tmp_path / "validation.yaml"
        path.write_text("- log_failures\n")

        with pytest.raises(ConfigurationError):
            ValidationSettings.from_file(path)

    def test_invalid_values(self, tmp_path):
        """Test that file values are checked like dictionary values."""
        path = tmp_path / "validation.yaml"
        path.write_text("slice_internal_errors: ignore\n")

        with pytest.raises(ConfigurationError):
            ValidationSettings.from_file(path)


class TestGlobalSettings:
    """Test the process-wide settings."""

    def test_get_settings_is_cached(self):
        """Test that repeated calls return one instance."""
        assert get_settings() is get_settings()

    def test_reset_settings(self):
        """Test replacing and clearing the process-wide settings."""
        custom = ValidationSettings({"log_failures": True}, use_env=False)
        reset_settings(custom)
        assert get_settings() is custom

        reset_settings()
        assert get_settings() is not custom
        assert get_settings().log_failures is False
