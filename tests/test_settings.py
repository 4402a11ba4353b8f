"""Tests for settings loading."""

import pytest
from pydantic import ValidationError

from better_shell.config.settings import LoggingConfig, Settings, TelemetryConfig


def test_defaults_derive_from_home(tmp_path):
    settings = Settings(home_dir=tmp_path)
    assert settings.state_dir == tmp_path / ".config" / "better-shell"
    assert settings.backup_dir == tmp_path / ".better-shell-backups"
    assert settings.log_file == settings.state_dir / "logs" / "better-shell.log"
    assert settings.telemetry_notice_file.parent == settings.state_dir
    assert ".zshrc" in settings.backup.files


def test_env_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("BETTER_SHELL_HOME_DIR", str(tmp_path))
    monkeypatch.setenv("BETTER_SHELL_LOGGING__LEVEL", "debug")
    monkeypatch.setenv("BETTER_SHELL_TELEMETRY_CONFIG__ENABLED", "false")
    settings = Settings()
    assert settings.home_dir == tmp_path
    assert settings.logging.level == "DEBUG"
    assert settings.telemetry_config.enabled is False


def test_opt_out_variable_does_not_break_settings(monkeypatch, tmp_path):
    monkeypatch.setenv("BETTER_SHELL_TELEMETRY", "0")
    settings = Settings(home_dir=tmp_path)
    assert settings.telemetry_config.enabled is True


def test_invalid_log_level():
    with pytest.raises(ValidationError):
        LoggingConfig(level="LOUD")


def test_endpoint_must_be_http():
    with pytest.raises(ValidationError):
        TelemetryConfig(endpoint="ftp://example.com")
