"""Unit tests for application settings configuration."""

import json
from pathlib import Path

from helpdesk.config import Settings


def test_settings_uses_backend_env_file_independent_of_cwd():
    """Settings should always include backend/.env as an env source."""
    env_files = Settings.model_config.get("env_file")
    assert env_files is not None

    normalized = {str(Path(item)) for item in env_files}
    expected_backend_env = str(Path(__file__).resolve().parents[2] / ".env")

    assert expected_backend_env in normalized
    assert str(Path(".env")) in normalized


def test_command_settings_read_from_environment(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("COMMAND_MODEL", "anthropic/claude-3.5-haiku")
    monkeypatch.setenv("COMMAND_API_TOKEN", "secret")
    monkeypatch.setenv("LOG_LEVEL_COMMAND", "DEBUG")

    settings = Settings(_env_file=None)

    assert settings.command_model == "anthropic/claude-3.5-haiku"
    assert settings.command_api_token == "secret"
    assert settings.log_level_command == "DEBUG"


def test_settings_json_overrides_command_model(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("COMMAND_MODEL", raising=False)
    (tmp_path / "data").mkdir()
    (tmp_path / "data" / "settings.json").write_text(json.dumps({"command_model": "openai/gpt-4.1-mini"}))

    settings = Settings(_env_file=None)

    assert settings.command_model == "openai/gpt-4.1-mini"


def test_unreadable_settings_json_is_ignored(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("COMMAND_MODEL", raising=False)
    (tmp_path / "data").mkdir()
    (tmp_path / "data" / "settings.json").write_text("{not json")

    settings = Settings(_env_file=None)

    assert settings.command_model == "openai/gpt-4o-mini"
