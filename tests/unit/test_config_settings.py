"""Unit tests for application settings configuration."""

from pathlib import Path

from admin_dashboard.config import Settings


def test_settings_uses_project_env_file_independent_of_cwd():
    """Settings should always include the project's .env as an env source."""
    env_files = Settings.model_config.get("env_file")
    assert env_files is not None

    normalized = {str(Path(item)) for item in env_files}
    expected_project_env = str(Path(__file__).resolve().parents[2] / ".env")

    assert expected_project_env in normalized
    assert str(Path(".env")) in normalized


def test_marketplace_backend_settings_from_environment(monkeypatch):
    monkeypatch.setenv("MARKETPLACE_API_BASE_URL", "https://api.example.com")
    monkeypatch.setenv("MARKETPLACE_API_TIMEOUT", "2.5")
    monkeypatch.setenv("LOG_LEVEL_MARKETPLACE", "DEBUG")

    settings = Settings(_env_file=None)

    assert settings.marketplace_api_base_url == "https://api.example.com"
    assert settings.marketplace_api_timeout == 2.5
    assert settings.log_level_marketplace == "DEBUG"


def test_default_timeout_is_ten_seconds(monkeypatch):
    monkeypatch.delenv("MARKETPLACE_API_TIMEOUT", raising=False)
    assert Settings(_env_file=None).marketplace_api_timeout == 10.0
