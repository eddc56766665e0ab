"""
Settings tests.

Every variable is cleared first so the host environment cannot leak in.
"""

from pathlib import Path

import pytest

from agrilearn.config import DEFAULT_DATA_DIR, DEFAULT_MODEL, Settings


ENV_VARS = [
    "GEMINI_API_KEY",
    "AGRILEARN_MODEL",
    "AGRILEARN_DATA_DIR",
    "AGRILEARN_FORCE_OFFLINE",
    "AGRILEARN_LOG_LEVEL",
    "AGRILEARN_PROBE_HOST",
    "AGRILEARN_PROBE_PORT",
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    # setenv before delenv so teardown removes anything load_dotenv adds
    for name in ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return tmp_path / "missing.env"


class TestSettings:
    """Test Settings.from_env."""

    def test_defaults(self, clean_env):
        settings = Settings.from_env(clean_env)
        assert settings.gemini_api_key is None
        assert settings.model == DEFAULT_MODEL
        assert settings.data_dir == DEFAULT_DATA_DIR
        assert settings.db_path == DEFAULT_DATA_DIR / "offline.db"
        assert not settings.force_offline
        assert settings.probe_port == 53

    def test_environment_overrides(self, clean_env, monkeypatch, tmp_path):
        monkeypatch.setenv("GEMINI_API_KEY", "key-123")
        monkeypatch.setenv("AGRILEARN_DATA_DIR", str(tmp_path))
        monkeypatch.setenv("AGRILEARN_FORCE_OFFLINE", "Yes")
        monkeypatch.setenv("AGRILEARN_LOG_LEVEL", "debug")
        monkeypatch.setenv("AGRILEARN_PROBE_PORT", "443")

        settings = Settings.from_env(clean_env)

        assert settings.gemini_api_key == "key-123"
        assert settings.db_path == Path(tmp_path) / "offline.db"
        assert settings.force_offline
        assert settings.log_level == "DEBUG"
        assert settings.probe_port == 443

    def test_blank_api_key_is_none(self, clean_env, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "")
        assert Settings.from_env(clean_env).gemini_api_key is None

    def test_dotenv_file(self, clean_env, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("AGRILEARN_MODEL=gemini-2.5-pro\n", encoding="utf-8")
        assert Settings.from_env(env_file).model == "gemini-2.5-pro"

    def test_environment_wins_over_dotenv(self, clean_env, monkeypatch, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("AGRILEARN_MODEL=gemini-2.5-pro\n", encoding="utf-8")
        monkeypatch.setenv("AGRILEARN_MODEL", "gemini-2.0-flash")
        assert Settings.from_env(env_file).model == "gemini-2.0-flash"

