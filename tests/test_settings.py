"""
Unit tests for environment-backed settings.
"""

import pytest
from pydantic import ValidationError

from openai_tools.config.constants import AZURE_DEFAULT_API_VERSION
from openai_tools.config.settings import Settings, load_settings


class TestSettingsFromMapping:
    """Tests for Settings.from_mapping."""

    def test_empty_environment(self):
        """No variables gives an empty snapshot with defaults."""
        settings = Settings.from_mapping({})
        assert settings.openai_api_key is None
        assert settings.azure_api_version == AZURE_DEFAULT_API_VERSION
        assert settings.log_level == "INFO"
        assert settings.timeout is None
        assert not settings.has_azure_credentials

    def test_reads_all_variables(self):
        """Every known variable is captured."""
        settings = Settings.from_mapping(
            {
                "OPENAI_API_KEY": "sk-abc",
                "OPENAI_BASE_URL": "http://localhost:8000/v1",
                "AZURE_OPENAI_API_KEY": "az-key",
                "AZURE_OPENAI_ENDPOINT": "https://myres.openai.azure.com",
                "AZURE_OPENAI_DEPLOYMENT_NAME": "gpt4o",
                "AZURE_OPENAI_API_VERSION": "2025-01-01-preview",
                "LOG_LEVEL": "debug",
                "OPENAI_TIMEOUT": "12.5",
            }
        )
        assert settings.openai_api_key == "sk-abc"
        assert settings.openai_base_url == "http://localhost:8000/v1"
        assert settings.azure_api_key == "az-key"
        assert settings.azure_deployment_name == "gpt4o"
        assert settings.azure_api_version == "2025-01-01-preview"
        assert settings.log_level == "DEBUG"
        assert settings.timeout == 12.5
        assert settings.has_azure_credentials

    def test_empty_values_are_unset(self):
        """Empty strings behave like missing variables."""
        settings = Settings.from_mapping({"OPENAI_API_KEY": "", "OPENAI_TIMEOUT": ""})
        assert settings.openai_api_key is None
        assert settings.timeout is None

    def test_entra_token_counts_as_azure(self):
        """An Entra ID token alone selects Azure credentials."""
        settings = Settings.from_mapping({"AZURE_OPENAI_TOKEN": "eyJ0"})
        assert settings.has_azure_credentials

    def test_settings_are_frozen(self):
        """Settings cannot be changed after capture."""
        settings = Settings.from_mapping({})
        with pytest.raises(ValidationError):
            settings.openai_api_key = "sk-new"


class TestLoadSettings:
    """Tests for load_settings with dotenv files."""

    def test_loads_env_file(self, tmp_path, monkeypatch):
        """Variables from the dotenv file are picked up."""
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("OPENAI_API_KEY=sk-from-file\n")

        settings = load_settings(env_file)

        assert settings.openai_api_key == "sk-from-file"

    def test_process_environment_wins(self, tmp_path, monkeypatch):
        """Existing process variables are not overridden by the file."""
        monkeypatch.setenv("OPENAI_API_KEY", "sk-from-process")
        env_file = tmp_path / ".env"
        env_file.write_text("OPENAI_API_KEY=sk-from-file\n")

        settings = load_settings(env_file)

        assert settings.openai_api_key == "sk-from-process"

    def test_missing_file(self, tmp_path, monkeypatch):
        """A missing dotenv file is ignored."""
        monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
        settings = load_settings(tmp_path / "missing.env")
        assert settings.openai_api_key == "sk-env"
