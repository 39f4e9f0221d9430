"""Tests for environment settings."""

from __future__ import annotations

import pytest

from assistant_chat.config import ConfigurationError, Settings


class TestSettings:
    """Tests for Settings."""

    def test_reads_environment_at_access_time(self, monkeypatch):
        settings = Settings()
        monkeypatch.setenv("ASSISTANT_ID", "  asst_late  ")
        assert settings.assistant_id == "asst_late"

    def test_missing_keys_in_declared_order(self, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        monkeypatch.setenv("ASSISTANT_ID", "")
        assert Settings().missing_keys() == ["OPENAI_API_KEY", "ASSISTANT_ID"]

    def test_require_assistant_id(self, settings):
        assert settings.require_assistant_id() == "asst_test"

    def test_require_assistant_id_raises_when_unset(self, settings_without_assistant):
        with pytest.raises(ConfigurationError, match="ASSISTANT_ID is not set"):
            settings_without_assistant.require_assistant_id()

    def test_log_level_defaults_to_info(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        assert Settings().log_level == "INFO"

    def test_log_level_is_normalised(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert Settings().log_level == "DEBUG"
