"""Shared test fixtures and configuration."""

from __future__ import annotations

import pytest

from assistant_chat.config import Settings


@pytest.fixture
def settings(monkeypatch):
    """Settings with both required keys present."""
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("ASSISTANT_ID", "asst_test")
    return Settings()


@pytest.fixture
def settings_without_assistant(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.delenv("ASSISTANT_ID", raising=False)
    return Settings()
