"""Unit tests for settings loading."""

from __future__ import annotations

import pytest

from autopilot.agent_service.settings import AutopilotSettings, get_settings


def test_defaults() -> None:
    settings = AutopilotSettings(_env_file=None)
    assert settings.model == "gpt-4.1-mini"
    assert settings.temperature == 0.6
    assert settings.max_output_tokens == 900
    assert settings.knowledge_limit == 3
    assert not settings.has_credential()


def test_credential_from_openai_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", "sk-abc")
    settings = AutopilotSettings(_env_file=None)
    assert settings.has_credential()
    assert settings.openai_api_key is not None
    assert settings.openai_api_key.get_secret_value() == "sk-abc"


def test_blank_credential_is_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", "   ")
    assert not AutopilotSettings(_env_file=None).has_credential()


def test_prefixed_env_vars(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AUTOPILOT_MODEL", "gpt-4.1")
    monkeypatch.setenv("AUTOPILOT_TEMPERATURE", "0.2")
    monkeypatch.setenv("AUTOPILOT_KNOWLEDGE_LIMIT", "5")
    settings = AutopilotSettings(_env_file=None)
    assert settings.model == "gpt-4.1"
    assert settings.temperature == 0.2
    assert settings.knowledge_limit == 5


def test_get_settings_is_cached() -> None:
    assert get_settings() is get_settings()


def test_secret_not_in_repr(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", "sk-very-secret")
    assert "sk-very-secret" not in repr(AutopilotSettings(_env_file=None))
