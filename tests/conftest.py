"""Shared test fixtures: settings isolated from the host environment.

Every test gets settings built from a controlled environment (no ``.env``
file, credential set to a dummy value) so nothing ever reaches a real model
provider.  Tests for the missing-credential path use ``settings_without_key``.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from autopilot.agent_service.settings import AutopilotSettings, _get_settings_cached

_ENV_KEYS = ("OPENAI_API_KEY", "AUTOPILOT_OPENAI_API_KEY", "AUTOPILOT_SYSTEM_PROMPT", "AUTOPILOT_MODEL")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Strip credential/config env vars and invalidate the settings cache."""
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    _get_settings_cached.cache_clear()
    yield
    _get_settings_cached.cache_clear()


@pytest.fixture
def settings(monkeypatch: pytest.MonkeyPatch) -> AutopilotSettings:
    """Settings with a dummy credential configured."""
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test-not-a-real-key")
    return AutopilotSettings(_env_file=None)


@pytest.fixture
def settings_without_key(monkeypatch: pytest.MonkeyPatch) -> AutopilotSettings:
    """Settings with no credential configured, even when ``settings`` set one first."""
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.delenv("AUTOPILOT_OPENAI_API_KEY", raising=False)
    return AutopilotSettings(_env_file=None)
