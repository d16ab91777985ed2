"""Shared fixtures for agent-service tests."""

from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
from httpx import ASGITransport, AsyncClient

from autopilot.agent_service.app import app
from autopilot.agent_service.models.workspace import WorkspaceState, seed_workspace
from autopilot.agent_service.settings import AutopilotSettings, get_settings
from tests.agent_service.helpers import SEED_TIME


@pytest.fixture
def seed() -> WorkspaceState:
    return seed_workspace(now=SEED_TIME)


@pytest.fixture
async def client(settings: AutopilotSettings) -> AsyncIterator[AsyncClient]:
    """Async HTTP client wired to the app with test settings.

    Overrides ``get_settings`` so every request sees the fixture settings.
    The app lifespan does NOT run under ``ASGITransport``; tests override
    ``get_generation_client`` with a scripted model as needed.
    """
    app.dependency_overrides[get_settings] = lambda: settings

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
