"""FastAPI dependency injection for settings and turn collaborators.

Usage in route handlers::

    @router.post("")
    async def run_agent(settings: Settings, coordinator: Coordinator) -> AgentResponse:
        ...

Tests replace collaborators through ``app.dependency_overrides``, e.g. a
generation client backed by a pydantic-ai ``FunctionModel``.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from autopilot.agent_service.execution.coordinator import AgentCoordinator
from autopilot.agent_service.execution.generation import StructuredGenerationClient
from autopilot.agent_service.knowledge.search import KnowledgeBase, load_knowledge_base
from autopilot.agent_service.settings import AutopilotSettings, get_settings


def get_knowledge_base() -> KnowledgeBase:
    """Return the shared, read-only knowledge base."""
    return load_knowledge_base()


def get_generation_client(settings: Annotated[AutopilotSettings, Depends(get_settings)]) -> StructuredGenerationClient:
    """Return a generation client for this request.

    The client builds its model lazily, so this never touches the credential.
    """
    return StructuredGenerationClient(settings)


def get_coordinator(
    settings: Annotated[AutopilotSettings, Depends(get_settings)],
    knowledge: Annotated[KnowledgeBase, Depends(get_knowledge_base)],
    generator: Annotated[StructuredGenerationClient, Depends(get_generation_client)],
) -> AgentCoordinator:
    return AgentCoordinator(knowledge=knowledge, generator=generator, settings=settings)


# -- Annotated type aliases for concise route signatures ---------------------

Settings = Annotated[AutopilotSettings, Depends(get_settings)]
"""Annotated dependency: cached service settings."""

Coordinator = Annotated[AgentCoordinator, Depends(get_coordinator)]
"""Annotated dependency: per-request turn coordinator."""
