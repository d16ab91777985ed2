"""API request / response schemas for the agent endpoint."""

from __future__ import annotations

from pydantic import BaseModel, Field

from autopilot.agent_service.models.base import CamelModel
from autopilot.agent_service.models.conversation import Message
from autopilot.agent_service.models.workspace import WorkspaceState


class AgentRequest(CamelModel):
    """One turn: the full conversation so far plus the client-held workspace."""

    messages: list[Message] = Field(default_factory=list)
    workspace: WorkspaceState


class AgentResponse(CamelModel):
    reply: str
    workspace: WorkspaceState
    action_summary: list[str] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Body of every non-2xx response."""

    error: str
