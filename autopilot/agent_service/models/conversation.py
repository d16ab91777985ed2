"""Conversation message model."""

from __future__ import annotations

from datetime import datetime

from pydantic import ConfigDict

from autopilot.agent_service.models.base import CamelModel
from autopilot.agent_service.models.enums import MessageRole


class Message(CamelModel):
    """A single chat turn.  List order is dialogue order."""

    model_config = ConfigDict(frozen=True)

    id: str
    role: MessageRole
    content: str
    created_at: datetime
