"""Workspace data model.

The workspace is the structured state the agent maintains across a
conversation: a kanban of tasks, automation routines, decisions and free-text
insights.  It has no server-side store -- the client holds it and sends it
back with every turn, and each successful turn replaces it wholesale.
"""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import Field, field_validator

from autopilot.agent_service.models.base import CamelModel
from autopilot.agent_service.models.enums import AutomationStatus, DecisionStatus, Priority, TaskStatus


class Task(CamelModel):
    id: str = Field(description="Stable identifier for the task.")
    title: str
    description: str
    status: TaskStatus
    priority: Priority
    due: str | None = Field(default=None, description="ISO date or natural language.")
    owner: str | None = None
    tags: list[str] | None = None


class Automation(CamelModel):
    id: str
    name: str
    cadence: str
    description: str
    status: AutomationStatus
    last_run: str | None = None
    next_run: str | None = None


class Decision(CamelModel):
    id: str
    title: str
    summary: str
    impact: Priority
    status: DecisionStatus
    owner: str | None = None
    due: str | None = None


class WorkspaceState(CamelModel):
    """Full workspace snapshot round-tripped by the client."""

    tasks: list[Task] = Field(default_factory=list)
    automations: list[Automation] = Field(default_factory=list)
    decisions: list[Decision] = Field(default_factory=list)
    insights: list[str] = Field(default_factory=list)
    knowledge_highlights: list[str] = Field(default_factory=list)
    updated_at: datetime

    @field_validator("updated_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # Naive timestamps would not compare against the merge clock.
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value


def seed_workspace(*, now: datetime | None = None) -> WorkspaceState:
    """Return the empty workspace a new session starts from."""
    return WorkspaceState(updated_at=now or datetime.now(tz=UTC))
