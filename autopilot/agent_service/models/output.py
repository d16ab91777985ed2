"""Structured output schema the model must produce each turn.

Bounds here are enforced by pydantic at the generation boundary, so a
result with too many items never reaches the workspace merger.
"""

from __future__ import annotations

from pydantic import Field

from autopilot.agent_service.models.base import CamelModel
from autopilot.agent_service.models.workspace import Automation, Decision, Task

MAX_TASKS = 12
MAX_AUTOMATIONS = 6
MAX_DECISIONS = 8
MAX_INSIGHTS = 8


class AgentOutput(CamelModel):
    """One turn of agent output: a reply plus the complete desired workspace."""

    reply: str = Field(description="Assistant response for the user. Use confident, action-oriented language.")
    tasks: list[Task] = Field(
        max_length=MAX_TASKS,
        description="Full set of tasks for the workspace. Include existing tasks.",
    )
    automations: list[Automation] = Field(
        max_length=MAX_AUTOMATIONS,
        description="Automation routines the agent is executing or planning.",
    )
    decisions: list[Decision] = Field(max_length=MAX_DECISIONS)
    insights: list[str] = Field(max_length=MAX_INSIGHTS)
    action_summary: list[str] = Field(description="Short bullet points describing what the agent just did.")
