"""Workspace merge -- combines the prior workspace with a generated update.

Merge policy is full-snapshot replacement, not a diff or field-level patch:
the model sees the whole prior workspace and re-emits the complete desired
state, so tasks, automations, decisions and insights are taken verbatim
from the update.  Deciding what to keep versus change happens in the
generation step.  Item IDs are not checked for uniqueness or stability here.

``knowledge_highlights`` is the one field carried forward when the update
does not supply it.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from pydantic import BaseModel

from autopilot.agent_service.models.output import AgentOutput
from autopilot.agent_service.models.workspace import Automation, Decision, Task, WorkspaceState

# Smallest step used to keep updated_at strictly increasing
TIMESTAMP_STEP = timedelta(milliseconds=1)


class WorkspaceUpdate(BaseModel):
    """Newly generated workspace fields for one turn."""

    tasks: list[Task]
    automations: list[Automation]
    decisions: list[Decision]
    insights: list[str]
    knowledge_highlights: list[str] | None = None

    @classmethod
    def from_output(cls, output: AgentOutput, *, knowledge_highlights: list[str] | None = None) -> WorkspaceUpdate:
        return cls(
            tasks=output.tasks,
            automations=output.automations,
            decisions=output.decisions,
            insights=output.insights,
            knowledge_highlights=knowledge_highlights,
        )


def next_timestamp(prior: datetime, now: datetime | None = None) -> datetime:
    """Return ``now`` (default: current UTC time), bumped to stay after ``prior``."""
    stamp = now or datetime.now(tz=UTC)
    if stamp <= prior:
        stamp = prior + TIMESTAMP_STEP
    return stamp


def merge_workspace(prior: WorkspaceState, update: WorkspaceUpdate, *, now: datetime | None = None) -> WorkspaceState:
    """Return a new workspace snapshot; ``prior`` is left untouched."""
    highlights = update.knowledge_highlights if update.knowledge_highlights is not None else prior.knowledge_highlights
    return prior.model_copy(
        update={
            "tasks": list(update.tasks),
            "automations": list(update.automations),
            "decisions": list(update.decisions),
            "insights": list(update.insights),
            "knowledge_highlights": list(highlights),
            "updated_at": next_timestamp(prior.updated_at, now),
        }
    )
