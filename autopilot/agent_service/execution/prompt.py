"""Prompt composition for a single agent turn.

Two pieces go to the model:

- the **system prompt**, rendered from a Jinja2 template with variables
  derived from the current workspace only;
- the **prompt payload**, a fixed sequence of sections: knowledge context,
  conversation history, operational instructions.

Section order, headings and separators are part of the model-facing
contract.  Both functions are deterministic for a given input (the system
prompt's ``date`` variable aside).

Template variables available to the system prompt:

- ``task_count`` / ``automation_count`` / ``decision_count`` / ``insight_count``
- ``blocked_count``       : tasks with status ``blocked``
- ``open_decision_count`` : decisions with status ``open``
- ``max_tasks`` / ``max_automations`` / ``max_decisions`` / ``max_insights``
- ``updated_at``          : workspace timestamp (ISO 8601)
- ``date``                : current date (YYYY-MM-DD)
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

import jinja2

from autopilot.agent_service.models.enums import DecisionStatus, TaskStatus
from autopilot.agent_service.models.output import MAX_AUTOMATIONS, MAX_DECISIONS, MAX_INSIGHTS, MAX_TASKS

if TYPE_CHECKING:
    from collections.abc import Sequence

    from autopilot.agent_service.models.knowledge import KnowledgeEntry
    from autopilot.agent_service.models.workspace import WorkspaceState

NO_KNOWLEDGE_PLACEHOLDER = "No directly relevant knowledge snippets located."

OPERATING_INSTRUCTIONS = (
    "- Return thoughtful updates even if you need clarification; outline reasonable assumptions and next steps.",
    "- Maintain continuity. Preserve task IDs and automation IDs from earlier turns.",
    "- If something is blocked, surface a direct ask with a suggested owner.",
)

DEFAULT_SYSTEM_PROMPT = """\
You are Autopilot, an autonomous operations agent that plans and tracks work for the user.
Each turn you return a reply plus the COMPLETE workspace: every task, automation, decision and \
insight that should exist after this turn, including unchanged items with their original IDs.

Current workspace ({{ date }}):
- {{ task_count }} task(s), {{ blocked_count }} blocked (max {{ max_tasks }})
- {{ automation_count }} automation(s) (max {{ max_automations }})
- {{ decision_count }} decision(s), {{ open_decision_count }} open (max {{ max_decisions }})
- {{ insight_count }} insight(s) (max {{ max_insights }})
- Last updated {{ updated_at }}
{% if task_count == 0 and automation_count == 0 %}
The workspace is empty. Propose a starting plan with concrete, owned tasks.
{% elif blocked_count > 0 %}
Review the blocked tasks first and propose how to unblock them.
{% endif %}
Keep task statuses to backlog, in-progress, blocked or done. Prefer concise titles and action-oriented descriptions.\
"""


def _workspace_vars(workspace: WorkspaceState) -> dict[str, object]:
    return {
        "task_count": len(workspace.tasks),
        "automation_count": len(workspace.automations),
        "decision_count": len(workspace.decisions),
        "insight_count": len(workspace.insights),
        "blocked_count": sum(1 for task in workspace.tasks if task.status == TaskStatus.BLOCKED),
        "open_decision_count": sum(1 for d in workspace.decisions if d.status == DecisionStatus.OPEN),
        "max_tasks": MAX_TASKS,
        "max_automations": MAX_AUTOMATIONS,
        "max_decisions": MAX_DECISIONS,
        "max_insights": MAX_INSIGHTS,
        "updated_at": workspace.updated_at.isoformat(),
        "date": datetime.now(tz=UTC).strftime("%Y-%m-%d"),
    }


def render_system_prompt(
    workspace: WorkspaceState,
    *,
    template: str | None = None,
    extra_vars: dict[str, object] | None = None,
) -> str:
    """Render system instructions from the current workspace state.

    Parameters
    ----------
    workspace:
        The workspace as sent by the client (before this turn's merge).
    template:
        Jinja2 template overriding ``DEFAULT_SYSTEM_PROMPT``.
    extra_vars:
        Additional template variables (override defaults on conflict).

    Returns
    -------
    str
        The rendered system prompt.  If the template contains no Jinja2
        syntax, it is returned unchanged.
    """
    raw = template or DEFAULT_SYSTEM_PROMPT
    if "{{" not in raw and "{%" not in raw:
        return raw

    template_vars = _workspace_vars(workspace)
    if extra_vars:
        template_vars.update(extra_vars)

    env = jinja2.Environment(autoescape=False, trim_blocks=True, lstrip_blocks=True)  # noqa: S701
    return env.from_string(raw).render(**template_vars)


def format_knowledge_entry(entry: KnowledgeEntry) -> str:
    bullets = "\n".join(f"- {item}" for item in entry.takeaways)
    return f"{entry.title} ({entry.domain.value})\n{entry.summary}\n{bullets}"


def build_prompt_payload(entries: Sequence[KnowledgeEntry], history: str) -> str:
    """Compose the per-turn prompt from retrieved knowledge and formatted history."""
    knowledge_summary = "\n\n".join(format_knowledge_entry(entry) for entry in entries).strip()

    return "\n".join(
        [
            "Context from curated knowledge base (use when helpful):",
            knowledge_summary or NO_KNOWLEDGE_PLACEHOLDER,
            "",
            "Conversation history:",
            history,
            "",
            "Instructions:",
            *OPERATING_INSTRUCTIONS,
        ]
    )
