"""Unit tests for the full-snapshot workspace merge."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from autopilot.agent_service.execution.merge import TIMESTAMP_STEP, WorkspaceUpdate, merge_workspace, next_timestamp
from autopilot.agent_service.models.enums import AutomationStatus, Priority, TaskStatus
from autopilot.agent_service.models.output import AgentOutput
from autopilot.agent_service.models.workspace import Automation, Task, WorkspaceState

_PRIOR_TIME = datetime(2026, 1, 5, 9, 0, tzinfo=UTC)


def _task(task_id: str, title: str | None = None, status: TaskStatus = TaskStatus.BACKLOG) -> Task:
    return Task(id=task_id, title=title or task_id, description="", status=status, priority=Priority.MEDIUM)


def _prior(**overrides) -> WorkspaceState:
    defaults: dict = {
        "tasks": [_task("t1"), _task("t2")],
        "automations": [
            Automation(id="a1", name="Digest", cadence="daily", description="", status=AutomationStatus.SCHEDULED)
        ],
        "insights": ["old insight"],
        "knowledge_highlights": ["Launch checklist"],
        "updated_at": _PRIOR_TIME,
    }
    defaults.update(overrides)
    return WorkspaceState(**defaults)


def _update(**overrides) -> WorkspaceUpdate:
    defaults: dict = {"tasks": [], "automations": [], "decisions": [], "insights": []}
    defaults.update(overrides)
    return WorkspaceUpdate(**defaults)


def test_identity_continuity_with_new_task() -> None:
    prior = _prior()
    new_task = _task("t3", "Write FAQ")
    generated = [*prior.tasks, new_task]

    merged = merge_workspace(prior, _update(tasks=generated))

    assert [task.id for task in merged.tasks] == ["t1", "t2", "t3"]
    assert merged.tasks[:2] == prior.tasks


def test_lists_replaced_wholesale() -> None:
    prior = _prior()
    merged = merge_workspace(prior, _update(tasks=[_task("t2", status=TaskStatus.DONE)], insights=["new"]))

    assert [task.id for task in merged.tasks] == ["t2"]
    assert merged.tasks[0].status == TaskStatus.DONE
    assert merged.automations == []
    assert merged.insights == ["new"]


def test_generated_order_is_kept() -> None:
    prior = _prior()
    merged = merge_workspace(prior, _update(tasks=[_task("t2"), _task("t1")]))
    assert [task.id for task in merged.tasks] == ["t2", "t1"]


def test_knowledge_highlights_fall_back_to_prior() -> None:
    prior = _prior()
    merged = merge_workspace(prior, _update())
    assert merged.knowledge_highlights == ["Launch checklist"]


def test_knowledge_highlights_replaced_when_supplied() -> None:
    merged = merge_workspace(_prior(), _update(knowledge_highlights=["Decision logs"]))
    assert merged.knowledge_highlights == ["Decision logs"]


def test_knowledge_highlights_empty_list_is_a_replacement() -> None:
    merged = merge_workspace(_prior(), _update(knowledge_highlights=[]))
    assert merged.knowledge_highlights == []


def test_prior_is_not_mutated() -> None:
    prior = _prior()
    snapshot = prior.model_copy(deep=True)
    merge_workspace(prior, _update(tasks=[_task("x")]))
    assert prior == snapshot


def test_updated_at_uses_merge_clock() -> None:
    now = _PRIOR_TIME + timedelta(minutes=5)
    merged = merge_workspace(_prior(), _update(), now=now)
    assert merged.updated_at == now


def test_updated_at_strictly_increases_under_clock_skew() -> None:
    skewed = _PRIOR_TIME - timedelta(hours=1)
    merged = merge_workspace(_prior(), _update(), now=skewed)
    assert merged.updated_at == _PRIOR_TIME + TIMESTAMP_STEP


def test_successive_merges_are_monotonic() -> None:
    frozen = _PRIOR_TIME + timedelta(seconds=1)
    first = merge_workspace(_prior(), _update(), now=frozen)
    second = merge_workspace(first, _update(), now=frozen)
    assert second.updated_at > first.updated_at > _PRIOR_TIME


def test_next_timestamp_defaults_to_now() -> None:
    assert next_timestamp(_PRIOR_TIME) > _PRIOR_TIME


def test_update_from_output() -> None:
    output = AgentOutput(
        reply="ok",
        tasks=[_task("t1")],
        automations=[],
        decisions=[],
        insights=["i"],
        action_summary=["did it"],
    )
    update = WorkspaceUpdate.from_output(output)
    assert update.tasks == output.tasks
    assert update.knowledge_highlights is None
