"""Payload builders and a scripted model for agent-service tests.

Generation is driven by a pydantic-ai ``FunctionModel`` that replays scripted
structured outputs and records every request it receives.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from pydantic_ai.messages import ModelMessage, ModelRequest, ModelResponse, ToolCallPart, UserPromptPart
from pydantic_ai.models.function import AgentInfo, FunctionModel

SEED_TIME = datetime(2026, 1, 5, 9, 0, tzinfo=UTC)


def task_payload(task_id: str, title: str, **overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": task_id,
        "title": title,
        "description": f"{title} description",
        "status": "backlog",
        "priority": "medium",
    }
    payload.update(overrides)
    return payload


def output_payload(**overrides: Any) -> dict[str, Any]:
    """A schema-valid structured output as the model would emit it (camelCase)."""
    payload: dict[str, Any] = {
        "reply": "Drafted the onboarding launch plan.",
        "tasks": [task_payload("task-1", "Define activation metric", status="in-progress", priority="high")],
        "automations": [],
        "decisions": [],
        "insights": ["Activation is the launch's success metric."],
        "actionSummary": ["Created the launch task list."],
    }
    payload.update(overrides)
    return payload


def message_payload(message_id: str, role: str, content: str) -> dict[str, Any]:
    return {"id": message_id, "role": role, "content": content, "createdAt": "2026-01-05T09:00:00Z"}


@dataclass
class ScriptedModel:
    """Replays ``outputs`` in order (the last one repeats) or raises ``error``."""

    outputs: list[dict[str, Any]]
    error: Exception | None = None
    calls: list[list[ModelMessage]] = field(default_factory=list)

    def __post_init__(self) -> None:
        def respond(messages: list[ModelMessage], info: AgentInfo) -> ModelResponse:
            self.calls.append(list(messages))
            if self.error is not None:
                raise self.error
            args = self.outputs[min(len(self.calls), len(self.outputs)) - 1]
            return ModelResponse(parts=[ToolCallPart(tool_name=info.output_tools[0].name, args=args)])

        self.model = FunctionModel(respond)

    def first_request(self) -> ModelRequest:
        request = self.calls[0][0]
        assert isinstance(request, ModelRequest)
        return request

    def user_prompt(self) -> str:
        for part in self.first_request().parts:
            if isinstance(part, UserPromptPart):
                assert isinstance(part.content, str)
                return part.content
        raise AssertionError("no user prompt sent")

    def instructions(self) -> str | None:
        return self.first_request().instructions


def scripted(*outputs: dict[str, Any], error: Exception | None = None) -> ScriptedModel:
    return ScriptedModel(outputs=list(outputs) or [output_payload()], error=error)
