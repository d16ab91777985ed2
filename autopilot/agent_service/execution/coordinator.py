"""Execution coordinator -- runs one agent turn end to end.

Pipeline for a parsed ``AgentRequest``:

1. **KnowledgeRetrieval**: search the corpus with the latest user message
   (empty query when there is none).
2. **PromptComposition**: system prompt from the workspace, prompt payload
   from knowledge + formatted history.
3. **Generation**: schema-constrained model call.
4. **Merge**: replace the workspace with the generated snapshot.

The caller (API layer) is responsible for the credential check, payload
parsing and mapping errors to responses.  Nothing is retried here and no
state survives the call: a turn either returns a fully merged workspace or
raises.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from autopilot.agent_service.execution.conversation import format_conversation_history, latest_user_message
from autopilot.agent_service.execution.merge import WorkspaceUpdate, merge_workspace
from autopilot.agent_service.execution.prompt import build_prompt_payload, render_system_prompt
from autopilot.agent_service.models.api import AgentRequest, AgentResponse

if TYPE_CHECKING:
    from autopilot.agent_service.execution.generation import StructuredGenerationClient
    from autopilot.agent_service.knowledge.search import KnowledgeBase
    from autopilot.agent_service.settings import AutopilotSettings

logger = logging.getLogger(__name__)


class AgentCoordinator:
    """Wires retrieval, prompting, generation and merge for a single turn."""

    def __init__(
        self,
        knowledge: KnowledgeBase,
        generator: StructuredGenerationClient,
        settings: AutopilotSettings,
    ) -> None:
        self._knowledge = knowledge
        self._generator = generator
        self._settings = settings

    def build_prompts(self, request: AgentRequest) -> tuple[str, str]:
        """Return ``(system_prompt, prompt_payload)`` for the request."""
        latest = latest_user_message(request.messages)
        query = latest.content if latest is not None else ""
        entries = self._knowledge.search(query, limit=self._settings.knowledge_limit)
        logger.debug("Knowledge retrieval: query=%r, hits=%d", query[:80], len(entries))

        system_prompt = render_system_prompt(request.workspace, template=self._settings.system_prompt)
        payload = build_prompt_payload(entries, format_conversation_history(request.messages))
        return system_prompt, payload

    async def run_turn(self, request: AgentRequest) -> AgentResponse:
        started = time.monotonic()
        system_prompt, payload = self.build_prompts(request)

        output = await self._generator.generate(system_prompt, payload)

        workspace = merge_workspace(request.workspace, WorkspaceUpdate.from_output(output))

        logger.info(
            "Agent turn completed: messages=%d, tasks=%d, automations=%d, decisions=%d, elapsed=%.2fs",
            len(request.messages),
            len(workspace.tasks),
            len(workspace.automations),
            len(workspace.decisions),
            time.monotonic() - started,
        )
        return AgentResponse(
            reply=output.reply,
            workspace=workspace,
            action_summary=output.action_summary,
        )
