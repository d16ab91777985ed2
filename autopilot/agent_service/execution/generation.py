"""Structured generation client -- the only component that talks to the model.

Wraps a pydantic-ai ``Agent`` whose ``output_type`` is ``AgentOutput``.  The
SDK validates the model's output against the schema (the agent's
``retries`` is ``AUTOPILOT_OUTPUT_RETRIES``, so the model gets that many
chances to fix it); anything that still fails, along with transport and
credential problems, surfaces as ``GenerationError``.
Callers either get a fully validated ``AgentOutput`` or nothing.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic_ai import Agent, ModelSettings

from autopilot.agent_service.errors import GenerationError
from autopilot.agent_service.models.output import AgentOutput

if TYPE_CHECKING:
    from pydantic_ai.models import Model

    from autopilot.agent_service.settings import AutopilotSettings

logger = logging.getLogger(__name__)


def resolve_model_settings(settings: AutopilotSettings) -> ModelSettings:
    """Map service settings to SDK decoding settings."""
    return ModelSettings(
        temperature=settings.temperature,
        max_tokens=settings.max_output_tokens,
    )


def create_openai_model(settings: AutopilotSettings) -> Model:
    """Build the OpenAI chat model from settings.  Raises ``GenerationError`` without a credential."""
    if not settings.has_credential():
        msg = "Model credential is not configured"
        raise GenerationError(msg)

    from pydantic_ai.models.openai import OpenAIChatModel
    from pydantic_ai.providers.openai import OpenAIProvider

    api_key = settings.openai_api_key.get_secret_value()  # type: ignore[union-attr]
    return OpenAIChatModel(settings.model, provider=OpenAIProvider(api_key=api_key))


class StructuredGenerationClient:
    """Schema-constrained, non-streaming generation against a fixed output type.

    The model is built lazily on the first call so that constructing the
    client never requires a credential.  Pass ``model`` to inject any
    pydantic-ai model (tests use ``FunctionModel`` / ``TestModel``).
    """

    def __init__(self, settings: AutopilotSettings, *, model: Model | None = None) -> None:
        self._settings = settings
        self._model = model

    def _resolve_model(self) -> Model:
        if self._model is None:
            self._model = create_openai_model(self._settings)
        return self._model

    async def generate(self, system_instructions: str, prompt: str) -> AgentOutput:
        """Run one generation and return the validated structured result."""
        try:
            agent = Agent(
                self._resolve_model(),
                output_type=AgentOutput,
                instructions=system_instructions,
                model_settings=resolve_model_settings(self._settings),
                retries=self._settings.output_retries,
                name="autopilot",
            )
            result = await agent.run(prompt)
        except GenerationError:
            raise
        except Exception as exc:
            msg = f"Structured generation failed: {type(exc).__name__}: {exc}"
            raise GenerationError(msg) from exc

        usage = result.usage()
        logger.info(
            "Generation completed: requests=%d, total_tokens=%s",
            usage.requests,
            usage.total_tokens,
        )
        return result.output
