"""Knowledge corpus entry model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from autopilot.agent_service.models.enums import KnowledgeDomain


class KnowledgeEntry(BaseModel):
    """A retrievable reference snippet from the curated corpus."""

    model_config = ConfigDict(frozen=True)

    title: str
    domain: KnowledgeDomain
    summary: str
    takeaways: list[str] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list, description="Extra search terms, not rendered in prompts")
