"""Data models for the agent service."""

from autopilot.agent_service.models.api import AgentRequest, AgentResponse, ErrorResponse
from autopilot.agent_service.models.conversation import Message
from autopilot.agent_service.models.enums import (
    AutomationStatus,
    DecisionStatus,
    KnowledgeDomain,
    MessageRole,
    Priority,
    TaskStatus,
)
from autopilot.agent_service.models.knowledge import KnowledgeEntry
from autopilot.agent_service.models.output import AgentOutput
from autopilot.agent_service.models.workspace import (
    Automation,
    Decision,
    Task,
    WorkspaceState,
    seed_workspace,
)

__all__ = [
    # Output schema
    "AgentOutput",
    # API schemas
    "AgentRequest",
    "AgentResponse",
    # Workspace
    "Automation",
    # Enums
    "AutomationStatus",
    "Decision",
    "DecisionStatus",
    "ErrorResponse",
    "KnowledgeDomain",
    # Knowledge
    "KnowledgeEntry",
    # Conversation
    "Message",
    "MessageRole",
    "Priority",
    "Task",
    "TaskStatus",
    "WorkspaceState",
    "seed_workspace",
]
