"""Shared enumerations used across the agent service."""

from __future__ import annotations

from enum import StrEnum

# -- Conversation ------------------------------------------------------------


class MessageRole(StrEnum):
    USER = "user"
    ASSISTANT = "assistant"


# -- Workspace ---------------------------------------------------------------


class TaskStatus(StrEnum):
    """Kanban column a task sits in."""

    BACKLOG = "backlog"
    IN_PROGRESS = "in-progress"
    BLOCKED = "blocked"
    DONE = "done"


class Priority(StrEnum):
    """Shared low/medium/high scale (task priority, decision impact)."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class AutomationStatus(StrEnum):
    IDLE = "idle"
    SCHEDULED = "scheduled"
    RUNNING = "running"


class DecisionStatus(StrEnum):
    OPEN = "open"
    CLOSED = "closed"


# -- Knowledge ---------------------------------------------------------------


class KnowledgeDomain(StrEnum):
    """Domains the curated knowledge corpus is organised by."""

    PRODUCT = "product"
    OPERATIONS = "operations"
    GROWTH = "growth"
    FINANCE = "finance"
    PEOPLE = "people"
    ENGINEERING = "engineering"
