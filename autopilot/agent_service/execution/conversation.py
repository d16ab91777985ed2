"""Conversation history rendering for the generation prompt."""

from __future__ import annotations

from typing import TYPE_CHECKING

from autopilot.agent_service.models.enums import MessageRole

if TYPE_CHECKING:
    from collections.abc import Sequence

    from autopilot.agent_service.models.conversation import Message


def format_conversation_history(messages: Sequence[Message]) -> str:
    """Render messages as ``role: content`` lines in dialogue order."""
    return "\n".join(f"{message.role.value}: {message.content}" for message in messages)


def latest_user_message(messages: Sequence[Message]) -> Message | None:
    """Return the most recent user-authored message, if any."""
    for message in reversed(messages):
        if message.role == MessageRole.USER:
            return message
    return None
