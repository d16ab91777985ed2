"""Error taxonomy for a single agent turn.

Every error carries the HTTP status and the message that is safe to show
the client.  The underlying cause (``__cause__``) is for operator logs only.
"""

from __future__ import annotations

from fastapi import status

from autopilot.agent_service.settings import CREDENTIAL_ENV_VAR


class AgentServiceError(Exception):
    """Base class for errors that terminate a request with an error response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    public_message: str = "The autonomous agent could not complete the request."

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or self.public_message)


class ConfigurationError(AgentServiceError):
    """The generation credential is not configured.  Fatal until an operator fixes it."""

    public_message = (
        f"Missing {CREDENTIAL_ENV_VAR}. Set the environment variable to connect the autonomous agent."
    )


class PayloadError(AgentServiceError):
    """The request body is not a usable JSON payload."""

    status_code = status.HTTP_400_BAD_REQUEST
    public_message = "Invalid request payload."


class GenerationError(AgentServiceError):
    """Structured generation failed: transport, credential or schema violation.

    ``str(exc)`` holds the internal detail; clients only ever see
    ``public_message``.
    """
