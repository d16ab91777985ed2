"""Agent turn endpoint.

``POST /agent`` takes the conversation and the client-held workspace and
returns the agent's reply with the merged workspace.  Stages run in order
and the first failure ends the request:

CredentialCheck -> PayloadParse -> (coordinator: retrieve, compose,
generate, merge) -> Response.

Errors are raised as ``AgentServiceError`` subclasses and rendered as
``{"error": ...}`` by the app-level exception handler.  ``AgentRoute`` turns
any other failure on these routes, including dependency construction and
response serialization, into ``GenerationError``.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from fastapi import APIRouter, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.routing import APIRoute
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from autopilot.agent_service.deps import Coordinator, Settings
from autopilot.agent_service.errors import AgentServiceError, ConfigurationError, GenerationError, PayloadError
from autopilot.agent_service.models.api import AgentRequest, AgentResponse, ErrorResponse


class AgentRoute(APIRoute):
    """Route whose unexpected failures surface as ``GenerationError``."""

    def get_route_handler(self) -> Callable[[Request], Awaitable[Response]]:
        handler = super().get_route_handler()

        async def guarded_handler(request: Request) -> Response:
            try:
                return await handler(request)
            except (AgentServiceError, StarletteHTTPException, RequestValidationError):
                raise
            except Exception as exc:
                msg = f"Agent turn failed: {type(exc).__name__}: {exc}"
                raise GenerationError(msg) from exc

        return guarded_handler


router = APIRouter(prefix="/agent", tags=["agent"], route_class=AgentRoute)


async def parse_agent_request(request: Request) -> AgentRequest:
    """Read and validate the JSON body.  Raises ``PayloadError``."""
    try:
        payload = await request.json()
    except (ValueError, RecursionError) as exc:
        msg = f"Request body is not valid JSON: {exc}"
        raise PayloadError(msg) from exc

    try:
        return AgentRequest.model_validate(payload)
    except ValidationError as exc:
        msg = f"Request body does not match the agent request schema ({exc.error_count()} errors)"
        raise PayloadError(msg) from exc


@router.post(
    "",
    response_model=AgentResponse,
    response_model_exclude_none=True,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
)
async def run_agent(request: Request, settings: Settings, coordinator: Coordinator) -> AgentResponse:
    """Run one agent turn and return the reply with the merged workspace."""
    if not settings.has_credential():
        raise ConfigurationError

    agent_request = await parse_agent_request(request)

    return await coordinator.run_turn(agent_request)
