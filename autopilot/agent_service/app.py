from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.routing import APIRouter
from loguru import logger

from autopilot.agent_service.errors import AgentServiceError, GenerationError
from autopilot.agent_service.knowledge.search import load_knowledge_base
from autopilot.agent_service.log import configure_from_settings
from autopilot.agent_service.models.api import ErrorResponse
from autopilot.agent_service.settings import CREDENTIAL_ENV_VAR, get_settings


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    # -- Startup ---------------------------------------------------------------
    settings = get_settings()
    configure_from_settings(settings)

    logger.info("Agent Service starting (host={}, port={})", settings.host, settings.port)
    logger.info(
        "Generation: model={}, temperature={}, max_output_tokens={}",
        settings.model,
        settings.temperature,
        settings.max_output_tokens,
    )
    if not settings.has_credential():
        logger.warning("{} not set -- agent requests will be rejected", CREDENTIAL_ENV_VAR)

    knowledge = load_knowledge_base()
    logger.info("Knowledge base: {} entries loaded", len(knowledge))

    yield

    # -- Shutdown --------------------------------------------------------------
    logger.info("Agent Service shutting down")


app = FastAPI(title="Autopilot Agent Service", lifespan=lifespan)


# ---------------------------------------------------------------------------
# Error responses -- every failure becomes {"error": ...}
# ---------------------------------------------------------------------------


@app.exception_handler(AgentServiceError)
async def handle_agent_service_error(request: Request, exc: AgentServiceError) -> JSONResponse:
    if exc.status_code >= 500:
        cause = exc.__cause__ or exc
        logger.opt(exception=cause).error("{} {} failed: {}", request.method, request.url.path, exc)
    else:
        logger.warning("{} {} rejected: {}", request.method, request.url.path, exc)
    body = ErrorResponse(error=exc.public_message)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.opt(exception=exc).error("{} {} failed unexpectedly: {}", request.method, request.url.path, exc)
    body = ErrorResponse(error=GenerationError.public_message)
    return JSONResponse(status_code=GenerationError.status_code, content=body.model_dump())


# ---------------------------------------------------------------------------
# API router -- backend endpoints live under /api; the agent endpoint is
# also served at the root as /agent.
# ---------------------------------------------------------------------------
api = APIRouter(prefix="/api")


@api.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


from autopilot.agent_service.routers.agent import router as agent_router  # noqa: E402

api.include_router(agent_router)

app.include_router(api)
app.include_router(agent_router)
