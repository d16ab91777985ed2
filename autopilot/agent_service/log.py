"""Process-wide logging for the agent service.

loguru owns the output.  Records from stdlib loggers (the service's own
modules, uvicorn, the OpenAI client) are forwarded into it, so a turn's
retrieval, generation and error lines all share one sink and one format.
Set ``AUTOPILOT_LOG_JSON=true`` to emit one JSON object per line instead of
the human-readable format.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, TextIO

from loguru import logger

if TYPE_CHECKING:
    from autopilot.agent_service.settings import AutopilotSettings

TEXT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

# Per-request chatter that would drown the per-turn lines
QUIET_LOGGERS = ("uvicorn.access", "httpx", "httpcore", "openai")


class StdlibForwarder(logging.Handler):
    """Re-emit stdlib log records through loguru at the original call site."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(level: str = "INFO", *, serialize: bool = False, sink: TextIO | None = None) -> int:
    """Replace every loguru sink with a single one and route stdlib logging into it.

    Returns the loguru handler id of the new sink.
    """
    level = level.upper()

    logger.remove()
    handler_id = logger.add(
        sink or sys.stderr,
        level=level,
        format=TEXT_FORMAT,
        serialize=serialize,
        colorize=None if sink is None else False,
    )

    logging.basicConfig(handlers=[StdlibForwarder()], level=0, force=True)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger.debug("Logging configured (level={}, json={})", level, serialize)
    return handler_id


def configure_from_settings(settings: AutopilotSettings) -> int:
    return setup_logging(settings.log_level, serialize=settings.log_json)
