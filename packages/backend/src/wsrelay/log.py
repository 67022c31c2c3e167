"""Logging setup — structlog with contextvars for per-connection context.

Learn: Every log line is a structured event ("relay.message_forwarded")
plus key/value context. The accept loop binds connection_id into
structlog's contextvars, so everything logged while handling that
connection carries it without passing it around.
"""

import logging
import sys
from typing import Optional, Union

import structlog

from wsrelay.config import settings


def configure_logging(level: str = "INFO", json: bool = False) -> None:
    """Configure structlog (and stdlib logging, for uvicorn's own lines)."""
    numeric_level = logging.getLevelName(level.upper())

    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if json
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,
    )


def payload_preview(payload: Union[str, bytes], limit: Optional[int] = None) -> str:
    """Render a payload for a log line without dumping huge blobs.

    Text is truncated to `limit` characters (default from settings);
    binary payloads are shown by size only.
    """
    if isinstance(payload, bytes):
        return f"<{len(payload)} bytes>"
    if limit is None:
        limit = settings.log_payload_preview
    if limit < 1:
        raise ValueError("limit must be at least 1")
    if len(payload) <= limit:
        return payload
    return payload[:limit] + f"... ({len(payload)} chars)"
