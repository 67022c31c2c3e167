"""FastAPI application factory.

Learn: App factory pattern — create_app() returns a configured FastAPI
instance with its own Relay (and therefore its own Registry) on
app.state. Lifespan logs startup/shutdown; there is nothing else to
open or close since the relay keeps no external resources.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from wsrelay import __version__
from wsrelay.api import api_router
from wsrelay.config import Settings, settings
from wsrelay.realtime.relay import Relay
from wsrelay.realtime.websocket import create_router

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle.

    Learn: Anything before `yield` runs at startup, after `yield` runs
    at shutdown. Open sockets are closed by the server itself.

    This runs before uvicorn binds the port, so it only announces the
    target address; uvicorn logs its own line once it is listening.
    """
    config: Settings = app.state.settings
    logger.info(
        "relay.starting",
        version=__version__,
        environment=config.environment,
        url=f"ws://{config.host}:{config.port}{config.ws_path}",
    )

    yield

    logger.info(
        "relay.shutdown",
        connections=app.state.relay.connection_count,
    )


def create_app(config: Settings = settings) -> FastAPI:
    """Build and return the FastAPI application."""
    app = FastAPI(
        title="wsrelay",
        description="Minimal real-time WebSocket relay — every message goes to every other client",
        version=__version__,
        debug=config.debug,
        lifespan=lifespan,
    )

    app.state.settings = config
    app.state.relay = Relay()

    app.include_router(api_router)
    app.include_router(create_router(config.ws_path))

    return app


# Default app instance (used by uvicorn: wsrelay.main:app)
app = create_app()
