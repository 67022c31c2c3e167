"""WebSocket endpoint — the accept loop that feeds the Relay.

Learn: Each client connects to ws://host:port/ (path configurable).
The handler:
1. Accepts the socket and registers it with the Relay
2. Reads raw ASGI frames — text stays str, binary stays bytes
3. Hands every frame to relay.on_message
4. On disconnect → relay.on_close; on transport error → relay.on_error

This is a long-lived connection — one per client. The Relay comes
from app.state via a dependency, so there is no module-level registry.
"""

import structlog
from fastapi import APIRouter, Depends, WebSocket
from starlette.websockets import WebSocketState

from wsrelay.realtime.registry import Connection, Payload
from wsrelay.realtime.relay import Relay

logger = structlog.get_logger()


class WebSocketConnection(Connection):
    """Connection backed by a Starlette WebSocket."""

    def __init__(self, websocket: WebSocket):
        super().__init__()
        self.websocket = websocket

    @property
    def is_open(self) -> bool:
        return (
            self.websocket.application_state == WebSocketState.CONNECTED
            and self.websocket.client_state == WebSocketState.CONNECTED
        )

    async def send(self, payload: Payload) -> None:
        if isinstance(payload, bytes):
            await self.websocket.send_bytes(payload)
        else:
            await self.websocket.send_text(payload)


def get_relay(websocket: WebSocket) -> Relay:
    """Resolve the app's Relay (created in create_app)."""
    return websocket.app.state.relay


async def relay_websocket(websocket: WebSocket, relay: Relay = Depends(get_relay)):
    """Relay every frame from this client to all other connected clients."""
    await websocket.accept()

    connection = WebSocketConnection(websocket)
    structlog.contextvars.bind_contextvars(connection_id=connection.id)
    relay.on_connect(connection)

    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break

            # Exactly one of text/bytes is set on a receive event
            text = message.get("text")
            payload = text if text is not None else message.get("bytes")
            if payload is None:
                continue
            await relay.on_message(connection, payload)
    except Exception as e:
        relay.on_error(connection, e)
    finally:
        relay.on_close(connection)
        structlog.contextvars.unbind_contextvars("connection_id")
        if websocket.application_state == WebSocketState.CONNECTED and (
            websocket.client_state == WebSocketState.CONNECTED
        ):
            await websocket.close()


def create_router(path: str = "/") -> APIRouter:
    """Build the router that mounts the relay endpoint at `path`."""
    router = APIRouter()
    router.add_api_websocket_route(path, relay_websocket, name="relay")
    return router
