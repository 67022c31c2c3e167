"""Test fixtures — fake connections for unit tests, a live app for integration.

Learn: Two testing layers:

1. Relay/Registry unit tests use FakeConnection — an in-memory transport
   that records what it was sent and can be closed or broken on demand.
   No sockets, no event loop tricks.
2. WebSocket tests run a fresh app per test through Starlette's
   TestClient. Used as a context manager, every websocket session
   shares one event loop, just like clients of a real uvicorn process.
"""

from typing import Optional

import pytest
from httpx import ASGITransport, AsyncClient
from starlette.testclient import TestClient

from wsrelay.config import Settings
from wsrelay.main import create_app
from wsrelay.realtime.registry import Connection
from wsrelay.realtime.relay import Relay


class FakeConnection(Connection):
    """In-memory transport that records every payload it is sent."""

    def __init__(self, name: Optional[str] = None):
        super().__init__(connection_id=name)
        self.received: list = []
        self.open = True
        self.broken = False

    @property
    def is_open(self) -> bool:
        return self.open

    async def send(self, payload) -> None:
        if self.broken:
            raise ConnectionResetError("connection reset by peer")
        self.received.append(payload)

    def close(self) -> None:
        self.open = False


@pytest.fixture()
def make_conn():
    """Factory for named FakeConnections."""
    return FakeConnection


@pytest.fixture()
def relay():
    return Relay()


@pytest.fixture()
def app():
    """Fresh app (and Relay) per test — no registry leaks between tests."""
    return create_app(Settings())


@pytest.fixture()
def ws_client(app):
    with TestClient(app) as tc:
        yield tc


@pytest.fixture()
async def client(app):
    """Async HTTP client for the plain HTTP routes."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
