"""Health endpoint tests."""

import pytest


@pytest.mark.asyncio
async def test_health_returns_ok(client):
    """Health endpoint should return server status and version."""
    resp = await client.get("/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "ok"
    assert "version" in data
    assert data["connections"] == 0


def test_health_counts_live_connections(ws_client):
    with ws_client.websocket_connect("/"):
        with ws_client.websocket_connect("/"):
            assert ws_client.get("/health").json()["connections"] == 2
        assert ws_client.get("/health").json()["connections"] == 1
    assert ws_client.get("/health").json()["connections"] == 0


def test_lifespan_logs_starting_then_shutdown(app):
    from starlette.testclient import TestClient
    from structlog.testing import capture_logs

    with capture_logs() as logs:
        with TestClient(app):
            pass

    events = [e["event"] for e in logs]
    assert events == ["relay.starting", "relay.shutdown"]
    starting = logs[0]
    assert starting["url"] == "ws://0.0.0.0:3000/"
