"""Health check endpoint.

Learn: Simple GET endpoint that verifies the server is running and
reports how many clients are currently registered with the relay.
"""

from fastapi import APIRouter, Request

from wsrelay import __version__

router = APIRouter()


@router.get("/health")
async def health_check(request: Request):
    """Check server health and report live connection count."""
    relay = request.app.state.relay
    return {
        "status": "ok",
        "version": __version__,
        "connections": relay.connection_count,
    }
