"""API route aggregation.

All HTTP routers registered here get mounted in main.py. The relay
itself is a WebSocket route and lives in wsrelay.realtime.websocket.
"""

from fastapi import APIRouter

from wsrelay.api.health import router as health_router

api_router = APIRouter()

api_router.include_router(health_router, tags=["health"])
