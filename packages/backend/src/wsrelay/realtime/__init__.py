"""Real-time relay — registry, fan-out, and the WebSocket accept loop.

Learn: Three layers, each testable on its own:
1. Registry — the live set of open connections
2. Relay — connect/message/close/error events → registry + fan-out
3. WebSocket endpoint — turns a Starlette socket into Relay events

The Relay never touches a socket directly; it only sees Connection
objects. Tests plug in fake connections, production plugs in
WebSocketConnection.
"""

from wsrelay.realtime.registry import Connection, Payload, Registry
from wsrelay.realtime.relay import BroadcastResult, Relay

__all__ = [
    "BroadcastResult",
    "Connection",
    "Payload",
    "Registry",
    "Relay",
]
