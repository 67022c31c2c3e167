"""wsrelay — a minimal real-time WebSocket message relay.

Every message a client sends is forwarded verbatim to every other
connected client. No auth, no persistence, no protocol on top of the
transport's own framing.
"""

__version__ = "0.1.0"
