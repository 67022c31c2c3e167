"""Relay — connection lifecycle events and broadcast fan-out.

Learn: The accept loop calls these four methods explicitly:

  on_connect → registry.add
  on_message → forward to every other open member
  on_close   → registry.remove (idempotent)
  on_error   → same as on_close, plus a warning

Fan-out is best-effort and concurrent. A recipient whose send stalls
or fails never holds up the others. Failures are logged and counted,
never retried.
The sender hears nothing back either way.
"""

import asyncio
from dataclasses import dataclass
from typing import Optional

import structlog

from wsrelay.log import payload_preview
from wsrelay.realtime.registry import Connection, Payload, Registry

logger = structlog.get_logger()


@dataclass
class BroadcastResult:
    """Outcome of one on_message fan-out."""

    delivered: int = 0
    failed: int = 0

    @property
    def attempted(self) -> int:
        return self.delivered + self.failed


class Relay:
    """Forwards each client's messages to every other open client."""

    def __init__(self, registry: Optional[Registry] = None):
        self.registry = registry if registry is not None else Registry()

    @property
    def connection_count(self) -> int:
        return len(self.registry)

    def on_connect(self, connection: Connection) -> None:
        self.registry.add(connection)
        logger.info(
            "relay.client_connected",
            connection_id=connection.id,
            connections=len(self.registry),
        )

    async def on_message(self, sender: Connection, payload: Payload) -> BroadcastResult:
        """Forward `payload` unmodified to every open member except `sender`.

        Sends run concurrently, so a stalled recipient never holds up the
        others. Targets come from a snapshot taken on entry: members that
        join mid-broadcast are not targeted, and members that close
        mid-broadcast fail the is_open check instead of breaking iteration.
        The sender's read loop awaits the whole fan-out before reading its
        next frame, so each recipient still sees that sender's messages in
        order.
        """
        logger.info(
            "relay.message_received",
            connection_id=sender.id,
            kind="binary" if isinstance(payload, bytes) else "text",
            payload=payload_preview(payload),
        )

        targets = [m for m in self.registry.snapshot() if m is not sender]
        outcomes = await asyncio.gather(
            *(self._forward(sender, member, payload) for member in targets)
        )

        return BroadcastResult(
            delivered=sum(1 for o in outcomes if o is True),
            failed=sum(1 for o in outcomes if o is False),
        )

    async def _forward(
        self, sender: Connection, member: Connection, payload: Payload
    ) -> Optional[bool]:
        """Send to one member. True = delivered, False = failed, None = skipped."""
        if not member.is_open:
            return None
        try:
            await member.send(payload)
        except Exception as e:
            logger.warning(
                "relay.forward_failed",
                connection_id=sender.id,
                recipient_id=member.id,
                error=str(e) or type(e).__name__,
            )
            return False
        logger.info(
            "relay.message_forwarded",
            connection_id=sender.id,
            recipient_id=member.id,
        )
        return True

    def on_close(self, connection: Connection) -> None:
        if not self.registry.remove(connection):
            return
        logger.info(
            "relay.client_disconnected",
            connection_id=connection.id,
            connections=len(self.registry),
        )

    def on_error(self, connection: Connection, err: BaseException) -> None:
        logger.warning(
            "relay.client_error",
            connection_id=connection.id,
            error=str(err) or type(err).__name__,
        )
        self.on_close(connection)
