"""Connection registry — the live set of open client connections.

Learn: The registry is an explicit object owned by the Relay, not a
module-level set. The app factory creates one per app, so tests can
build a Registry, add fake connections, and assert on broadcast
behavior without a network listener.

Invariant: a connection is in the registry iff it has not yet
signaled close or error. Adding the same connection twice is a no-op;
removing an absent one is a no-op.
"""

import uuid
from abc import ABC, abstractmethod
from typing import Iterator, Optional, Union

# Opaque message body: text frames stay str, binary frames stay bytes
Payload = Union[str, bytes]


class Connection(ABC):
    """One client's persistent session with the relay.

    Learn: Implement this to plug a new transport into the relay.
    The relay only needs to know whether the transport is open and
    how to hand it a payload.
    """

    def __init__(self, connection_id: Optional[str] = None):
        self.id = connection_id or uuid.uuid4().hex[:8]

    @property
    @abstractmethod
    def is_open(self) -> bool:
        """True while the transport can still accept sends."""
        ...

    @abstractmethod
    async def send(self, payload: Payload) -> None:
        """Deliver a payload unmodified through the transport."""
        ...

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id} open={self.is_open}>"


class Registry:
    """Insertion-ordered set of live connections."""

    def __init__(self) -> None:
        # dict keeps insertion order and gives O(1) add/remove
        self._members: dict[Connection, None] = {}

    def add(self, connection: Connection) -> None:
        self._members[connection] = None

    def remove(self, connection: Connection) -> bool:
        """Remove a connection. Returns False if it was already gone."""
        if connection not in self._members:
            return False
        del self._members[connection]
        return True

    def snapshot(self) -> list[Connection]:
        """A stable copy of the members, safe to iterate across awaits."""
        return list(self._members)

    def __contains__(self, connection: object) -> bool:
        return connection in self._members

    def __iter__(self) -> Iterator[Connection]:
        return iter(self.snapshot())

    def __len__(self) -> int:
        return len(self._members)
