"""WebSocket Connection Representation.

One Connection exists per connection attempt and holds the transport handle
plus timing and traffic counters for it.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

from chatbot_client.application.websocket.transport import Transport

log = logging.getLogger(__name__)


@dataclass(eq=False)
class Connection:
    """A single attempt to reach the backend over one transport."""

    transport: Transport

    connection_id: str = field(default_factory=lambda: str(uuid4()))

    # Timing info
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    opened_at: datetime | None = None
    closed_at: datetime | None = None
    last_activity: datetime = field(default_factory=lambda: datetime.now(UTC))

    # Message tracking
    frames_sent: int = 0
    frames_received: int = 0
    close_reason: str | None = None

    # Task driving open + receive loop
    task: asyncio.Task | None = None

    @property
    def url(self) -> str:
        return self.transport.url

    @property
    def is_open(self) -> bool:
        return self.transport.is_open

    def update_activity(self) -> None:
        self.last_activity = datetime.now(UTC)

    def record_opened(self) -> None:
        self.opened_at = datetime.now(UTC)
        self.update_activity()

    def record_received(self) -> None:
        self.frames_received += 1
        self.update_activity()

    def record_sent(self) -> None:
        self.frames_sent += 1
        self.update_activity()

    def record_closed(self, reason: str | None) -> None:
        self.closed_at = datetime.now(UTC)
        self.close_reason = reason

    def __repr__(self) -> str:
        return f"Connection(id={self.connection_id[:8]}..., url={self.url}, opened={self.opened_at is not None}, sent={self.frames_sent}, received={self.frames_received})"
