"""WebSocket Connection Manager.

Owns the single backend connection, providing:
- Connection lifecycle (connect, loss detection)
- Watchdog reconnection on a fixed interval
- Best-effort frame sending
- Inbound decoding and in-order dispatch to the session state machine

Implements neuroglia's HostedService so the host can start and stop it.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any
from urllib.parse import urlsplit, urlunsplit

from neuroglia.hosting.abstractions import HostedService

from chatbot_client.application.protocol import decode
from chatbot_client.application.websocket.connection import Connection
from chatbot_client.application.websocket.state import ConnectionStateMachine
from chatbot_client.application.websocket.transport import TransportFactory
from chatbot_client.domain.enums import ConnectionState
from chatbot_client.domain.exceptions import MalformedFrameError, TransportError
from chatbot_client.domain.models import Frame

if TYPE_CHECKING:
    from chatbot_client.application.settings import Settings

log = logging.getLogger(__name__)

MessageHandler = Callable[[Frame], Awaitable[None]]
OpenCallback = Callable[[], Awaitable[None]]
CloseCallback = Callable[[str | None], Awaitable[None]]


def build_websocket_url(page_url: str, path: str = "/ws") -> str:
    """Derive the WebSocket endpoint from the hosting page URL.

    ``https`` pages get ``wss``, everything else gets plain ``ws``.

    Args:
        page_url: URL of the page the client is served from, e.g. "https://chat.example.com/"
        path: Endpoint path on the same host

    Returns:
        The endpoint URL, e.g. "wss://chat.example.com/ws"
    """
    parts = urlsplit(page_url)
    scheme = "wss" if parts.scheme.lower() == "https" else "ws"
    netloc = parts.netloc or parts.path.split("/")[0]
    if not path.startswith("/"):
        path = f"/{path}"
    return urlunsplit((scheme, netloc, path, "", ""))


class ConnectionManager(HostedService):
    """Manages the one backend connection of the session client.

    Implements HostedService for lifecycle management:
    - start_async(): connects and starts the watchdog task
    - stop_async(): stops the watchdog and closes the transport

    At most one connection attempt exists at a time: ``connect()`` is a no-op
    unless the state is DISCONNECTED. Reconnection is left entirely to the
    watchdog, which retries every ``watchdog_interval_seconds`` without backoff
    and without a retry limit.
    """

    def __init__(
        self,
        transport_factory: TransportFactory,
        page_url: str = "http://localhost:8080/",
        websocket_path: str = "/ws",
        watchdog_interval_seconds: float = 5.0,
    ):
        """Initialize the ConnectionManager.

        Args:
            transport_factory: Builds a fresh transport for an endpoint URL
            page_url: URL of the hosting page; its scheme picks ws or wss
            websocket_path: Endpoint path (default: /ws)
            watchdog_interval_seconds: Interval between reconnection checks (default: 5s)
        """
        self._transport_factory = transport_factory
        self._websocket_url = build_websocket_url(page_url, websocket_path)
        self._watchdog_interval = watchdog_interval_seconds

        self._state_machine = ConnectionStateMachine()
        self._connection: Connection | None = None

        # Background tasks
        self._watchdog_task: asyncio.Task | None = None
        self._running = False

        # Event callbacks
        self._message_handler: MessageHandler | None = None
        self._on_open_callbacks: list[OpenCallback] = []
        self._on_close_callbacks: list[CloseCallback] = []

        # Counters
        self._connect_attempts = 0
        self._frames_sent = 0
        self._frames_received = 0
        self._frames_dropped = 0
        self._sends_lost = 0

        log.info(f"ConnectionManager initialized for {self._websocket_url}")

    @classmethod
    def from_settings(cls, settings: "Settings", transport_factory: TransportFactory) -> "ConnectionManager":
        """Build a manager from application settings.

        Args:
            settings: The application Settings
            transport_factory: Builds a fresh transport for an endpoint URL
        """
        return cls(
            transport_factory=transport_factory,
            page_url=settings.page_url,
            websocket_path=settings.websocket_path,
            watchdog_interval_seconds=settings.watchdog_interval,
        )

    @property
    def state(self) -> ConnectionState:
        return self._state_machine.state

    @property
    def state_machine(self) -> ConnectionStateMachine:
        return self._state_machine

    @property
    def websocket_url(self) -> str:
        return self._websocket_url

    @property
    def connection(self) -> Connection | None:
        """The current connection attempt, if any."""
        return self._connection

    # =========================================================================
    # Connection Lifecycle
    # =========================================================================

    def connect(self) -> bool:
        """Start a connection attempt unless one is already open or in flight.

        The state becomes CONNECTING immediately; the opening handshake and the
        receive loop run in a background task.

        Returns:
            True if a new attempt was started, False if it was a no-op
        """
        if not self._state_machine.is_idle:
            log.debug(f"connect() ignored, connection is {self.state.value}")
            return False

        transport = self._transport_factory(self._websocket_url)
        connection = Connection(transport=transport)
        self._connection = connection
        self._connect_attempts += 1
        self._state_machine.transition_to(ConnectionState.CONNECTING, "connect_requested")
        log.info(f"🔌 Connecting to {self._websocket_url} (attempt {self._connect_attempts})")

        connection.task = asyncio.create_task(self._run_connection(connection))
        return True

    def watchdog_tick(self) -> bool:
        """Reconnect if the connection is down.

        Returns:
            True if a connection attempt was started
        """
        if self._state_machine.is_idle:
            log.debug("Watchdog found connection down, reconnecting")
            return self.connect()
        return False

    async def _run_connection(self, connection: Connection) -> None:
        """Open the transport, then pump inbound messages until it closes."""
        try:
            await connection.transport.open()
        except asyncio.CancelledError:
            await self._handle_closed(connection, "cancelled")
            raise
        except Exception as e:
            log.warning(f"Connection to {connection.url} failed: {e}")
            await self._handle_closed(connection, f"open_failed: {e}")
            return

        if connection is not self._connection:
            await connection.transport.close()
            return

        connection.record_opened()
        self._state_machine.transition_to(ConnectionState.OPEN, "transport_open")
        log.info(f"🔌 Connection established: {connection}")
        await self._notify_open()

        reason = "transport_closed"
        try:
            async for raw in connection.transport.messages():
                connection.record_received()
                await self._dispatch(raw)
        except asyncio.CancelledError:
            await self._handle_closed(connection, "cancelled")
            raise
        except Exception as e:
            log.warning(f"Connection {connection.connection_id[:8]}... lost: {e}")
            reason = f"transport_error: {e}"

        await self._handle_closed(connection, reason)

    async def _handle_closed(self, connection: Connection, reason: str | None) -> None:
        """Revert to DISCONNECTED and notify listeners. Stale connections are ignored."""
        if connection is not self._connection:
            log.debug(f"Ignoring close of superseded connection {connection.connection_id[:8]}...")
            return

        self._connection = None
        connection.record_closed(reason)
        self._state_machine.transition_to(ConnectionState.DISCONNECTED, reason)
        log.info(f"🔌 Disconnected: {connection} (reason: {reason})")

        # Listeners run before the transport close suspends, so a newer attempt cannot open first
        for callback in list(self._on_close_callbacks):
            if self._connection is not None and self._connection.opened_at is not None:
                log.debug(f"Skipping close notification, {self._connection} is already open")
                break
            try:
                await callback(reason)
            except Exception as e:
                log.error(f"Error in on_close callback: {e}")

        try:
            await connection.transport.close()
        except Exception as e:
            log.debug(f"Error closing transport: {e}")

    async def _notify_open(self) -> None:
        for callback in list(self._on_open_callbacks):
            try:
                await callback()
            except Exception as e:
                log.error(f"Error in on_open callback: {e}")

    # =========================================================================
    # Message Sending
    # =========================================================================

    async def send(self, raw: str) -> bool:
        """Send an encoded frame.

        If the connection is not open, a connection attempt is started first
        (fire and forget) and the send is attempted anyway. Because the new
        connection cannot be open yet, such a frame is lost; there is no
        pending-send queue.

        Args:
            raw: The encoded frame

        Returns:
            True if the transport accepted the frame, False if it was lost
        """
        if not self._state_machine.is_open:
            log.info(f"Send requested while {self.state.value}, starting connection attempt")
            self.connect()

        connection = self._connection
        if connection is None or not connection.is_open:
            self._sends_lost += 1
            log.warning(f"Frame lost, connection is {self.state.value}: {raw[:64]!r}")
            return False

        try:
            await connection.transport.send(raw)
        except TransportError as e:
            self._sends_lost += 1
            log.error(f"Failed to send frame on {connection.connection_id[:8]}...: {e}")
            return False

        connection.record_sent()
        self._frames_sent += 1
        log.debug(f"📤 Sent {raw[:2]!r} frame ({len(raw)} chars)")
        return True

    # =========================================================================
    # Inbound Dispatch
    # =========================================================================

    async def _dispatch(self, raw: str | bytes) -> None:
        """Decode one inbound message and hand it to the message handler."""
        try:
            frame = decode(raw)
        except MalformedFrameError as e:
            self._frames_dropped += 1
            log.warning(f"Dropping inbound message: {e}")
            return

        self._frames_received += 1
        log.debug(f"📥 Received {frame.tag!r} frame ({len(frame.payload)} chars)")

        if self._message_handler is None:
            log.debug("No message handler registered, frame ignored")
            return

        try:
            await self._message_handler(frame)
        except Exception as e:
            log.exception(f"Error handling {frame.tag!r} frame: {e}")

    # =========================================================================
    # HostedService Lifecycle
    # =========================================================================

    async def start_async(self) -> None:
        """Connect and start the watchdog task."""
        if self._running:
            return

        self._running = True
        self.connect()
        self._watchdog_task = asyncio.create_task(self._watchdog_loop())
        log.info(f"🚀 ConnectionManager started (watchdog every {self._watchdog_interval}s)")

    async def stop_async(self) -> None:
        """Stop the watchdog and close the connection."""
        self._running = False

        if self._watchdog_task:
            self._watchdog_task.cancel()
            try:
                await self._watchdog_task
            except asyncio.CancelledError:
                pass
            self._watchdog_task = None

        connection = self._connection
        if connection and connection.task:
            connection.task.cancel()
            try:
                await connection.task
            except asyncio.CancelledError:
                pass
        # A task cancelled before its first step never reaches its own cleanup
        if connection and connection is self._connection:
            await self._handle_closed(connection, "stopped")

        log.info("🛑 ConnectionManager stopped")

    async def _watchdog_loop(self) -> None:
        """Background task that reconnects whenever the connection is down."""
        log.debug("Watchdog loop started")
        while self._running:
            try:
                await asyncio.sleep(self._watchdog_interval)
                self.watchdog_tick()
            except asyncio.CancelledError:
                break
            except Exception as e:
                log.error(f"Error in watchdog loop: {e}")

    # =========================================================================
    # Event Callbacks
    # =========================================================================

    def set_message_handler(self, handler: MessageHandler) -> None:
        """Set the receiver of decoded inbound frames.

        Args:
            handler: Async function awaited once per frame, in arrival order
        """
        self._message_handler = handler

    def on_open(self, callback: OpenCallback) -> None:
        """Register a callback for when the connection opens.

        Args:
            callback: Async function called with no arguments
        """
        self._on_open_callbacks.append(callback)

    def on_close(self, callback: CloseCallback) -> None:
        """Register a callback for when the connection closes or fails to open.

        Args:
            callback: Async function called with the close reason
        """
        self._on_close_callbacks.append(callback)

    # =========================================================================
    # Query Methods
    # =========================================================================

    def get_stats(self) -> dict[str, Any]:
        """Get connection statistics."""
        return {
            "state": self.state.value,
            "url": self._websocket_url,
            "connect_attempts": self._connect_attempts,
            "frames_sent": self._frames_sent,
            "frames_received": self._frames_received,
            "frames_dropped": self._frames_dropped,
            "sends_lost": self._sends_lost,
            "running": self._running,
        }
