"""WebSocket transport on the websockets asyncio client."""

import logging
from collections.abc import AsyncIterator

from websockets.asyncio.client import ClientConnection, connect
from websockets.exceptions import ConnectionClosed, ConnectionClosedError, InvalidHandshake, InvalidURI
from websockets.protocol import State

from chatbot_client.application.websocket.transport import Transport, TransportFactory
from chatbot_client.domain.exceptions import TransportError

log = logging.getLogger(__name__)


class WebSocketTransport(Transport):
    """
    Transport backed by one ``websockets`` client connection.

    Library exceptions are translated to TransportError so the connection
    manager treats refused handshakes, network errors and abnormal closes alike.
    """

    def __init__(self, url: str, open_timeout: float = 10.0) -> None:
        """
        Initialize the transport.

        Args:
            url: ws:// or wss:// endpoint
            open_timeout: Seconds allowed for the opening handshake
        """
        super().__init__(url)
        self._open_timeout = open_timeout
        self._websocket: ClientConnection | None = None

    @property
    def is_open(self) -> bool:
        return self._websocket is not None and self._websocket.state is State.OPEN

    async def open(self) -> None:
        if self._websocket is not None:
            raise TransportError(f"Transport for {self.url} was already opened")
        try:
            self._websocket = await connect(self.url, open_timeout=self._open_timeout)
        except InvalidURI as e:
            raise TransportError(f"Invalid WebSocket URI: {e}") from e
        except InvalidHandshake as e:
            raise TransportError(f"WebSocket handshake failed: {e}") from e
        except TimeoutError as e:
            raise TransportError(f"Timed out after {self._open_timeout}s opening {self.url}") from e
        except OSError as e:
            raise TransportError(f"Network error: {e}") from e
        log.debug(f"WebSocket open: {self.url}")

    async def messages(self) -> AsyncIterator[str | bytes]:
        if self._websocket is None:
            raise TransportError(f"Transport for {self.url} is not open")
        try:
            async for message in self._websocket:
                yield message
        except ConnectionClosedError as e:
            raise TransportError(f"Connection closed abnormally: {e}") from e

    async def send(self, raw: str) -> None:
        if not self.is_open:
            raise TransportError(f"Transport for {self.url} is not open")
        try:
            await self._websocket.send(raw)
        except ConnectionClosed as e:
            raise TransportError(f"Connection closed while sending: {e}") from e

    async def close(self) -> None:
        if self._websocket is None:
            return
        await self._websocket.close()


def create_transport_factory(open_timeout: float = 10.0) -> TransportFactory:
    """
    Build the factory the ConnectionManager uses to create one transport per attempt.

    Args:
        open_timeout: Seconds allowed for each opening handshake
    """

    def factory(url: str) -> Transport:
        return WebSocketTransport(url, open_timeout=open_timeout)

    return factory
