"""Transport abstraction.

The ConnectionManager only talks to this interface; the websockets-backed
implementation lives in ``chatbot_client.infrastructure``.
"""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Callable


class Transport(ABC):
    """A single bidirectional text-message socket.

    A transport is used for exactly one connection attempt: it is created, opened
    once, and discarded after it closes.
    """

    def __init__(self, url: str):
        self.url = url

    @property
    @abstractmethod
    def is_open(self) -> bool:
        """True while frames can be sent."""

    @abstractmethod
    async def open(self) -> None:
        """Perform the opening handshake.

        Raises:
            TransportError: If the endpoint cannot be reached or refuses the upgrade
        """

    @abstractmethod
    def messages(self) -> AsyncIterator[str | bytes]:
        """Iterate inbound messages in arrival order.

        Iteration ends when the peer closes normally.

        Raises:
            TransportError: If the connection drops abnormally
        """

    @abstractmethod
    async def send(self, raw: str) -> None:
        """Send one text message.

        Raises:
            TransportError: If the transport is not open or the write fails
        """

    @abstractmethod
    async def close(self) -> None:
        """Close the transport. Safe to call more than once."""


TransportFactory = Callable[[str], Transport]
