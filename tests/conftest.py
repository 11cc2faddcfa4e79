"""Pytest configuration and shared fixtures for all tests.

This module provides:
- Test markers
- An in-memory Transport and its factory, so the ConnectionManager runs without a network
- A recording SessionView mock
"""

import asyncio
from unittest.mock import MagicMock

import pytest
from _pytest.config import Config

from chatbot_client.application.session.view import SessionView
from chatbot_client.application.websocket.transport import Transport
from chatbot_client.domain.exceptions import TransportError

# ============================================================================
# PYTEST CONFIGURATION
# ============================================================================


def pytest_configure(config: Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (may use external services)")


# ============================================================================
# FAKE TRANSPORT
# ============================================================================

_CLOSED = object()


class FakeTransport(Transport):
    """In-memory transport; tests push inbound messages and inspect sent ones."""

    def __init__(self, url: str, fail_open: bool = False, close_delay: float = 0.0):
        super().__init__(url)
        self.fail_open = fail_open
        self.close_delay = close_delay
        self.opened = False
        self.closed = False
        self.sent: list[str] = []
        self._inbox: asyncio.Queue = asyncio.Queue()

    @property
    def is_open(self) -> bool:
        return self.opened and not self.closed

    async def open(self) -> None:
        await asyncio.sleep(0)
        if self.fail_open:
            raise TransportError("connection refused")
        self.opened = True

    async def messages(self):
        while True:
            item = await self._inbox.get()
            if item is _CLOSED:
                return
            if isinstance(item, Exception):
                raise item
            yield item

    async def send(self, raw: str) -> None:
        if not self.is_open:
            raise TransportError("not open")
        self.sent.append(raw)

    async def close(self) -> None:
        if self.close_delay:
            # Suspends like a real closing handshake
            await asyncio.sleep(self.close_delay)
        if not self.closed:
            self.closed = True
            self._inbox.put_nowait(_CLOSED)

    def push(self, raw: str | bytes) -> None:
        """Deliver an inbound message."""
        self._inbox.put_nowait(raw)

    def peer_close(self) -> None:
        """Simulate the backend closing the socket normally."""
        self._inbox.put_nowait(_CLOSED)

    def peer_error(self) -> None:
        """Simulate the socket dropping abnormally."""
        self._inbox.put_nowait(TransportError("connection reset"))


class FakeTransportFactory:
    """Creates FakeTransports and remembers each one."""

    def __init__(self):
        self.created: list[FakeTransport] = []
        self.failures_remaining = 0
        self.close_delay = 0.0

    def __call__(self, url: str) -> FakeTransport:
        fail = self.failures_remaining > 0
        if fail:
            self.failures_remaining -= 1
        transport = FakeTransport(url, fail_open=fail, close_delay=self.close_delay)
        self.created.append(transport)
        return transport

    @property
    def last(self) -> FakeTransport:
        return self.created[-1]


async def settle(rounds: int = 25) -> None:
    """Let pending tasks run until the event loop is idle."""
    for _ in range(rounds):
        await asyncio.sleep(0)


# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture
def transport_factory() -> FakeTransportFactory:
    """Provide a fresh fake transport factory."""
    return FakeTransportFactory()


@pytest.fixture
def mock_view() -> MagicMock:
    """Provide a SessionView mock that records every notification."""
    return MagicMock(spec=SessionView)


@pytest.fixture
def settle_loop():
    """Provide the coroutine that lets pending tasks run until the loop is idle."""
    return settle
