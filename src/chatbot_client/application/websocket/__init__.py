"""WebSocket infrastructure for the chatbot session client.

This package provides:
- Transport abstraction (the socket seam)
- Connection state machine (DISCONNECTED, CONNECTING, OPEN)
- Connection record for one transport attempt
- ConnectionManager: connect, watchdog reconnection, send, inbound dispatch
"""

from chatbot_client.application.websocket.connection import Connection
from chatbot_client.application.websocket.manager import ConnectionManager, build_websocket_url
from chatbot_client.application.websocket.state import ConnectionStateMachine, StateTransition
from chatbot_client.application.websocket.transport import Transport, TransportFactory

__all__ = [
    "Connection",
    "ConnectionManager",
    "ConnectionStateMachine",
    "StateTransition",
    "Transport",
    "TransportFactory",
    "build_websocket_url",
]
