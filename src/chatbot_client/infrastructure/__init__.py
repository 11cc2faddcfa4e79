"""Infrastructure layer for the chatbot session client.

Contains:
- websocket_transport.py: Transport implementation on the websockets library
"""

from chatbot_client.infrastructure.websocket_transport import WebSocketTransport, create_transport_factory

__all__ = [
    "WebSocketTransport",
    "create_transport_factory",
]
