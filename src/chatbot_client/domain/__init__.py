"""Domain layer for the chatbot session client.

Contains:
- enums/: Closed enumerations (EventCode, ConnectionState, HistoryControl, ...)
- models/: Frame, Confirmation and the session state value objects
- exceptions.py: Client error hierarchy
"""

from chatbot_client.domain.enums import AssistantIcon, ChatEntryKind, ConnectionState, EventCode, HistoryControl
from chatbot_client.domain.exceptions import ChatClientError, MalformedFrameError, TransportError
from chatbot_client.domain.models import ChatEntry, Confirmation, Frame, SessionState

__all__ = [
    "AssistantIcon",
    "ChatEntry",
    "ChatEntryKind",
    "ChatClientError",
    "Confirmation",
    "ConnectionState",
    "EventCode",
    "Frame",
    "HistoryControl",
    "MalformedFrameError",
    "SessionState",
    "TransportError",
]
