"""Domain enumerations package for the chatbot session client.

Modules:
- event_code: Wire protocol event codes
- connection_state: Connection lifecycle states
- ui_state: History controls, assistant icon and chat entry kinds
"""

from .connection_state import ConnectionState
from .event_code import CLIENT_EVENT_CODES, EventCode
from .ui_state import AssistantIcon, ChatEntryKind, HistoryControl

__all__ = [
    # Protocol enums
    "EventCode",
    "CLIENT_EVENT_CODES",
    # Connection enums
    "ConnectionState",
    # View enums
    "AssistantIcon",
    "ChatEntryKind",
    "HistoryControl",
]
