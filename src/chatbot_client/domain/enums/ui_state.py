"""View-facing enumerations.

Names the affordances the session state machine toggles on the view.
"""

from enum import Enum


class HistoryControl(str, Enum):
    """The two request-history toggles; only one is shown at a time."""

    ENABLE = "enable_history"
    DISABLE = "disable_history"

    @property
    def opposite(self) -> "HistoryControl":
        return HistoryControl.DISABLE if self is HistoryControl.ENABLE else HistoryControl.ENABLE


class AssistantIcon(str, Enum):
    """Assistant avatar state: static while idle, animated while a prompt is in flight."""

    IDLE = "idle"
    BUSY = "busy"


class ChatEntryKind(str, Enum):
    """Origin of a chat log entry."""

    ASSISTANT = "assistant"
    USER = "user"
    DIAGNOSTIC = "diagnostic"
    STATUS = "status"
