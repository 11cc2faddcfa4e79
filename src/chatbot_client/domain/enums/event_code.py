"""Event code enumeration.

Every protocol frame starts with a two-character tag naming its meaning and
direction. Tags not listed here map to ``EventCode.UNRECOGNIZED``.
"""

from enum import Enum


class EventCode(str, Enum):
    """Two-character protocol event tags.

    Client to server:
    - USER_PROMPT, SYSTEM_PROMPT, CANCEL_USER_PROMPT, RESET_HISTORY,
      ENABLE_HISTORY, DISABLE_HISTORY, LOAD_SYSTEM_PROMPT, PONG

    Server to client:
    - ASSISTANT_WAIT, ASSISTANT_OUTPUT, ASSISTANT_FINISH, DIAGNOSTIC,
      CONFIRMED, PING

    CONFIRMED wraps the tag of the client command it acknowledges.
    """

    USER_PROMPT = "01"
    SYSTEM_PROMPT = "02"
    ASSISTANT_WAIT = "03"
    ASSISTANT_OUTPUT = "04"
    ASSISTANT_FINISH = "05"
    PING = "06"
    PONG = "07"
    DIAGNOSTIC = "08"
    CONFIRMED = "09"
    RESET_HISTORY = "10"
    ENABLE_HISTORY = "11"
    DISABLE_HISTORY = "12"
    CANCEL_USER_PROMPT = "14"
    LOAD_SYSTEM_PROMPT = "15"

    # Fallback for tags sent by a newer backend
    UNRECOGNIZED = "??"

    @classmethod
    def from_tag(cls, tag: str) -> "EventCode":
        """Map a raw wire tag to its EventCode, or UNRECOGNIZED."""
        try:
            return cls(tag)
        except ValueError:
            return cls.UNRECOGNIZED

    @property
    def is_recognized(self) -> bool:
        return self is not EventCode.UNRECOGNIZED


CLIENT_EVENT_CODES: frozenset[EventCode] = frozenset(
    {
        EventCode.USER_PROMPT,
        EventCode.SYSTEM_PROMPT,
        EventCode.CANCEL_USER_PROMPT,
        EventCode.RESET_HISTORY,
        EventCode.ENABLE_HISTORY,
        EventCode.DISABLE_HISTORY,
        EventCode.LOAD_SYSTEM_PROMPT,
        EventCode.PONG,
    }
)
