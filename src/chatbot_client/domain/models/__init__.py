"""Domain models for the chatbot session client.

- frame: Frame and Confirmation protocol value objects
- session_state: SessionState and ChatEntry
"""

from .frame import Confirmation, Frame
from .session_state import ChatEntry, SessionState

__all__ = [
    "ChatEntry",
    "Confirmation",
    "Frame",
    "SessionState",
]
