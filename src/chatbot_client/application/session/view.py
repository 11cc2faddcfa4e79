"""View adapter interface.

The session state machine reports every visible change through these calls and
never depends on how they are rendered.
"""

from abc import ABC, abstractmethod

from chatbot_client.domain.enums import AssistantIcon, HistoryControl
from chatbot_client.domain.models import ChatEntry


class SessionView(ABC):
    """Receives notifications from the SessionStateMachine and renders them."""

    @abstractmethod
    def append_entry(self, entry: ChatEntry) -> None:
        """Add an entry to the bottom of the chat log."""

    @abstractmethod
    def clear_entries(self) -> None:
        """Remove every entry from the chat log."""

    @abstractmethod
    def set_spinner(self, active: bool) -> None:
        """Show or hide the "awaiting response" spinner."""

    @abstractmethod
    def set_input_enabled(self, enabled: bool) -> None:
        """Enable or disable the user prompt input."""

    @abstractmethod
    def set_system_prompt_text(self, text: str) -> None:
        """Replace the contents of the system prompt field."""

    @abstractmethod
    def set_history_control_visible(self, control: HistoryControl, visible: bool) -> None:
        """Show or hide one of the request-history toggles."""

    @abstractmethod
    def set_assistant_icon(self, icon: AssistantIcon) -> None:
        """Switch the assistant avatar between idle and busy."""

    @abstractmethod
    def set_offline_indicator_visible(self, visible: bool) -> None:
        """Show or hide the "offline" affordance."""
