"""Session state owned by the session state machine."""

from dataclasses import dataclass, field

from chatbot_client.domain.enums import AssistantIcon, ChatEntryKind, ConnectionState


@dataclass(frozen=True)
class ChatEntry:
    """A rendered entry of the chat log."""

    kind: ChatEntryKind
    text: str


@dataclass
class SessionState:
    """Everything the view reflects about the current session.

    Created once at client start. Only the SessionStateMachine mutates it.
    """

    connection: ConnectionState = ConnectionState.DISCONNECTED
    input_enabled: bool = False
    history_enabled: bool = True
    spinner_active: bool = False
    system_prompt_text: str = ""
    assistant_icon: AssistantIcon = AssistantIcon.IDLE
    chat_log: list[ChatEntry] = field(default_factory=list)

    def snapshot(self) -> "SessionState":
        """Return a copy whose chat log is detached from this state."""
        return SessionState(
            connection=self.connection,
            input_enabled=self.input_enabled,
            history_enabled=self.history_enabled,
            spinner_active=self.spinner_active,
            system_prompt_text=self.system_prompt_text,
            assistant_icon=self.assistant_icon,
            chat_log=list(self.chat_log),
        )
