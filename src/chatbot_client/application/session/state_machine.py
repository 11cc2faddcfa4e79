"""Session State Machine.

Owns the SessionState of the client. Inbound frames are routed through a
dispatch table keyed by EventCode; CONFIRMED frames are unwrapped and routed a
second time through the confirmation table. User actions build outbound frames
and hand them to the ConnectionManager.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from chatbot_client.application.protocol import decode_confirmation, encode
from chatbot_client.application.session.view import SessionView
from chatbot_client.domain.enums import CLIENT_EVENT_CODES, AssistantIcon, ChatEntryKind, ConnectionState, EventCode, HistoryControl
from chatbot_client.domain.exceptions import MalformedFrameError
from chatbot_client.domain.models import ChatEntry, Confirmation, Frame, SessionState

if TYPE_CHECKING:
    from chatbot_client.application.websocket.manager import ConnectionManager

log = logging.getLogger(__name__)

DEFAULT_GREETING = "Hello! How can I help you today?"
PONG_PAYLOAD = "pong"

FrameHandler = Callable[[Frame], Awaitable[None]]
ConfirmationHandler = Callable[[Confirmation], None]

_CONFIRMATION_MESSAGES: dict[EventCode, str] = {
    EventCode.SYSTEM_PROMPT: "Applied submitted by user system prompt.",
    EventCode.RESET_HISTORY: "Reset request history.",
    EventCode.ENABLE_HISTORY: "Request history has been enabled.",
    EventCode.DISABLE_HISTORY: "Request history has been disabled.",
    EventCode.CANCEL_USER_PROMPT: "User request has been canceled.",
}


class SessionStateMachine:
    """Interprets protocol frames and user actions for one chat session.

    Features:
    - Inbound dispatch table keyed by EventCode
    - Nested dispatch for CONFIRMED acknowledgements
    - Outbound frame construction for every user action
    - View notification for every visible state change

    Unknown and unmapped codes are logged and ignored; they never change state.
    """

    def __init__(self, connection_manager: ConnectionManager, view: SessionView, greeting: str = DEFAULT_GREETING):
        """Initialize the state machine and attach it to the connection manager.

        Args:
            connection_manager: Sends outbound frames and delivers inbound ones
            view: Renders state changes
            greeting: Assistant entry the chat log starts with
        """
        self._connection_manager = connection_manager
        self._view = view
        self._greeting = greeting
        self._state = SessionState()

        self._handlers: dict[EventCode, FrameHandler] = {
            EventCode.ASSISTANT_WAIT: self._on_assistant_wait,
            EventCode.ASSISTANT_OUTPUT: self._on_assistant_output,
            EventCode.DIAGNOSTIC: self._on_diagnostic,
            EventCode.ASSISTANT_FINISH: self._on_assistant_finish,
            EventCode.LOAD_SYSTEM_PROMPT: self._on_load_system_prompt,
            EventCode.PING: self._on_ping,
            EventCode.PONG: self._on_pong,
            EventCode.CONFIRMED: self._on_confirmed,
        }
        self._confirmation_handlers: dict[EventCode, ConfirmationHandler] = {
            EventCode.SYSTEM_PROMPT: self._confirm_with_status,
            EventCode.USER_PROMPT: self._confirm_user_prompt,
            EventCode.RESET_HISTORY: self._confirm_with_status,
            EventCode.ENABLE_HISTORY: self._confirm_enable_history,
            EventCode.DISABLE_HISTORY: self._confirm_disable_history,
            EventCode.CANCEL_USER_PROMPT: self._confirm_with_status,
        }

        connection_manager.set_message_handler(self.handle_frame)
        connection_manager.on_open(self.handle_connection_opened)
        connection_manager.on_close(self.handle_connection_closed)

        self._append(ChatEntry(ChatEntryKind.ASSISTANT, greeting))
        self._view.set_input_enabled(False)
        self._show_only_history_control(HistoryControl.DISABLE)

    @property
    def state(self) -> SessionState:
        """A snapshot of the current session state."""
        return self._state.snapshot()

    # =========================================================================
    # Inbound Frames
    # =========================================================================

    async def handle_frame(self, frame: Frame) -> None:
        """Apply the transition for one inbound frame.

        Args:
            frame: A decoded frame from the connection manager
        """
        handler = self._handlers.get(frame.code)
        if handler is None:
            if frame.code in CLIENT_EVENT_CODES:
                log.warning(f"Ignoring client-to-server event code {frame.tag!r} ({frame.code.name}) received from the backend")
            else:
                log.warning(f"Ignoring frame with unexpected event code {frame.tag!r}")
            return
        await handler(frame)

    async def _on_assistant_wait(self, frame: Frame) -> None:
        self._set_spinner(True)

    async def _on_assistant_output(self, frame: Frame) -> None:
        self._set_spinner(False)
        self._append(ChatEntry(ChatEntryKind.ASSISTANT, frame.payload))

    async def _on_diagnostic(self, frame: Frame) -> None:
        self._set_spinner(False)
        self._append(ChatEntry(ChatEntryKind.DIAGNOSTIC, frame.payload))

    async def _on_assistant_finish(self, frame: Frame) -> None:
        self._set_spinner(False)
        self._set_assistant_icon(AssistantIcon.IDLE)
        self._set_input_enabled(True)

    async def _on_load_system_prompt(self, frame: Frame) -> None:
        self._set_system_prompt_text(frame.payload)

    async def _on_ping(self, frame: Frame) -> None:
        await self._send(EventCode.PONG, PONG_PAYLOAD)

    async def _on_pong(self, frame: Frame) -> None:
        log.debug("Received PONG")

    async def _on_confirmed(self, frame: Frame) -> None:
        try:
            confirmation = decode_confirmation(frame)
        except MalformedFrameError as e:
            log.warning(f"Ignoring CONFIRMED frame: {e}")
            return

        handler = self._confirmation_handlers.get(confirmation.of)
        if handler is None:
            log.warning(f"Unexpected confirmed event type {confirmation.tag!r} in {frame.payload!r}")
            return
        handler(confirmation)

    # =========================================================================
    # Confirmations
    # =========================================================================

    def _confirm_with_status(self, confirmation: Confirmation) -> None:
        self._append(ChatEntry(ChatEntryKind.STATUS, _CONFIRMATION_MESSAGES[confirmation.of]))

    def _confirm_user_prompt(self, confirmation: Confirmation) -> None:
        self._set_spinner(True)

    def _confirm_enable_history(self, confirmation: Confirmation) -> None:
        self._confirm_with_status(confirmation)
        self._state.history_enabled = True
        self._show_only_history_control(HistoryControl.DISABLE)

    def _confirm_disable_history(self, confirmation: Confirmation) -> None:
        self._confirm_with_status(confirmation)
        self._state.history_enabled = False
        self._show_only_history_control(HistoryControl.ENABLE)

    # =========================================================================
    # Connection Notifications
    # =========================================================================

    async def handle_connection_opened(self) -> None:
        self._state.connection = ConnectionState.OPEN
        self._set_input_enabled(True)
        self._view.set_offline_indicator_visible(False)

    async def handle_connection_closed(self, reason: str | None = None) -> None:
        # No chat entry for a lost connection; the disabled input is the only signal
        self._state.connection = ConnectionState.DISCONNECTED
        self._set_input_enabled(False)
        self._view.set_offline_indicator_visible(True)

    # =========================================================================
    # User Actions
    # =========================================================================

    async def submit_user_prompt(self, text: str) -> bool:
        """Send a user prompt.

        Blank prompts are ignored. Otherwise the prompt is logged as a user
        entry, input is disabled until ASSISTANT_FINISH, and the assistant icon
        switches to busy.

        Returns:
            True if the frame reached the transport
        """
        if not text.strip():
            return False
        self._append(ChatEntry(ChatEntryKind.USER, text))
        self._set_input_enabled(False)
        self._set_assistant_icon(AssistantIcon.BUSY)
        return await self._send(EventCode.USER_PROMPT, text)

    async def submit_system_prompt(self, text: str) -> bool:
        """Send a system prompt unless it is blank."""
        if not text.strip():
            return False
        return await self._send(EventCode.SYSTEM_PROMPT, text)

    async def cancel_user_prompt(self) -> bool:
        return await self._send(EventCode.CANCEL_USER_PROMPT)

    async def reset_history(self) -> bool:
        return await self._send(EventCode.RESET_HISTORY)

    async def enable_history(self) -> bool:
        """Ask the backend to keep request history.

        The "enable" control is hidden right away; the "disable" control only
        appears once the backend confirms.
        """
        self._view.set_history_control_visible(HistoryControl.ENABLE, False)
        return await self._send(EventCode.ENABLE_HISTORY)

    async def disable_history(self) -> bool:
        """Ask the backend to stop keeping request history."""
        self._view.set_history_control_visible(HistoryControl.DISABLE, False)
        return await self._send(EventCode.DISABLE_HISTORY)

    async def load_system_prompt(self) -> bool:
        """Request the backend's default system prompt; it arrives as an inbound LOAD_SYSTEM_PROMPT."""
        return await self._send(EventCode.LOAD_SYSTEM_PROMPT)

    def clear_chat(self) -> None:
        """Reset the chat log to the greeting. Nothing is sent."""
        self._state.chat_log.clear()
        self._view.clear_entries()
        self._append(ChatEntry(ChatEntryKind.ASSISTANT, self._greeting))

    def clear_system_prompt(self) -> None:
        """Empty the system prompt field. Nothing is sent."""
        self._set_system_prompt_text("")

    # =========================================================================
    # State Mutation Helpers
    # =========================================================================

    async def _send(self, code: EventCode, payload: str = "") -> bool:
        return await self._connection_manager.send(encode(code, payload))

    def _append(self, entry: ChatEntry) -> None:
        self._state.chat_log.append(entry)
        self._view.append_entry(entry)

    def _set_spinner(self, active: bool) -> None:
        if self._state.spinner_active == active:
            return
        self._state.spinner_active = active
        self._view.set_spinner(active)

    def _set_input_enabled(self, enabled: bool) -> None:
        self._state.input_enabled = enabled
        self._view.set_input_enabled(enabled)

    def _set_assistant_icon(self, icon: AssistantIcon) -> None:
        self._state.assistant_icon = icon
        self._view.set_assistant_icon(icon)

    def _set_system_prompt_text(self, text: str) -> None:
        self._state.system_prompt_text = text
        self._view.set_system_prompt_text(text)

    def _show_only_history_control(self, control: HistoryControl) -> None:
        self._view.set_history_control_visible(control.opposite, False)
        self._view.set_history_control_visible(control, True)
