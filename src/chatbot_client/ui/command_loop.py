"""Interactive command loop.

Maps terminal input to session actions. Plain lines are user prompts; lines
starting with ``/`` are commands.
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from chatbot_client.application.session import SessionStateMachine
from chatbot_client.application.websocket import ConnectionManager
from chatbot_client.ui.console_view import ConsoleView

log = logging.getLogger(__name__)

PROMPT_ACTION = "prompt"

HELP_TEXT = """Commands:
  <text>               send a user prompt
  /system <text>       submit a system prompt
  /load                load the backend's default system prompt
  /clear-system        clear the system prompt field
  /cancel              cancel the prompt in flight
  /reset               reset request history
  /history on|off      enable or disable request history
  /clear               clear the chat
  /status              show session and connection state
  /help                show this help
  /quit                exit"""


@dataclass(frozen=True)
class Command:
    """A parsed input line."""

    action: str
    argument: str = ""


def parse_command(line: str) -> Command:
    """Parse one input line.

    Args:
        line: Raw terminal input

    Returns:
        ``Command("prompt", line)`` for plain text, otherwise the lower-cased
        command name and the rest of the line
    """
    stripped = line.strip()
    if not stripped.startswith("/"):
        return Command(PROMPT_ACTION, line)
    name, _, argument = stripped[1:].partition(" ")
    return Command(name.lower(), argument.strip())


class CommandLoop:
    """Reads terminal input and drives the session state machine."""

    def __init__(
        self,
        session: SessionStateMachine,
        view: ConsoleView,
        connection_manager: ConnectionManager,
        read_line: Callable[[], str] | None = None,
    ):
        self._session = session
        self._view = view
        self._connection_manager = connection_manager
        self._read_line = read_line or (lambda: input("> "))

    async def run_async(self) -> None:
        """Process input lines until /quit or end of input."""
        self._view.notice("Type /help for commands.")
        while True:
            try:
                line = await asyncio.to_thread(self._read_line)
            except EOFError:
                break
            if not await self.execute(line):
                break

    async def execute(self, line: str) -> bool:
        """Run one input line.

        Returns:
            False when the loop should stop
        """
        command = parse_command(line)
        log.debug(f"Command: {command.action}")

        match command.action:
            case "prompt":
                await self._submit_prompt(command.argument)
            case "system":
                if not await self._session.submit_system_prompt(command.argument):
                    self._view.notice("System prompt not sent.")
            case "load":
                await self._session.load_system_prompt()
            case "clear-system":
                self._session.clear_system_prompt()
            case "cancel":
                await self._session.cancel_user_prompt()
            case "reset":
                await self._session.reset_history()
            case "history":
                await self._toggle_history(command.argument)
            case "clear":
                self._session.clear_chat()
            case "status":
                self._show_status()
            case "help":
                self._view.notice(HELP_TEXT)
            case "quit" | "exit":
                return False
            case _:
                self._view.notice(f"Unknown command /{command.action}. Type /help for commands.")
        return True

    async def _submit_prompt(self, text: str) -> None:
        if not text.strip():
            return
        if not self._session.state.input_enabled:
            self._view.notice("Input is disabled until the assistant finishes or the connection is back.")
            return
        await self._session.submit_user_prompt(text)

    async def _toggle_history(self, argument: str) -> None:
        enabled = self._session.state.history_enabled
        match argument.lower():
            case "on":
                if enabled:
                    self._view.notice("Request history is already enabled.")
                    return
                await self._session.enable_history()
            case "off":
                if not enabled:
                    self._view.notice("Request history is already disabled.")
                    return
                await self._session.disable_history()
            case _:
                self._view.notice("Usage: /history on|off")

    def _show_status(self) -> None:
        state = self._session.state
        stats: dict[str, Any] = self._connection_manager.get_stats()
        self._view.notice(
            f"connection={stats['state']} url={stats['url']} attempts={stats['connect_attempts']} "
            f"sent={stats['frames_sent']} received={stats['frames_received']} "
            f"dropped={stats['frames_dropped']} lost={stats['sends_lost']}\n"
            f"input_enabled={state.input_enabled} history_enabled={state.history_enabled} "
            f"spinner={state.spinner_active} entries={len(state.chat_log)}"
        )
