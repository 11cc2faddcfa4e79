"""Console rendering of session notifications with rich."""

import html
import logging
import re

from rich.console import Console
from rich.status import Status
from rich.text import Text

from chatbot_client.application.session.view import SessionView
from chatbot_client.domain.enums import AssistantIcon, ChatEntryKind, HistoryControl
from chatbot_client.domain.models import ChatEntry

log = logging.getLogger(__name__)

_TAG_PATTERN = re.compile(r"<[^>]+>")
_BLOCK_END_PATTERN = re.compile(r"</(p|div|h[1-6]|li|pre|tr)>|<br\s*/?>", re.IGNORECASE)

_ENTRY_STYLES: dict[ChatEntryKind, tuple[str, str]] = {
    ChatEntryKind.ASSISTANT: ("Assistant", "cyan"),
    ChatEntryKind.USER: ("User", "green"),
    ChatEntryKind.DIAGNOSTIC: ("Diagnostic", "red"),
    ChatEntryKind.STATUS: ("Status", "yellow"),
}


def html_to_text(markup: str) -> str:
    """Flatten the backend's HTML fragments to plain text for the terminal."""
    text = _BLOCK_END_PATTERN.sub("\n", markup)
    text = _TAG_PATTERN.sub("", text)
    return html.unescape(text).strip()


class ConsoleView(SessionView):
    """Renders the chat session on a rich Console."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()
        self._status: Status | None = None
        self._visible_controls: set[HistoryControl] = set()
        self.input_enabled = False

    def append_entry(self, entry: ChatEntry) -> None:
        label, style = _ENTRY_STYLES[entry.kind]
        line = Text()
        line.append(f"{label}: ", style=f"bold {style}")
        line.append(html_to_text(entry.text))
        self.console.print(line)

    def clear_entries(self) -> None:
        self.console.clear()

    def set_spinner(self, active: bool) -> None:
        if active and self._status is None:
            self._status = self.console.status("Awaiting response...")
            self._status.start()
        elif not active and self._status is not None:
            self._status.stop()
            self._status = None

    def set_input_enabled(self, enabled: bool) -> None:
        self.input_enabled = enabled

    def set_system_prompt_text(self, text: str) -> None:
        if text:
            self.console.print(Text("System prompt:", style="bold magenta"))
            self.console.print(text)
        else:
            self.console.print(Text("System prompt cleared.", style="magenta"))

    def set_history_control_visible(self, control: HistoryControl, visible: bool) -> None:
        if visible:
            self._visible_controls.add(control)
        else:
            self._visible_controls.discard(control)

    def set_assistant_icon(self, icon: AssistantIcon) -> None:
        log.debug(f"Assistant icon: {icon.value}")

    def set_offline_indicator_visible(self, visible: bool) -> None:
        if visible:
            self.console.print(Text("[offline] waiting for the backend...", style="dim red"))
        else:
            self.console.print(Text("[online]", style="dim green"))

    def is_history_control_visible(self, control: HistoryControl) -> bool:
        return control in self._visible_controls

    def notice(self, message: str) -> None:
        """Print a client-side notice that is not part of the chat log."""
        self.console.print(Text(message, style="dim"))
