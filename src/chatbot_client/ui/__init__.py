"""Terminal front end: console view adapter and interactive command loop."""

from chatbot_client.ui.command_loop import Command, CommandLoop, parse_command
from chatbot_client.ui.console_view import ConsoleView

__all__ = [
    "Command",
    "CommandLoop",
    "ConsoleView",
    "parse_command",
]
