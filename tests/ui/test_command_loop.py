"""Unit tests for the terminal command loop."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from chatbot_client.domain.models import SessionState
from chatbot_client.ui.command_loop import HELP_TEXT, Command, CommandLoop, parse_command


class TestParseCommand:
    """Test input line parsing."""

    def test_plain_text_is_a_prompt(self):
        assert parse_command("What is 2+2?") == Command("prompt", "What is 2+2?")

    def test_slash_command_with_argument(self):
        assert parse_command("/system  Be brief. ") == Command("system", "Be brief.")

    def test_command_name_is_lowercased(self):
        assert parse_command("/HISTORY Off") == Command("history", "Off")

    def test_command_without_argument(self):
        assert parse_command("/quit") == Command("quit", "")


@pytest.fixture
def session() -> MagicMock:
    session = MagicMock()
    session.state = SessionState(input_enabled=True)
    for action in [
        "submit_user_prompt",
        "submit_system_prompt",
        "load_system_prompt",
        "cancel_user_prompt",
        "reset_history",
        "enable_history",
        "disable_history",
    ]:
        setattr(session, action, AsyncMock(return_value=True))
    return session


@pytest.fixture
def view() -> MagicMock:
    return MagicMock()


@pytest.fixture
def manager() -> MagicMock:
    manager = MagicMock()
    manager.get_stats.return_value = {
        "state": "open",
        "url": "ws://localhost:8080/ws",
        "connect_attempts": 1,
        "frames_sent": 2,
        "frames_received": 3,
        "frames_dropped": 0,
        "sends_lost": 0,
        "running": True,
    }
    return manager


@pytest.fixture
def loop(session, view, manager) -> CommandLoop:
    return CommandLoop(session, view, manager)


class TestExecute:
    """Test mapping of commands to session actions."""

    @pytest.mark.asyncio
    async def test_prompt(self, loop, session):
        assert await loop.execute("Hello") is True
        session.submit_user_prompt.assert_awaited_once_with("Hello")

    @pytest.mark.asyncio
    async def test_prompt_while_input_disabled(self, loop, session, view):
        session.state = SessionState(input_enabled=False)

        await loop.execute("Hello")

        session.submit_user_prompt.assert_not_awaited()
        view.notice.assert_called_once()

    @pytest.mark.asyncio
    async def test_blank_line_does_nothing(self, loop, session, view):
        await loop.execute("   ")

        session.submit_user_prompt.assert_not_awaited()
        view.notice.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("line", "action"),
        [
            ("/load", "load_system_prompt"),
            ("/cancel", "cancel_user_prompt"),
            ("/reset", "reset_history"),
        ],
    )
    async def test_payloadless_commands(self, loop, session, line, action):
        await loop.execute(line)
        getattr(session, action).assert_awaited_once_with()

    @pytest.mark.asyncio
    async def test_system_prompt(self, loop, session):
        await loop.execute("/system You are terse.")
        session.submit_system_prompt.assert_awaited_once_with("You are terse.")

    @pytest.mark.asyncio
    async def test_blank_system_prompt_is_reported(self, loop, session, view):
        session.submit_system_prompt.return_value = False

        await loop.execute("/system")

        view.notice.assert_called_once_with("System prompt not sent.")

    @pytest.mark.asyncio
    async def test_clear_commands_are_local(self, loop, session):
        await loop.execute("/clear")
        await loop.execute("/clear-system")

        session.clear_chat.assert_called_once_with()
        session.clear_system_prompt.assert_called_once_with()

    @pytest.mark.asyncio
    async def test_history_off_then_on(self, loop, session):
        await loop.execute("/history off")
        session.disable_history.assert_awaited_once_with()

        session.state = SessionState(history_enabled=False)
        await loop.execute("/history on")
        session.enable_history.assert_awaited_once_with()

    @pytest.mark.asyncio
    async def test_history_already_in_requested_state(self, loop, session, view):
        await loop.execute("/history on")

        session.enable_history.assert_not_awaited()
        view.notice.assert_called_once_with("Request history is already enabled.")

    @pytest.mark.asyncio
    async def test_history_usage(self, loop, session, view):
        await loop.execute("/history maybe")

        view.notice.assert_called_once_with("Usage: /history on|off")

    @pytest.mark.asyncio
    async def test_status_and_help(self, loop, view, manager):
        await loop.execute("/status")
        await loop.execute("/help")

        manager.get_stats.assert_called_once_with()
        status = view.notice.call_args_list[0].args[0]
        assert "connection=open" in status
        assert "entries=0" in status
        view.notice.assert_called_with(HELP_TEXT)

    @pytest.mark.asyncio
    async def test_unknown_command(self, loop, view):
        assert await loop.execute("/frobnicate") is True
        assert "/frobnicate" in view.notice.call_args.args[0]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("line", ["/quit", "/exit"])
    async def test_quit_stops_loop(self, loop, line):
        assert await loop.execute(line) is False


class TestRunAsync:
    """Test the read loop."""

    @pytest.mark.asyncio
    async def test_runs_until_quit(self, session, view, manager):
        lines = iter(["Hello", "/reset", "/quit", "never read"])
        loop = CommandLoop(session, view, manager, read_line=lambda: next(lines))

        await loop.run_async()

        session.submit_user_prompt.assert_awaited_once_with("Hello")
        session.reset_history.assert_awaited_once_with()
        assert next(lines) == "never read"

    @pytest.mark.asyncio
    async def test_stops_at_end_of_input(self, session, view, manager):
        def read_line():
            raise EOFError

        await CommandLoop(session, view, manager, read_line=read_line).run_async()

        session.submit_user_prompt.assert_not_awaited()
