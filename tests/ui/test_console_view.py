"""Unit tests for the rich console view."""

import io

import pytest
from rich.console import Console

from chatbot_client.domain.enums import AssistantIcon, ChatEntryKind, HistoryControl
from chatbot_client.domain.models import ChatEntry
from chatbot_client.ui.console_view import ConsoleView, html_to_text


@pytest.fixture
def output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def view(output) -> ConsoleView:
    return ConsoleView(Console(file=output, width=120, color_system=None))


class TestHtmlToText:
    """Test flattening of backend HTML fragments."""

    def test_strips_tags(self):
        assert html_to_text("<p>Hello <b>world</b></p>") == "Hello world"

    def test_block_ends_become_newlines(self):
        assert html_to_text("<p>one</p><p>two</p>") == "one\ntwo"
        assert html_to_text("a<br>b<br/>c") == "a\nb\nc"

    def test_unescapes_entities(self):
        assert html_to_text("1 &lt; 2 &amp;&amp; 3 &gt; 2") == "1 < 2 && 3 > 2"

    def test_plain_text_is_unchanged(self):
        assert html_to_text("time: 12:30") == "time: 12:30"


class TestConsoleView:
    """Test rendering of session notifications."""

    def test_append_entry_labels_by_kind(self, view, output):
        view.append_entry(ChatEntry(ChatEntryKind.ASSISTANT, "<p>Hi!</p>"))
        view.append_entry(ChatEntry(ChatEntryKind.DIAGNOSTIC, "model overloaded"))
        view.append_entry(ChatEntry(ChatEntryKind.STATUS, "Reset request history."))

        text = output.getvalue()
        assert "Assistant: Hi!" in text
        assert "Diagnostic: model overloaded" in text
        assert "Status: Reset request history." in text

    def test_input_enabled_is_tracked(self, view):
        assert view.input_enabled is False
        view.set_input_enabled(True)
        assert view.input_enabled is True

    def test_history_control_visibility(self, view):
        view.set_history_control_visible(HistoryControl.DISABLE, True)
        assert view.is_history_control_visible(HistoryControl.DISABLE)
        assert not view.is_history_control_visible(HistoryControl.ENABLE)

        view.set_history_control_visible(HistoryControl.DISABLE, False)
        assert not view.is_history_control_visible(HistoryControl.DISABLE)

    def test_spinner_start_and_stop(self, view):
        view.set_spinner(True)
        view.set_spinner(True)
        view.set_spinner(False)
        view.set_spinner(False)

    def test_system_prompt_and_notices(self, view, output):
        view.set_system_prompt_text("Be brief.")
        view.set_system_prompt_text("")
        view.set_offline_indicator_visible(True)
        view.set_assistant_icon(AssistantIcon.BUSY)
        view.notice("Type /help for commands.")

        text = output.getvalue()
        assert "Be brief." in text
        assert "System prompt cleared." in text
        assert "[offline]" in text
        assert "Type /help for commands." in text
