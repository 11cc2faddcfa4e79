"""Session layer: the state machine that interprets frames and the view it drives."""

from chatbot_client.application.session.state_machine import SessionStateMachine
from chatbot_client.application.session.view import SessionView

__all__ = [
    "SessionStateMachine",
    "SessionView",
]
