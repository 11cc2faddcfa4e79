"""Exceptions for the chatbot session client.

None of these are fatal to the client: the connection manager and the session
state machine catch them, log them and carry on.
"""


class ChatClientError(Exception):
    """Base exception for client errors.

    Attributes:
        message: Human-readable description of the failure.
        code: Optional error code for programmatic handling.
    """

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


class MalformedFrameError(ChatClientError):
    """Raised when a raw message is too short or badly separated to hold a frame."""

    def __init__(self, raw: str, reason: str) -> None:
        super().__init__(f"Malformed frame {raw!r}: {reason}", code="MALFORMED_FRAME")
        self.raw = raw
        self.reason = reason


class TransportError(ChatClientError):
    """Raised by a transport that cannot open, send or receive."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="TRANSPORT_ERROR")
