"""Session client for the chatbot WebSocket protocol."""

__version__ = "1.0.0"
