"""Application services: logging setup."""

from chatbot_client.application.services.logger import configure_logging

__all__ = ["configure_logging"]
