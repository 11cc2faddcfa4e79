"""Chatbot session client entry point."""

import asyncio
import logging

from chatbot_client.application.services.logger import configure_logging
from chatbot_client.application.session import SessionStateMachine
from chatbot_client.application.settings import Settings, app_settings
from chatbot_client.application.websocket import ConnectionManager
from chatbot_client.infrastructure import create_transport_factory
from chatbot_client.ui import CommandLoop, ConsoleView

log = logging.getLogger(__name__)


async def run_async(settings: Settings) -> None:
    """Wire the client together and run the command loop until the user quits.

    Args:
        settings: Application settings
    """
    view = ConsoleView()
    connection_manager = ConnectionManager.from_settings(settings, create_transport_factory(open_timeout=settings.open_timeout))
    session = SessionStateMachine(connection_manager, view, greeting=settings.greeting)
    command_loop = CommandLoop(session, view, connection_manager)

    await connection_manager.start_async()
    try:
        await command_loop.run_async()
    finally:
        await connection_manager.stop_async()
        view.set_spinner(False)


def main() -> None:
    configure_logging(
        log_level=app_settings.log_level,
        console=app_settings.log_console,
        file=bool(app_settings.log_file),
        filename=app_settings.log_file,
    )
    log.info(f"🚀 Starting chatbot client against {app_settings.page_url}")
    try:
        asyncio.run(run_async(app_settings))
    except KeyboardInterrupt:
        log.info("Interrupted")


if __name__ == "__main__":
    main()
