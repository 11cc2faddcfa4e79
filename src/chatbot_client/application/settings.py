"""Application settings configuration for the chatbot session client."""

from neuroglia.hosting.abstractions import ApplicationSettings


class Settings(ApplicationSettings):
    """Session client settings, read from CHATBOT_CLIENT_* environment variables or .env."""

    # Logging Configuration
    log_level: str = "INFO"
    log_console: bool = False  # Log records go to stderr as well as the file
    log_file: str = "logs/chatbot-client.log"  # Empty disables the file handler

    # Backend Configuration
    # The page the chat UI is served from; https selects wss, anything else ws
    page_url: str = "http://localhost:8080/"
    websocket_path: str = "/ws"
    open_timeout: float = 10.0  # Seconds allowed for the opening handshake

    # Reconnection Configuration
    watchdog_interval: float = 5.0  # Seconds between reconnection checks

    # UI Configuration
    greeting: str = "Hello! How can I help you today?"

    class Config:
        env_file = ".env"
        env_prefix = "CHATBOT_CLIENT_"  # All env vars prefixed with CHATBOT_CLIENT_
        case_sensitive = False
        extra = "ignore"


app_settings = Settings()
