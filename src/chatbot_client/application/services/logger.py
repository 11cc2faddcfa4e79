import logging
import os
import typing

DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname) - 8s %(name)s:%(lineno)d %(message)s"
DEFAULT_LOG_FILENAME = "logs/chatbot-client.log"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_LIBRARIES_LIST = ["asyncio", "websockets"]
DEFAULT_LOG_LIBRARIES_LEVEL = "WARN"


def configure_logging(
    log_level: str = DEFAULT_LOG_LEVEL,
    log_format: str = DEFAULT_LOG_FORMAT,
    console: bool = False,
    file: bool = True,
    filename: str = DEFAULT_LOG_FILENAME,
    lib_list: typing.List = DEFAULT_LOG_LIBRARIES_LIST,
    lib_level: str = DEFAULT_LOG_LIBRARIES_LEVEL,
) -> None:
    """Configures the root logger with the given format and handler(s).
       The console handler writes to stderr and is off by default so log records do not
       interleave with the chat transcript; the log level of noisy libraries is set separately.

    Args:
        log_level (str, optional): The log_level for the root logger. Defaults to DEFAULT_LOG_LEVEL.
        log_format (str, optional): The format of the log records. Defaults to DEFAULT_LOG_FORMAT.
        console (bool, optional): Whether to enable the console (stderr) handler. Defaults to False.
        file (bool, optional): Whether to enable the file-based handler. Defaults to True.
        filename (str, optional): If file-based handler is enabled, this will set the filename of the log file. Defaults to DEFAULT_LOG_FILENAME.
        lib_list (typing.List, optional): List of libraries/packages name. Defaults to DEFAULT_LOG_LIBRARIES_LIST.
        lib_level (str, optional): The separate log level for the libraries included in the lib_list. Defaults to DEFAULT_LOG_LIBRARIES_LEVEL.
    """
    # Ensure log_level is uppercase for consistency
    log_level = log_level.upper()
    lib_level = lib_level.upper()

    # Get root logger and clear any existing handlers to prevent duplicates
    root_logger = logging.getLogger()
    if root_logger.handlers:
        root_logger.handlers.clear()

    # Set the root logger level
    root_logger.setLevel(log_level)
    formatter = logging.Formatter(log_format)

    if console:
        _configure_console_based_logging(root_logger, log_level, formatter)
    if file and filename:
        _configure_file_based_logging(root_logger, log_level, formatter, filename)
    # Keep records from reaching the last-resort stderr handler when both handlers are off
    if not root_logger.handlers:
        root_logger.addHandler(logging.NullHandler())

    # Configure library-specific log levels
    for lib_name in lib_list:
        logging.getLogger(lib_name).setLevel(lib_level)


def _configure_console_based_logging(
    root_logger: logging.Logger,
    log_level: str,
    formatter: logging.Formatter,
) -> None:
    console_handler = logging.StreamHandler()
    handler = _configure_handler(console_handler, log_level, formatter)
    root_logger.addHandler(handler)


def _configure_file_based_logging(
    root_logger: logging.Logger,
    log_level: str,
    formatter: logging.Formatter,
    filename: str,
) -> None:
    # Ensure the directory exists; a bare filename lives in the working directory
    directory = os.path.dirname(filename)
    if directory:
        os.makedirs(directory, exist_ok=True)

    file_handler = logging.FileHandler(filename, encoding="utf-8")
    handler = _configure_handler(file_handler, log_level, formatter)
    root_logger.addHandler(handler)


def _configure_handler(
    handler: logging.Handler,
    log_level: str,
    formatter: logging.Formatter,
) -> logging.Handler:
    handler.setLevel(log_level)
    handler.setFormatter(formatter)
    return handler
