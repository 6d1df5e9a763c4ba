"""
Logging for the HTTP client MCP server.

Everything under the ``http_client_mcp`` logger goes to a rotating
<log_dir>/http_mcp_server.log. Warnings and errors are echoed to stderr;
stdout belongs to the stdio transport.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

SERVER_LOG_FILE_NAME = "http_mcp_server.log"
PACKAGE_LOGGER = "http_client_mcp"

FORMATTER = logging.Formatter(
    "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s",
    "%Y-%m-%d %H:%M:%S",
)


def setup_logging(log_dir: Path, log_level: str = "INFO") -> Path:
    """
    Attach the file and console handlers to the package logger and return
    the log file path. Calling it again replaces the handlers.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / SERVER_LOG_FILE_NAME

    to_file = RotatingFileHandler(log_file, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8")
    to_file.setLevel(level)
    to_stderr = logging.StreamHandler()
    to_stderr.setLevel(logging.WARNING)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)
    for old in package_logger.handlers:
        old.close()
    package_logger.handlers = []
    for handler in (to_file, to_stderr):
        handler.setFormatter(FORMATTER)
        package_logger.addHandler(handler)

    logging.getLogger().setLevel(level)
    return log_file


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
