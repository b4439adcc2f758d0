"""
Logging configuration for the machine reservation service.

This module provides a centralized logging setup with support for:
- Console output with colored formatting
- Optional file rotation with size limits
- Optional remote logging to Loki
"""

import logging
import time
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Optional

import colorlog
import httpx

from machine_reservation.configs import (
    APP_NAME,
    LOG_FILE,
    LOG_LEVEL,
    LOGGER_NAME,
    LOKI_URL,
    resolve_log_level,
)


# =============================================================================
# Constants
# =============================================================================

DEFAULT_LOG_FORMAT: Final[str] = (
    "%(name)s | %(asctime)s | %(levelname)s | %(funcName)s:%(lineno)d | %(message)s"
)
DEFAULT_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"
MAX_LOG_FILE_SIZE: Final[int] = 5 * 1024 * 1024  # 5 MB
LOG_BACKUP_COUNT: Final[int] = 3
LOKI_TIMEOUT: Final[float] = 2.0


# =============================================================================
# Color Configuration
# =============================================================================

LOG_COLORS: Final[dict[str, str]] = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold_red",
}


# =============================================================================
# Loki Integration
# =============================================================================

def build_loki_payload(level: str, message: str, app: str) -> dict:
    """
    Build a Loki push payload for a single log line.

    Args:
        level: Log level name.
        message: Formatted log message.
        app: Application name for Loki labels.

    Returns:
        Payload accepted by the Loki push API.
    """
    return {
        "streams": [
            {
                "stream": {"level": level, "app": app},
                "values": [[str(int(time.time() * 1e9)), message]],
            }
        ]
    }


class LokiHandler(logging.Handler):
    """
    Logging handler that pushes records to Loki.

    Attributes:
        url: Loki push endpoint.
        app: Application name for Loki labels.
    """

    def __init__(self, url: str, app: str, client: Optional[httpx.Client] = None) -> None:
        """
        Initialize the Loki handler.

        Args:
            url: Loki push endpoint.
            app: Application name for Loki labels.
            client: HTTP client to reuse; one is created when omitted.
        """
        super().__init__()
        self.url = url
        self.app = app
        self._client = client or httpx.Client(timeout=LOKI_TIMEOUT)

    def emit(self, record: logging.LogRecord) -> None:
        """
        Emit a log record to Loki.

        Args:
            record: The log record to send.
        """
        try:
            payload = build_loki_payload(record.levelname.upper(), self.format(record), self.app)
            self._client.post(self.url, json=payload)
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        """Close the HTTP client together with the handler."""
        try:
            self._client.close()
        finally:
            super().close()


# =============================================================================
# Logger Factory
# =============================================================================

def get_logger(
    name: str,
    app: str = APP_NAME,
    log_file: str = "",
    loki_url: str = "",
    level: int | str = logging.INFO,
) -> logging.Logger:
    """
    Create and configure a logger with console, file and Loki handlers.

    The file and Loki handlers are attached only when ``log_file`` and
    ``loki_url`` are set.

    Args:
        name: Logger name.
        app: Application name for Loki labels.
        log_file: Path to the log file.
        loki_url: Loki push endpoint.
        level: Logging level; unknown level names fall back to the default.

    Returns:
        Configured logger instance.
    """
    if isinstance(level, str):
        level = resolve_log_level(level)

    logger_instance = logging.getLogger(name)
    logger_instance.setLevel(level)

    # Avoid duplicate handlers on repeated calls
    if logger_instance.handlers:
        return logger_instance

    console_formatter = colorlog.ColoredFormatter(
        f"%(name)s | %(log_color)s%(asctime)s | %(levelname)s | "
        f"%(funcName)s:%(lineno)d | %(message)s",
        datefmt=DEFAULT_DATE_FORMAT,
        log_colors=LOG_COLORS,
    )
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(console_formatter)
    logger_instance.addHandler(console_handler)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=MAX_LOG_FILE_SIZE,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter(fmt=DEFAULT_LOG_FORMAT, datefmt=DEFAULT_DATE_FORMAT)
        )
        logger_instance.addHandler(file_handler)

    if loki_url:
        loki_handler = LokiHandler(loki_url, app)
        loki_handler.setLevel(level)
        loki_handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
                datefmt=DEFAULT_DATE_FORMAT,
            )
        )
        logger_instance.addHandler(loki_handler)

    return logger_instance


# =============================================================================
# Default Logger Instance
# =============================================================================

logger = get_logger(
    name=LOGGER_NAME,
    log_file=LOG_FILE,
    loki_url=LOKI_URL,
    level=LOG_LEVEL,
)
