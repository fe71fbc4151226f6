"""
Centralized logging configuration for JobSift.

Colored console output for development, JSON lines for production, and an
optional rotating log file.
"""

import json
import logging
import logging.handlers
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

# Log directory (created on first file handler)
LOGS_DIR = Path(__file__).parent.parent / "logs"

# Log levels by environment
LOG_LEVELS = {
    "development": logging.DEBUG,
    "production": logging.INFO,
    "testing": logging.WARNING,
}

# Third-party loggers that are too chatty at DEBUG
NOISY_LOGGERS = ("urllib3", "requests", "werkzeug", "flask_cors")


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_obj = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_obj)


class ConsoleFormatter(logging.Formatter):
    """Colored console formatter for development."""

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"
    MAX_MESSAGE_LENGTH = 500

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, self.RESET)
        timestamp = datetime.now().strftime("%H:%M:%S")

        message = record.getMessage()
        if len(message) > self.MAX_MESSAGE_LENGTH:
            message = message[: self.MAX_MESSAGE_LENGTH] + "..."
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"

        return f"{color}[{timestamp}] {record.levelname:8}{self.RESET} {record.name}: {message}"


def resolve_log_level(level: Optional[str] = None) -> int:
    """Explicit level name wins; otherwise the FLASK_ENV default."""
    if level:
        return getattr(logging, level.upper(), logging.INFO)
    env = os.environ.get("FLASK_ENV", "development")
    return LOG_LEVELS.get(env, logging.INFO)


def setup_logging(
    level: Optional[str] = None,
    json_logs: bool = False,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    Configure application-wide logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: Use JSON formatting (for production)
        log_file: Optional log file path (enables file logging)

    Returns:
        Root logger configured for the application
    """
    env = os.environ.get("FLASK_ENV", "development")
    log_level = resolve_log_level(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(JSONFormatter() if json_logs else ConsoleFormatter())
    root_logger.addHandler(console_handler)

    # File handler with rotation
    if log_file or env == "production":
        if log_file:
            file_path = Path(log_file)
        else:
            LOGS_DIR.mkdir(exist_ok=True)
            file_path = LOGS_DIR / "jobsift.log"
        file_handler = logging.handlers.RotatingFileHandler(
            file_path,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(JSONFormatter())
        root_logger.addHandler(file_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a specific module.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
