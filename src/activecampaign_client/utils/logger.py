#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Logging Configuration Module

Configurable logging for the ActiveCampaign client. Supports console and
rotating file handlers, plain or JSON formatting, and masking of secrets such
as the API key before they reach a handler.
"""

import os
import sys
import json
import logging
from logging.handlers import RotatingFileHandler
from typing import Optional, Dict, Any, Union

# Default log levels
DEFAULT_CONSOLE_LEVEL = logging.INFO
DEFAULT_FILE_LEVEL = logging.DEBUG

# Environment variable names
ENV_LOG_LEVEL = "LOG_LEVEL"
ENV_LOG_FILE_PATH = "LOG_FILE_PATH"

# Log level mapping
LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

# Root name for every logger created by this package
PACKAGE_LOGGER = "activecampaign_client"

# Registry to avoid duplicate handlers
_loggers: Dict[str, logging.Logger] = {}


def _resolve_level(level: Optional[Union[int, str]], default: int) -> int:
    if level is None:
        return default
    if isinstance(level, str):
        return LOG_LEVELS.get(level.upper(), default)
    return level


class LoggerConfig:
    """Configuration class for logger settings."""

    def __init__(
        self,
        name: str = PACKAGE_LOGGER,
        console_level: Optional[Union[int, str]] = None,
        file_level: Optional[Union[int, str]] = None,
        log_file: Optional[str] = None,
        max_bytes: int = 10 * 1024 * 1024,  # 10MB
        backup_count: int = 5,
        format_string: Optional[str] = None,
        json_logs: bool = False,
        propagate: bool = False,
    ):
        """
        Initialize logger configuration.

        Args:
            name: Logger name
            console_level: Console logging level (int or string)
            file_level: File logging level (int or string)
            log_file: Path to log file (None to use LOG_FILE_PATH, if set)
            max_bytes: Maximum file size before rotation
            backup_count: Number of backup files to keep
            format_string: Custom log format string
            json_logs: Whether to format logs as JSON
            propagate: Whether to propagate to parent loggers
        """
        self.name = name

        # Get log level from environment
        env_level = os.environ.get(ENV_LOG_LEVEL)
        if env_level:
            named_level = LOG_LEVELS.get(env_level.upper())
            if named_level is None:
                try:
                    named_level = int(env_level)
                except ValueError:
                    named_level = None
            env_level = named_level

        self.console_level = _resolve_level(
            console_level, env_level if env_level is not None else DEFAULT_CONSOLE_LEVEL
        )
        self.file_level = _resolve_level(
            file_level, env_level if env_level is not None else DEFAULT_FILE_LEVEL
        )

        # File logging only when a path is given explicitly or through the environment
        self.log_file = log_file or os.environ.get(ENV_LOG_FILE_PATH) or None

        self.max_bytes = max_bytes
        self.backup_count = backup_count
        self.format_string = format_string or (
            "%(asctime)s | %(levelname)s | %(name)s | %(filename)s:%(lineno)d | %(message)s"
        )
        self.json_logs = json_logs
        self.propagate = propagate


class JsonFormatter(logging.Formatter):
    """
    Formatter that outputs each log record as a single JSON object.
    """

    def __init__(
        self,
        fmt_dict: Optional[Dict[str, Any]] = None,
        time_format: str = "%Y-%m-%d %H:%M:%S",
    ):
        """
        Initialize JSON formatter.

        Args:
            fmt_dict: Mapping of output keys to LogRecord attributes
            time_format: Format string for timestamps
        """
        super().__init__()
        self.fmt_dict = fmt_dict or {
            "timestamp": "asctime",
            "level": "levelname",
            "name": "name",
            "module": "module",
            "function": "funcName",
            "line": "lineno",
            "message": "message",
        }
        self.time_format = time_format

    def format(self, record: logging.LogRecord) -> str:
        record.asctime = self.formatTime(record, self.time_format)
        record.message = record.getMessage()

        log_record = {}
        for key, value in self.fmt_dict.items():
            if hasattr(record, value):
                log_record[key] = getattr(record, value)

        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_record)


def configure_logger(config: Optional[LoggerConfig] = None) -> logging.Logger:
    """
    Configure a logger with the specified settings.

    Args:
        config: Logger configuration (or None for default)

    Returns:
        Configured logger
    """
    if config is None:
        config = LoggerConfig()

    logger = logging.getLogger(config.name)
    if config.log_file:
        logger.setLevel(min(config.console_level, config.file_level))
    else:
        logger.setLevel(config.console_level)
    logger.propagate = config.propagate

    # Clear existing handlers
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    if config.json_logs:
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(config.format_string)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(config.console_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if config.log_file:
        os.makedirs(os.path.dirname(os.path.abspath(config.log_file)), exist_ok=True)
        file_handler = RotatingFileHandler(
            config.log_file,
            maxBytes=config.max_bytes,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(config.file_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    _loggers[config.name] = logger
    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger by name.

    Loggers are children of the package logger and carry no handlers of their
    own, so the library stays silent until the application configures logging.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    if name in _loggers:
        return _loggers[name]

    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"

    logger = logging.getLogger(name)
    _loggers[name] = logger
    return logger


def configure_logging(
    level: Optional[Union[int, str]] = None,
    log_file: Optional[str] = None,
    json_logs: bool = False,
) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        level: Logging level (int or string)
        log_file: Path to log file
        json_logs: Whether to format logs as JSON

    Returns:
        Configured package logger
    """
    config = LoggerConfig(
        name=PACKAGE_LOGGER,
        console_level=level,
        file_level=level,
        log_file=log_file,
        json_logs=json_logs,
    )
    return configure_logger(config)


# The library never configures handlers on import
logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


def log_integration_event(integration: str, event_type: str, message: str, level: int = logging.INFO) -> None:
    """
    Log an integration event.

    Args:
        integration: Integration name
        event_type: Type of event (request, error, complete, etc.)
        message: Event description
        level: Logging level
    """
    logger = get_logger("integration")
    logger.log(level, f"[{integration}] [{event_type}] {message}")


def mask_value(value: str) -> str:
    """Mask all but the first and last character of a secret."""
    if len(value) > 6:
        return value[0] + "*" * (len(value) - 2) + value[-1]
    return "*" * len(value)


def log_sensitive(logger: logging.Logger, level: int, message: str, **sensitive_data) -> None:
    """
    Log a message while masking sensitive data.

    Args:
        logger: Logger to use
        level: Logging level
        message: Message to log
        sensitive_data: Keys and values to mask in the message
    """
    if not logger.isEnabledFor(level):
        return

    masked_message = message
    for value in sensitive_data.values():
        if value and isinstance(value, str):
            masked_message = masked_message.replace(value, mask_value(value))

    logger.log(level, masked_message)
