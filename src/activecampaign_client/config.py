#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Configuration management for the ActiveCampaign client.

Values are read from environment variables (and a local .env file when
present) with sensible defaults. The configuration can be validated before a
client is built from it.
"""

import os
import logging
from pathlib import Path
from dataclasses import dataclass, field
from typing import List, Optional
from urllib.parse import urlparse

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Environment variable names
ENV_API_URL = "ACTIVECAMPAIGN_API_URL"
ENV_API_KEY = "ACTIVECAMPAIGN_API_KEY"
ENV_CONNECTION_ID = "ACTIVECAMPAIGN_CONNECTION_ID"
ENV_TIMEOUT = "ACTIVECAMPAIGN_TIMEOUT"

DEFAULT_TIMEOUT = 30.0  # seconds

# Log levels
LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def _optional_env(name: str) -> Optional[str]:
    value = os.getenv(name)
    return value if value else None


@dataclass
class ClientConfig:
    """Client configuration."""

    # API access
    api_url: Optional[str] = field(default_factory=lambda: _optional_env(ENV_API_URL))
    api_key: Optional[str] = field(default_factory=lambda: _optional_env(ENV_API_KEY))
    connection_id: Optional[str] = field(
        default_factory=lambda: _optional_env(ENV_CONNECTION_ID)
    )
    timeout: float = field(
        default_factory=lambda: float(os.getenv(ENV_TIMEOUT, str(DEFAULT_TIMEOUT)))
    )

    # Logging
    log_level: int = field(
        default_factory=lambda: LOG_LEVELS.get(
            os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO
        )
    )
    log_file_path: Optional[Path] = field(
        default_factory=lambda: Path(os.environ["LOG_FILE_PATH"])
        if os.getenv("LOG_FILE_PATH")
        else None
    )

    # Debug options
    debug_mode: bool = field(
        default_factory=lambda: os.getenv("DEBUG_MODE", "false").lower() == "true"
    )

    def validate(self) -> List[str]:
        """
        Validate configuration values.

        Returns:
            List[str]: List of validation errors, empty if valid
        """
        errors = []

        if not self.api_url:
            errors.append(f"{ENV_API_URL} is required")
        else:
            parsed = urlparse(self.api_url)
            if parsed.scheme not in ("http", "https") or not parsed.netloc:
                errors.append(f"{ENV_API_URL} must be an http(s) URL: {self.api_url}")

        if not self.api_key:
            errors.append(f"{ENV_API_KEY} is required")

        if self.timeout <= 0:
            errors.append(f"{ENV_TIMEOUT} must be positive")

        if self.log_file_path is not None and not self.log_file_path.parent.exists():
            errors.append(f"Log file path parent does not exist: {self.log_file_path.parent}")

        return errors
