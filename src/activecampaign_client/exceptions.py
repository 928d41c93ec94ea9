#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Exceptions raised by the ActiveCampaign client.

Every failure surfaces as a subclass of ActiveCampaignError. Nothing is
retried or recovered inside the client.
"""

from typing import Any, Dict, Optional

UNKNOWN_ERROR_MESSAGE = "Unknown error occurred"


class ActiveCampaignError(Exception):
    """Base exception for ActiveCampaign client errors."""
    pass


class TransportError(ActiveCampaignError):
    """Exception raised when the HTTP call itself could not be completed."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(f"Transport error: {message}")


class ApiError(ActiveCampaignError):
    """
    Exception raised when the API answers with a failure.

    Covers HTTP statuses outside 2xx as well as bodies carrying
    ``"status": "error"``.
    """

    def __init__(
        self,
        status_code: int,
        message: Optional[str] = None,
        response: Optional[Dict[str, Any]] = None,
    ):
        self.status_code = status_code
        self.message = message or UNKNOWN_ERROR_MESSAGE
        self.response = response if response is not None else {}
        super().__init__(f"HTTP error {status_code}: {self.message}")


class ValidationError(ActiveCampaignError, ValueError):
    """Exception raised when a model is built from invalid values."""
    pass
