#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
ActiveCampaign API client.

A synchronous wrapper around the ActiveCampaign v3 REST API covering contacts,
accounts, deals, tags and e-commerce connections, customers and orders.
"""

__version__ = "0.1.0"

from .client import ActiveCampaignClient
from .config import ClientConfig
from .exceptions import ActiveCampaignError, ApiError, TransportError, ValidationError
from .models import Contact, Deal

__all__ = [
    "ActiveCampaignClient",
    "ClientConfig",
    "ActiveCampaignError",
    "ApiError",
    "TransportError",
    "ValidationError",
    "Contact",
    "Deal",
]
