#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Data models sent to and received from the ActiveCampaign API.
"""

from .contact import Contact
from .deal import Deal

__all__ = ["Contact", "Deal"]
