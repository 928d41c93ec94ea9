#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Pytest configuration file for the ActiveCampaign client test suite.
"""

import os
import sys
import json
import pytest
from pathlib import Path
from unittest.mock import MagicMock

import requests

# Add the src directory to Python path
project_root = Path(__file__).parent.parent
src_path = os.path.join(project_root, "src")
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from activecampaign_client.client import ActiveCampaignClient

TEST_API_URL = "https://testaccount.api-us1.com"
TEST_API_KEY = "test_api_key_123"


def make_response(status_code: int = 200, payload=None, text=None) -> MagicMock:
    """Build a mock requests.Response."""
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    if text is None:
        text = json.dumps(payload) if payload is not None else ""
    response.content = text.encode("utf-8")
    response.text = text
    if payload is not None:
        response.json.return_value = payload
    else:
        response.json.side_effect = ValueError("No JSON object could be decoded")
    return response


@pytest.fixture(scope="function")
def mock_session() -> MagicMock:
    """Mock requests session with a default empty 200 response."""
    session = MagicMock(spec=requests.Session)
    session.headers = {}
    session.request.return_value = make_response(200, {})
    return session


@pytest.fixture(scope="function")
def client(mock_session: MagicMock) -> ActiveCampaignClient:
    """Client wired to the mock session."""
    return ActiveCampaignClient(
        TEST_API_URL,
        TEST_API_KEY,
        connection_id="7",
        session=mock_session,
    )


@pytest.fixture(scope="function")
def temp_log_path(tmp_path: Path) -> Path:
    """Temporary log file path for testing."""
    return tmp_path / "test.log"


@pytest.fixture(scope="function")
def mock_env_vars(monkeypatch, temp_log_path: Path):
    """
    Set up environment variables for testing.

    Args:
        monkeypatch: Pytest monkeypatch fixture
        temp_log_path: Temporary log file path
    """
    monkeypatch.setenv("ACTIVECAMPAIGN_API_URL", TEST_API_URL)
    monkeypatch.setenv("ACTIVECAMPAIGN_API_KEY", TEST_API_KEY)
    monkeypatch.setenv("ACTIVECAMPAIGN_CONNECTION_ID", "3")
    monkeypatch.setenv("ACTIVECAMPAIGN_TIMEOUT", "12.5")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("LOG_FILE_PATH", str(temp_log_path))
    monkeypatch.setenv("DEBUG_MODE", "true")


@pytest.fixture(scope="function")
def clean_env(monkeypatch):
    """Remove every client environment variable."""
    for name in (
        "ACTIVECAMPAIGN_API_URL",
        "ACTIVECAMPAIGN_API_KEY",
        "ACTIVECAMPAIGN_CONNECTION_ID",
        "ACTIVECAMPAIGN_TIMEOUT",
        "LOG_LEVEL",
        "LOG_FILE_PATH",
        "DEBUG_MODE",
    ):
        monkeypatch.delenv(name, raising=False)
