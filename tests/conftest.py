"""
Pytest configuration and fixtures for remdoc tests.
"""

import sys
from pathlib import Path
from unittest.mock import MagicMock, PropertyMock

import pytest
import requests

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

BASE_URL = "https://portainer.example.com"
TOKEN = "test-jwt"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Keep tests away from the real ~/.remdoc and any timeout override."""
    monkeypatch.delenv("REMDOC_TIMEOUT", raising=False)
    monkeypatch.setenv("REMDOC_CONFIG_DIR", str(tmp_path / "remdoc-config"))


@pytest.fixture
def make_response():
    """Build a fake requests.Response. null=True makes the body JSON null."""

    def _make(status_code=200, json_body=None, text="", unreadable=False, null=False):
        response = MagicMock()
        response.status_code = status_code
        response.json.return_value = json_body
        if json_body is None and not null:
            response.json.side_effect = ValueError("Expecting value")
        if unreadable:
            type(response).text = PropertyMock(
                side_effect=requests.ConnectionError("connection reset")
            )
        else:
            response.text = text
        return response

    return _make


@pytest.fixture
def mock_session():
    """A requests.Session stand-in; set request.side_effect per test."""
    return MagicMock(spec=requests.Session)


@pytest.fixture
def endpoints_response(make_response):
    """GET /api/endpoints answer with a single endpoint, id 3."""
    return make_response(200, [{"Id": 3, "Name": "local"}])


@pytest.fixture
def backend(mock_session):
    from remdoc.core.portainer import PortainerBackend

    return PortainerBackend(BASE_URL + "/", TOKEN, session=mock_session)
