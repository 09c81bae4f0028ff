"""
Shared fixtures for the FoodieFrame client tests.

HTTP traffic is faked by patching requests.Session.request. Because the patch
replaces the attribute on the class with a plain Mock, calls arrive as
(method, url, **kwargs) without the session instance. Tests that need the
encoded request (headers, multipart body) use the `wire` fixture instead.
"""

import json
from typing import Any, Optional
from unittest.mock import patch

import pytest
import requests

from foodieframe.client import FoodieFrameClient
from foodieframe.models import Session, User
from foodieframe.session import MemorySessionStorage, SessionStore

BASE_URL = "http://api.test/api"
UPLOAD_URL = "http://upload.test/api"
TOKEN = "token-abc"


def build_response(status_code: int = 200, body: Any = None, text: Optional[str] = None) -> requests.Response:
    """Build a real requests.Response with a JSON or text body."""
    response = requests.Response()
    response.status_code = status_code
    response.encoding = "utf-8"
    if body is not None:
        response._content = json.dumps(body).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
    elif text is not None:
        response._content = text.encode("utf-8")
        response.headers["Content-Type"] = "text/plain"
    else:
        response._content = b""
    return response


@pytest.fixture
def make_response():
    """Factory for fake responses."""
    return build_response


@pytest.fixture
def store():
    """An empty in-memory session store."""
    return SessionStore(MemorySessionStorage())


@pytest.fixture
def session():
    """A session for user 7."""
    return Session(user=User(id=7, username="ana", name="Ana", email="ana@example.com"), token=TOKEN)


@pytest.fixture
def client(store):
    """A client pointed at a fake backend, not logged in."""
    api = FoodieFrameClient(store, base_url=BASE_URL, upload_url=UPLOAD_URL, timeout=5)
    yield api
    api.close()


@pytest.fixture
def logged_in_client(client, session):
    """The same client with user 7 logged in."""
    client.session.set_session(session)
    return client


@pytest.fixture
def http():
    """Patch every outgoing request; returns the mock."""
    with patch("requests.Session.request") as mock_request:
        mock_request.return_value = build_response(200, {})
        yield mock_request


@pytest.fixture
def wire():
    """
    Patch the transport adapter instead of Session.request, so requests
    prepares the real request. The mock receives the PreparedRequest as its
    first positional argument.
    """
    with patch("requests.adapters.HTTPAdapter.send") as mock_send:
        mock_send.return_value = build_response(200, {})
        yield mock_send
