"""
Test configuration and fixtures for pytest.

This module provides shared fixtures used across all tests:
- Deterministic settings (set through env vars before the app is imported)
- A fake Microsoft upstream built on httpx.MockTransport
- Test clients (FastAPI TestClient) with and without a session cookie
"""

import os

# Settings are read once at import time, so configure them before importing the app
os.environ["TENANT_ID"] = "test-tenant"
os.environ["CLIENT_ID"] = "test-client-id"
os.environ["CLIENT_SECRET"] = "test-client-secret"
os.environ["APP_URL"] = "http://localhost:1337"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["CALENDAR_TIMEZONE"] = "Asia/Tokyo"
os.environ["OAUTH_SCOPES"] = "User.Read Calendars.ReadWrite.Shared"
os.environ["EVENT_WINDOW_DAYS"] = "7"

import html
import re
from typing import Generator, List, Union
from urllib.parse import parse_qs, urlparse

import httpx
import pytest
from fastapi.testclient import TestClient

from roombook.main import app
from roombook.deps import get_auth_client, get_calendar_client_factory
from roombook.environments.microsoft import MicrosoftAuthClient, GraphCalendarClient


TOKEN_PATH = "/oauth2/v2.0/token"
CALENDAR_VIEW_PATH = "/v1.0/me/calendar/calendarView"
EVENTS_PATH = "/v1.0/me/calendar/events"

ACCESS_TOKEN = "test-access-token"


# ---------------------------------------------------------------------------
# FAKE UPSTREAM
# ---------------------------------------------------------------------------

class FakeUpstream:
    """
    Stands in for login.microsoftonline.com and graph.microsoft.com.

    Register a response (or an exception to raise) per method and path
    suffix; every request that reaches the transport is recorded.
    """

    def __init__(self):
        self._routes: dict = {}
        self.requests: List[httpx.Request] = []

    def add(self, method: str, path_suffix: str, reply: Union[httpx.Response, Exception]) -> None:
        self._routes[(method, path_suffix)] = reply

    def requests_to(self, path_suffix: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.path.endswith(path_suffix)]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        for (method, suffix), reply in self._routes.items():
            if request.method == method and request.url.path.endswith(suffix):
                if isinstance(reply, Exception):
                    raise reply
                return reply
        raise AssertionError(f"Unexpected upstream call: {request.method} {request.url}")

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


# ---------------------------------------------------------------------------
# CLIENT FIXTURES
# ---------------------------------------------------------------------------

@pytest.fixture
def client(upstream: FakeUpstream) -> Generator[TestClient, None, None]:
    """
    Create a test client whose outbound calls go to the fake upstream.

    Overrides the client dependencies so no real network is touched.
    """
    transport = upstream.transport

    def override_auth_client():
        return MicrosoftAuthClient(transport=transport)

    def override_calendar_factory():
        def factory(access_token: str) -> GraphCalendarClient:
            return GraphCalendarClient(access_token=access_token, transport=transport)
        return factory

    app.dependency_overrides[get_auth_client] = override_auth_client
    app.dependency_overrides[get_calendar_client_factory] = override_calendar_factory

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def signed_in_client(client: TestClient) -> TestClient:
    """Test client that already holds an accessToken cookie."""
    client.cookies.set("accessToken", ACCESS_TOKEN)
    return client


# ---------------------------------------------------------------------------
# HELPERS
# ---------------------------------------------------------------------------

def extract_authorization_url(page: str) -> str:
    """Pull the sign-in link out of the rendered login page."""
    match = re.search(r'id="login"[^>]*href="([^"]+)"', page)
    assert match, "login link not found"
    return html.unescape(match.group(1))


def query_of(url: str) -> dict:
    """Single-valued query parameters of a URL."""
    return {key: values[0] for key, values in parse_qs(urlparse(url).query).items()}


def graph_json(status_code: int, body: str) -> httpx.Response:
    """A Graph-style JSON response with the body kept byte-for-byte."""
    return httpx.Response(
        status_code,
        content=body.encode(),
        headers={"content-type": "application/json"},
    )
