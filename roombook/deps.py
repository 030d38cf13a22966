"""
Dependencies module - reusable FastAPI dependencies for route handlers.

Clients are handed out through dependencies so tests can swap in versions
backed by httpx.MockTransport via app.dependency_overrides.
"""

from typing import Callable

from fastapi import Request

from roombook.core.config import settings
from roombook.core.session import TokenSession
from roombook.environments.microsoft import MicrosoftAuthClient, GraphCalendarClient
from roombook.environments.microsoft.calendar import PageRenderer


# Builds a calendar client for the bearer token of the current session
CalendarClientFactory = Callable[[str], GraphCalendarClient]


def get_session(request: Request) -> TokenSession:
    """Cookie-backed session of the current request."""
    return TokenSession(request)


def get_auth_client() -> MicrosoftAuthClient:
    """OAuth client configured from settings."""
    return MicrosoftAuthClient()


def get_calendar_client_factory() -> CalendarClientFactory:
    """
    Return a factory rather than a client: the token only exists for
    signed-in users, and routes decide what to do when it's missing.
    """
    def factory(access_token: str) -> GraphCalendarClient:
        return GraphCalendarClient(access_token=access_token)

    return factory


def get_renderer() -> PageRenderer:
    return PageRenderer(title=settings.APP_NAME)
