"""
Microsoft Environment Module - Microsoft 365 integration.

microsoft/
├── __init__.py
├── auth/                 # Identity platform OAuth (authorize URL, token exchange)
└── calendar/             # Graph calendar API (calendarView, events)

Usage:
======
    from roombook.environments.microsoft import MicrosoftAuthClient, GraphCalendarClient

    auth_client = MicrosoftAuthClient()
    tokens = await auth_client.exchange_code_for_tokens(code)

    calendar = GraphCalendarClient(access_token=tokens.access_token)
    rows = [event.to_row() for event in await calendar.list_upcoming_events()]
"""

from roombook.environments.microsoft.auth import MicrosoftAuthClient
from roombook.environments.microsoft.calendar import (
    GraphCalendarClient,
    GraphEvent,
    EventRow,
    BookingRequest,
)

__all__ = [
    "MicrosoftAuthClient",
    "GraphCalendarClient",
    "GraphEvent",
    "EventRow",
    "BookingRequest",
]
