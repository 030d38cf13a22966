"""
Graph Calendar Module - Microsoft Graph calendar integration.

Features:
=========
- List the signed-in user's events for the coming week (calendarView)
- Book a room: create an event with the room as a resource attendee
- Render the event list, booking form, and login page as HTML
"""

from roombook.environments.microsoft.calendar.client import GraphCalendarClient
from roombook.environments.microsoft.calendar.schemas import (
    BookingFormError,
    BookingRequest,
    EventRow,
    GraphEvent,
    split_location,
    join_location,
    parse_start,
)
from roombook.environments.microsoft.calendar.renderer import PageRenderer

__all__ = [
    "GraphCalendarClient",
    "BookingFormError",
    "BookingRequest",
    "EventRow",
    "GraphEvent",
    "split_location",
    "join_location",
    "parse_start",
    "PageRenderer",
]
