"""
Graph Calendar Schemas - Data structures for calendar operations.

These Pydantic models cover the two directions the app needs:
- Reading: Graph event resources, projected into display rows
- Writing: a room booking built from the HTML form, serialized to Graph JSON

Reference: https://learn.microsoft.com/graph/api/resources/event
"""

import re
from datetime import datetime, timedelta
from typing import Optional, List, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


# Display format for event start times in the event list
ROW_TIME_FORMAT = "%Y/%m/%d %H:%M"

# Graph expects local wall-clock time without offset; the zone goes in timeZone
GRAPH_DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%S"

# Separates the room's email address from its display name in the form
LOCATION_SEPARATOR = "/"

# Graph returns 7 fractional digits ("2025-01-15T10:00:00.0000000")
_FRACTION_RE = re.compile(r"\.(\d{6})\d+")


class BookingFormError(ValueError):
    """Raised when booking form fields can't be parsed."""
    pass


# ---------------------------------------------------------------------------
# READ MODELS
# ---------------------------------------------------------------------------


class DateTimeTimeZone(BaseModel):
    """
    Graph dateTimeTimeZone resource.

    dateTime is a wall-clock time in the zone named by timeZone; with the
    Prefer: outlook.timezone header that is the preferred zone.
    """
    model_config = ConfigDict(populate_by_name=True)

    date_time: datetime = Field(..., alias="dateTime")
    time_zone: Optional[str] = Field(None, alias="timeZone")

    @field_validator("date_time", mode="before")
    @classmethod
    def _trim_fraction(cls, value: Any) -> Any:
        if isinstance(value, str):
            return _FRACTION_RE.sub(r".\1", value)
        return value


class EventLocation(BaseModel):
    """Graph location resource (only the fields the app uses)."""
    model_config = ConfigDict(populate_by_name=True)

    display_name: Optional[str] = Field(None, alias="displayName")
    location_email_address: Optional[str] = Field(None, alias="locationEmailAddress")


class EventRow(BaseModel):
    """One line of the event list: formatted start, subject, location name."""
    start: str
    subject: str
    location: str


class GraphEvent(BaseModel):
    """
    A Microsoft Graph calendar event.

    Graph events carry dozens of fields; only what the event list shows
    is modelled and the rest is ignored.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Optional[str] = None
    subject: Optional[str] = None
    start: Optional[DateTimeTimeZone] = None
    end: Optional[DateTimeTimeZone] = None
    location: Optional[EventLocation] = None

    def get_display_title(self) -> str:
        """Get a display-friendly title (with fallback)."""
        return self.subject or "(No title)"

    def get_time_display(self) -> str:
        """Start time as YYYY/MM/DD HH:MM, or empty if Graph sent none."""
        if not self.start:
            return ""
        return self.start.date_time.strftime(ROW_TIME_FORMAT)

    def get_location_name(self) -> str:
        if self.location and self.location.display_name:
            return self.location.display_name
        return ""

    def to_row(self) -> EventRow:
        """Project this event onto the display triple."""
        return EventRow(
            start=self.get_time_display(),
            subject=self.get_display_title(),
            location=self.get_location_name(),
        )


class CalendarViewResponse(BaseModel):
    """Response envelope of GET /me/calendar/calendarView."""
    model_config = ConfigDict(populate_by_name=True)

    value: List[GraphEvent] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# WRITE MODELS
# ---------------------------------------------------------------------------


def split_location(location: str) -> tuple[str, str]:
    """
    Split "room@example.com/Room A" into (email, display name).

    Only the first two pieces are kept, so a display name that itself
    contains "/" is cut at the first one.

    Example:
        >>> split_location("room-a@contoso.com/Room A")
        ('room-a@contoso.com', 'Room A')
    """
    parts = location.split(LOCATION_SEPARATOR)
    email = parts[0]
    name = parts[1] if len(parts) > 1 else ""
    return email, name


def join_location(email: str, display_name: str) -> str:
    """Inverse of split_location() for names without "/"."""
    return f"{email}{LOCATION_SEPARATOR}{display_name}"


def _parse_numbers(value: str, separator: str, count: int, field: str) -> List[int]:
    parts = value.strip().split(separator)
    if len(parts) != count:
        raise BookingFormError(f"Invalid {field}: {value!r}")
    try:
        return [int(part) for part in parts]
    except ValueError:
        raise BookingFormError(f"Invalid {field}: {value!r}")


def parse_start(start_date: str, start_time: str) -> datetime:
    """
    Build a naive start datetime from "YYYY/MM/DD" and "HH:MM".

    Raises:
        BookingFormError: If either field isn't numeric or the date doesn't exist
    """
    year, month, day = _parse_numbers(start_date, "/", 3, "startDate")
    hour, minute = _parse_numbers(start_time, ":", 2, "startTime")
    try:
        return datetime(year, month, day, hour, minute, 0)
    except ValueError as e:
        raise BookingFormError(f"Invalid start {start_date} {start_time}: {e}")


class BookingRequest(BaseModel):
    """
    A room reservation built from the booking form.

    Example:
        request = BookingRequest.from_form(
            subject="Design review",
            location="room-a@contoso.com/Room A",
            start_date="2025/01/15",
            start_time="10:00",
            length="30",
            timezone="Asia/Tokyo",
        )
        payload = request.to_graph_payload()
    """
    subject: str
    location_email: str
    location_name: str
    start: datetime
    length_minutes: int
    timezone: str

    @property
    def end(self) -> datetime:
        """End time: start plus the booked length."""
        return self.start + timedelta(minutes=self.length_minutes)

    @classmethod
    def from_form(
        cls,
        subject: str,
        location: str,
        start_date: str,
        start_time: str,
        length: str,
        timezone: str,
    ) -> "BookingRequest":
        """
        Parse raw form fields into a booking.

        Raises:
            BookingFormError: If the date, time, or length can't be parsed
        """
        email, name = split_location(location)
        start = parse_start(start_date, start_time)
        try:
            length_minutes = int(str(length).strip())
        except ValueError:
            raise BookingFormError(f"Invalid length: {length!r}")

        # The end must still be a representable datetime
        try:
            start + timedelta(minutes=length_minutes)
        except (ValueError, OverflowError):
            raise BookingFormError(
                f"Invalid length: {length!r} minutes from {start_date} {start_time}"
            )

        return cls(
            subject=subject,
            location_email=email,
            location_name=name,
            start=start,
            length_minutes=length_minutes,
            timezone=timezone,
        )

    def to_graph_payload(self) -> dict:
        """
        Serialize to the JSON body of POST /me/calendar/events.

        The room is both the event location and a "resource" attendee; the
        attendee is what actually books the room mailbox.
        """
        return {
            "subject": self.subject,
            "start": {
                "dateTime": self.start.strftime(GRAPH_DATETIME_FORMAT),
                "timeZone": self.timezone,
            },
            "end": {
                "dateTime": self.end.strftime(GRAPH_DATETIME_FORMAT),
                "timeZone": self.timezone,
            },
            "location": {
                "locationEmailAddress": self.location_email,
                "displayName": self.location_name,
            },
            "attendees": [
                {
                    "emailAddress": {
                        "address": self.location_email,
                    },
                    "type": "resource",
                }
            ],
        }
