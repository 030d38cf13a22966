"""
Tests for the booking and event schemas.

These tests verify:
- Location field splitting (email/displayName)
- Date/time parsing from the form's separate fields
- Graph event payload (end = start + length, resource attendee)
- Projection of Graph events into display rows
"""

from datetime import datetime, timedelta

import pytest

from roombook.environments.microsoft.calendar.schemas import (
    BookingFormError,
    BookingRequest,
    CalendarViewResponse,
    GraphEvent,
    join_location,
    parse_start,
    split_location,
)


def _booking(**overrides) -> BookingRequest:
    fields = {
        "subject": "Design review",
        "location": "room@x.com/Room A",
        "start_date": "2025/01/15",
        "start_time": "10:00",
        "length": "30",
        "timezone": "Asia/Tokyo",
    }
    fields.update(overrides)
    return BookingRequest.from_form(**fields)


class TestSplitLocation:
    """Tests for the email/displayName location field."""

    def test_split_email_and_name(self):
        assert split_location("room@x.com/Room A") == ("room@x.com", "Room A")

    @pytest.mark.parametrize("name", ["Room A", "Sakura 3F (12 seats)", "会議室 B"])
    def test_names_without_separator_survive(self, name):
        """A display name with no "/" comes back unchanged."""
        email, parsed = split_location(join_location("room@x.com", name))

        assert email == "room@x.com"
        assert parsed == name

    def test_name_with_separator_is_cut(self):
        """Only the piece before the second "/" is kept."""
        assert split_location("room@x.com/Room/A") == ("room@x.com", "Room")

    def test_missing_separator_gives_empty_name(self):
        assert split_location("room@x.com") == ("room@x.com", "")


class TestParseStart:
    """Tests for combining startDate and startTime."""

    def test_parse_date_and_time(self):
        assert parse_start("2025/01/15", "10:05") == datetime(2025, 1, 15, 10, 5)

    def test_single_digit_parts(self):
        assert parse_start("2025/1/5", "9:00") == datetime(2025, 1, 5, 9, 0)

    @pytest.mark.parametrize(
        "start_date,start_time",
        [
            ("2025-01-15", "10:00"),
            ("2025/13/01", "10:00"),
            ("2025/02/30", "10:00"),
            ("2025/01/15", "ab:cd"),
            ("2025/01/15", "25:00"),
        ],
    )
    def test_invalid_values_raise(self, start_date, start_time):
        with pytest.raises(BookingFormError):
            parse_start(start_date, start_time)


class TestBookingRequest:
    """Tests for BookingRequest and its Graph payload."""

    def test_end_is_start_plus_length(self):
        booking = _booking(length="30")

        assert booking.end - booking.start == timedelta(minutes=30)

    def test_payload_times(self):
        """Start and end are local wall-clock times in the calendar zone."""
        payload = _booking().to_graph_payload()

        assert payload["start"] == {"dateTime": "2025-01-15T10:00:00", "timeZone": "Asia/Tokyo"}
        assert payload["end"] == {"dateTime": "2025-01-15T10:30:00", "timeZone": "Asia/Tokyo"}

    def test_payload_end_crosses_midnight(self):
        payload = _booking(start_time="23:45", length="30").to_graph_payload()

        assert payload["end"]["dateTime"] == "2025-01-16T00:15:00"

    def test_payload_location_and_attendee(self):
        """The room is both the location and a resource attendee."""
        payload = _booking().to_graph_payload()

        assert payload["subject"] == "Design review"
        assert payload["location"] == {
            "locationEmailAddress": "room@x.com",
            "displayName": "Room A",
        }
        assert payload["attendees"] == [
            {"emailAddress": {"address": "room@x.com"}, "type": "resource"}
        ]

    def test_invalid_length_raises(self):
        with pytest.raises(BookingFormError):
            _booking(length="half an hour")

    @pytest.mark.parametrize(
        "overrides",
        [
            {"length": "99999999999"},
            {"length": "9" * 40},
            {"start_date": "9999/12/31", "start_time": "23:59", "length": "30"},
            {"start_date": "0001/01/01", "start_time": "00:00", "length": "-1"},
        ],
    )
    def test_end_out_of_range_raises(self, overrides):
        """A length that pushes the end past the datetime range is a form error."""
        with pytest.raises(BookingFormError):
            _booking(**overrides)


class TestGraphEvent:
    """Tests for reading Graph events into display rows."""

    def test_to_row(self):
        """Graph's 7-digit fractional seconds are accepted."""
        event = GraphEvent(**{
            "id": "AAMk1",
            "subject": "Weekly sync",
            "start": {"dateTime": "2025-01-15T10:00:00.0000000", "timeZone": "Tokyo Standard Time"},
            "end": {"dateTime": "2025-01-15T10:30:00.0000000", "timeZone": "Tokyo Standard Time"},
            "location": {"displayName": "Room A"},
        })

        row = event.to_row()

        assert row.start == "2025/01/15 10:00"
        assert row.subject == "Weekly sync"
        assert row.location == "Room A"

    def test_to_row_fallbacks(self):
        event = GraphEvent(**{"start": {"dateTime": "2025-01-15T09:30:00"}})

        row = event.to_row()

        assert row.start == "2025/01/15 09:30"
        assert row.subject == "(No title)"
        assert row.location == ""

    def test_calendar_view_ignores_unknown_fields(self):
        view = CalendarViewResponse(**{
            "@odata.context": "https://graph.microsoft.com/v1.0/$metadata#users('me')/calendar/calendarView",
            "value": [
                {"subject": "A", "isOnlineMeeting": True, "start": {"dateTime": "2025-01-15T10:00:00"}},
                {"subject": "B", "start": {"dateTime": "2025-01-16T11:00:00"}},
            ],
        })

        assert [event.subject for event in view.value] == ["A", "B"]
