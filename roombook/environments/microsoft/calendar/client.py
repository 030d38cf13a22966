"""
Microsoft Graph Calendar Client - Read upcoming events and book rooms.

Key Features:
=============
1. Calendar view (expanded occurrences) for a time window, ordered by start
2. Event creation with a room as "resource" attendee
3. Tagged errors: NetworkError vs UpstreamError (status + raw body)

Every request sends Prefer: outlook.timezone="<CALENDAR_TIMEZONE>" so Graph
returns start/end in the same zone events are created in.

API Reference:
==============
- calendarView: https://learn.microsoft.com/graph/api/calendar-list-calendarview
- Create event: https://learn.microsoft.com/graph/api/calendar-post-events
"""

import logging
from datetime import datetime, timezone, timedelta
from typing import Any, List, Optional, Type

import httpx
from pydantic import BaseModel, ValidationError

from roombook.core.config import settings
from roombook.environments.base import EnvironmentService, NetworkError, UpstreamError
from roombook.environments.microsoft.calendar.schemas import (
    BookingRequest,
    CalendarViewResponse,
    GraphEvent,
)


logger = logging.getLogger("roombook.environments.microsoft.calendar")


def to_graph_timestamp(value: datetime) -> str:
    """Format an aware datetime as UTC ISO-8601 with millisecond precision and Z."""
    utc = value.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


class GraphCalendarClient(EnvironmentService):
    """
    Microsoft Graph calendar client for the signed-in user.

    Attributes:
        access_token: Bearer token with Calendars.ReadWrite.Shared
        timezone: IANA/Windows zone name used for the Prefer header and new events

    Example:
        client = GraphCalendarClient(access_token="eyJ0eXAi...")
        events = await client.list_upcoming_events()
    """

    BASE_URL = "https://graph.microsoft.com/v1.0"

    def __init__(
        self,
        access_token: str,
        time_zone: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the Calendar client.

        Args:
            access_token: Bearer token from the session cookie
            time_zone: Calendar time zone (defaults to settings.CALENDAR_TIMEZONE)
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        super().__init__(access_token)
        self.timezone = time_zone or settings.CALENDAR_TIMEZONE
        self._transport = transport

    # -------------------------------------------------------------------------
    # HTTP CLIENT MANAGEMENT
    # -------------------------------------------------------------------------

    def _get_headers(self) -> dict:
        headers = super()._get_headers()
        headers["Prefer"] = f'outlook.timezone="{self.timezone}"'
        return headers

    async def _make_request(
        self,
        method: str,
        endpoint: str,
        params: Optional[dict] = None,
        json_body: Optional[dict] = None,
        response_model: Optional[Type[BaseModel]] = None,
    ) -> Any:
        """
        Make an authenticated request to the Graph API.

        Args:
            method: HTTP method (GET, POST, etc.)
            endpoint: API endpoint path (e.g., "/me/calendar/events")
            params: Query parameters
            json_body: JSON body to send
            response_model: Optional model to validate the JSON into

        Returns:
            The validated model, or the parsed JSON (empty dict for bodiless
            responses) when no model is given

        Raises:
            NetworkError: If Graph can't be reached
            UpstreamError: If Graph answers with a non-2xx status or a body
                           that isn't the expected JSON
        """
        url = f"{self.BASE_URL}{endpoint}"

        async with httpx.AsyncClient(transport=self._transport) as client:
            try:
                response = await client.request(
                    method=method,
                    url=url,
                    headers=self._get_headers(),
                    params=params,
                    json=json_body,
                    timeout=settings.HTTP_TIMEOUT,
                )
            except httpx.RequestError as e:
                logger.error(f"Network error in Graph API: {e}")
                raise NetworkError(f"Network error: {e}") from e

        if response.status_code == 401:
            logger.error("Graph API: Unauthorized (token may be expired)")
        elif response.status_code == 403:
            logger.error("Graph API: Forbidden (calendar scope may be missing)")

        if not response.is_success:
            logger.error(f"Graph API error: {response.status_code} - {response.text}")
            raise UpstreamError.from_response(
                f"{method} {endpoint} failed with status {response.status_code}",
                response,
            )

        try:
            data = response.json() if response.content else {}
            if response_model is not None:
                return response_model(**data)
            return data
        except (TypeError, ValueError, ValidationError) as e:
            logger.error(f"Malformed Graph response: {e}")
            raise UpstreamError.from_response("Malformed Graph response", response) from e

    # -------------------------------------------------------------------------
    # CALENDAR EVENTS
    # -------------------------------------------------------------------------

    async def list_calendar_view(
        self,
        start: datetime,
        end: datetime,
    ) -> List[GraphEvent]:
        """
        List event occurrences between start and end, ordered by start time.

        Args:
            start: Window start (timezone-aware)
            end: Window end (timezone-aware)

        Returns:
            List of GraphEvent objects
        """
        params = {
            "startDateTime": to_graph_timestamp(start),
            "endDateTime": to_graph_timestamp(end),
            "$orderby": "start/dateTime",
        }

        logger.info(
            "Fetching calendar view",
            extra={"start": params["startDateTime"], "end": params["endDateTime"]},
        )

        view = await self._make_request(
            method="GET",
            endpoint="/me/calendar/calendarView",
            params=params,
            response_model=CalendarViewResponse,
        )

        logger.info(f"Fetched {len(view.value)} calendar events")

        return view.value

    async def list_upcoming_events(
        self,
        days: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> List[GraphEvent]:
        """
        List events from now until `days` days ahead.

        Args:
            days: Window length (defaults to settings.EVENT_WINDOW_DAYS)
            now: Window start (defaults to the current time)

        Returns:
            List of GraphEvent objects
        """
        if now is None:
            now = datetime.now(timezone.utc)
        window = timedelta(days=days if days is not None else settings.EVENT_WINDOW_DAYS)

        return await self.list_calendar_view(start=now, end=now + window)

    async def create_event(self, request: BookingRequest) -> dict:
        """
        Book a room by creating an event on the user's calendar.

        Args:
            request: BookingRequest parsed from the form

        Returns:
            The created event resource as returned by Graph

        Raises:
            NetworkError: If Graph can't be reached
            UpstreamError: If Graph rejects the event
        """
        logger.info(
            "Creating calendar event",
            extra={
                "subject": request.subject,
                "room": request.location_email,
                "start": request.start.isoformat(),
                "length_minutes": request.length_minutes,
            },
        )

        created = await self._make_request(
            method="POST",
            endpoint="/me/calendar/events",
            json_body=request.to_graph_payload(),
        )

        logger.info(f"Created event: {created.get('id', '')}")

        return created
