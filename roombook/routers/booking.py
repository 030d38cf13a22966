"""
Booking Router - The app's home page and the room booking form.

Endpoints:
==========
- GET /  → Login page (no session) or event list + booking form
- POST / → Create the booking in the user's calendar, then back to GET /

Upstream failures are not handled here: NetworkError and UpstreamError
propagate to the exception handlers in roombook.main, so a failed calendar
call never produces a half-rendered page.
"""

import logging

from fastapi import APIRouter, Depends, Form, status
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from roombook.core.config import settings
from roombook.core.security import generate_state
from roombook.core.session import TokenSession
from roombook.deps import (
    CalendarClientFactory,
    get_auth_client,
    get_calendar_client_factory,
    get_renderer,
    get_session,
)
from roombook.environments.microsoft import MicrosoftAuthClient
from roombook.environments.microsoft.auth import parse_scopes
from roombook.environments.microsoft.calendar import (
    BookingFormError,
    BookingRequest,
    PageRenderer,
)


logger = logging.getLogger("roombook.routers.booking")


# ---------------------------------------------------------------------------
# ROUTER SETUP
# ---------------------------------------------------------------------------
router = APIRouter(tags=["booking"])


# ---------------------------------------------------------------------------
# HELPER FUNCTIONS
# ---------------------------------------------------------------------------


def _render_login_page(
    session: TokenSession,
    auth_client: MicrosoftAuthClient,
    renderer: PageRenderer,
) -> HTMLResponse:
    """
    Render the login page and start a login attempt.

    The state nonce goes both into the authorize URL and, signed, into
    the oauthState cookie that /callback checks.
    """
    state = generate_state()
    authorization_url = auth_client.get_authorization_url(
        scopes=parse_scopes(settings.OAUTH_SCOPES),
        state=state,
    )

    response = HTMLResponse(content=renderer.render_login(authorization_url))
    session.begin_login(response, state)
    return response


# ---------------------------------------------------------------------------
# ENDPOINTS
# ---------------------------------------------------------------------------


@router.get("/", response_class=HTMLResponse)
async def home(
    session: TokenSession = Depends(get_session),
    auth_client: MicrosoftAuthClient = Depends(get_auth_client),
    calendar_factory: CalendarClientFactory = Depends(get_calendar_client_factory),
    renderer: PageRenderer = Depends(get_renderer),
):
    """
    Show the login page or the user's upcoming events and booking form.

    Returns:
        HTMLResponse with either page
    """
    access_token = session.get_access_token()
    if access_token is None:
        return _render_login_page(session, auth_client, renderer)

    calendar = calendar_factory(access_token)
    events = await calendar.list_upcoming_events()

    rows = [event.to_row() for event in events]
    return HTMLResponse(
        content=renderer.render_form(rows, window_days=settings.EVENT_WINDOW_DAYS)
    )


@router.post("/")
async def book_room(
    subject: str = Form(...),
    location: str = Form(..., description="Room as email/displayName"),
    start_date: str = Form(..., alias="startDate", description="YYYY/MM/DD"),
    start_time: str = Form(..., alias="startTime", description="HH:MM"),
    length: str = Form(..., description="Meeting length in minutes"),
    session: TokenSession = Depends(get_session),
    calendar_factory: CalendarClientFactory = Depends(get_calendar_client_factory),
    renderer: PageRenderer = Depends(get_renderer),
) -> Response:
    """
    Book a room from the submitted form.

    Returns:
        303 redirect to / on success (or when not signed in),
        400 page if the date, time, or length can't be parsed
    """
    access_token = session.get_access_token()
    if access_token is None:
        logger.info("Booking submitted without a session, sending to login")
        return RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)

    calendar = calendar_factory(access_token)

    try:
        booking = BookingRequest.from_form(
            subject=subject,
            location=location,
            start_date=start_date,
            start_time=start_time,
            length=length,
            timezone=calendar.timezone,
        )
    except BookingFormError as e:
        logger.warning(f"Rejected booking form: {e}")
        return HTMLResponse(
            content=renderer.render_error(str(e)),
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    await calendar.create_event(booking)

    return RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)
