"""
Page Renderer - Generate the HTML pages of the booking app.

Pages:
======
- Login page: a single "Sign in with Microsoft" link to the authorize URL
- Booking page: the upcoming-events table plus the room booking form
- Error page: shown when the booking form can't be parsed

Pages are plain HTML/CSS built from f-strings; every value that comes from
the user or from Graph goes through html.escape.

Usage:
======
    from roombook.environments.microsoft.calendar import PageRenderer

    renderer = PageRenderer()
    html = renderer.render_form([event.to_row() for event in events])
"""

from typing import List
import html as html_escape

from roombook.environments.microsoft.calendar.schemas import EventRow


class PageRenderer:
    """
    Renders the app's HTML pages.

    Attributes:
        title: Application name shown in the header and <title>
    """

    def __init__(self, title: str = "Room Booker"):
        self.title = title

    def _get_css(self) -> str:
        """Page stylesheet."""
        bg_color = "#f5f5f5"
        text_color = "#1a1a1a"
        accent_color = "#0f6cbd"
        card_bg = "#ffffff"
        muted_color = "#666666"
        border_color = "#e0e0e0"

        return f"""
        * {{
            margin: 0;
            padding: 0;
            box-sizing: border-box;
        }}

        body {{
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            font-size: 16px;
            line-height: 1.5;
            background-color: {bg_color};
            color: {text_color};
            padding: 2rem;
        }}

        .container {{
            max-width: 900px;
            margin: 0 auto;
        }}

        header {{
            display: flex;
            justify-content: space-between;
            align-items: center;
            margin-bottom: 2rem;
            padding-bottom: 1rem;
            border-bottom: 2px solid {border_color};
        }}

        h1 {{
            font-size: 2rem;
            font-weight: 600;
            color: {accent_color};
        }}

        h2 {{
            font-size: 1.2rem;
            margin-bottom: 0.75rem;
        }}

        a {{
            color: {accent_color};
        }}

        section {{
            background: {card_bg};
            border-radius: 12px;
            padding: 1.5rem;
            margin-bottom: 1.5rem;
            box-shadow: 0 2px 8px rgba(0, 0, 0, 0.1);
        }}

        table {{
            width: 100%;
            border-collapse: collapse;
        }}

        th, td {{
            text-align: left;
            padding: 0.5rem;
            border-bottom: 1px solid {border_color};
        }}

        th {{
            color: {muted_color};
            font-weight: 500;
        }}

        .no-events {{
            color: {muted_color};
        }}

        form label {{
            display: block;
            margin-bottom: 0.75rem;
        }}

        form input {{
            display: block;
            width: 100%;
            padding: 0.4rem;
            border: 1px solid {border_color};
            border-radius: 6px;
        }}

        .hint {{
            font-size: 0.8rem;
            color: {muted_color};
        }}

        .button {{
            display: inline-block;
            padding: 0.6rem 1.2rem;
            background: {accent_color};
            color: white;
            border: none;
            border-radius: 6px;
            text-decoration: none;
            cursor: pointer;
        }}

        .error-message {{
            color: #d13438;
        }}
        """

    def _page(self, body: str) -> str:
        """Wrap body HTML in the common page shell."""
        safe_title = html_escape.escape(self.title)
        return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{safe_title}</title>
    <style>
    {self._get_css()}
    </style>
</head>
<body>
    <div class="container">
        {body}
    </div>
</body>
</html>
"""

    def _render_row(self, row: EventRow) -> str:
        """Render a single event as a table row."""
        return (
            '<tr class="event-row">'
            f"<td>{html_escape.escape(row.start)}</td>"
            f"<td>{html_escape.escape(row.subject)}</td>"
            f"<td>{html_escape.escape(row.location)}</td>"
            "</tr>"
        )

    def render_login(self, authorization_url: str) -> str:
        """
        Render the login page.

        Args:
            authorization_url: Full /authorize URL including the state nonce

        Returns:
            Complete HTML page as a string
        """
        safe_url = html_escape.escape(authorization_url, quote=True)
        safe_title = html_escape.escape(self.title)

        return self._page(f"""
        <header>
            <h1>{safe_title}</h1>
        </header>
        <section>
            <h2>Sign in</h2>
            <p>Sign in with your work account to see your calendar and book a room.</p>
            <p><a id="login" class="button" href="{safe_url}">Sign in with Microsoft</a></p>
        </section>
        """)

    def render_form(self, events: List[EventRow], window_days: int = 7) -> str:
        """
        Render the event list and booking form.

        Args:
            events: Display rows, already ordered by start time
            window_days: Length of the listed window, for the empty message

        Returns:
            Complete HTML page as a string
        """
        safe_title = html_escape.escape(self.title)

        if events:
            rows_html = "\n".join(self._render_row(row) for row in events)
            events_section = f"""
            <table class="events">
                <thead>
                    <tr><th>Start</th><th>Subject</th><th>Location</th></tr>
                </thead>
                <tbody>
                {rows_html}
                </tbody>
            </table>
            """
        else:
            events_section = f'<p class="no-events">No events in the next {window_days} days.</p>'

        return self._page(f"""
        <header>
            <h1>{safe_title}</h1>
            <a href="/logout">Sign out</a>
        </header>
        <section>
            <h2>Upcoming events</h2>
            {events_section}
        </section>
        <section>
            <h2>Book a room</h2>
            <form method="post" action="/">
                <label>Subject
                    <input type="text" name="subject" required>
                </label>
                <label>Room
                    <input type="text" name="location" placeholder="room@example.com/Room A" required>
                    <span class="hint">Room mailbox address and display name, separated by "/"</span>
                </label>
                <label>Date
                    <input type="text" name="startDate" placeholder="YYYY/MM/DD" required>
                </label>
                <label>Start time
                    <input type="text" name="startTime" placeholder="HH:MM" required>
                </label>
                <label>Length (minutes)
                    <input type="number" name="length" value="30" min="1" required>
                </label>
                <button class="button" type="submit">Book</button>
            </form>
        </section>
        """)

    def render_error(self, error_message: str, title: str = "Booking failed") -> str:
        """
        Render an error page with a link back to the form.

        Args:
            error_message: Error description to display
            title: Heading text

        Returns:
            Complete HTML error page as a string
        """
        return self._page(f"""
        <header>
            <h1>{html_escape.escape(title)}</h1>
        </header>
        <section>
            <p class="error-message">{html_escape.escape(error_message)}</p>
            <p><a href="/">Back</a></p>
        </section>
        """)
