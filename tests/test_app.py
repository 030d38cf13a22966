"""
Tests for application wiring: health check, settings, logging and HTML pages.
"""

import logging

from roombook.core.config import Settings
from roombook.core.logger import setup_logging
from roombook.environments.microsoft.calendar import EventRow, PageRenderer


class TestHealth:

    def test_health(self, client, upstream):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}
        assert upstream.requests == []


class TestSettings:
    """Tests for derived settings."""

    def test_redirect_uri(self):
        settings = Settings(APP_URL="https://rooms.example.com/")

        assert settings.REDIRECT_URI == "https://rooms.example.com/callback"

    def test_auth_base_url(self):
        settings = Settings(TENANT_ID="contoso.onmicrosoft.com")

        assert settings.AUTH_BASE_URL == "https://login.microsoftonline.com/contoso.onmicrosoft.com/oauth2/v2.0"


class TestLogging:

    def test_setup_is_idempotent(self):
        logger = setup_logging("DEBUG")
        handlers = list(logger.handlers)

        again = setup_logging("WARNING")

        assert again is logger
        assert again.handlers == handlers
        assert again.level == logging.WARNING


class TestPageRenderer:
    """Tests for the HTML pages."""

    def test_login_link_is_escaped(self):
        page = PageRenderer().render_login("https://login.example.com/authorize?a=1&b=2")

        assert 'href="https://login.example.com/authorize?a=1&amp;b=2"' in page

    def test_row_values_are_escaped(self):
        row = EventRow(start="2025/01/15 10:00", subject="<script>x</script>", location="A & B")

        page = PageRenderer().render_form([row])

        assert "&lt;script&gt;" in page
        assert "<script>x" not in page
        assert "A &amp; B" in page

    def test_window_in_empty_message(self):
        page = PageRenderer().render_form([], window_days=3)

        assert "No events in the next 3 days." in page

    def test_error_page(self):
        page = PageRenderer().render_error("Invalid start date: 2025/13/01")

        assert "Booking failed" in page
        assert "Invalid start date: 2025/13/01" in page
