"""
Configuration module - centralized settings for the entire application.
Uses pydantic-settings to load values from environment variables and .env file.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Pydantic-settings automatically:
    1. Reads from environment variables (highest priority)
    2. Falls back to .env file values
    3. Uses default values if neither exists

    To run against a real tenant, set at least:
        export TENANT_ID=contoso.onmicrosoft.com
        export CLIENT_ID=00000000-0000-0000-0000-000000000000
        export CLIENT_SECRET=your-client-secret
        export APP_URL=https://rooms.example.com
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ---------------------------------------------------------------------------
    # APPLICATION SETTINGS
    # ---------------------------------------------------------------------------
    APP_NAME: str = "Room Booker"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # APP_URL: Public base URL of this app, used to build the OAuth redirect URI
    # - Must match the redirect URI registered for the app in Entra ID
    APP_URL: str = "http://localhost:1337"
    PORT: int = 1337

    # ---------------------------------------------------------------------------
    # MICROSOFT IDENTITY PLATFORM (OAuth 2.0 v2.0 endpoints)
    # ---------------------------------------------------------------------------
    # Azure Portal > App registrations:
    # 1. Register a web application
    # 2. Add redirect URI: {APP_URL}/callback
    # 3. Grant delegated permissions User.Read and Calendars.ReadWrite.Shared
    # 4. Create a client secret and copy it to .env
    TENANT_ID: str = "common"
    CLIENT_ID: str = ""
    CLIENT_SECRET: str = ""

    # Space-separated, in the format the /authorize endpoint expects
    OAUTH_SCOPES: str = "User.Read Calendars.ReadWrite.Shared"

    # ---------------------------------------------------------------------------
    # SESSION SETTINGS
    # ---------------------------------------------------------------------------
    # SECRET_KEY: Signs the short-lived OAuth state cookie (CSRF protection)
    # - Generate with: openssl rand -hex 32
    SECRET_KEY: str = "change-me-in-production"

    # ACCESS_TOKEN_MAX_AGE: Lifetime of the accessToken cookie in seconds
    ACCESS_TOKEN_MAX_AGE: int = 60 * 60  # 1 hour

    # OAUTH_STATE_EXPIRE_MINUTES: How long a login attempt may take
    OAUTH_STATE_EXPIRE_MINUTES: int = 10

    # ---------------------------------------------------------------------------
    # CALENDAR SETTINGS
    # ---------------------------------------------------------------------------
    # CALENDAR_TIMEZONE: Sent in the Prefer header and on created events
    CALENDAR_TIMEZONE: str = "Asia/Tokyo"

    # EVENT_WINDOW_DAYS: How far ahead the event list looks
    EVENT_WINDOW_DAYS: int = 7

    # Timeout in seconds for outbound calls to Microsoft
    HTTP_TIMEOUT: float = 30.0

    @property
    def AUTH_BASE_URL(self) -> str:
        """Tenant-specific base URL of the OAuth 2.0 v2.0 endpoints."""
        return f"https://login.microsoftonline.com/{self.TENANT_ID}/oauth2/v2.0"

    @property
    def REDIRECT_URI(self) -> str:
        """Where the identity provider sends the browser after consent."""
        return f"{self.APP_URL.rstrip('/')}/callback"


# ---------------------------------------------------------------------------
# GLOBAL SETTINGS INSTANCE
# ---------------------------------------------------------------------------
# Usage: from roombook.core.config import settings
settings = Settings()
