"""
Environments Module - External Service Integrations

environments/
├── __init__.py           # Module exports
├── base.py               # Error variants and abstract base classes
└── microsoft/            # Microsoft 365 integration
    ├── auth/             # Microsoft identity platform OAuth (authorize + token)
    └── calendar/         # Microsoft Graph calendar (calendarView + events)
"""

from roombook.environments.base import (
    EnvironmentProvider,
    EnvironmentService,
    EnvironmentError,
    NetworkError,
    UpstreamError,
    OAuthStateError,
    OAuthTokens,
)

__all__ = [
    "EnvironmentProvider",
    "EnvironmentService",
    "EnvironmentError",
    "NetworkError",
    "UpstreamError",
    "OAuthStateError",
    "OAuthTokens",
]
