"""
Microsoft Auth Module - OAuth 2.0 against the Microsoft identity platform.

OAuth 2.0 Flow Overview:
========================
1. User opens the app without an accessToken cookie
2. Login page links to the /authorize URL (with a state nonce)
3. User signs in and grants consent
4. Identity provider redirects back to /callback with a code
5. Backend exchanges the code for an access token at /token
6. Token is stored in the session cookie for calendar calls
"""

from roombook.environments.microsoft.auth.client import MicrosoftAuthClient
from roombook.environments.microsoft.auth.schemas import (
    MicrosoftTokenResponse,
    parse_scopes,
)

__all__ = [
    "MicrosoftAuthClient",
    "MicrosoftTokenResponse",
    "parse_scopes",
]
