"""
Microsoft OAuth Schemas - Data structures for Microsoft identity platform auth.

Using Pydantic models ensures the token endpoint response is typed and
validated before anything is stored in the session.
"""

from typing import Optional, List
from pydantic import BaseModel, Field


def parse_scopes(scope: Optional[str]) -> List[str]:
    """Convert a space-separated scope string to a list."""
    if scope:
        return scope.split()
    return []


# ---------------------------------------------------------------------------
# TOKEN RESPONSES
# ---------------------------------------------------------------------------

class MicrosoftTokenResponse(BaseModel):
    """
    Response from the /oauth2/v2.0/token endpoint.

    Example response:
    {
        "token_type": "Bearer",
        "scope": "User.Read Calendars.ReadWrite.Shared",
        "expires_in": 3599,
        "access_token": "eyJ0eXAiOiJKV1QiLCJub25jZSI6..."
    }
    """
    access_token: str = Field(..., description="OAuth access token")
    token_type: str = Field(default="Bearer", description="Token type (usually Bearer)")
    expires_in: Optional[int] = Field(None, description="Seconds until expiration")
    scope: Optional[str] = Field(None, description="Space-separated scopes granted")

    def get_scopes_list(self) -> List[str]:
        """Convert space-separated scope string to list."""
        return parse_scopes(self.scope)
