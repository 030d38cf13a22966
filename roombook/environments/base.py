"""
Base classes and interfaces for Environment integrations.

This module defines the contracts the identity provider and calendar
integrations implement, plus the errors they raise.

Error Variants:
===============
- NetworkError:    the request never got an HTTP answer (DNS, refused, timeout)
- UpstreamError:   the provider answered with a non-2xx status; carries the
                   status code and the raw body so it can be shown unchanged
- OAuthStateError: the callback's state didn't match the login we started

Routes don't catch these; exception handlers in roombook.main turn them
into HTTP responses.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, List

import httpx


# ---------------------------------------------------------------------------
# CUSTOM EXCEPTIONS
# ---------------------------------------------------------------------------


class EnvironmentError(Exception):
    """Base exception for all environment-related errors."""
    pass


class NetworkError(EnvironmentError):
    """Raised when a provider could not be reached at all."""
    pass


class UpstreamError(EnvironmentError):
    """Raised when a provider answers with an error status."""

    def __init__(
        self,
        message: str,
        status_code: int,
        body: str = "",
        content_type: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
        self.content_type = content_type

    @classmethod
    def from_response(cls, message: str, response: httpx.Response) -> "UpstreamError":
        """Capture an httpx response as-is."""
        return cls(
            message,
            status_code=response.status_code,
            body=response.text,
            content_type=response.headers.get("content-type"),
        )


class OAuthStateError(EnvironmentError):
    """Raised when the OAuth callback can't be tied to a login we started."""
    pass


# ---------------------------------------------------------------------------
# DATA STRUCTURES
# ---------------------------------------------------------------------------


@dataclass
class OAuthTokens:
    """
    Token data from an OAuth provider.

    Tokens are never refreshed, so no refresh token or expiry is kept.
    """
    access_token: str
    token_type: str = "Bearer"
    scopes: Optional[List[str]] = None


# ---------------------------------------------------------------------------
# ABSTRACT BASE CLASSES
# ---------------------------------------------------------------------------


class EnvironmentProvider(ABC):
    """
    Abstract base class for OAuth providers.

    The provider is responsible for:
    - Generating authorization URLs
    - Exchanging authorization codes for tokens
    """

    @abstractmethod
    def get_authorization_url(
        self,
        scopes: List[str],
        state: str,
        redirect_uri: Optional[str] = None,
    ) -> str:
        """
        Generate the OAuth authorization URL.

        Args:
            scopes: List of OAuth scopes to request
            state: CSRF protection state parameter
            redirect_uri: Override the default redirect URI

        Returns:
            URL to redirect the user to for authorization
        """
        pass

    @abstractmethod
    async def exchange_code_for_tokens(
        self,
        code: str,
        redirect_uri: Optional[str] = None,
    ) -> OAuthTokens:
        """
        Exchange authorization code for an access token.

        Args:
            code: Authorization code from the callback
            redirect_uri: Must match the redirect_uri used in authorization

        Returns:
            OAuthTokens with access_token, expiration, etc.

        Raises:
            NetworkError: If the token endpoint can't be reached
            UpstreamError: If the token endpoint rejects the code
        """
        pass


class EnvironmentService(ABC):
    """
    Abstract base class for API services within a provider.

    Services act on behalf of the user with the bearer token obtained
    by their parent provider.
    """

    def __init__(self, access_token: str):
        self.access_token = access_token

    def _get_headers(self) -> dict:
        """Get authorization headers for API requests."""
        return {
            "Authorization": f"Bearer {self.access_token}",
            "Accept": "application/json",
        }
