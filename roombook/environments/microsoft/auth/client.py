"""
Microsoft OAuth Client - Handles the OAuth 2.0 authorization code flow
against the Microsoft identity platform (v2.0 endpoints).

OAuth 2.0 Flow Implementation:
==============================
1. get_authorization_url() → Browser is sent to /authorize
2. exchange_code_for_tokens() → Called in /callback, POSTs the code to /token

Tokens are never refreshed: when the access token expires the user logs in
again.

References:
===========
- Auth code flow: https://learn.microsoft.com/entra/identity-platform/v2-oauth2-auth-code-flow
"""

import logging
from typing import List, Optional
from urllib.parse import urlencode

import httpx
from pydantic import ValidationError

from roombook.core.config import settings
from roombook.environments.base import (
    EnvironmentProvider,
    OAuthTokens,
    NetworkError,
    UpstreamError,
)
from roombook.environments.microsoft.auth.schemas import MicrosoftTokenResponse


logger = logging.getLogger("roombook.environments.microsoft.auth")


class MicrosoftAuthClient(EnvironmentProvider):
    """
    Microsoft identity platform OAuth 2.0 client.

    Example Usage:
        client = MicrosoftAuthClient()

        # Step 1: Generate auth URL and send the browser there
        auth_url = client.get_authorization_url(
            scopes=settings.OAUTH_SCOPES.split(),
            state=generate_state(),
        )

        # Step 2: Handle callback
        tokens = await client.exchange_code_for_tokens(code="M.R3_BAY...")
    """

    def __init__(
        self,
        tenant_id: Optional[str] = None,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        redirect_uri: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the Microsoft OAuth client.

        Args:
            tenant_id: Directory (tenant) ID or domain (defaults to settings)
            client_id: Application (client) ID (defaults to settings)
            client_secret: Client secret (defaults to settings)
            redirect_uri: OAuth callback URL (defaults to settings)
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.tenant_id = tenant_id or settings.TENANT_ID
        self.client_id = client_id or settings.CLIENT_ID
        self.client_secret = client_secret or settings.CLIENT_SECRET
        self.redirect_uri = redirect_uri or settings.REDIRECT_URI
        self._transport = transport

        if not self.client_id or not self.client_secret:
            logger.warning(
                "Microsoft OAuth not configured. Set CLIENT_ID and "
                "CLIENT_SECRET in environment variables."
            )

    @property
    def base_url(self) -> str:
        return f"https://login.microsoftonline.com/{self.tenant_id}/oauth2/v2.0"

    @property
    def authorization_url(self) -> str:
        return f"{self.base_url}/authorize"

    @property
    def token_url(self) -> str:
        return f"{self.base_url}/token"

    # -------------------------------------------------------------------------
    # AUTHORIZATION URL
    # -------------------------------------------------------------------------

    def get_authorization_url(
        self,
        scopes: List[str],
        state: str,
        redirect_uri: Optional[str] = None,
        prompt: str = "consent",
    ) -> str:
        """
        Generate the /authorize URL.

        Args:
            scopes: List of OAuth scopes to request
            state: CSRF protection nonce, echoed back on the callback
            redirect_uri: Override default callback URL
            prompt: "consent" always shows the consent screen

        Returns:
            Full authorization URL to send the browser to
        """
        params = {
            "client_id": self.client_id,
            "response_type": "code",
            "redirect_uri": redirect_uri or self.redirect_uri,
            "scope": " ".join(scopes),
            "prompt": prompt,
            "state": state,
        }

        auth_url = f"{self.authorization_url}?{urlencode(params)}"

        logger.debug(
            f"Generated authorization URL with {len(scopes)} scopes",
            extra={"scopes": scopes},
        )

        return auth_url

    # -------------------------------------------------------------------------
    # TOKEN EXCHANGE
    # -------------------------------------------------------------------------

    async def exchange_code_for_tokens(
        self,
        code: str,
        redirect_uri: Optional[str] = None,
    ) -> OAuthTokens:
        """
        Exchange an authorization code for an access token.

        Args:
            code: Authorization code from the callback
            redirect_uri: Must match the redirect_uri used in authorization

        Returns:
            OAuthTokens with access_token and expiration

        Raises:
            NetworkError: If the token endpoint can't be reached
            UpstreamError: If the token endpoint rejects the request
        """
        token_data = {
            "grant_type": "authorization_code",
            "client_id": self.client_id,
            "code": code,
            "redirect_uri": redirect_uri or self.redirect_uri,
            "client_secret": self.client_secret,
        }

        logger.info("Exchanging authorization code for tokens")

        async with httpx.AsyncClient(transport=self._transport) as client:
            try:
                response = await client.post(
                    self.token_url,
                    data=token_data,
                    timeout=settings.HTTP_TIMEOUT,
                )
            except httpx.RequestError as e:
                logger.error(f"Network error during token exchange: {e}")
                raise NetworkError(f"Network error: {e}") from e

        if response.status_code != 200:
            logger.error(
                f"Token exchange failed with status {response.status_code}",
                extra={"body": response.text},
            )
            raise UpstreamError.from_response("Token exchange failed", response)

        try:
            token_response = MicrosoftTokenResponse(**response.json())
        except (ValueError, ValidationError) as e:
            # 200 without a usable access_token is still the provider's fault
            logger.error(f"Unexpected token endpoint response: {e}")
            raise UpstreamError.from_response("Malformed token response", response) from e

        logger.info(
            "Successfully obtained access token",
            extra={
                "expires_in": token_response.expires_in,
                "scopes": token_response.get_scopes_list(),
            },
        )

        return OAuthTokens(
            access_token=token_response.access_token,
            token_type=token_response.token_type,
            scopes=token_response.get_scopes_list(),
        )
