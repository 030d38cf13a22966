"""
Auth Router - OAuth 2.0 callback and logout.

The login itself starts on GET / (see routers.booking), which links to the
identity provider's /authorize URL.

Endpoints:
==========
- GET /callback → Verify state, exchange code for token, set session cookie
- GET /logout   → Expire the session cookie

Security:
=========
- CSRF protection: the `state` query parameter must match the signed
  oauthState cookie set when the login page was rendered
- The access token cookie expires after ACCESS_TOKEN_MAX_AGE; it is never
  refreshed, the user simply signs in again
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import RedirectResponse

from roombook.core.session import TokenSession
from roombook.deps import get_auth_client, get_session
from roombook.environments.base import OAuthStateError
from roombook.environments.microsoft import MicrosoftAuthClient


logger = logging.getLogger("roombook.routers.auth")


# ---------------------------------------------------------------------------
# ROUTER SETUP
# ---------------------------------------------------------------------------
router = APIRouter(tags=["auth"])


# ---------------------------------------------------------------------------
# ENDPOINTS
# ---------------------------------------------------------------------------


@router.get("/callback")
async def oauth_callback(
    code: Optional[str] = Query(None, description="Authorization code"),
    state: Optional[str] = Query(None, description="CSRF state nonce"),
    error: Optional[str] = Query(None, description="Error from the identity provider"),
    error_description: Optional[str] = Query(None, description="Error details"),
    session: TokenSession = Depends(get_session),
    auth_client: MicrosoftAuthClient = Depends(get_auth_client),
):
    """
    Handle the redirect back from the identity provider.

    Flow:
        1. Surface a provider-side error (e.g. consent declined)
        2. Validate state against the oauthState cookie
        3. Exchange the code for an access token
        4. Store the token in the session, redirect to /

    Returns:
        302 RedirectResponse to /

    Raises:
        HTTPException 400: Provider error or missing code
        OAuthStateError: State missing, expired, or not ours (→ 400)
        NetworkError / UpstreamError: Token exchange failed (→ 500)
    """
    if error:
        logger.warning(f"OAuth error: {error} - {error_description}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Authorization failed: {error_description or error}",
        )

    if not code:
        logger.warning("Missing code in OAuth callback")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing authorization code",
        )

    if not session.verify_login(state):
        logger.warning("Invalid or expired OAuth state")
        raise OAuthStateError("Invalid or expired state. Please sign in again.")

    tokens = await auth_client.exchange_code_for_tokens(code=code)

    response = RedirectResponse(url="/", status_code=status.HTTP_302_FOUND)
    session.set_access_token(response, tokens.access_token)
    session.finish_login(response)

    logger.info("User signed in")

    return response


@router.get("/logout")
async def logout(session: TokenSession = Depends(get_session)):
    """
    Sign out by expiring the session cookie.

    Nothing is revoked at the identity provider; the token just stops
    being sent.
    """
    response = RedirectResponse(url="/", status_code=status.HTTP_302_FOUND)
    session.expire(response)
    return response
