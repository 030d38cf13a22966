"""
Session abstraction - the browser cookies are the only session store.

Two cookies are involved:
- accessToken: the bearer token from the token exchange (1 hour, readable by JS)
- oauthState:  signed state nonce for a login in progress (HTTP-only)

Routes never touch cookie names or flags directly; they go through
TokenSession so the storage can change without touching the handlers.
"""

import logging
from typing import Optional

from fastapi import Request, Response

from roombook.core.config import settings
from roombook.core.security import create_state_token, verify_state_token


logger = logging.getLogger("roombook.core.session")


ACCESS_TOKEN_COOKIE = "accessToken"
OAUTH_STATE_COOKIE = "oauthState"


class TokenSession:
    """
    Cookie-backed session for a single request.

    Reads come from the incoming request; writes go onto whichever response
    the route returns (a redirect or a rendered page).

    Example:
        session = TokenSession(request)
        if session.get_access_token() is None:
            ...
        response = RedirectResponse("/", status_code=302)
        session.set_access_token(response, tokens.access_token)
    """

    def __init__(self, request: Request):
        self._cookies = request.cookies

    # -------------------------------------------------------------------------
    # ACCESS TOKEN
    # -------------------------------------------------------------------------

    def get_access_token(self) -> Optional[str]:
        """Return the bearer token, or None if the user hasn't logged in."""
        return self._cookies.get(ACCESS_TOKEN_COOKIE) or None

    def set_access_token(self, response: Response, token: str) -> None:
        """Store the bearer token. It expires client-side after ACCESS_TOKEN_MAX_AGE."""
        response.set_cookie(
            ACCESS_TOKEN_COOKIE,
            token,
            max_age=settings.ACCESS_TOKEN_MAX_AGE,
            httponly=False,
            samesite="lax",
        )

    def expire(self, response: Response) -> None:
        """Drop the bearer token (logout)."""
        response.delete_cookie(ACCESS_TOKEN_COOKIE)
        logger.info("Session expired")

    # -------------------------------------------------------------------------
    # OAUTH STATE
    # -------------------------------------------------------------------------

    def begin_login(self, response: Response, state: str) -> None:
        """Remember the state nonce of a login that is about to start."""
        response.set_cookie(
            OAUTH_STATE_COOKIE,
            create_state_token(state),
            max_age=settings.OAUTH_STATE_EXPIRE_MINUTES * 60,
            httponly=True,
            samesite="lax",
        )

    def verify_login(self, state: Optional[str]) -> bool:
        """Check the callback's state against the one stored by begin_login()."""
        return verify_state_token(self._cookies.get(OAUTH_STATE_COOKIE), state)

    def finish_login(self, response: Response) -> None:
        """Forget the state nonce; it is single use."""
        response.delete_cookie(OAUTH_STATE_COOKIE)
