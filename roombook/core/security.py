"""
Security utilities - signed OAuth state tokens.

The authorize redirect carries a random `state` nonce. The same nonce is kept
in a short-lived cookie as a JWT signed with SECRET_KEY, so the callback can
prove the code it receives answers a login this browser started.
"""

import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from roombook.core.config import settings


ALGORITHM = "HS256"

# Marks the JWT as an OAuth state token so other signed values can't be replayed here
STATE_TOKEN_TYPE = "oauth_state"


def generate_state() -> str:
    """
    Generate a cryptographically secure state nonce.

    Returns:
        43-character random URL-safe string
    """
    return secrets.token_urlsafe(32)


def create_state_token(state: str, expires_delta: Optional[timedelta] = None) -> str:
    """
    Sign a state nonce for storage in the oauthState cookie.

    Args:
        state: The nonce placed in the authorize URL
        expires_delta: Optional custom lifetime
                       If None, uses OAUTH_STATE_EXPIRE_MINUTES from settings

    Returns:
        A signed JWT string
    """
    expire = datetime.now(timezone.utc) + (
        expires_delta
        if expires_delta
        else timedelta(minutes=settings.OAUTH_STATE_EXPIRE_MINUTES)
    )
    payload = {"state": state, "type": STATE_TOKEN_TYPE, "exp": expire}
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=ALGORITHM)


def verify_state_token(token: Optional[str], state: Optional[str]) -> bool:
    """
    Check that a returned state matches the signed cookie value.

    Args:
        token: The oauthState cookie value
        state: The `state` query parameter from the callback

    Returns:
        True only if the token is validly signed, unexpired, and its nonce
        equals `state`
    """
    if not token or not state:
        return False

    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        return False

    if payload.get("type") != STATE_TOKEN_TYPE:
        return False

    expected = payload.get("state")
    if not isinstance(expected, str):
        return False

    return secrets.compare_digest(expected, state)
