"""
Tests for the signed OAuth state token.
"""

from datetime import datetime, timedelta, timezone

from jose import jwt

from roombook.core.config import settings
from roombook.core.security import (
    ALGORITHM,
    create_state_token,
    generate_state,
    verify_state_token,
)


class TestGenerateState:

    def test_states_are_unique(self):
        states = {generate_state() for _ in range(20)}

        assert len(states) == 20

    def test_state_is_url_safe(self):
        state = generate_state()

        assert len(state) >= 43
        assert all(c.isalnum() or c in "-_" for c in state)


class TestVerifyStateToken:
    """A callback state is accepted only if it matches a valid signed cookie."""

    def test_matching_state(self):
        token = create_state_token("nonce-1")

        assert verify_state_token(token, "nonce-1") is True

    def test_different_state(self):
        token = create_state_token("nonce-1")

        assert verify_state_token(token, "nonce-2") is False

    def test_missing_values(self):
        token = create_state_token("nonce-1")

        assert verify_state_token(None, "nonce-1") is False
        assert verify_state_token(token, None) is False
        assert verify_state_token("", "") is False

    def test_expired_token(self):
        token = create_state_token("nonce-1", expires_delta=timedelta(seconds=-1))

        assert verify_state_token(token, "nonce-1") is False

    def test_tampered_token(self):
        token = create_state_token("nonce-1")
        header, payload, signature = token.split(".")
        forged = ".".join([header, payload, signature[::-1]])

        assert verify_state_token(forged, "nonce-1") is False

    def test_signed_with_other_key(self):
        expire = datetime.now(timezone.utc) + timedelta(minutes=5)
        token = jwt.encode(
            {"state": "nonce-1", "type": "oauth_state", "exp": expire},
            "not-" + settings.SECRET_KEY,
            algorithm=ALGORITHM,
        )

        assert verify_state_token(token, "nonce-1") is False

    def test_other_token_type(self):
        """A validly signed JWT that isn't a state token is refused."""
        expire = datetime.now(timezone.utc) + timedelta(minutes=5)
        token = jwt.encode(
            {"state": "nonce-1", "type": "access", "exp": expire},
            settings.SECRET_KEY,
            algorithm=ALGORITHM,
        )

        assert verify_state_token(token, "nonce-1") is False
