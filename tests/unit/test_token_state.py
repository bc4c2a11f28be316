"""Unit tests for token state bookkeeping."""

import time
from datetime import datetime, timedelta, timezone

from photo_api.config import DEFAULT_TOKEN_LIFETIME
from photo_api.oauth import TokenState
from photo_api.oauth.token_state import utcnow


def test_new_state_is_stale():
    """A new state has no access token and needs a refresh."""
    state = TokenState(refresh_token="test_refresh_token")

    assert state.access_token is None
    assert state.expire_at <= utcnow()
    assert state.is_stale


def test_expired_access_token_is_stale():
    state = TokenState(access_token="old", expire_at=utcnow() - timedelta(seconds=1))
    assert state.is_stale


def test_valid_access_token_is_not_stale():
    state = TokenState(access_token="token", expire_at=utcnow() + timedelta(minutes=5))
    assert not state.is_stale


def test_update_uses_expires_at():
    state = TokenState(refresh_token="test_refresh_token")
    expires_at = time.time() + 1800

    state.update({"access_token": "new_token", "expires_at": expires_at})

    assert state.access_token == "new_token"
    assert state.expire_at == datetime.fromtimestamp(expires_at, tz=timezone.utc)
    assert state.refresh_token == "test_refresh_token"
    assert not state.is_stale


def test_update_uses_expires_in():
    state = TokenState()
    before = utcnow()

    state.update({"access_token": "new_token", "expires_in": 600, "refresh_token": "rt"})

    assert before + timedelta(seconds=600) <= state.expire_at <= utcnow() + timedelta(seconds=600)
    assert state.refresh_token == "rt"


def test_update_without_expiry_uses_default_lifetime():
    state = TokenState()
    before = utcnow()

    state.update({"access_token": "new_token"})

    assert state.expire_at >= before + timedelta(seconds=DEFAULT_TOKEN_LIFETIME)


def test_as_oauth_token():
    expire_at = utcnow() + timedelta(hours=1)
    state = TokenState(access_token="token", refresh_token="rt", expire_at=expire_at)

    token = state.as_oauth_token()

    assert token == {
        "access_token": "token",
        "token_type": "Bearer",
        "expires_at": expire_at.timestamp(),
        "refresh_token": "rt",
    }
