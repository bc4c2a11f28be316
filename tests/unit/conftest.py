"""Configuration for unit tests."""

import logging
import time
from unittest.mock import MagicMock

import pytest
import requests
from requests.adapters import BaseAdapter

from photo_api.config import PICASA_WEB
from photo_api.models import AppCredentials
from photo_api.oauth import OAuthClient, TokenState


@pytest.fixture(autouse=True)
def setup_logging():
    """Configure logging for tests."""
    logging.basicConfig(level=logging.DEBUG)
    yield


def make_response(status_code=200, text="", content_type="application/atom+xml"):
    """Create a mock requests.Response."""
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    response.headers = {"Content-Type": content_type}
    return response


def fresh_token(access_token="fresh_token", lifetime=3600):
    """Token dict shaped like requests_oauthlib's refresh result."""
    return {
        "access_token": access_token,
        "token_type": "Bearer",
        "expires_in": lifetime,
        "expires_at": time.time() + lifetime,
    }


@pytest.fixture
def mock_flow():
    """Create a mock google_auth_oauthlib Flow with a mock OAuth2Session."""
    flow = MagicMock()
    flow.oauth2session = MagicMock()
    flow.oauth2session.request.return_value = make_response(text="<feed/>")
    flow.oauth2session.refresh_token.return_value = fresh_token()
    return flow


@pytest.fixture
def credentials():
    return AppCredentials("test_app_key", "test_app_secret")


@pytest.fixture
def make_client(mock_flow, credentials):
    """Factory for OAuth clients over the mock flow."""
    def _make(token_state=None, provider=PICASA_WEB):
        return OAuthClient(provider, credentials, mock_flow, token_state=token_state, timeout=5)
    return _make


@pytest.fixture
def response_factory():
    return make_response


@pytest.fixture
def token_factory():
    return fresh_token


@pytest.fixture
def stale_state():
    """Token state holding only a refresh token, as after bootstrap."""
    return TokenState(refresh_token="test_refresh_token")


class StubAdapter(BaseAdapter):
    """Transport adapter answering from a queue of canned responses."""

    def __init__(self, responses):
        super().__init__()
        self.responses = list(responses)
        self.requests = []

    def send(self, request, **kwargs):
        self.requests.append(request)
        status_code, body, content_type = self.responses.pop(0)
        response = requests.Response()
        response.status_code = status_code
        response._content = body.encode("utf-8")
        response.encoding = "utf-8"
        response.headers["Content-Type"] = content_type
        response.url = request.url
        response.request = request
        return response

    def close(self):
        pass


@pytest.fixture
def mount_responses(monkeypatch):
    """Answer an API object's OAuth2Session traffic with canned responses."""
    monkeypatch.delenv("OAUTHLIB_RELAX_TOKEN_SCOPE", raising=False)

    def _mount(api, *responses):
        adapter = StubAdapter(responses)
        api.oauth.session.mount("https://", adapter)
        return adapter
    return _mount
