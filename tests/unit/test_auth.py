"""Unit tests for authentication utilities."""

import pytest
from google_auth_oauthlib.flow import Flow

from photo_api.config import FLICKR, OOB_REDIRECT_URI, PICASA_WEB
from photo_api.models import AppCredentials
from photo_api.utils.auth import build_flow


@pytest.fixture
def credentials():
    return AppCredentials("test_client_id", "test_client_secret")


def test_build_flow_client_config(credentials, mocker):
    """Test the flow is built from the provider's endpoints."""
    mock_from_config = mocker.patch.object(Flow, "from_client_config")

    flow = build_flow(PICASA_WEB, credentials, redirect_uri=OOB_REDIRECT_URI)

    assert flow is mock_from_config.return_value
    mock_from_config.assert_called_once_with(
        {
            "installed": {
                "client_id": "test_client_id",
                "client_secret": "test_client_secret",
                "auth_uri": "https://accounts.google.com/o/oauth2/auth",
                "token_uri": "https://accounts.google.com/o/oauth2/token",
            }
        },
        scopes=["https://www.googleapis.com/auth/userinfo.email", "https://picasaweb.google.com/data/"],
        redirect_uri=OOB_REDIRECT_URI,
    )


def test_build_flow_session(credentials):
    """Test the real flow exposes an OAuth2 session for the app."""
    flow = build_flow(FLICKR, credentials, redirect_uri="https://example.com/cb")

    assert flow.redirect_uri == "https://example.com/cb"
    assert flow.client_config["token_uri"] == FLICKR.refresh_url
    assert flow.oauth2session.client_id == "test_client_id"


def test_build_flow_without_redirect(credentials):
    flow = build_flow(PICASA_WEB, credentials)

    assert flow.redirect_uri is None
