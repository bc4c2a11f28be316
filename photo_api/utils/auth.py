"""Authentication utilities shared by the photo providers."""

import logging
from typing import Optional

from google_auth_oauthlib.flow import Flow

from photo_api.config import ProviderConfig
from photo_api.models import AppCredentials

logger = logging.getLogger(__name__)


def build_flow(provider: ProviderConfig, credentials: AppCredentials,
               redirect_uri: Optional[str] = None) -> Flow:
    """Create the OAuth 2.0 flow for a provider.

    The flow's OAuth2Session is also the transport the client signs API
    requests with, so one is built even when no user interaction will happen.

    Args:
        provider: Endpoints and scopes of the provider
        credentials: App key and secret
        redirect_uri: Callback URL, the out-of-band URI for the PIN flow,
                      or None when only a refresh token will be used

    Returns:
        Flow bound to the provider's authorize and token endpoints
    """
    logger.debug("Building %s OAuth flow (redirect_uri=%s)", provider.name, redirect_uri)
    return Flow.from_client_config(
        provider.client_config(credentials.app_key, credentials.app_secret),
        scopes=list(provider.scopes),
        redirect_uri=redirect_uri,
    )
