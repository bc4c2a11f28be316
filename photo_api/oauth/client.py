"""OAuth 2.0 client that signs and dispatches provider API requests."""

import logging
import threading
from typing import Any, Dict, Optional

import requests
from google_auth_oauthlib.flow import Flow
from oauthlib.oauth2 import InsecureTransportError, OAuth2Error, TokenExpiredError

from photo_api.config import DEFAULT_TIMEOUT, ProviderConfig
from photo_api.models import ApiResponse, AppCredentials, AuthError, HttpError, NetworkError
from photo_api.oauth.token_state import TokenState

logger = logging.getLogger(__name__)


class OAuthClient:
    """Sends authorized requests to one provider, refreshing stale tokens."""

    def __init__(
        self,
        provider: ProviderConfig,
        credentials: AppCredentials,
        flow: Flow,
        token_state: Optional[TokenState] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """Initialize the client.

        Args:
            provider: Endpoints of the provider
            credentials: App key and secret
            flow: OAuth flow; its oauth2session is used as HTTP transport
            token_state: Initial tokens, e.g. a bootstrap refresh token
            timeout: Timeout in seconds for refresh and API requests
        """
        self.provider = provider
        self.credentials = credentials
        self.flow = flow
        self.session = flow.oauth2session
        self.timeout = timeout
        self._state = token_state or TokenState()
        self._lock = threading.RLock()

    @property
    def refresh_token(self) -> Optional[str]:
        return self._state.refresh_token

    @property
    def is_authorized(self) -> bool:
        """Whether requests can be made without user interaction."""
        return self._state.access_token is not None or self._state.refresh_token is not None

    def authorization_url(self) -> str:
        """URL where the user grants access and receives a code or PIN."""
        url, _ = self.flow.authorization_url(**self.provider.authorization_params)
        return url

    def authorize(self, code: str) -> None:
        """Exchange an authorization code or PIN for tokens.

        Raises:
            AuthError: If the provider rejects the code
        """
        try:
            token = self.flow.fetch_token(code=code)
        except Warning as e:
            token = self._granted_token(e)
        except (OAuth2Error, ValueError) as e:
            raise AuthError(f"{self.provider.name} rejected authorization code: {e}") from e
        except requests.RequestException as e:
            raise AuthError(f"{self.provider.name} authorization failed: {e}") from e

        with self._lock:
            self._update_state(token)
        logger.info("Authorized with %s", self.provider.name)

    def refresh_if_needed(self) -> bool:
        """Refresh the access token if it is missing or expired.

        Returns:
            True if a refresh was performed

        Raises:
            AuthError: If no refresh token exists or the refresh fails
        """
        with self._lock:
            if not self._state.is_stale:
                return False
            self._refresh()
            return True

    def _refresh(self) -> None:
        refresh_token = self._state.refresh_token
        if not refresh_token:
            raise AuthError(
                f"No {self.provider.name} access token or refresh token, authorization required"
            )

        logger.info("Refreshing %s access token", self.provider.name)
        try:
            token = self.session.refresh_token(
                self.provider.refresh_url,
                refresh_token=refresh_token,
                client_id=self.credentials.app_key,
                client_secret=self.credentials.app_secret,
                timeout=self.timeout,
            )
        except Warning as e:
            token = self._granted_token(e)
        except (OAuth2Error, ValueError) as e:
            logger.warning("%s token refresh rejected: %s", self.provider.name, e)
            raise AuthError(f"{self.provider.name} token refresh rejected: {e}") from e
        except requests.RequestException as e:
            logger.warning("%s token refresh failed: %s", self.provider.name, e)
            raise AuthError(f"{self.provider.name} token refresh failed: {e}") from e

        self._update_state(token)
        logger.debug("%s access token valid until %s", self.provider.name, self._state.expire_at)

    def _granted_token(self, warning: Warning) -> Any:
        """Accept a token whose granted scope differs from the requested one.

        oauthlib raises a Warning carrying the parsed token when the provider
        spells the scope differently, e.g. Google expanding "email".
        """
        token = getattr(warning, "token", None)
        if token is None:
            raise AuthError(f"{self.provider.name} token response rejected: {warning}") from warning
        logger.warning(
            "%s granted scope %s instead of %s",
            self.provider.name,
            getattr(warning, "new_scope", None),
            getattr(warning, "old_scope", None),
        )
        return token

    def _update_state(self, token: Any) -> None:
        try:
            self._state.update(token)
        except (KeyError, TypeError, ValueError) as e:
            raise AuthError(f"Malformed {self.provider.name} token response: {token!r}") from e

    def resolve_url(self, endpoint: str) -> str:
        """Join a relative endpoint onto the provider's API prefix."""
        if endpoint.startswith(("http://", "https://")):
            return endpoint
        return self.provider.prefix_url + endpoint.lstrip("/")

    def send_request(
        self, endpoint: str, method: str = "GET", params: Optional[Dict[str, Any]] = None
    ) -> ApiResponse:
        """Send an authorized request, refreshing the token first if needed.

        Args:
            endpoint: Path relative to the API prefix, or an absolute URL
            method: HTTP method
            params: Query parameters

        Returns:
            Status code, content type and body of a 2xx response

        Raises:
            AuthError: If no valid access token can be obtained
            NetworkError: If the request fails at the transport level
            HttpError: If the provider answers with a non-2xx status
        """
        url = self.resolve_url(endpoint)

        # Only one check-refresh-dispatch sequence runs per client at a time
        with self._lock:
            self.refresh_if_needed()
            self.session.token = self._state.as_oauth_token()

            logger.debug("API Request: %s %s params=%s", method, url, params)
            try:
                response = self.session.request(method, url, params=params, timeout=self.timeout)
            except TokenExpiredError as e:
                raise AuthError(f"{self.provider.name} access token expired") from e
            except InsecureTransportError as e:
                raise NetworkError(f"Refusing to send a token over plain http: {url}") from e
            except OAuth2Error as e:
                raise AuthError(f"{self.provider.name} could not sign request: {e}") from e
            except requests.RequestException as e:
                logger.error("API request failed: %s %s - %s", method, url, e)
                raise NetworkError(f"{method} {url} failed: {e}") from e

        if not 200 <= response.status_code < 300:
            logger.warning("API request failed: %s %s - HTTP %s", method, url, response.status_code)
            raise HttpError(response.status_code, response.text)

        return ApiResponse(
            status_code=response.status_code,
            content_type=response.headers.get("Content-Type", ""),
            body=response.text,
        )
