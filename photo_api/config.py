"""Provider endpoints and client defaults."""

from dataclasses import dataclass, field
from typing import Dict, Tuple

# Seconds before an outstanding HTTP request is abandoned
DEFAULT_TIMEOUT = 30

# Lifetime assumed for access tokens issued without expires_in
DEFAULT_TOKEN_LIFETIME = 3600

# Redirect URI for the copy/paste PIN flow
OOB_REDIRECT_URI = "urn:ietf:wg:oauth:2.0:oob"

# User ID meaning "the authorized user"
DEFAULT_USER = "default"


@dataclass(frozen=True)
class ProviderConfig:
    """OAuth and API endpoints of a photo provider."""
    name: str
    auth_url: str
    refresh_url: str
    prefix_url: str
    scopes: Tuple[str, ...] = ()
    authorization_params: Dict[str, str] = field(default_factory=dict)

    def client_config(self, app_key: str, app_secret: str) -> Dict[str, Dict[str, str]]:
        """Build an installed-app client config for google_auth_oauthlib."""
        return {
            "installed": {
                "client_id": app_key,
                "client_secret": app_secret,
                "auth_uri": self.auth_url,
                "token_uri": self.refresh_url,
            }
        }


PICASA_WEB = ProviderConfig(
    name="PicasaWeb",
    auth_url="https://accounts.google.com/o/oauth2/auth",
    refresh_url="https://accounts.google.com/o/oauth2/token",
    prefix_url="https://picasaweb.google.com/data/feed/api/",
    scopes=("https://www.googleapis.com/auth/userinfo.email", "https://picasaweb.google.com/data/"),
    authorization_params={"access_type": "offline", "prompt": "consent"},
)

PICASA_USER_INFO_URL = "https://www.googleapis.com/oauth2/v1/userinfo"

FLICKR = ProviderConfig(
    name="Flickr",
    auth_url="https://www.flickr.com/services/oauth/authorize",
    refresh_url="https://api.flickr.com/services/rest/refresh",
    prefix_url="https://api.flickr.com/services/",
    scopes=("read",),
)
