"""Access/refresh token bookkeeping for one provider and user."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Mapping, Optional

from photo_api.config import DEFAULT_TOKEN_LIFETIME


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class TokenState:
    """Current tokens of an OAuth client.

    A freshly constructed state has no access token and expires now, so the
    first authorized request always triggers a refresh.
    """
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    expire_at: datetime = field(default_factory=utcnow)

    @property
    def is_stale(self) -> bool:
        """True when an access token must be obtained before a request."""
        return self.access_token is None or self.expire_at <= utcnow()

    def update(self, token: Mapping[str, Any]) -> None:
        """Take over a token response from the OAuth session.

        Args:
            token: Token dict as returned by requests_oauthlib, holding
                   access_token and optionally expires_at, expires_in and
                   refresh_token
        """
        self.access_token = token["access_token"]
        if token.get("refresh_token"):
            self.refresh_token = token["refresh_token"]

        if token.get("expires_at") is not None:
            self.expire_at = datetime.fromtimestamp(float(token["expires_at"]), tz=timezone.utc)
        elif token.get("expires_in") is not None:
            self.expire_at = utcnow() + timedelta(seconds=int(token["expires_in"]))
        else:
            self.expire_at = utcnow() + timedelta(seconds=DEFAULT_TOKEN_LIFETIME)

    def as_oauth_token(self) -> Dict[str, Any]:
        """Token dict understood by requests_oauthlib.OAuth2Session."""
        token: Dict[str, Any] = {
            "access_token": self.access_token,
            "token_type": "Bearer",
            "expires_at": self.expire_at.timestamp(),
        }
        if self.refresh_token:
            token["refresh_token"] = self.refresh_token
        return token
