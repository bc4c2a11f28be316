"""OAuth token lifecycle and authorized request dispatch."""

from .client import OAuthClient
from .token_state import TokenState

__all__ = ["OAuthClient", "TokenState"]
