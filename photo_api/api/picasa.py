"""PicasaWeb API."""

import logging
from enum import Enum
from typing import List, Optional, Sequence

from photo_api.api.base import SizeToken, size_tokens
from photo_api.config import (
    DEFAULT_TIMEOUT,
    DEFAULT_USER,
    OOB_REDIRECT_URI,
    PICASA_USER_INFO_URL,
    PICASA_WEB,
)
from photo_api.models import Album, AppCredentials, Photo, Result, UserInfo
from photo_api.oauth import OAuthClient, TokenState
from photo_api.parsers import picasa as parser
from photo_api.utils.auth import build_flow

logger = logging.getLogger(__name__)


class ThumbSize(str, Enum):
    """Uncropped thumbnail sizes PicasaWeb can render."""
    T94 = "94u"
    T110 = "110u"
    T128 = "128u"
    T200 = "200u"
    T220 = "220u"
    T288 = "288u"
    T320 = "320u"
    T400 = "400u"
    T512 = "512u"
    T576 = "576u"
    T640 = "640u"
    T720 = "720u"
    T800 = "800u"
    T912 = "912u"
    T1024 = "1024u"
    T1152 = "1152u"
    T1280 = "1280u"
    T1440 = "1440u"
    T1600 = "1600u"


DEFAULT_THUMBS = (ThumbSize.T200, ThumbSize.T320, ThumbSize.T640, ThumbSize.T720, ThumbSize.T1024)


class PicasaWebAPI:
    """Access to PicasaWeb albums and photos.

    Create instances with interactive(), with_callback() or
    with_refresh_token().
    """

    name = PICASA_WEB.name

    def __init__(self, oauth: OAuthClient):
        self.oauth = oauth

    @classmethod
    def _create(cls, app_key: str, app_secret: str, redirect_uri: Optional[str] = None,
                refresh_token: Optional[str] = None,
                timeout: float = DEFAULT_TIMEOUT) -> "PicasaWebAPI":
        credentials = AppCredentials(app_key, app_secret)
        flow = build_flow(PICASA_WEB, credentials, redirect_uri=redirect_uri)
        state = TokenState(refresh_token=refresh_token)
        return cls(OAuthClient(PICASA_WEB, credentials, flow, token_state=state, timeout=timeout))

    @classmethod
    def interactive(cls, app_key: str, app_secret: str, **kwargs) -> "PicasaWebAPI":
        """Create an API object authorized by a PIN the user copies back."""
        return cls._create(app_key, app_secret, redirect_uri=OOB_REDIRECT_URI, **kwargs)

    @classmethod
    def with_callback(cls, app_key: str, app_secret: str, callback: str,
                      **kwargs) -> "PicasaWebAPI":
        """Create an API object whose authorization redirects to callback."""
        return cls._create(app_key, app_secret, redirect_uri=callback, **kwargs)

    @classmethod
    def with_refresh_token(cls, app_key: str, app_secret: str, refresh_token: str,
                           **kwargs) -> "PicasaWebAPI":
        """Create an already authorized API object from a refresh token.

        The first request always refreshes the access token.
        """
        return cls._create(app_key, app_secret, refresh_token=refresh_token, **kwargs)

    @property
    def refresh_token(self) -> Optional[str]:
        return self.oauth.refresh_token

    def authorization_url(self) -> str:
        return self.oauth.authorization_url()

    def authorize(self, code: str) -> Result[Optional[str]]:
        """Complete authorization; the result holds the refresh token."""
        def exchange() -> Optional[str]:
            self.oauth.authorize(code)
            return self.oauth.refresh_token

        return Result.capture(exchange)

    def get_albums(self, user_id: str = DEFAULT_USER) -> Result[List[Album]]:
        """Get a user's album list.

        Args:
            user_id: Album owner, "default" for the authorized user

        Returns:
            Result holding the albums
        """
        endpoint = f"user/{user_id}"
        logger.debug("Fetching PicasaWeb albums of %s", user_id)

        def fetch() -> List[Album]:
            return parser.parse_albums(self.oauth.send_request(endpoint, "GET").body)

        return Result.capture(fetch)

    def get_photos(self, album_id: str, user_id: str = DEFAULT_USER,
                   image_max_size: str = "d",
                   thumbnail_sizes: Sequence[SizeToken] = DEFAULT_THUMBS) -> Result[List[Photo]]:
        """Get the photos of an album.

        Args:
            album_id: The ID of the album
            user_id: The album's owner
            image_max_size: imgmax value for the photo URL, "d" for the original
            thumbnail_sizes: Thumbnail sizes to render, in the order wanted

        Returns:
            Result holding the photos

        Raises:
            ValueError: If thumbnail_sizes is empty
        """
        tokens = size_tokens(thumbnail_sizes)
        endpoint = f"user/{user_id}/albumid/{album_id}"
        params = {"imgmax": image_max_size, "thumbsize": ",".join(tokens)}
        logger.debug("Fetching PicasaWeb photos of album %s", album_id)

        def fetch() -> List[Photo]:
            response = self.oauth.send_request(endpoint, "GET", params)
            return parser.parse_photos(response.body, thumbnail_sizes=tokens)

        return Result.capture(fetch)

    def get_user_info(self) -> Result[UserInfo]:
        """Get the Google user ID and e-mail of the authorized user."""
        def fetch() -> UserInfo:
            return parser.parse_user_info(self.oauth.send_request(PICASA_USER_INFO_URL, "GET").body)

        return Result.capture(fetch)
