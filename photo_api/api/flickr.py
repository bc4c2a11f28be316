"""Flickr API."""

import logging
from enum import Enum
from typing import Dict, List, Optional, Sequence

from photo_api.api.base import SizeToken, size_tokens
from photo_api.config import DEFAULT_TIMEOUT, DEFAULT_USER, FLICKR, OOB_REDIRECT_URI
from photo_api.models import Album, AppCredentials, Photo, Result, UserInfo
from photo_api.oauth import OAuthClient, TokenState
from photo_api.parsers import flickr as parser
from photo_api.utils.auth import build_flow

logger = logging.getLogger(__name__)

REST_ENDPOINT = "rest"


class FlickrSize(str, Enum):
    """Flickr size suffixes."""
    SQUARE = "sq"
    LARGE_SQUARE = "q"
    THUMBNAIL = "t"
    SMALL = "s"
    SMALL_320 = "n"
    MEDIUM = "m"
    MEDIUM_640 = "z"
    MEDIUM_800 = "c"
    LARGE = "l"
    ORIGINAL = "o"


DEFAULT_THUMBS = (
    FlickrSize.LARGE_SQUARE,
    FlickrSize.SMALL_320,
    FlickrSize.MEDIUM_640,
    FlickrSize.MEDIUM_800,
    FlickrSize.LARGE,
)


class FlickrAPI:
    """Access to Flickr photosets and photos."""

    name = FLICKR.name

    def __init__(self, oauth: OAuthClient):
        self.oauth = oauth

    @classmethod
    def _create(cls, app_key: str, app_secret: str, redirect_uri: Optional[str] = None,
                refresh_token: Optional[str] = None,
                timeout: float = DEFAULT_TIMEOUT) -> "FlickrAPI":
        credentials = AppCredentials(app_key, app_secret)
        flow = build_flow(FLICKR, credentials, redirect_uri=redirect_uri)
        state = TokenState(refresh_token=refresh_token)
        return cls(OAuthClient(FLICKR, credentials, flow, token_state=state, timeout=timeout))

    @classmethod
    def interactive(cls, app_key: str, app_secret: str, **kwargs) -> "FlickrAPI":
        return cls._create(app_key, app_secret, redirect_uri=OOB_REDIRECT_URI, **kwargs)

    @classmethod
    def with_callback(cls, app_key: str, app_secret: str, callback: str,
                      **kwargs) -> "FlickrAPI":
        return cls._create(app_key, app_secret, redirect_uri=callback, **kwargs)

    @classmethod
    def with_refresh_token(cls, app_key: str, app_secret: str, refresh_token: str,
                           **kwargs) -> "FlickrAPI":
        """Create an already authorized API object; the first call refreshes."""
        return cls._create(app_key, app_secret, refresh_token=refresh_token, **kwargs)

    @property
    def refresh_token(self) -> Optional[str]:
        return self.oauth.refresh_token

    def authorization_url(self) -> str:
        return self.oauth.authorization_url()

    def authorize(self, code: str) -> Result[Optional[str]]:
        def exchange() -> Optional[str]:
            self.oauth.authorize(code)
            return self.oauth.refresh_token

        return Result.capture(exchange)

    def _call(self, method: str, user_id: str = DEFAULT_USER, **params: str) -> str:
        """Invoke a REST method and return the response body."""
        query: Dict[str, str] = {"method": method}
        # Flickr falls back to the calling user when user_id is absent
        if user_id != DEFAULT_USER:
            query["user_id"] = user_id
        query.update(params)
        return self.oauth.send_request(REST_ENDPOINT, "GET", query).body

    def get_albums(self, user_id: str = DEFAULT_USER) -> Result[List[Album]]:
        """Get a user's photosets."""
        logger.debug("Fetching Flickr photosets of %s", user_id)
        return Result.capture(
            lambda: parser.parse_albums(self._call("flickr.photosets.getList", user_id))
        )

    def get_photos(self, album_id: str, user_id: str = DEFAULT_USER,
                   image_max_size: SizeToken = FlickrSize.ORIGINAL,
                   thumbnail_sizes: Sequence[SizeToken] = DEFAULT_THUMBS) -> Result[List[Photo]]:
        """Get the photos of a photoset.

        The photo URL is the url_<image_max_size> extra; thumbnails are the
        requested size suffixes Flickr rendered, in the order given. Photos
        whose owner blocks original downloads have no url_o; they fall back
        to the widest rendered thumbnail, named by metadata["url_size"].

        Raises:
            ValueError: If thumbnail_sizes is empty
        """
        tokens = size_tokens(thumbnail_sizes)
        max_size = size_tokens([image_max_size])[0]

        extras = ["date_taken"]
        for token in [max_size] + tokens:
            if f"url_{token}" not in extras:
                extras.append(f"url_{token}")

        logger.debug("Fetching Flickr photos of photoset %s", album_id)

        def fetch() -> List[Photo]:
            body = self._call(
                "flickr.photosets.getPhotos", user_id,
                photoset_id=album_id, extras=",".join(extras),
            )
            return parser.parse_photos(body, image_max_size=max_size, thumbnail_sizes=tokens)

        return Result.capture(fetch)

    def get_user_info(self) -> Result[UserInfo]:
        """Get the Flickr user ID and name of the authorized user."""
        return Result.capture(
            lambda: parser.parse_user_info(
                self._call("flickr.test.login", format="json", nojsoncallback="1")
            )
        )
