"""Conversion of Flickr REST responses to the common model."""

import json
import logging
import xml.etree.ElementTree as ET
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from photo_api.models import Album, ApiError, ParseError, Photo, Thumbnail, UserInfo

logger = logging.getLogger(__name__)

DATE_TAKEN_FORMAT = "%Y-%m-%d %H:%M:%S"


def _load_rsp(body: str, container: str) -> ET.Element:
    """Return the container element of an <rsp stat="ok"> document."""
    try:
        root = ET.fromstring(body)
    except ET.ParseError as e:
        raise ParseError(f"Invalid Flickr XML: {e}", body) from e

    if root.tag != "rsp":
        raise ParseError(f"Expected <rsp>, got <{root.tag}>", body)

    stat = root.get("stat")
    if stat == "fail":
        err = root.find("err")
        if err is None:
            raise ParseError("Failed response without <err>", body)
        raise ApiError(err.get("msg", "unknown error"), code=err.get("code"))
    if stat != "ok":
        raise ParseError(f"Unexpected response status {stat!r}", body)

    node = root.find(container)
    if node is None:
        raise ParseError(f"Response is missing <{container}>", body)
    return node


def _required_attr(node: ET.Element, name: str, body: str) -> str:
    value = node.get(name)
    if value is None:
        raise ParseError(f"<{node.tag}> is missing {name}", body)
    return value


def _int(value: Optional[str], body: str) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except ValueError as e:
        raise ParseError(f"Not an integer: {value!r}", body) from e


def parse_albums(body: str) -> List[Album]:
    """Parse a flickr.photosets.getList response into albums."""
    photosets = _load_rsp(body, "photosets")
    albums = []
    for photoset in photosets.findall("photoset"):
        photo_count = _int(_required_attr(photoset, "photos", body), body)
        if photo_count is None:
            raise ParseError("<photoset> has an empty photos count", body)

        title = photoset.find("title")
        if title is None:
            raise ParseError("<photoset> is missing <title>", body)

        created = _int(photoset.get("date_create"), body)
        albums.append(
            Album(
                id=_required_attr(photoset, "id", body),
                title=title.text or "",
                photo_count=photo_count,
                description=photoset.findtext("description") or None,
                created_at=(
                    datetime.fromtimestamp(created, tz=timezone.utc) if created is not None else None
                ),
                metadata={
                    "primary": photoset.get("primary"),
                    "videos": _int(photoset.get("videos"), body),
                },
            )
        )

    logger.debug("Parsed %d Flickr photosets", len(albums))
    return albums


def _date_taken(value: Optional[str], body: str) -> Optional[datetime]:
    # Flickr reports the camera's local time without an offset
    if not value:
        return None
    try:
        return datetime.strptime(value, DATE_TAKEN_FORMAT)
    except ValueError as e:
        raise ParseError(f"Invalid datetaken {value!r}", body) from e


def parse_photos(body: str, image_max_size: str = "o",
                 thumbnail_sizes: Sequence[str] = ()) -> List[Photo]:
    """Parse a flickr.photosets.getPhotos response into photos.

    Args:
        body: Response XML
        image_max_size: Size suffix whose url_* attribute is the photo URL
        thumbnail_sizes: Size suffixes to collect as thumbnails, in order

    Raises:
        ApiError: If Flickr reported a failure
        ParseError: If the response is malformed or a photo has neither its
                    URL nor any rendered thumbnail

    Owners can block downloads of their originals, in which case Flickr omits
    url_o. The photo then falls back to its widest rendered thumbnail and
    metadata["url_size"] names the size actually used.
    """
    photoset = _load_rsp(body, "photoset")
    album_id = photoset.get("id")

    photos = []
    for node in photoset.findall("photo"):
        thumbnails = []
        for size in thumbnail_sizes:
            # Sizes larger than the original are not rendered
            thumb_url = node.get(f"url_{size}")
            if thumb_url:
                thumbnails.append(
                    Thumbnail(
                        size=size,
                        url=thumb_url,
                        width=_int(node.get(f"width_{size}"), body),
                        height=_int(node.get(f"height_{size}"), body),
                    )
                )

        url_size = image_max_size
        url = node.get(f"url_{image_max_size}")
        if not url:
            if not thumbnails:
                raise ParseError(f"<photo> is missing url_{image_max_size}", body)
            widest = max(thumbnails, key=lambda thumb: thumb.width or 0)
            url_size, url = widest.size, widest.url

        photos.append(
            Photo(
                id=_required_attr(node, "id", body),
                title=node.get("title", ""),
                url=url,
                thumbnails=thumbnails,
                taken_at=_date_taken(node.get("datetaken"), body),
                album_id=album_id,
                width=_int(node.get(f"width_{url_size}"), body),
                height=_int(node.get(f"height_{url_size}"), body),
                metadata={
                    "secret": node.get("secret"),
                    "server": node.get("server"),
                    "is_primary": node.get("isprimary") == "1",
                    "url_size": url_size,
                },
            )
        )

    logger.debug("Parsed %d Flickr photos", len(photos))
    return photos


def parse_user_info(body: str) -> UserInfo:
    """Parse a flickr.test.login JSON response.

    Flickr does not expose e-mail addresses, so email is always None.
    """
    try:
        document = json.loads(body)
    except ValueError as e:
        raise ParseError(f"Invalid Flickr JSON: {e}", body) from e

    if not isinstance(document, dict):
        raise ParseError("Response is not a JSON object", body)
    if document.get("stat") == "fail":
        raise ApiError(document.get("message", "unknown error"), code=str(document.get("code")))

    user = document.get("user")
    if not isinstance(user, dict) or not isinstance(user.get("id"), str):
        raise ParseError("Response lacks user id", body)

    username = user.get("username")
    name = username.get("_content") if isinstance(username, dict) else None
    return UserInfo(user_id=user["id"], email=None, name=name)
