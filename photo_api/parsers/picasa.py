"""Conversion of PicasaWeb Atom feeds and Google userinfo to the common model."""

import json
import logging
import xml.etree.ElementTree as ET
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from photo_api.models import Album, ParseError, Photo, Thumbnail, UserInfo

logger = logging.getLogger(__name__)

NAMESPACES = {
    "atom": "http://www.w3.org/2005/Atom",
    "gphoto": "http://schemas.google.com/photos/2007",
    "media": "http://search.yahoo.com/mrss/",
}


def _load_feed(body: str) -> ET.Element:
    try:
        root = ET.fromstring(body)
    except ET.ParseError as e:
        raise ParseError(f"Invalid PicasaWeb XML: {e}", body) from e

    if root.tag != f"{{{NAMESPACES['atom']}}}feed":
        raise ParseError(f"Expected an Atom feed, got <{root.tag}>", body)
    return root


def _required_text(entry: ET.Element, path: str, body: str) -> str:
    node = entry.find(path, NAMESPACES)
    if node is None:
        raise ParseError(f"Entry is missing {path}", body)
    return (node.text or "").strip()


def _optional_text(entry: ET.Element, path: str) -> Optional[str]:
    node = entry.find(path, NAMESPACES)
    if node is None or node.text is None:
        return None
    return node.text.strip()


def _optional_int(value: Optional[str], body: str) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except ValueError as e:
        raise ParseError(f"Not an integer: {value!r}", body) from e


def _timestamp(entry: ET.Element, body: str) -> Optional[datetime]:
    # gphoto:timestamp is milliseconds since the epoch
    millis = _optional_int(_optional_text(entry, "gphoto:timestamp"), body)
    if millis is None:
        return None
    return datetime.fromtimestamp(millis / 1000, tz=timezone.utc)


def _alternate_link(entry: ET.Element) -> Optional[str]:
    for link in entry.findall("atom:link", NAMESPACES):
        if link.get("rel") == "alternate":
            return link.get("href")
    return None


def parse_albums(body: str) -> List[Album]:
    """Parse a user feed into albums.

    Raises:
        ParseError: If the feed is malformed or an entry lacks id, title or
                    photo count
    """
    root = _load_feed(body)
    albums = []
    for entry in root.findall("atom:entry", NAMESPACES):
        photo_count = _optional_int(_required_text(entry, "gphoto:numphotos", body), body)
        if photo_count is None:
            raise ParseError("Entry has an empty gphoto:numphotos", body)

        cover = entry.find("media:group/media:thumbnail", NAMESPACES)
        albums.append(
            Album(
                id=_required_text(entry, "gphoto:id", body),
                title=_required_text(entry, "atom:title", body),
                photo_count=photo_count,
                description=_optional_text(entry, "atom:summary"),
                created_at=_timestamp(entry, body),
                metadata={
                    "name": _optional_text(entry, "gphoto:name"),
                    "access": _optional_text(entry, "gphoto:access"),
                    "cover_url": cover.get("url") if cover is not None else None,
                    "link": _alternate_link(entry),
                },
            )
        )

    logger.debug("Parsed %d PicasaWeb albums", len(albums))
    return albums


def _thumbnails(entry: ET.Element, sizes: Optional[Sequence[str]], body: str) -> List[Thumbnail]:
    nodes = entry.findall("media:group/media:thumbnail", NAMESPACES)
    # Thumbnails come back in the order they were requested
    labelled = sizes is not None and len(sizes) == len(nodes)

    thumbnails = []
    for index, node in enumerate(nodes):
        url = node.get("url")
        if not url:
            raise ParseError("media:thumbnail without url", body)
        width = _optional_int(node.get("width"), body)
        height = _optional_int(node.get("height"), body)
        if labelled:
            label = sizes[index]
        elif width and height:
            label = f"{width}x{height}"
        else:
            label = str(index)
        thumbnails.append(Thumbnail(size=label, url=url, width=width, height=height))
    return thumbnails


def parse_photos(body: str, thumbnail_sizes: Optional[Sequence[str]] = None) -> List[Photo]:
    """Parse an album feed into photos.

    Args:
        body: Album feed XML
        thumbnail_sizes: The thumbsize tokens of the request, used to label
                         the returned thumbnails

    Raises:
        ParseError: If the feed is malformed or an entry lacks id or content
    """
    root = _load_feed(body)
    photos = []
    for entry in root.findall("atom:entry", NAMESPACES):
        content = entry.find("atom:content", NAMESPACES)
        if content is None or not content.get("src"):
            raise ParseError("Entry is missing atom:content/@src", body)

        photos.append(
            Photo(
                id=_required_text(entry, "gphoto:id", body),
                title=_optional_text(entry, "atom:title") or "",
                url=content.get("src"),
                thumbnails=_thumbnails(entry, thumbnail_sizes, body),
                taken_at=_timestamp(entry, body),
                album_id=_optional_text(entry, "gphoto:albumid"),
                description=_optional_text(entry, "atom:summary") or None,
                width=_optional_int(_optional_text(entry, "gphoto:width"), body),
                height=_optional_int(_optional_text(entry, "gphoto:height"), body),
                metadata={
                    "mime_type": content.get("type"),
                    "link": _alternate_link(entry),
                },
            )
        )

    logger.debug("Parsed %d PicasaWeb photos", len(photos))
    return photos


def parse_user_info(body: str) -> UserInfo:
    """Parse a Google userinfo JSON document.

    Raises:
        ParseError: If the body is not JSON or lacks a string id or email
    """
    try:
        document = json.loads(body)
    except ValueError as e:
        raise ParseError(f"Invalid userinfo JSON: {e}", body) from e

    if not isinstance(document, dict):
        raise ParseError("Userinfo is not a JSON object", body)

    user_id = document.get("id")
    email = document.get("email")
    if not isinstance(user_id, str) or not isinstance(email, str):
        raise ParseError("Userinfo lacks id or email", body)

    return UserInfo(user_id=user_id, email=email, name=document.get("name"))
