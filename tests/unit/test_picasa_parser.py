"""Unit tests for the PicasaWeb response parser."""

from datetime import datetime, timezone

import pytest

from photo_api.models import ParseError
from photo_api.parsers import picasa


def test_parse_albums(load_fixture):
    albums = picasa.parse_albums(load_fixture("picasa_albums.xml"))

    assert len(albums) == 2
    kyoto, scans = albums

    assert kyoto.id == "5830093454335386353"
    assert kyoto.title == "Trip to Kyoto"
    assert kyoto.photo_count == 42
    assert kyoto.description == "Temples and gardens"
    assert kyoto.created_at == datetime(2012, 12, 21, 10, 0, tzinfo=timezone.utc)
    assert kyoto.metadata == {
        "name": "TripToKyoto",
        "access": "public",
        "cover_url": "https://lh3.googleusercontent.com/kyoto/s160-c/TripToKyoto.jpg",
        "link": "https://picasaweb.google.com/108337425823592036213/TripToKyoto",
    }

    assert scans.id == "5830093454335386354"
    assert scans.photo_count == 0
    assert scans.description is None
    assert scans.created_at is None
    assert scans.metadata["cover_url"] is None


def test_parse_photos(load_fixture):
    photos = picasa.parse_photos(load_fixture("picasa_photos.xml"), thumbnail_sizes=["200u", "320u"])

    assert len(photos) == 2
    first, second = photos

    assert first.id == "5830093460000000001"
    assert first.title == "IMG_0001.JPG"
    assert first.url == "https://lh3.googleusercontent.com/kyoto/d/IMG_0001.JPG"
    assert first.album_id == "5830093454335386353"
    assert first.description == "Kinkaku-ji"
    assert (first.width, first.height) == (4000, 3000)
    assert first.taken_at == datetime(2012, 12, 20, 11, 0, tzinfo=timezone.utc)
    assert first.metadata == {
        "mime_type": "image/jpeg",
        "link": "https://picasaweb.google.com/lh/photo/abc",
    }
    assert [(t.size, t.url, t.width, t.height) for t in first.thumbnails] == [
        ("200u", "https://lh3.googleusercontent.com/kyoto/s200/IMG_0001.JPG", 200, 150),
        ("320u", "https://lh3.googleusercontent.com/kyoto/s320/IMG_0001.JPG", 320, 240),
    ]

    assert second.id == "5830093460000000002"
    assert second.description is None
    assert second.taken_at is None
    assert second.metadata["link"] is None


def test_parse_photos_labels_thumbnails_by_dimensions(load_fixture):
    """Without matching size tokens thumbnails are labelled WxH."""
    photos = picasa.parse_photos(load_fixture("picasa_photos.xml"))

    assert [t.size for t in photos[1].thumbnails] == ["150x200", "240x320"]


def test_truncated_feed_fails_without_partial_result(load_fixture):
    body = load_fixture("picasa_photos.xml")
    truncated = body[: len(body) // 2]

    with pytest.raises(ParseError) as exc_info:
        picasa.parse_photos(truncated)

    assert exc_info.value.raw_body == truncated


def test_entry_missing_required_field(load_fixture):
    """One broken entry fails the whole feed."""
    body = load_fixture("picasa_albums.xml").replace("<gphoto:numphotos>0</gphoto:numphotos>", "")

    with pytest.raises(ParseError):
        picasa.parse_albums(body)


def test_photo_without_content(load_fixture):
    body = load_fixture("picasa_photos.xml").replace(
        "<content type='image/jpeg' src='https://lh3.googleusercontent.com/kyoto/d/IMG_0002.JPG'/>", ""
    )

    with pytest.raises(ParseError):
        picasa.parse_photos(body)


def test_non_integer_photo_count(load_fixture):
    body = load_fixture("picasa_albums.xml").replace("<gphoto:numphotos>42<", "<gphoto:numphotos>many<")

    with pytest.raises(ParseError):
        picasa.parse_albums(body)


def test_wrong_root_element():
    body = "<html><body>Service unavailable</body></html>"

    with pytest.raises(ParseError) as exc_info:
        picasa.parse_albums(body)

    assert exc_info.value.raw_body == body


def test_empty_feed():
    body = "<feed xmlns='http://www.w3.org/2005/Atom'></feed>"

    assert picasa.parse_albums(body) == []
    assert picasa.parse_photos(body) == []


def test_parse_user_info(load_fixture):
    user = picasa.parse_user_info(load_fixture("picasa_userinfo.json"))

    assert user.user_id == "108337425823592036213"
    assert user.email == "traveller@example.com"
    assert user.name == "Kyoto Traveller"


@pytest.mark.parametrize(
    "body",
    [
        "not json",
        "[]",
        '{"id": "1"}',
        '{"id": 1, "email": "a@example.com"}',
    ],
)
def test_parse_user_info_malformed(body):
    with pytest.raises(ParseError):
        picasa.parse_user_info(body)
