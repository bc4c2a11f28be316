"""Command line front-end for the photo API client."""

import argparse
import logging
import sys
from typing import List, Optional

from tabulate import tabulate

from photo_api.api import FlickrAPI, PhotoAPI, PicasaWebAPI
from photo_api.models import Album, Photo, Result, UserInfo

logger = logging.getLogger(__name__)

PROVIDERS = {
    "picasa": PicasaWebAPI,
    "flickr": FlickrAPI,
}


def create_api(args: argparse.Namespace) -> PhotoAPI:
    """Build the provider API matching the command line options."""
    api_class = PROVIDERS[args.provider]
    if args.refresh_token:
        return api_class.with_refresh_token(args.app_key, args.app_secret, args.refresh_token)
    if args.callback:
        return api_class.with_callback(args.app_key, args.app_secret, args.callback)
    return api_class.interactive(args.app_key, args.app_secret)


def _fail(result: Result) -> int:
    print(f"Error: {result.error}", file=sys.stderr)
    return 1


def login(api: PhotoAPI) -> int:
    """Run the PIN flow and print the refresh token for later runs."""
    print("Open this URL in a browser and grant access:")
    print(api.authorization_url())
    code = input("Enter the code: ").strip()

    result = api.authorize(code)
    if not result.ok:
        return _fail(result)
    print(f"Refresh token: {result.value}")
    return 0


def print_albums(api: PhotoAPI, user_id: str) -> int:
    """Print a table of a user's albums."""
    result: Result[List[Album]] = api.get_albums(user_id)
    if not result.ok:
        return _fail(result)

    rows = [[album.id, album.title, album.photo_count] for album in result.value]
    print(tabulate(rows, headers=["ID", "Title", "Photos"], tablefmt="psql"))
    print(f"\nTotal albums: {len(rows)}")
    return 0


def print_photos(api: PhotoAPI, album_id: str, user_id: str,
                 image_max_size: Optional[str], thumbnail_sizes: Optional[List[str]]) -> int:
    """Print a table of the photos in an album."""
    kwargs = {}
    if image_max_size:
        kwargs["image_max_size"] = image_max_size
    if thumbnail_sizes:
        kwargs["thumbnail_sizes"] = thumbnail_sizes

    result: Result[List[Photo]] = api.get_photos(album_id, user_id, **kwargs)
    if not result.ok:
        return _fail(result)

    rows = [
        [photo.id, photo.title, photo.taken_at.isoformat() if photo.taken_at else "", photo.url]
        for photo in result.value
    ]
    print(tabulate(rows, headers=["ID", "Title", "Taken", "URL"], tablefmt="psql"))
    print(f"\nTotal photos: {len(rows)}")
    return 0


def print_user_info(api: PhotoAPI) -> int:
    result: Result[UserInfo] = api.get_user_info()
    if not result.ok:
        return _fail(result)
    print(f"User ID: {result.value.user_id}")
    print(f"E-mail: {result.value.email or '-'}")
    return 0


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Photo API client")

    # Global arguments
    parser.add_argument("--provider", choices=sorted(PROVIDERS), default="picasa",
                        help="Photo provider")
    parser.add_argument("--app-key", required=True, help="OAuth app key")
    parser.add_argument("--app-secret", required=True, help="OAuth app secret")
    parser.add_argument("--refresh-token", help="Previously obtained refresh token")
    parser.add_argument("--callback", help="Redirect URL registered for the app")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Commands", required=True)

    subparsers.add_parser("login", help="Authorize and print a refresh token")

    albums_parser = subparsers.add_parser("albums", help="List albums")
    albums_parser.add_argument("--user-id", default="default", help="Album owner")

    photos_parser = subparsers.add_parser("photos", help="List photos of an album")
    photos_parser.add_argument("album_id", help="Album ID")
    photos_parser.add_argument("--user-id", default="default", help="Album owner")
    photos_parser.add_argument("--imgmax", help="Maximum image size token")
    photos_parser.add_argument("--thumbsize", nargs="+", help="Thumbnail size tokens, in order")

    subparsers.add_parser("whoami", help="Show the authorized user")

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the photo API CLI."""
    args = parse_arguments(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    api = create_api(args)

    if args.command == "login":
        return login(api)
    if args.command == "albums":
        return print_albums(api, args.user_id)
    if args.command == "photos":
        return print_photos(api, args.album_id, args.user_id, args.imgmax, args.thumbsize)
    if args.command == "whoami":
        return print_user_info(api)

    logger.error("Unknown command: %s", args.command)
    return 2


if __name__ == "__main__":
    sys.exit(main())
