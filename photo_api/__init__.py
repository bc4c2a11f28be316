"""Unified client for PicasaWeb and Flickr photo APIs."""

from photo_api.api import FlickrAPI, FlickrSize, PhotoAPI, PicasaWebAPI, ThumbSize
from photo_api.models import (
    Album,
    ApiError,
    AuthError,
    HttpError,
    NetworkError,
    ParseError,
    Photo,
    PhotoApiError,
    Result,
    Thumbnail,
    UserInfo,
)

__all__ = [
    "Album",
    "ApiError",
    "AuthError",
    "FlickrAPI",
    "FlickrSize",
    "HttpError",
    "NetworkError",
    "ParseError",
    "Photo",
    "PhotoAPI",
    "PhotoApiError",
    "PicasaWebAPI",
    "Result",
    "Thumbnail",
    "ThumbSize",
    "UserInfo",
]
