"""Provider API facades."""

from .base import PhotoAPI
from .flickr import FlickrAPI, FlickrSize
from .picasa import PicasaWebAPI, ThumbSize

__all__ = ["FlickrAPI", "FlickrSize", "PhotoAPI", "PicasaWebAPI", "ThumbSize"]
