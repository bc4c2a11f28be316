"""Per-provider response parsers.

Each parser either converts a whole response or raises ParseError; partial
results are never returned.
"""

from . import flickr, picasa

__all__ = ["flickr", "picasa"]
