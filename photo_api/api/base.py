"""Capability shared by every provider API."""

from enum import Enum
from typing import Any, List, Optional, Protocol, Sequence, Union

from photo_api.models import Album, Photo, Result, UserInfo

SizeToken = Union[str, Enum]


class PhotoAPI(Protocol):
    """Read access to a user's albums and photos on one provider."""

    name: str

    def authorization_url(self) -> str:
        ...

    def authorize(self, code: str) -> Result[Optional[str]]:
        ...

    def get_albums(self, user_id: str = ...) -> Result[List[Album]]:
        ...

    def get_photos(self, album_id: str, user_id: str = ..., image_max_size: Any = ...,
                   thumbnail_sizes: Sequence[SizeToken] = ...) -> Result[List[Photo]]:
        ...

    def get_user_info(self) -> Result[UserInfo]:
        ...


def size_tokens(sizes: Sequence[SizeToken]) -> List[str]:
    """Convert size enum members and strings to provider tokens, keeping order.

    Raises:
        ValueError: If no size is given
    """
    if not sizes:
        raise ValueError("At least one thumbnail size is required")
    return [size.value if isinstance(size, Enum) else str(size) for size in sizes]
