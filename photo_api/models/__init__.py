"""Models shared by every photo provider."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, Generic, List, NamedTuple, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class AppCredentials:
    """Application key and secret issued by a provider."""
    app_key: str
    app_secret: str


@dataclass
class Thumbnail:
    """A rendered thumbnail of a photo."""
    size: str
    url: str
    width: Optional[int] = None
    height: Optional[int] = None


@dataclass
class Photo:
    """Represents a photo in an album."""
    id: str
    title: str
    url: str
    thumbnails: List[Thumbnail]
    taken_at: Optional[datetime] = None
    album_id: Optional[str] = None
    description: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class Album:
    """Represents an album."""
    id: str
    title: str
    photo_count: int
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class UserInfo:
    """The account an API object is authorized as."""
    user_id: str
    email: Optional[str] = None
    name: Optional[str] = None


class ApiResponse(NamedTuple):
    """Raw response of an authorized request."""
    status_code: int
    content_type: str
    body: str


class PhotoApiError(Exception):
    """Base exception for photo API operations."""


class AuthError(PhotoApiError):
    """Raised when no valid access token can be obtained."""


class NetworkError(PhotoApiError):
    """Raised when a request fails at the transport level."""


class ApiError(PhotoApiError):
    """Raised when a provider reports a failed API call."""

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.code = code
        self.message = message


class HttpError(ApiError):
    """Raised when a provider answers with a non-2xx status."""

    def __init__(self, status: int, body: str):
        super().__init__(f"HTTP {status}: {body[:200]}", code=str(status))
        self.status = status
        self.body = body


class ParseError(PhotoApiError):
    """Raised when a response body cannot be converted to the model."""

    def __init__(self, message: str, raw_body: str):
        super().__init__(message)
        self.raw_body = raw_body


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a provider call: either a value or a PhotoApiError."""
    value: Optional[T] = None
    error: Optional[PhotoApiError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, raising the stored error on failure."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: PhotoApiError) -> "Result[T]":
        return cls(error=error)

    @classmethod
    def capture(cls, operation: Callable[..., T], *args: Any, **kwargs: Any) -> "Result[T]":
        """Run operation and wrap its return value or PhotoApiError."""
        try:
            return cls.success(operation(*args, **kwargs))
        except PhotoApiError as e:
            return cls.failure(e)


__all__ = [
    "Album",
    "ApiError",
    "ApiResponse",
    "AppCredentials",
    "AuthError",
    "HttpError",
    "NetworkError",
    "ParseError",
    "Photo",
    "PhotoApiError",
    "Result",
    "Thumbnail",
    "UserInfo",
]
