"""media-source exception classes."""

from media_source.exceptions.base import MediaSourceError
from media_source.exceptions.media import (
    InvalidMediaUrlError,
    MediaReadError,
    AssetNotFoundError,
)

__all__ = [
    "MediaSourceError",
    "InvalidMediaUrlError",
    "MediaReadError",
    "AssetNotFoundError",
]
