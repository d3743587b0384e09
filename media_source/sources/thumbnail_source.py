"""Pairing of a media source with an optional preview source."""

from typing import Optional

from media_source.sources.base_source import MediaSource


class ThumbnailMedia:
    """Mixin for sources that can carry a preview ``thumbnail``."""

    _thumbnail: Optional[MediaSource] = None

    @property
    def thumbnail(self) -> Optional[MediaSource]:
        return self._thumbnail

    @property
    def has_thumbnail(self) -> bool:
        return self._thumbnail is not None


class ThumbnailMediaSource(ThumbnailMedia, MediaSource):
    """Wraps an ``original`` source together with an optional ``thumbnail``.

    Name, MIME type, size and metadata are those of ``original``. This is
    not a storage backend: ``fold`` always falls through to ``or_else`` and
    no conversions are offered.

    Args:
        original: The full-quality media source.
        thumbnail: Optional preview source, typically an image.
    """

    def __init__(self, original: MediaSource, thumbnail: Optional[MediaSource] = None):
        super().__init__(
            metadata=original.metadata,
            mime_type=original.mime_type,
            name=original.name,
            size=original.size,
        )
        self._original = original
        self._thumbnail = thumbnail

    @property
    def original(self) -> MediaSource:
        return self._original

    def _props(self) -> tuple:
        return (self._original, self._thumbnail)

    def _repr_fields(self) -> dict:
        return {"original": self._original, "thumbnail": self._thumbnail}
