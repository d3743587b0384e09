"""Media kinds and the immutable type variants attached to every source.

A ``MediaKind`` is the bare classification tag. A ``FileType`` variant is the
value object a ``MediaSource`` carries as its ``metadata``; audio and video
variants additionally carry an optional ``duration``.
"""

from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Callable, ClassVar, Iterable, Optional, TypeVar

from media_source.config.constants import SMOOTH_STREAMING_MARKER
from media_source.utils.platform_utils import PlatformUtils

T = TypeVar("T")


class MediaKind(Enum):
    """Closed set of media classification tags."""

    IMAGE = "image"
    AUDIO = "audio"
    VIDEO = "video"
    DOCUMENT = "document"
    URL = "url"
    OTHER = "other"

    def is_any(self, kinds: Iterable["MediaKind"]) -> bool:
        return self in tuple(kinds)

    @classmethod
    def from_mime(cls, mime_type: Optional[str]) -> "MediaKind":
        """Classify a MIME string by substring.

        The ``mpegurl`` check makes ``.m3u8`` HLS playlists count as video.
        """
        if not mime_type:
            return cls.OTHER
        mime = mime_type.lower()
        if "image" in mime:
            return cls.IMAGE
        if "audio" in mime:
            return cls.AUDIO
        if "video" in mime or "mpegurl" in mime:
            return cls.VIDEO
        if "application/pdf" in mime:
            return cls.DOCUMENT
        return cls.OTHER

    @classmethod
    def from_path(cls, path: str, mime_type: Optional[str] = None) -> "MediaKind":
        """Classify a file path or URL, preferring an explicit MIME type.

        Any path containing "ism" is treated as a smooth-streaming manifest
        and classified as video before anything else is looked at. The check
        is a plain substring match, so "charisma.mp3" is video too.
        """
        if SMOOTH_STREAMING_MARKER in path:
            return cls.VIDEO
        if mime_type:
            return cls.from_mime(mime_type)
        classifier = PlatformUtils.instance().classifier
        return cls.from_mime(classifier.classify_from_path(path))

    @classmethod
    def from_bytes(cls, data: bytes, mime_type: Optional[str] = None) -> "MediaKind":
        """Classify a byte buffer, preferring an explicit MIME type."""
        if mime_type:
            return cls.from_mime(mime_type)
        classifier = PlatformUtils.instance().classifier
        return cls.from_mime(classifier.classify_from_bytes(data))


class DurationMedia:
    """Marker for variants that carry an optional ``duration``."""

    duration: Optional[timedelta]


@dataclass(frozen=True)
class FileType:
    """Base of the immutable media type variants."""

    kind: ClassVar[MediaKind] = MediaKind.OTHER

    def is_any(self, kinds: Iterable[MediaKind]) -> bool:
        return self.kind.is_any(kinds)

    def fold(
        self,
        *,
        or_else: Callable[[], T],
        image: Optional[Callable[["ImageType"], T]] = None,
        audio: Optional[Callable[["AudioType"], T]] = None,
        video: Optional[Callable[["VideoType"], T]] = None,
        document: Optional[Callable[["DocumentType"], T]] = None,
        url: Optional[Callable[["UrlType"], T]] = None,
    ) -> T:
        """Run the handler matching this variant, or ``or_else``."""
        if isinstance(self, ImageType) and image is not None:
            return image(self)
        if isinstance(self, AudioType) and audio is not None:
            return audio(self)
        if isinstance(self, VideoType) and video is not None:
            return video(self)
        if isinstance(self, DocumentType) and document is not None:
            return document(self)
        if isinstance(self, UrlType) and url is not None:
            return url(self)
        return or_else()

    @staticmethod
    def from_kind(kind: MediaKind, duration: Optional[timedelta] = None) -> "FileType":
        """Build the variant for ``kind``; ``duration`` only reaches audio/video."""
        if kind is MediaKind.VIDEO:
            return VideoType(duration)
        if kind is MediaKind.AUDIO:
            return AudioType(duration)
        if kind is MediaKind.IMAGE:
            return ImageType()
        if kind is MediaKind.DOCUMENT:
            return DocumentType()
        if kind is MediaKind.URL:
            return UrlType()
        return OtherType()


@dataclass(frozen=True)
class VideoType(FileType, DurationMedia):
    duration: Optional[timedelta] = None

    kind: ClassVar[MediaKind] = MediaKind.VIDEO


@dataclass(frozen=True)
class AudioType(FileType, DurationMedia):
    duration: Optional[timedelta] = None

    kind: ClassVar[MediaKind] = MediaKind.AUDIO


@dataclass(frozen=True)
class ImageType(FileType):
    kind: ClassVar[MediaKind] = MediaKind.IMAGE


@dataclass(frozen=True)
class DocumentType(FileType):
    kind: ClassVar[MediaKind] = MediaKind.DOCUMENT


@dataclass(frozen=True)
class UrlType(FileType):
    kind: ClassVar[MediaKind] = MediaKind.URL


@dataclass(frozen=True)
class OtherType(FileType):
    kind: ClassVar[MediaKind] = MediaKind.OTHER
