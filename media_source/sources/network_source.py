"""Media sources that only describe a network location.

A network source stores a URI and descriptive metadata. It never fetches
content, so it offers no conversion to file or memory.
"""

from datetime import timedelta
from typing import Optional, Union
from urllib.parse import SplitResult, urlsplit

from media_source.config.constants import URL_MIME_TYPE
from media_source.exceptions import InvalidMediaUrlError
from media_source.media_type import (
    AudioType,
    DocumentType,
    FileType,
    ImageType,
    MediaKind,
    OtherType,
    UrlType,
    VideoType,
)
from media_source.sources.base_source import MediaSource, resolve_media_type
from media_source.sources.thumbnail_source import ThumbnailMedia
from media_source.utils.file_util import get_file_name_from_path
from media_source.utils.logger import logger
from media_source.utils.platform_utils import PlatformUtils

UriLike = Union[str, SplitResult]


def parse_uri(url: UriLike) -> SplitResult:
    """Parse ``url`` into its components.

    Raises:
        InvalidMediaUrlError: If ``url`` is empty, not a string, or malformed.
    """
    if isinstance(url, SplitResult):
        return url
    if not isinstance(url, str):
        raise InvalidMediaUrlError("URL must be a string", url=url)
    if not url.strip():
        raise InvalidMediaUrlError("URL is empty", url=url)
    try:
        uri = urlsplit(url)
        # Accessing the port validates it
        uri.port
    except ValueError as e:
        raise InvalidMediaUrlError(f"Malformed URL ({e})", url=url) from e
    return uri


class NetworkMediaSource(MediaSource):
    """Media addressed by a URI.

    ``uri`` may be given as a URL string or an already split URI. ``name``
    defaults to the last path segment and ``mime_type`` to the type guessed
    from the path.
    """

    def __init__(
        self,
        uri: UriLike,
        *,
        metadata: FileType,
        name: Optional[str] = None,
        size: Optional[int] = None,
        mime_type: Optional[str] = None,
    ):
        uri = parse_uri(uri)
        if mime_type is None:
            mime_type = PlatformUtils.instance().classifier.classify_from_path(uri.path)
        super().__init__(
            metadata=metadata,
            mime_type=mime_type,
            name=name or get_file_name_from_path(uri.path),
            size=size,
        )
        self._uri = uri

    @property
    def uri(self) -> SplitResult:
        return self._uri

    @property
    def url(self) -> str:
        return self._uri.geturl()

    def _props(self) -> tuple:
        return (self._uri,) + super()._props()

    def _repr_fields(self) -> dict:
        return {"url": self.url, **super()._repr_fields()}

    @classmethod
    def from_url(
        cls,
        url: UriLike,
        *,
        name: Optional[str] = None,
        size: Optional[int] = None,
        mime_type: Optional[str] = None,
        duration: Optional[timedelta] = None,
        thumbnail: Optional[MediaSource] = None,
        media_type: Optional[Union[MediaKind, FileType]] = None,
    ) -> "NetworkMediaSource":
        """Create a source for ``url``.

        No request is made. Called on ``NetworkMediaSource`` the kind comes
        from the URL path or ``mime_type`` (unless ``media_type`` is given)
        and the matching subclass is returned. Called on a subclass, that
        subclass is returned as-is. ``thumbnail`` only applies to video and
        image sources.

        Raises:
            InvalidMediaUrlError: If ``url`` cannot be parsed.
        """
        uri = parse_uri(url)
        kind, duration = resolve_media_type(media_type, duration)
        media_class = cls
        if cls is NetworkMediaSource:
            if kind is None:
                kind = MediaKind.from_path(uri.geturl(), mime_type)
            media_class = network_media_class_for(kind)

        if issubclass(media_class, UrlMedia):
            return media_class(uri)

        kwargs = {"name": name, "size": size, "mime_type": mime_type}
        if issubclass(media_class, ThumbnailMedia):
            kwargs["thumbnail"] = thumbnail
        return media_class._create(uri, duration=duration, **kwargs)

    @classmethod
    def from_url_or_null(cls, url: Optional[str]) -> Optional["NetworkMediaSource"]:
        """Best-effort ``from_url``: None for a missing or unusable URL."""
        if not url:
            return None
        try:
            return cls.from_url(url)
        except Exception as e:
            logger.debug(f"Ignoring unusable media URL {url!r}: {e}")
            return None


class VideoNetworkMedia(ThumbnailMedia, NetworkMediaSource):
    """Video at a URL, optionally with a preview thumbnail."""

    metadata_type = VideoType

    def __init__(
        self,
        uri: UriLike,
        *,
        name: Optional[str] = None,
        size: Optional[int] = None,
        mime_type: Optional[str] = None,
        duration: Optional[timedelta] = None,
        thumbnail: Optional[MediaSource] = None,
    ):
        super().__init__(
            uri, metadata=VideoType(duration), name=name, size=size, mime_type=mime_type
        )
        self._thumbnail = thumbnail


class AudioNetworkMedia(NetworkMediaSource):
    metadata_type = AudioType

    def __init__(
        self,
        uri: UriLike,
        *,
        name: Optional[str] = None,
        size: Optional[int] = None,
        mime_type: Optional[str] = None,
        duration: Optional[timedelta] = None,
    ):
        super().__init__(
            uri, metadata=AudioType(duration), name=name, size=size, mime_type=mime_type
        )


class ImageNetworkMedia(ThumbnailMedia, NetworkMediaSource):
    """Image at a URL, optionally with a smaller preview."""

    metadata_type = ImageType

    def __init__(
        self,
        uri: UriLike,
        *,
        name: Optional[str] = None,
        size: Optional[int] = None,
        mime_type: Optional[str] = None,
        thumbnail: Optional[MediaSource] = None,
    ):
        super().__init__(
            uri, metadata=ImageType(), name=name, size=size, mime_type=mime_type
        )
        self._thumbnail = thumbnail


class DocumentNetworkMedia(NetworkMediaSource):
    metadata_type = DocumentType

    def __init__(
        self,
        uri: UriLike,
        *,
        name: Optional[str] = None,
        size: Optional[int] = None,
        mime_type: Optional[str] = None,
    ):
        super().__init__(
            uri, metadata=DocumentType(), name=name, size=size, mime_type=mime_type
        )


class OtherTypeNetworkMedia(NetworkMediaSource):
    metadata_type = OtherType

    def __init__(
        self,
        uri: UriLike,
        *,
        name: Optional[str] = None,
        size: Optional[int] = None,
        mime_type: Optional[str] = None,
    ):
        super().__init__(
            uri, metadata=OtherType(), name=name, size=size, mime_type=mime_type
        )


class UrlMedia(NetworkMediaSource):
    """A plain hyperlink rather than playable media.

    Size is always zero and the MIME type is the literal ``"url"``. Two links
    are equal when their URIs are.
    """

    metadata_type = UrlType

    def __init__(self, uri: UriLike):
        super().__init__(uri, metadata=UrlType(), size=0, mime_type=URL_MIME_TYPE)

    def _props(self) -> tuple:
        return (self._uri, self._metadata)


_NETWORK_MEDIA_BY_KIND = {
    MediaKind.VIDEO: VideoNetworkMedia,
    MediaKind.AUDIO: AudioNetworkMedia,
    MediaKind.IMAGE: ImageNetworkMedia,
    MediaKind.DOCUMENT: DocumentNetworkMedia,
    MediaKind.URL: UrlMedia,
}


def network_media_class_for(kind: MediaKind) -> type:
    return _NETWORK_MEDIA_BY_KIND.get(kind, OtherTypeNetworkMedia)
