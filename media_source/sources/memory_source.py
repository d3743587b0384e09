"""Media sources backed by an in-memory byte buffer."""

import os
from datetime import timedelta
from typing import Optional, Union

from media_source.media_type import (
    AudioType,
    DocumentType,
    DurationMedia,
    FileType,
    ImageType,
    MediaKind,
    OtherType,
    VideoType,
)
from media_source.sources.base_source import (
    MediaSource,
    ToFileConvertibleMedia,
    duration_of,
    resolve_media_type,
)
from media_source.sources.file_source import FileMediaSource, file_media_class_for
from media_source.utils.logger import logger
from media_source.utils.metadata import fetch_metadata_from_bytes
from media_source.utils.platform_utils import PlatformFile, PlatformUtils


class MemoryMediaSource(MediaSource, ToFileConvertibleMedia):
    """Media held as bytes.

    ``size`` always equals ``len(bytes)``. The bytes take part in equality
    but are left out of ``repr`` so large buffers never end up in logs.

    Subclasses: ``VideoMemoryMedia``, ``AudioMemoryMedia``,
    ``ImageMemoryMedia``, ``DocumentMemoryMedia``, ``OtherTypeMemoryMedia``.
    """

    def __init__(
        self,
        data: bytes,
        *,
        metadata: FileType,
        name: Optional[str] = None,
        mime_type: Optional[str] = None,
    ):
        data = bytes(data)
        if mime_type is None:
            mime_type = PlatformUtils.instance().classifier.classify_from_bytes(data)
        super().__init__(
            metadata=metadata,
            mime_type=mime_type,
            name=name,
            size=len(data),
        )
        self._bytes = data

    def _props(self) -> tuple:
        return (self._bytes,) + super()._props()

    @classmethod
    async def from_bytes(
        cls,
        data: bytes,
        *,
        name: Optional[str] = None,
        mime_type: Optional[str] = None,
        duration: Optional[timedelta] = None,
        media_type: Optional[Union[MediaKind, FileType]] = None,
    ) -> "MemoryMediaSource":
        """Classify ``data`` and build the matching in-memory source.

        When the buffer itself is not recognised, ``name`` is classified by
        its extension instead. Called on a subclass, that subclass is returned
        as-is. For audio and video, a missing duration or MIME type is filled
        in by the metadata extractor; if extraction fails or times out the
        known values are kept.
        """
        kind, duration = resolve_media_type(media_type, duration)
        media_class = cls
        if cls is MemoryMediaSource:
            if kind is None:
                kind = MediaKind.from_bytes(data, mime_type)
                if kind is MediaKind.OTHER and name and not mime_type:
                    kind = MediaKind.from_path(name)
            media_class = memory_media_class_for(kind)

        if issubclass(media_class.metadata_type, DurationMedia) and (
            duration is None or mime_type is None
        ):
            extractor = PlatformUtils.instance().metadata_extractor
            extracted = await fetch_metadata_from_bytes(extractor, data, name)
            if extracted is not None:
                duration = extracted.duration if duration is None else duration
                mime_type = extracted.mime_type if mime_type is None else mime_type
            else:
                logger.debug(f"No metadata extracted for {name!r}")

        return media_class._create(data, name=name, mime_type=mime_type, duration=duration)

    async def save_to_file(self, path: str) -> FileMediaSource:
        """Write the bytes to ``path`` and return the matching file source."""
        facade = PlatformUtils.instance().facade
        await facade.ensure_directory(path)
        await facade.write(path, self._bytes)

        return file_media_class_for(self.metadata.kind)._create(
            PlatformFile(path, mime_type=self.mime_type),
            name=self.name,
            size=self.size,
            mime_type=self.mime_type,
            duration=duration_of(self.metadata),
        )

    async def save_to_folder(self, folder_path: str) -> FileMediaSource:
        """Save under ``folder_path`` using ``name``, overwriting any file there."""
        return await self.save_to_file(os.path.join(folder_path, self.name))

    # Must stay below every method annotated with the builtin ``bytes``
    @property
    def bytes(self) -> bytes:
        return self._bytes


class VideoMemoryMedia(MemoryMediaSource):
    metadata_type = VideoType

    def __init__(
        self,
        data: bytes,
        *,
        name: Optional[str] = None,
        mime_type: Optional[str] = None,
        duration: Optional[timedelta] = None,
    ):
        super().__init__(data, metadata=VideoType(duration), name=name, mime_type=mime_type)


class AudioMemoryMedia(MemoryMediaSource):
    metadata_type = AudioType

    def __init__(
        self,
        data: bytes,
        *,
        name: Optional[str] = None,
        mime_type: Optional[str] = None,
        duration: Optional[timedelta] = None,
    ):
        super().__init__(data, metadata=AudioType(duration), name=name, mime_type=mime_type)


class ImageMemoryMedia(MemoryMediaSource):
    metadata_type = ImageType

    def __init__(
        self,
        data: bytes,
        *,
        name: Optional[str] = None,
        mime_type: Optional[str] = None,
    ):
        super().__init__(data, metadata=ImageType(), name=name, mime_type=mime_type)


class DocumentMemoryMedia(MemoryMediaSource):
    metadata_type = DocumentType

    def __init__(
        self,
        data: bytes,
        *,
        name: Optional[str] = None,
        mime_type: Optional[str] = None,
    ):
        super().__init__(data, metadata=DocumentType(), name=name, mime_type=mime_type)


class OtherTypeMemoryMedia(MemoryMediaSource):
    metadata_type = OtherType

    def __init__(
        self,
        data: bytes,
        *,
        name: Optional[str] = None,
        mime_type: Optional[str] = None,
    ):
        super().__init__(data, metadata=OtherType(), name=name, mime_type=mime_type)


_MEMORY_MEDIA_BY_KIND = {
    MediaKind.VIDEO: VideoMemoryMedia,
    MediaKind.AUDIO: AudioMemoryMedia,
    MediaKind.IMAGE: ImageMemoryMedia,
    MediaKind.DOCUMENT: DocumentMemoryMedia,
}


def memory_media_class_for(kind: MediaKind) -> type:
    return _MEMORY_MEDIA_BY_KIND.get(kind, OtherTypeMemoryMedia)
