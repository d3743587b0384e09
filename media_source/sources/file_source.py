"""Media sources backed by a file on the platform filesystem."""

import os
from datetime import timedelta
from typing import TYPE_CHECKING, Optional, Union

from media_source.exceptions import MediaReadError
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
    ToMemoryConvertibleMedia,
    duration_of,
    resolve_media_type,
)
from media_source.utils.logger import logger
from media_source.utils.metadata import fetch_metadata_from_file
from media_source.utils.platform_utils import PlatformFile, PlatformUtils

if TYPE_CHECKING:
    from media_source.sources.memory_source import MemoryMediaSource


class FileMediaSource(MediaSource, ToMemoryConvertibleMedia):
    """Media stored in a file.

    ``save_to`` and ``move_to`` return new instances bound to the new path;
    the only operation that touches the backing file in place is ``delete``.

    Use ``FileMediaSource.from_path`` to classify the file and get the
    matching subclass, or a subclass's own ``from_path`` when the kind is
    already known.
    """

    def __init__(
        self,
        file: PlatformFile,
        *,
        metadata: FileType,
        name: Optional[str] = None,
        size: Optional[int] = None,
        mime_type: Optional[str] = None,
    ):
        if mime_type is None:
            mime_type = file.mime_type or PlatformUtils.instance().classifier.classify_from_path(
                file.path
            )
        super().__init__(
            metadata=metadata,
            mime_type=mime_type,
            name=name or file.name,
            size=size,
        )
        self._file = file

    @property
    def file(self) -> PlatformFile:
        return self._file

    def _props(self) -> tuple:
        return (self._file,) + super()._props()

    def _repr_fields(self) -> dict:
        return {"path": self._file.path, **super()._repr_fields()}

    @classmethod
    async def from_path(
        cls,
        path: str,
        *,
        name: Optional[str] = None,
        size: Optional[int] = None,
        mime_type: Optional[str] = None,
        duration: Optional[timedelta] = None,
        media_type: Optional[Union[MediaKind, FileType]] = None,
    ) -> "FileMediaSource":
        """Create a source for the file at ``path``.

        Called on ``FileMediaSource`` the file is classified (unless
        ``media_type`` is given) and the matching subclass is returned.
        Called on a subclass, that subclass is returned as-is.
        """
        return await cls.from_file(
            PlatformFile(path, mime_type=mime_type),
            name=name,
            size=size,
            mime_type=mime_type,
            duration=duration,
            media_type=media_type,
        )

    @classmethod
    async def from_file(
        cls,
        file: PlatformFile,
        *,
        name: Optional[str] = None,
        size: Optional[int] = None,
        mime_type: Optional[str] = None,
        duration: Optional[timedelta] = None,
        media_type: Optional[Union[MediaKind, FileType]] = None,
    ) -> "FileMediaSource":
        """Create a source for ``file``; see ``from_path``.

        A size that cannot be determined is logged and left as None. For
        audio and video, a missing duration or MIME type is read from the
        file by the metadata extractor; known values are never replaced.
        """
        kind, duration = resolve_media_type(media_type, duration)
        media_class = cls
        if cls is FileMediaSource:
            if kind is None:
                kind = await _classify_file(file, mime_type)
            media_class = file_media_class_for(kind)

        if size is None:
            size = await _resolve_size(file)

        if mime_type is None:
            mime_type = file.mime_type
        if issubclass(media_class.metadata_type, DurationMedia) and (
            duration is None or mime_type is None
        ):
            extractor = PlatformUtils.instance().metadata_extractor
            extracted = await fetch_metadata_from_file(extractor, file.path)
            if extracted is not None:
                duration = extracted.duration if duration is None else duration
                mime_type = extracted.mime_type if mime_type is None else mime_type

        return media_class._create(
            file,
            name=name,
            size=size,
            mime_type=mime_type,
            duration=duration,
        )

    async def save_to(self, path: str) -> "FileMediaSource":
        """Copy the file to ``path`` and return a source bound to the copy.

        Name, MIME type and metadata (including duration) carry over.
        """
        facade = PlatformUtils.instance().facade
        await facade.ensure_directory(path)
        await facade.copy(self._file.path, path)

        size = self.size
        if size is None:
            size = await _resolve_size(PlatformFile(path))

        return type(self)._create(
            PlatformFile(path, mime_type=self.mime_type),
            name=self.name,
            size=size,
            mime_type=self.mime_type,
            duration=duration_of(self.metadata),
        )

    async def save_to_folder(self, folder_path: str) -> "FileMediaSource":
        return await self.save_to(os.path.join(folder_path, self.name))

    async def move_to(self, path: str) -> "FileMediaSource":
        """Move the file to ``path``.

        Returns ``self`` without any I/O when ``path`` is the current path,
        and also when ``path`` is another spelling of it (``./``, relative
        or symlinked). An existing file at ``path`` is replaced. The original
        is deleted only after the copy succeeded.
        """
        if self._file.path == path:
            return self

        facade = PlatformUtils.instance().facade
        if await facade.exists(path):
            if _same_location(self._file.path, path):
                return self
            await facade.delete(path)

        saved = await self.save_to(path)
        await self.delete()
        return saved

    async def move_to_folder(self, folder_path: str) -> "FileMediaSource":
        return await self.move_to(os.path.join(folder_path, self.name))

    async def delete(self) -> bool:
        """Delete the backing file.

        Returns:
            False if the file did not exist or could not be deleted.
        """
        try:
            return await PlatformUtils.instance().facade.delete(self._file.path)
        except OSError as e:
            logger.warning(f"Failed to delete {self._file.path}: {e}")
            return False

    async def convert_to_memory(self) -> "MemoryMediaSource":
        """Read the whole file into the matching in-memory source.

        Raises:
            MediaReadError: If the file cannot be read.
        """
        from media_source.sources.memory_source import memory_media_class_for

        try:
            data = await PlatformUtils.instance().facade.read(self._file.path)
        except OSError as e:
            raise MediaReadError(f"Failed to read media file: {e}", path=self._file.path) from e

        return memory_media_class_for(self.metadata.kind)._create(
            data,
            name=self.name,
            mime_type=self.mime_type,
            duration=duration_of(self.metadata),
        )


class VideoFileMedia(FileMediaSource):
    """Video file with an optional duration."""

    metadata_type = VideoType

    def __init__(
        self,
        file: PlatformFile,
        *,
        name: Optional[str] = None,
        size: Optional[int] = None,
        mime_type: Optional[str] = None,
        duration: Optional[timedelta] = None,
    ):
        super().__init__(
            file, metadata=VideoType(duration), name=name, size=size, mime_type=mime_type
        )


class AudioFileMedia(FileMediaSource):
    """Audio file with an optional duration."""

    metadata_type = AudioType

    def __init__(
        self,
        file: PlatformFile,
        *,
        name: Optional[str] = None,
        size: Optional[int] = None,
        mime_type: Optional[str] = None,
        duration: Optional[timedelta] = None,
    ):
        super().__init__(
            file, metadata=AudioType(duration), name=name, size=size, mime_type=mime_type
        )


class ImageFileMedia(FileMediaSource):
    metadata_type = ImageType

    def __init__(
        self,
        file: PlatformFile,
        *,
        name: Optional[str] = None,
        size: Optional[int] = None,
        mime_type: Optional[str] = None,
    ):
        super().__init__(
            file, metadata=ImageType(), name=name, size=size, mime_type=mime_type
        )


class DocumentFileMedia(FileMediaSource):
    metadata_type = DocumentType

    def __init__(
        self,
        file: PlatformFile,
        *,
        name: Optional[str] = None,
        size: Optional[int] = None,
        mime_type: Optional[str] = None,
    ):
        super().__init__(
            file, metadata=DocumentType(), name=name, size=size, mime_type=mime_type
        )


class OtherTypeFileMedia(FileMediaSource):
    """File whose kind is not one of the media kinds above."""

    metadata_type = OtherType

    def __init__(
        self,
        file: PlatformFile,
        *,
        name: Optional[str] = None,
        size: Optional[int] = None,
        mime_type: Optional[str] = None,
    ):
        super().__init__(
            file, metadata=OtherType(), name=name, size=size, mime_type=mime_type
        )


_FILE_MEDIA_BY_KIND = {
    MediaKind.VIDEO: VideoFileMedia,
    MediaKind.AUDIO: AudioFileMedia,
    MediaKind.IMAGE: ImageFileMedia,
    MediaKind.DOCUMENT: DocumentFileMedia,
}


def file_media_class_for(kind: MediaKind) -> type:
    return _FILE_MEDIA_BY_KIND.get(kind, OtherTypeFileMedia)


async def _classify_file(file: PlatformFile, mime_type: Optional[str]) -> MediaKind:
    facade = PlatformUtils.instance().facade
    mime_type = mime_type or file.mime_type
    if facade.classify_from_bytes:
        try:
            return MediaKind.from_bytes(await facade.read(file.path), mime_type)
        except OSError as e:
            logger.warning(f"Could not read {file.path} for classification: {e}")
    return MediaKind.from_path(file.path, mime_type)


def _same_location(a: str, b: str) -> bool:
    return os.path.realpath(a) == os.path.realpath(b)


async def _resolve_size(file: PlatformFile) -> Optional[int]:
    try:
        return await PlatformUtils.instance().facade.length(file.path)
    except OSError as e:
        logger.warning(f"Failed to get file length for {file.path}: {e}")
        return None
