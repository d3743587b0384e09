"""Media sources backed by an application asset bundle.

Assets are read-only resources shipped with an application. Measuring an
asset's size requires loading it completely, so callers that already know the
size should pass it to ``load``.
"""

import os
from abc import ABC, abstractmethod
from datetime import timedelta
from pathlib import Path
from typing import Optional, Union

from media_source.config.settings import settings
from media_source.exceptions import AssetNotFoundError
from media_source.media_type import (
    AudioType,
    DocumentType,
    FileType,
    ImageType,
    MediaKind,
    OtherType,
    VideoType,
)
from media_source.sources.base_source import (
    MediaSource,
    ToFileConvertibleMedia,
    ToMemoryConvertibleMedia,
    duration_of,
    resolve_media_type,
)
from media_source.sources.file_source import FileMediaSource, file_media_class_for
from media_source.sources.memory_source import MemoryMediaSource, memory_media_class_for
from media_source.utils.logger import logger
from media_source.utils.platform_utils import PlatformFile, PlatformUtils


class BundleLoader(ABC):
    """Loads assets by their bundle-relative path."""

    @abstractmethod
    async def load(self, asset_path: str) -> bytes:
        """Return the asset's bytes.

        Raises:
            AssetNotFoundError: If the bundle has no such asset.
        """


class DirectoryBundleLoader(BundleLoader):
    """Bundle whose assets are files below a root directory.

    Args:
        root: Directory asset paths are resolved against
            (defaults to settings.ASSET_ROOT)
    """

    def __init__(self, root: Optional[str] = None):
        self.root = Path(root if root is not None else settings.ASSET_ROOT)

    async def load(self, asset_path: str) -> bytes:
        path = self.root / asset_path
        if not path.is_file():
            raise AssetNotFoundError(asset_path=asset_path)
        return path.read_bytes()


_default_bundle: Optional[BundleLoader] = None


def default_bundle() -> BundleLoader:
    """The bundle used when a source has none of its own."""
    global _default_bundle
    if _default_bundle is None:
        _default_bundle = DirectoryBundleLoader()
    return _default_bundle


class AssetMediaSource(MediaSource, ToFileConvertibleMedia, ToMemoryConvertibleMedia):
    """Media bundled with the application.

    ``bundle`` takes part in equality by identity; None means the default
    bundle. ``name`` defaults to the asset's basename and ``mime_type`` to the
    type guessed from its path.
    """

    def __init__(
        self,
        asset_path: str,
        *,
        metadata: FileType,
        bundle: Optional[BundleLoader] = None,
        name: Optional[str] = None,
        size: Optional[int] = None,
        mime_type: Optional[str] = None,
    ):
        if mime_type is None:
            mime_type = PlatformUtils.instance().classifier.classify_from_path(asset_path)
        super().__init__(
            metadata=metadata,
            mime_type=mime_type,
            name=name or os.path.basename(asset_path),
            size=size,
        )
        self._asset_path = asset_path
        self._bundle = bundle

    @property
    def asset_path(self) -> str:
        return self._asset_path

    @property
    def bundle(self) -> Optional[BundleLoader]:
        return self._bundle

    def _props(self) -> tuple:
        return (self._asset_path, self._bundle) + super()._props()

    def _repr_fields(self) -> dict:
        return {"asset_path": self._asset_path, **super()._repr_fields()}

    @staticmethod
    async def load_asset(asset_path: str, bundle: Optional[BundleLoader] = None) -> bytes:
        """Load the raw bytes of ``asset_path`` from ``bundle``."""
        return await (bundle or default_bundle()).load(asset_path)

    @classmethod
    async def load(
        cls,
        asset_path: str,
        *,
        bundle: Optional[BundleLoader] = None,
        name: Optional[str] = None,
        mime_type: Optional[str] = None,
        duration: Optional[timedelta] = None,
        size: Optional[int] = None,
        media_type: Optional[Union[MediaKind, FileType]] = None,
    ) -> "AssetMediaSource":
        """Create a source for ``asset_path``.

        Called on ``AssetMediaSource`` the asset path is classified (unless
        ``media_type`` is given) and the matching subclass is returned.
        Without ``size`` the asset is loaded once to measure it.
        """
        kind, duration = resolve_media_type(media_type, duration)
        media_class = cls
        if cls is AssetMediaSource:
            if kind is None:
                kind = MediaKind.from_path(asset_path, mime_type)
            media_class = asset_media_class_for(kind)

        if size is None:
            logger.debug(f"Loading asset {asset_path} to measure its size")
            size = len(await cls.load_asset(asset_path, bundle))

        return media_class._create(
            asset_path,
            bundle=bundle,
            name=name,
            size=size,
            mime_type=mime_type,
            duration=duration,
        )

    async def save_to(self, path: str) -> FileMediaSource:
        """Write the asset to ``path`` and return the matching file source."""
        data = await self.load_asset(self._asset_path, self._bundle)
        facade = PlatformUtils.instance().facade
        await facade.ensure_directory(path)
        await facade.write(path, data)

        return file_media_class_for(self.metadata.kind)._create(
            PlatformFile(path, mime_type=self.mime_type),
            name=self.name,
            size=self.size if self.size is not None else len(data),
            mime_type=self.mime_type,
            duration=duration_of(self.metadata),
        )

    async def save_to_file(self, path: str) -> FileMediaSource:
        return await self.save_to(path)

    async def save_to_folder(self, folder_path: str) -> FileMediaSource:
        return await self.save_to(os.path.join(folder_path, self.name))

    async def convert_to_memory(self) -> MemoryMediaSource:
        """Load the asset into the matching in-memory source."""
        data = await self.load_asset(self._asset_path, self._bundle)
        return memory_media_class_for(self.metadata.kind)._create(
            data,
            name=self.name,
            mime_type=self.mime_type,
            duration=duration_of(self.metadata),
        )


class VideoAssetMedia(AssetMediaSource):
    """Video asset with an optional duration.

    Example:
        >>> video = await VideoAssetMedia.load(
        ...     "videos/intro.mp4", duration=timedelta(seconds=30)
        ... )
        >>> file_media = await video.save_to("/storage/intro.mp4")
    """

    metadata_type = VideoType

    def __init__(
        self,
        asset_path: str,
        *,
        bundle: Optional[BundleLoader] = None,
        name: Optional[str] = None,
        size: Optional[int] = None,
        mime_type: Optional[str] = None,
        duration: Optional[timedelta] = None,
    ):
        super().__init__(
            asset_path,
            metadata=VideoType(duration),
            bundle=bundle,
            name=name,
            size=size,
            mime_type=mime_type,
        )


class AudioAssetMedia(AssetMediaSource):
    metadata_type = AudioType

    def __init__(
        self,
        asset_path: str,
        *,
        bundle: Optional[BundleLoader] = None,
        name: Optional[str] = None,
        size: Optional[int] = None,
        mime_type: Optional[str] = None,
        duration: Optional[timedelta] = None,
    ):
        super().__init__(
            asset_path,
            metadata=AudioType(duration),
            bundle=bundle,
            name=name,
            size=size,
            mime_type=mime_type,
        )


class ImageAssetMedia(AssetMediaSource):
    metadata_type = ImageType

    def __init__(
        self,
        asset_path: str,
        *,
        bundle: Optional[BundleLoader] = None,
        name: Optional[str] = None,
        size: Optional[int] = None,
        mime_type: Optional[str] = None,
    ):
        super().__init__(
            asset_path,
            metadata=ImageType(),
            bundle=bundle,
            name=name,
            size=size,
            mime_type=mime_type,
        )


class DocumentAssetMedia(AssetMediaSource):
    metadata_type = DocumentType

    def __init__(
        self,
        asset_path: str,
        *,
        bundle: Optional[BundleLoader] = None,
        name: Optional[str] = None,
        size: Optional[int] = None,
        mime_type: Optional[str] = None,
    ):
        super().__init__(
            asset_path,
            metadata=DocumentType(),
            bundle=bundle,
            name=name,
            size=size,
            mime_type=mime_type,
        )


class OtherTypeAssetMedia(AssetMediaSource):
    metadata_type = OtherType

    def __init__(
        self,
        asset_path: str,
        *,
        bundle: Optional[BundleLoader] = None,
        name: Optional[str] = None,
        size: Optional[int] = None,
        mime_type: Optional[str] = None,
    ):
        super().__init__(
            asset_path,
            metadata=OtherType(),
            bundle=bundle,
            name=name,
            size=size,
            mime_type=mime_type,
        )


_ASSET_MEDIA_BY_KIND = {
    MediaKind.VIDEO: VideoAssetMedia,
    MediaKind.AUDIO: AudioAssetMedia,
    MediaKind.IMAGE: ImageAssetMedia,
    MediaKind.DOCUMENT: DocumentAssetMedia,
}


def asset_media_class_for(kind: MediaKind) -> type:
    return _ASSET_MEDIA_BY_KIND.get(kind, OtherTypeAssetMedia)
