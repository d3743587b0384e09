"""Factory for creating media sources by backend name."""

from typing import Awaitable, Callable

from media_source.sources.asset_source import AssetMediaSource
from media_source.sources.base_source import MediaSource
from media_source.sources.file_source import FileMediaSource
from media_source.sources.memory_source import MemoryMediaSource
from media_source.sources.network_source import NetworkMediaSource
from media_source.utils.logger import logger

SourceCreator = Callable[..., Awaitable[MediaSource]]


async def _create_file(path: str, **kwargs) -> MediaSource:
    return await FileMediaSource.from_path(path, **kwargs)


async def _create_memory(data: bytes, **kwargs) -> MediaSource:
    return await MemoryMediaSource.from_bytes(data, **kwargs)


async def _create_network(url: str, **kwargs) -> MediaSource:
    return NetworkMediaSource.from_url(url, **kwargs)


async def _create_asset(asset_path: str, **kwargs) -> MediaSource:
    return await AssetMediaSource.load(asset_path, **kwargs)


class MediaSourceFactory:
    """Factory for creating kind-dispatched MediaSource instances.

    Supports:
        - 'file': FileMediaSource.from_path (locator is a path)
        - 'memory': MemoryMediaSource.from_bytes (locator is bytes)
        - 'network': NetworkMediaSource.from_url (locator is a URL)
        - 'asset': AssetMediaSource.load (locator is an asset path)
    """

    _creators: dict[str, SourceCreator] = {
        "file": _create_file,
        "memory": _create_memory,
        "network": _create_network,
        "asset": _create_asset,
    }

    @classmethod
    async def create(cls, source_type: str, locator, **kwargs) -> MediaSource:
        """Create a source of the given backend type.

        Args:
            source_type: 'file', 'memory', 'network', 'asset' or a
                registered name
            locator: Path, bytes, URL or asset path, depending on the backend
            **kwargs: Passed through to the backend factory (name, mime_type,
                duration, size, media_type, ...)

        Raises:
            ValueError: If source_type is not supported.
        """
        if source_type not in cls._creators:
            supported = ", ".join(sorted(cls._creators.keys()))
            raise ValueError(
                f"Unsupported media source type: '{source_type}'. "
                f"Supported types: {supported}"
            )

        return await cls._creators[source_type](locator, **kwargs)

    @classmethod
    def supported_types(cls) -> list[str]:
        return sorted(cls._creators.keys())

    @classmethod
    def register_source(cls, source_type: str, creator: SourceCreator) -> None:
        """Register a new backend type."""
        cls._creators[source_type] = creator
        logger.info(f"Registered media source type: {source_type}")
