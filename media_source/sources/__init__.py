"""Media source backends."""

from media_source.sources.base_source import (
    MediaSource,
    ToFileConvertibleMedia,
    ToMemoryConvertibleMedia,
)
from media_source.sources.file_source import (
    FileMediaSource,
    VideoFileMedia,
    AudioFileMedia,
    ImageFileMedia,
    DocumentFileMedia,
    OtherTypeFileMedia,
)
from media_source.sources.memory_source import (
    MemoryMediaSource,
    VideoMemoryMedia,
    AudioMemoryMedia,
    ImageMemoryMedia,
    DocumentMemoryMedia,
    OtherTypeMemoryMedia,
)
from media_source.sources.network_source import (
    NetworkMediaSource,
    VideoNetworkMedia,
    AudioNetworkMedia,
    ImageNetworkMedia,
    DocumentNetworkMedia,
    OtherTypeNetworkMedia,
    UrlMedia,
)
from media_source.sources.asset_source import (
    AssetMediaSource,
    BundleLoader,
    DirectoryBundleLoader,
    VideoAssetMedia,
    AudioAssetMedia,
    ImageAssetMedia,
    DocumentAssetMedia,
    OtherTypeAssetMedia,
)
from media_source.sources.thumbnail_source import ThumbnailMedia, ThumbnailMediaSource
from media_source.sources.factory import MediaSourceFactory

__all__ = [
    "MediaSource",
    "ToFileConvertibleMedia",
    "ToMemoryConvertibleMedia",
    "FileMediaSource",
    "VideoFileMedia",
    "AudioFileMedia",
    "ImageFileMedia",
    "DocumentFileMedia",
    "OtherTypeFileMedia",
    "MemoryMediaSource",
    "VideoMemoryMedia",
    "AudioMemoryMedia",
    "ImageMemoryMedia",
    "DocumentMemoryMedia",
    "OtherTypeMemoryMedia",
    "NetworkMediaSource",
    "VideoNetworkMedia",
    "AudioNetworkMedia",
    "ImageNetworkMedia",
    "DocumentNetworkMedia",
    "OtherTypeNetworkMedia",
    "UrlMedia",
    "AssetMediaSource",
    "BundleLoader",
    "DirectoryBundleLoader",
    "VideoAssetMedia",
    "AudioAssetMedia",
    "ImageAssetMedia",
    "DocumentAssetMedia",
    "OtherTypeAssetMedia",
    "ThumbnailMedia",
    "ThumbnailMediaSource",
    "MediaSourceFactory",
]
