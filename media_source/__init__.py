"""Typed media sources that work the same whether content lives in a file,
in memory, behind a URL or in an application asset bundle.

Example:
    >>> video = await FileMediaSource.from_path("clips/intro.mp4")
    >>> memory = await video.convert_to_memory()
    >>> label = video.fold(
    ...     file=lambda f: f"File: {f.file.path}",
    ...     network=lambda n: f"URL: {n.url}",
    ...     or_else=lambda: "Unknown",
    ... )
"""

__version__ = "1.0.0"

from media_source.media_type import (  # noqa: E402
    MediaKind,
    FileType,
    DurationMedia,
    VideoType,
    AudioType,
    ImageType,
    DocumentType,
    UrlType,
    OtherType,
)
from media_source.sources import *  # noqa: E402,F401,F403
from media_source.sources import __all__ as _sources_all  # noqa: E402
from media_source.utils.platform_utils import (  # noqa: E402
    Platform,
    PlatformFile,
    PlatformFileFacade,
    LocalPlatformFacade,
    PlatformUtils,
)
from media_source.utils.file_util import TypeClassifier, MimeTypeClassifier  # noqa: E402
from media_source.utils.metadata import (  # noqa: E402
    MediaMetadata,
    MetadataExtractor,
    FfprobeMetadataExtractor,
)

__all__ = [
    "MediaKind",
    "FileType",
    "DurationMedia",
    "VideoType",
    "AudioType",
    "ImageType",
    "DocumentType",
    "UrlType",
    "OtherType",
    "Platform",
    "PlatformFile",
    "PlatformFileFacade",
    "LocalPlatformFacade",
    "PlatformUtils",
    "TypeClassifier",
    "MimeTypeClassifier",
    "MediaMetadata",
    "MetadataExtractor",
    "FfprobeMetadataExtractor",
    *_sources_all,
]
