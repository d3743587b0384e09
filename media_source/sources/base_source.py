"""Abstract base class for media sources."""

from abc import ABC, abstractmethod
from datetime import timedelta
from typing import (
    TYPE_CHECKING,
    Callable,
    ClassVar,
    Iterable,
    Optional,
    Tuple,
    Type,
    TypeVar,
    Union,
)

from pydantic import ByteSize

from media_source.media_type import DurationMedia, FileType, MediaKind, OtherType

if TYPE_CHECKING:
    from media_source.sources.asset_source import AssetMediaSource
    from media_source.sources.file_source import FileMediaSource
    from media_source.sources.memory_source import MemoryMediaSource
    from media_source.sources.network_source import NetworkMediaSource

T = TypeVar("T")

KindFilter = Union[Type[FileType], Tuple[Type[FileType], ...]]


def to_byte_size(size: Optional[int]) -> Optional[ByteSize]:
    """Wrap a raw byte count in ``ByteSize``; None stays None."""
    if size is None:
        return None
    return ByteSize(size)


def duration_of(metadata: FileType) -> Optional[timedelta]:
    """Duration of an audio/video variant, None for every other kind."""
    if isinstance(metadata, DurationMedia):
        return metadata.duration
    return None


def resolve_media_type(
    media_type: Optional[Union[MediaKind, FileType]],
    duration: Optional[timedelta],
) -> Tuple[Optional[MediaKind], Optional[timedelta]]:
    """Normalize a caller-supplied kind hint.

    A ``FileType`` hint contributes its duration when none was passed.
    """
    if isinstance(media_type, FileType):
        if duration is None:
            duration = duration_of(media_type)
        return media_type.kind, duration
    return media_type, duration


class MediaSource(ABC):
    """Media content independent of where it is stored.

    Every source carries a display ``name``, an optional ``mime_type``, an
    optional ``size`` and a ``metadata`` variant describing its kind. The
    concrete backends (file, memory, network, asset) add their own locator.

    Sources are immutable and compare structurally: two instances of the same
    class with the same locator and fields are equal.
    """

    # Variant class every instance of a concrete subclass carries
    metadata_type: ClassVar[Type[FileType]] = OtherType

    def __init__(
        self,
        *,
        metadata: FileType,
        mime_type: Optional[str],
        name: Optional[str],
        size: Optional[int],
    ):
        self._metadata = metadata
        self._mime_type = mime_type
        self._name = name or ""
        self._size = to_byte_size(size)

    @classmethod
    def _create(cls, *args, duration: Optional[timedelta] = None, **kwargs):
        """Instantiate ``cls``, passing ``duration`` only to audio/video classes."""
        if issubclass(cls.metadata_type, DurationMedia):
            kwargs["duration"] = duration
        return cls(*args, **kwargs)

    @property
    def metadata(self) -> FileType:
        return self._metadata

    @property
    def mime_type(self) -> Optional[str]:
        return self._mime_type

    @property
    def name(self) -> str:
        return self._name

    @property
    def size(self) -> Optional[ByteSize]:
        return self._size

    @property
    def extension(self) -> str:
        return self._name.split(".")[-1]

    def _props(self) -> tuple:
        """Values that define equality."""
        return (self._name, self._mime_type, self._size, self._metadata)

    def _repr_fields(self) -> dict:
        return {
            "name": self._name,
            "mime_type": self._mime_type,
            "size": self._size,
            "metadata": self._metadata,
        }

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if type(self) is not type(other):
            return NotImplemented
        return self._props() == other._props()

    def __hash__(self) -> int:
        return hash((type(self), self._props()))

    def __repr__(self) -> str:
        fields = ", ".join(f"{key}={value!r}" for key, value in self._repr_fields().items())
        return f"{type(self).__name__}({fields})"

    def is_any_type(self, types: Iterable[type]) -> bool:
        """Return True if this source's exact class is one of ``types``."""
        return type(self) in tuple(types)

    def fold(
        self,
        file: Optional[Callable[["FileMediaSource"], T]] = None,
        memory: Optional[Callable[["MemoryMediaSource"], T]] = None,
        network: Optional[Callable[["NetworkMediaSource"], T]] = None,
        asset: Optional[Callable[["AssetMediaSource"], T]] = None,
        *,
        or_else: Callable[[], T],
        kind: Optional[KindFilter] = None,
    ) -> T:
        """Dispatch on the storage backend.

        Handlers are tried in the order file, memory, network, asset. The
        first one whose backend matches runs, provided ``metadata`` is an
        instance of ``kind`` when ``kind`` is given. Otherwise ``or_else``
        runs. Exactly one callback is invoked.

        Example:
            >>> media.fold(
            ...     file=lambda f: f.file.path,
            ...     network=lambda n: n.url,
            ...     or_else=lambda: None,
            ...     kind=VideoType,
            ... )
        """
        from media_source.sources.asset_source import AssetMediaSource
        from media_source.sources.file_source import FileMediaSource
        from media_source.sources.memory_source import MemoryMediaSource
        from media_source.sources.network_source import NetworkMediaSource

        if kind is not None and not isinstance(self._metadata, kind):
            return or_else()

        if file is not None and isinstance(self, FileMediaSource):
            return file(self)
        if memory is not None and isinstance(self, MemoryMediaSource):
            return memory(self)
        if network is not None and isinstance(self, NetworkMediaSource):
            return network(self)
        if asset is not None and isinstance(self, AssetMediaSource):
            return asset(self)
        return or_else()


class ToMemoryConvertibleMedia(ABC):
    """A source whose content can be loaded into a ``MemoryMediaSource``."""

    @abstractmethod
    async def convert_to_memory(self) -> "MemoryMediaSource":
        """Return a new in-memory source holding this source's bytes."""


class ToFileConvertibleMedia(ABC):
    """A source whose content can be written out as a ``FileMediaSource``."""

    @abstractmethod
    async def save_to_file(self, path: str) -> "FileMediaSource":
        """Write the content to ``path`` and return a new file source."""
